import logging
import os
import ssl
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

import httpx
from kubernetes_asyncio import client
from kubernetes_asyncio import config as k8s_config

from .config import Config
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

Verify = Union[bool, ssl.SSLContext]


@dataclass(frozen=True)
class ApiEndpoint:
    """Where and how to reach the Kubernetes API server."""

    host: str
    headers: Dict[str, str] = field(default_factory=dict)
    verify: Verify = True


def build_ssl_context(
    ca_file: Optional[str] = None,
    client_cert: Optional[str] = None,
    client_key: Optional[str] = None,
    insecure: bool = False,
) -> Verify:
    """
    Returns the value to pass as httpx `verify`: False when verification is
    disabled, True for the system trust store, or an SSLContext carrying the
    CA bundle and client certificate.
    """
    if insecure:
        return False
    if not ca_file and not client_cert:
        return True
    try:
        context = ssl.create_default_context(cafile=ca_file)
        if client_cert:
            context.load_cert_chain(client_cert, client_key)
    except (OSError, ssl.SSLError) as e:
        raise ConfigurationError(f"Could not load TLS material for the Kubernetes API: {e}") from e
    return context


def _normalize_host(url: str) -> str:
    host = url.rstrip("/")
    if host.endswith("/api"):
        host = host[: -len("/api")]
    return host


async def _endpoint_from_kubeconfig(path: str) -> ApiEndpoint:
    configuration = client.Configuration()
    try:
        logger.debug("Loading kubeconfig from %s...", path)
        await k8s_config.load_kube_config(config_file=path, client_configuration=configuration)
    except (k8s_config.ConfigException, OSError) as e:
        raise ConfigurationError(f"Could not load kubeconfig '{path}': {e}") from e

    # The loader stores "Bearer <token>" (or "Basic ...") under BearerToken.
    token = await configuration.get_api_key_with_prefix("BearerToken", alias="authorization")
    headers = {"Authorization": token} if token else {}

    verify = build_ssl_context(
        ca_file=configuration.ssl_ca_cert,
        client_cert=configuration.cert_file,
        client_key=configuration.key_file,
        insecure=not configuration.verify_ssl,
    )
    logger.info("Loaded Kubernetes configuration from kubeconfig file.")
    return ApiEndpoint(host=_normalize_host(configuration.host), headers=headers, verify=verify)


def _read_token(path: str) -> str:
    try:
        with open(path, "r") as f:
            return f.read().strip()
    except OSError as e:
        raise ConfigurationError(f"Could not read bearer token file '{path}': {e}") from e


def _endpoint_from_settings(settings: Config) -> ApiEndpoint:
    url = settings.KUBERNETES_URL
    if not url:
        # Use the Kubernetes default service account if we're in a pod.
        env_host = os.getenv("KUBERNETES_SERVICE_HOST")
        env_port = os.getenv("KUBERNETES_SERVICE_PORT")
        if env_host and env_port:
            url = f"https://{env_host}:{env_port}"
    if not url:
        raise ConfigurationError("Kubernetes API URL is not set (KUBERNETES_URL or in-cluster service env).")

    ca_file = settings.KUBERNETES_CA_FILE
    token_file = settings.KUBERNETES_BEARER_TOKEN_FILE
    secret_dir = settings.KUBERNETES_SECRET_DIR
    if secret_dir and os.path.isdir(secret_dir):
        secret_ca_file = os.path.join(secret_dir, "ca.crt")
        secret_token_file = os.path.join(secret_dir, "token")
        if ca_file is None and os.path.exists(secret_ca_file):
            ca_file = secret_ca_file
        if token_file is None and os.path.exists(secret_token_file):
            token_file = secret_token_file

    token = settings.KUBERNETES_BEARER_TOKEN
    if not token and token_file:
        token = _read_token(token_file)

    headers = {"Authorization": f"Bearer {token}"} if token else {}
    verify = build_ssl_context(
        ca_file=ca_file,
        client_cert=settings.KUBERNETES_CLIENT_CERT,
        client_key=settings.KUBERNETES_CLIENT_KEY,
        insecure=settings.KUBERNETES_INSECURE_SSL,
    )
    return ApiEndpoint(host=_normalize_host(url), headers=headers, verify=verify)


async def load_api_endpoint(settings: Config) -> ApiEndpoint:
    """
    Resolves the API server address and credentials. A kubeconfig file wins
    over every other Kubernetes setting.

    Raises:
        ConfigurationError: If no API server can be determined or its credentials cannot be read.
    """
    if settings.KUBECONFIG:
        return await _endpoint_from_kubeconfig(settings.KUBECONFIG)
    return _endpoint_from_settings(settings)


async def verify_api(http_client: httpx.AsyncClient, endpoint: ApiEndpoint) -> None:
    """Checks once that the API server answers before scraping starts."""
    url = f"{endpoint.host}/api"
    try:
        response = await http_client.get(url)
    except httpx.HTTPError as e:
        raise ConfigurationError(f"Invalid Kubernetes API endpoint {url}: {e}") from e
    if not response.is_success:
        raise ConfigurationError(f"Invalid Kubernetes API endpoint {url}: HTTP {response.status_code}")
    logger.info("Kubernetes API at %s is reachable.", endpoint.host)
