# src/kubemetrics/core/config.py

import logging
import os
import re
from typing import List

from dotenv import load_dotenv

from .exceptions import ConfigurationError

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)

INTERVAL_PATTERN = re.compile(r"^(\d+)([smh])$")
INTERVAL_MULTIPLIERS = {"s": 1, "m": 60, "h": 3600}

TRUE_VALUES = ("true", "1", "t", "y", "yes")


def _get_bool(key: str, default: str) -> bool:
    return os.getenv(key, default).lower() in TRUE_VALUES


def parse_interval(interval_str: str) -> int:
    """
    Converts a duration string like '15s', '5m' or '1h' into seconds.
    """
    match = INTERVAL_PATTERN.match((interval_str or "").strip().lower())
    if not match:
        raise ConfigurationError(f"Invalid interval format: '{interval_str}'. Use 's', 'm', or 'h'.")
    value, unit = int(match.group(1)), match.group(2)
    return value * INTERVAL_MULTIPLIERS[unit]


class Config:
    """
    Handles the collector's configuration by loading values from environment variables.
    """

    def __init__(self):
        # --- Tagging and scheduling ---
        self.TAG = os.getenv("KUBEMETRICS_TAG", "kubernetes.metrics.*")
        self.SCRAPE_INTERVAL = os.getenv("SCRAPE_INTERVAL", "15s")

        # --- Fetch strategy ---
        # True: fetch the summary straight from a single kubelet.
        # False: fetch every node in NODE_NAMES through the API server proxy.
        self.USE_REST_CLIENT = _get_bool("USE_REST_CLIENT", "True")
        self.NODE_NAME = os.getenv("NODE_NAME") or None
        self.NODE_NAMES: List[str] = [
            name.strip() for name in os.getenv("NODE_NAMES", "").split(",") if name.strip()
        ]
        self.KUBELET_PORT = os.getenv("KUBELET_PORT", "10255")

        # --- Kubernetes API access (proxy strategy only) ---
        self.KUBECONFIG = os.getenv("KUBECONFIG") or None
        self.KUBERNETES_URL = os.getenv("KUBERNETES_URL") or None
        self.KUBERNETES_CLIENT_CERT = os.getenv("KUBERNETES_CLIENT_CERT") or None
        self.KUBERNETES_CLIENT_KEY = os.getenv("KUBERNETES_CLIENT_KEY") or None
        self.KUBERNETES_CA_FILE = os.getenv("KUBERNETES_CA_FILE") or None
        self.KUBERNETES_INSECURE_SSL = _get_bool("KUBERNETES_INSECURE_SSL", "False")
        self.KUBERNETES_BEARER_TOKEN_FILE = os.getenv("KUBERNETES_BEARER_TOKEN_FILE") or None
        self.KUBERNETES_BEARER_TOKEN = self._get_secret("KUBERNETES_BEARER_TOKEN")
        self.KUBERNETES_SECRET_DIR = os.getenv(
            "KUBERNETES_SECRET_DIR", "/var/run/secrets/kubernetes.io/serviceaccount"
        )

        # --- HTTP client ---
        self.DEFAULT_TIMEOUT_CONNECT = float(os.getenv("DEFAULT_TIMEOUT_CONNECT", "10"))
        self.DEFAULT_TIMEOUT_READ = float(os.getenv("DEFAULT_TIMEOUT_READ", "30"))

        # --- Output ---
        self.OUTPUT_PATH = os.getenv("OUTPUT_PATH") or None

        # --- Logging variables ---
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    @staticmethod
    def _get_secret(key: str, default: str = None) -> str:
        """
        Retrieves a secret from a file (Docker secret/volume) or falls back to environment variable.

        Raises:
            PermissionError: If the secret file exists but cannot be read due to permissions.
            IOError: If the secret file exists but cannot be read due to I/O errors.
        """
        secret_file = f"/etc/kubemetrics/secrets/{key}"
        if os.path.exists(secret_file):
            try:
                with open(secret_file, "r") as f:
                    value = f.read().strip()
                    logging.getLogger(__name__).debug(f"Loaded secret '{key}' from {secret_file}")
                    return value
            except PermissionError as e:
                raise PermissionError(
                    f"Secret file '{secret_file}' exists but cannot be read due to permission denied. "
                    f"Please check file permissions or run with appropriate privileges."
                ) from e
            except (IOError, OSError) as e:
                raise IOError(
                    f"Secret file '{secret_file}' exists but cannot be read: {e}. "
                    f"Please check the file integrity and system resources."
                ) from e
        return os.getenv(key, default)

    USER_AGENT = "kubemetrics/0.1"

    @property
    def interval_seconds(self) -> int:
        return parse_interval(self.SCRAPE_INTERVAL)

    @property
    def kubelet_port(self) -> int:
        try:
            port = int(self.KUBELET_PORT)
        except (TypeError, ValueError):
            raise ConfigurationError(f"KUBELET_PORT must be an integer, got '{self.KUBELET_PORT}'")
        if not 0 < port < 65536:
            raise ConfigurationError(f"KUBELET_PORT out of range: {port}")
        return port

    @property
    def node_targets(self) -> List[str]:
        """The node names scraped on every tick by the selected strategy."""
        if self.USE_REST_CLIENT:
            return [self.NODE_NAME] if self.NODE_NAME else []
        return list(self.NODE_NAMES)

    def validate_instance(self):
        """
        Raises:
            ConfigurationError: If the selected strategy lacks its node identity or a setting is malformed.
        """
        if self.USE_REST_CLIENT and not self.NODE_NAME:
            raise ConfigurationError("NODE_NAME is required")
        if not self.USE_REST_CLIENT and not self.NODE_NAMES:
            raise ConfigurationError("NODE_NAMES is required when USE_REST_CLIENT is false")
        if self.TAG.count("*") > 1:
            raise ConfigurationError(f"KUBEMETRICS_TAG may contain at most one '*', got '{self.TAG}'")
        logging.getLogger(__name__).debug(
            "Scraping %s every %ss on kubelet port %d", self.node_targets, self.interval_seconds, self.kubelet_port
        )


# Instantiate the config to be imported by other modules
config = Config()
