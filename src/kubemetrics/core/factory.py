# src/kubemetrics/core/factory.py
"""
Factory functions to instantiate the scrape pipeline from the configuration.
"""

import logging

from ..collectors.base_fetcher import BaseFetcher
from ..collectors.summary_fetcher import DirectFetcher, ProxyFetcher
from ..exporters.base_exporter import BaseExporter
from ..exporters.json_exporter import JSONLinesExporter
from ..utils.http_client import get_async_http_client
from .config import Config
from .k8s_client import load_api_endpoint, verify_api
from .scraper import MetricsScraper
from .tagging import TagTemplate

logger = logging.getLogger(__name__)


async def get_fetcher(settings: Config, check_api: bool = True) -> BaseFetcher:
    """
    Builds the fetch strategy selected by USE_REST_CLIENT.

    Raises:
        ConfigurationError: If the cluster API cannot be resolved or, with
            `check_api`, does not answer.
    """
    if settings.USE_REST_CLIENT:
        logger.info("Using direct kubelet fetcher.")
        return DirectFetcher(settings.NODE_NAME, settings.kubelet_port)

    logger.info("Using API server proxy fetcher for %d node(s).", len(settings.NODE_NAMES))
    endpoint = await load_api_endpoint(settings)
    http_client = get_async_http_client(verify=endpoint.verify, headers=endpoint.headers)
    if check_api:
        try:
            await verify_api(http_client, endpoint)
        except Exception:
            await http_client.aclose()
            raise
    return ProxyFetcher(settings.NODE_NAMES, settings.kubelet_port, endpoint, http_client=http_client)


def get_exporter(settings: Config) -> BaseExporter:
    if settings.OUTPUT_PATH:
        logger.info("Writing metric events to %s", settings.OUTPUT_PATH)
    return JSONLinesExporter(path=settings.OUTPUT_PATH)


async def get_scraper(settings: Config) -> MetricsScraper:
    """Validates the settings and wires fetcher, tag template and exporter together."""
    settings.validate_instance()
    template = TagTemplate.compile(settings.TAG)
    fetcher = await get_fetcher(settings)
    return MetricsScraper(fetcher, template, get_exporter(settings))
