# src/kubemetrics/collectors/summary_fetcher.py

import logging
from typing import List, Optional, Sequence

import httpx

from ..core.k8s_client import ApiEndpoint
from ..utils.http_client import get_async_http_client
from .base_fetcher import BaseFetcher

logger = logging.getLogger(__name__)


class DirectFetcher(BaseFetcher):
    """Reads the summary straight from one kubelet's read-only port."""

    def __init__(self, node_name: str, port: int, http_client: Optional[httpx.AsyncClient] = None):
        super().__init__(port, http_client)
        self.node_name = node_name
        logger.info("Use URL %s for querying the kubelet summary API", self.summary_url(node_name))

    def targets(self) -> List[str]:
        return [self.node_name]

    def summary_url(self, node: str) -> str:
        return f"http://{node}:{self.port}/{self.SUMMARY_PATH}"


class ProxyFetcher(BaseFetcher):
    """Reads each node's summary through the API server's node proxy sub-resource."""

    def __init__(
        self,
        node_names: Sequence[str],
        port: int,
        endpoint: ApiEndpoint,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(port, http_client)
        self.node_names = list(node_names)
        self.endpoint = endpoint
        for node in self.node_names:
            logger.info("Use URL %s for scraping metrics", self.summary_url(node))

    def targets(self) -> List[str]:
        return list(self.node_names)

    def summary_url(self, node: str) -> str:
        return f"{self.endpoint.host}/api/v1/nodes/{node}:{self.port}/proxy/{self.SUMMARY_PATH}"

    def _build_client(self) -> httpx.AsyncClient:
        return get_async_http_client(verify=self.endpoint.verify, headers=self.endpoint.headers)
