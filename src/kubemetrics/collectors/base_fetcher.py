# src/kubemetrics/collectors/base_fetcher.py
"""
This module defines the abstract base class for the ways a Summary API
document can be fetched. The scraper only depends on this interface, so the
direct kubelet fetch and the API server proxy fetch are interchangeable.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import httpx

from ..core.exceptions import TransportError
from ..utils.http_client import get_async_http_client

logger = logging.getLogger(__name__)


class BaseFetcher(ABC):
    """
    Abstract Base Class for Summary API fetch strategies.
    """

    SUMMARY_PATH = "stats/summary"

    def __init__(self, port: int, http_client: Optional[httpx.AsyncClient] = None):
        self.port = port
        self._client = http_client

    @abstractmethod
    def targets(self) -> List[str]:
        """The node names fetched on every scrape, in order."""
        pass

    @abstractmethod
    def summary_url(self, node: str) -> str:
        pass

    def _build_client(self) -> httpx.AsyncClient:
        return get_async_http_client()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = self._build_client()
        return self._client

    async def fetch(self, node: str) -> httpx.Response:
        """
        Performs one GET against the node's summary endpoint. The response is
        returned whatever its status code; the caller validates it.

        Raises:
            TransportError: On connection, TLS or timeout failures.
        """
        url = self.summary_url(node)
        client = self._ensure_client()
        try:
            return await client.get(url)
        except httpx.HTTPError as e:
            raise TransportError(f"Failed to fetch {url}: {e!r}") from e

    async def close(self):
        """Close the underlying HTTP client if it exists."""
        if self._client is not None:
            await self._client.aclose()
            logger.debug("%s HTTP client closed.", type(self).__name__)
            self._client = None
