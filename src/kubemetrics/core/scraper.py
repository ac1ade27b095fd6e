# src/kubemetrics/core/scraper.py

import logging

from ..collectors.base_fetcher import BaseFetcher
from ..exporters.base_exporter import BaseExporter
from .exceptions import TransportError
from .handler import handle_response
from .tagging import TagTemplate

logger = logging.getLogger(__name__)


class MetricsScraper:
    """
    Runs one scrape cycle: fetch every target node in turn, then flatten and
    export its summary. A failing node is logged and skipped; the remaining
    nodes are still scraped.
    """

    def __init__(self, fetcher: BaseFetcher, template: TagTemplate, exporter: BaseExporter):
        self.fetcher = fetcher
        self.template = template
        self.exporter = exporter

    async def scrape_node(self, node: str) -> int:
        try:
            response = await self.fetcher.fetch(node)
        except TransportError as e:
            logger.error("Failed to scrape metrics from node '%s': %s", node, e)
            return 0
        return await handle_response(response, self.template, self.exporter, node=node)

    async def scrape(self) -> int:
        """Scrapes all target nodes sequentially. Returns the number of exported events."""
        total = 0
        for node in self.fetcher.targets():
            total += await self.scrape_node(node)
        logger.debug("Scrape cycle exported %d event(s).", total)
        return total

    async def close(self):
        await self.fetcher.close()
        await self.exporter.close()
