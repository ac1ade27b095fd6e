from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from ..models.events import MetricEvent


class BaseExporter(ABC):
    """Abstract base class for event destinations.

    Delivery is fire-and-forget: the scraper does not wait for any
    acknowledgement beyond `emit` returning.
    """

    @abstractmethod
    async def emit(self, events: List[MetricEvent]) -> int:
        """Deliver the events of one scrape in order. Return how many were written."""
        raise NotImplementedError()

    async def close(self):
        """Release any resource held by the exporter."""
        pass
