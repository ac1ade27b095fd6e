import json
import os
import sys
from typing import List, Optional, TextIO

import aiofiles

from ..models.events import MetricEvent
from .base_exporter import BaseExporter


class JSONLinesExporter(BaseExporter):
    """Writes one JSON object per event, to a file when a path is given or to stdout otherwise."""

    def __init__(self, path: Optional[str] = None, stream: Optional[TextIO] = None):
        self.path = path
        self.stream = stream

    @staticmethod
    def serialize(events: List[MetricEvent]) -> str:
        return "".join(json.dumps(event.to_record(), ensure_ascii=False) + "\n" for event in events)

    async def emit(self, events: List[MetricEvent]) -> int:
        if not events:
            return 0
        content = self.serialize(events)

        if self.path:
            # Ensure parent directory exists
            os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
            async with aiofiles.open(self.path, "a", encoding="utf-8") as fh:
                await fh.write(content)
        else:
            stream = self.stream or sys.stdout
            stream.write(content)
            stream.flush()
        return len(events)
