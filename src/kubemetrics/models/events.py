# src/kubemetrics/models/events.py

from datetime import datetime
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field

from ..utils.date_utils import to_iso_z


class MetricEvent(BaseModel):
    """
    One scalar reading flattened out of a summary document.

    ``labels`` holds the identity of the measured entity (node, pod-*,
    container-name, name, interface) plus the reading itself under ``value``.
    """

    model_config = ConfigDict(frozen=True)

    tag: str = Field(..., description="Event tag, e.g. 'kubernetes.metrics.node.cpu.usage'.")
    timestamp: datetime = Field(..., description="When the reading was taken.")
    labels: Mapping[str, Any] = Field(..., description="Identity labels plus the 'value' key.")

    @property
    def value(self) -> Any:
        return self.labels["value"]

    def to_record(self) -> Dict[str, Any]:
        return {"tag": self.tag, "time": to_iso_z(self.timestamp), "record": dict(self.labels)}
