"""Exporters package: destinations for flattened metric events."""

from .base_exporter import BaseExporter
from .json_exporter import JSONLinesExporter

__all__ = ["BaseExporter", "JSONLinesExporter"]
