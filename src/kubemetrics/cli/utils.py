# src/kubemetrics/cli/utils.py

from typing import Optional

from ..core.config import Config


def apply_overrides(
    settings: Config,
    node_name: Optional[str] = None,
    node_names: Optional[str] = None,
    interval: Optional[str] = None,
    tag: Optional[str] = None,
    output: Optional[str] = None,
) -> Config:
    """Copies command-line options over the environment-derived settings."""
    if node_name:
        settings.NODE_NAME = node_name
    if node_names:
        settings.NODE_NAMES = [name.strip() for name in node_names.split(",") if name.strip()]
        settings.USE_REST_CLIENT = False
    if interval:
        settings.SCRAPE_INTERVAL = interval
    if tag:
        settings.TAG = tag
    if output:
        settings.OUTPUT_PATH = output
    return settings
