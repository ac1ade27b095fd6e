from .base_fetcher import BaseFetcher
from .summary_fetcher import DirectFetcher, ProxyFetcher

__all__ = [
    "BaseFetcher",
    "DirectFetcher",
    "ProxyFetcher",
]
