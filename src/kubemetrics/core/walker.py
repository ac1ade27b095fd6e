# src/kubemetrics/core/walker.py
"""
Per-entity emitters for summary sub-documents.

Each walker receives a tag stem (``node``, ``pod``, ``container.rootfs``...),
one sub-document and the labels accumulated by its ancestors, and yields one
MetricEvent per field present in the sub-document. An absent sub-document or
field yields nothing.
"""

from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Tuple

from ..models.events import MetricEvent
from ..models.summary import CPUStats, FsStats, MemoryStats, NetworkStats, RlimitStats
from ..utils.date_utils import parse_timestamp
from .tagging import TagTemplate, underscore

Labels = Mapping[str, Any]

NANO_CORES_PER_MILLICORE = 1_000_000


def _fields(*keys: str) -> Tuple[str, ...]:
    return tuple(underscore(key) for key in keys)


# Summary API keys read by each walker, as model attribute names. The attribute
# name is also the metric suffix of the emitted tag.
MEMORY_FIELDS = _fields("availableBytes", "usageBytes", "workingSetBytes", "rssBytes", "pageFaults", "majorPageFaults")
NETWORK_FIELDS = _fields("rxBytes", "rxErrors", "txBytes", "txErrors")
FS_FIELDS = _fields("availableBytes", "capacityBytes", "usedBytes", "inodesFree", "inodes", "inodesUsed")
RLIMIT_FIELDS = _fields("maxpid", "curproc")


@dataclass(frozen=True)
class ScrapeContext:
    """Values shared by every walker during one scrape of one response."""

    template: TagTemplate
    scraped_at: datetime


def make_labels(*parts: Mapping[str, Any]) -> Labels:
    """Merge label mappings into a new read-only mapping; later parts win."""
    merged = {}
    for part in parts:
        merged.update(part)
    return MappingProxyType(merged)


def _event(ctx: ScrapeContext, item_name: str, time: datetime, labels: Labels, value, **extra) -> MetricEvent:
    return MetricEvent(
        tag=ctx.template.build(item_name),
        timestamp=time,
        labels=make_labels(labels, {"value": value}, extra),
    )


def uptime_metrics(ctx: ScrapeContext, stem: str, start_time: Optional[str], labels: Labels) -> Iterator[MetricEvent]:
    if not start_time:
        return
    uptime = (ctx.scraped_at - parse_timestamp(start_time)).total_seconds()
    yield _event(ctx, f"{stem}.uptime", ctx.scraped_at, labels, uptime)


def cpu_metrics(ctx: ScrapeContext, stem: str, metrics: Optional[CPUStats], labels: Labels) -> Iterator[MetricEvent]:
    if metrics is None:
        return
    time = parse_timestamp(metrics.time)
    usage = metrics.usage_nano_cores
    if usage is None:
        return
    # Both events read usageNanoCores; usage_rate is the same reading in
    # millicores. Integer readings keep integer division.
    if isinstance(usage, int):
        usage_rate = usage // NANO_CORES_PER_MILLICORE
    else:
        usage_rate = usage / NANO_CORES_PER_MILLICORE
    yield _event(ctx, f"{stem}.cpu.usage_rate", time, labels, usage_rate)
    yield _event(ctx, f"{stem}.cpu.usage", time, labels, usage)


def memory_metrics(
    ctx: ScrapeContext, stem: str, metrics: Optional[MemoryStats], labels: Labels
) -> Iterator[MetricEvent]:
    if metrics is None:
        return
    time = parse_timestamp(metrics.time)
    for name in MEMORY_FIELDS:
        value = getattr(metrics, name)
        if value is not None:
            yield _event(ctx, f"{stem}.memory.{name}", time, labels, value)


def network_metrics(
    ctx: ScrapeContext, stem: str, metrics: Optional[NetworkStats], labels: Labels
) -> Iterator[MetricEvent]:
    if metrics is None or not metrics.interfaces:
        return
    time = parse_timestamp(metrics.time)
    for interface in metrics.interfaces:
        for name in NETWORK_FIELDS:
            value = getattr(interface, name)
            if value is not None:
                yield _event(ctx, f"{stem}.network.{name}", time, labels, value, interface=interface.name)


def fs_metrics(ctx: ScrapeContext, stem: str, metrics: Optional[FsStats], labels: Labels) -> Iterator[MetricEvent]:
    if metrics is None:
        return
    time = parse_timestamp(metrics.time)
    for name in FS_FIELDS:
        value = getattr(metrics, name)
        if value is not None:
            yield _event(ctx, f"{stem}.{name}", time, labels, value)


def rlimit_metrics(
    ctx: ScrapeContext, node_name: Optional[str], metrics: Optional[RlimitStats]
) -> Iterator[MetricEvent]:
    """Process limits of the node. The tag does not follow the caller's stem."""
    if metrics is None:
        return
    time = parse_timestamp(metrics.time)
    for name in RLIMIT_FIELDS:
        value = getattr(metrics, name)
        if value is not None:
            yield _event(ctx, f"node.runtime.imagefs.{name}", time, {}, value, node=node_name)
