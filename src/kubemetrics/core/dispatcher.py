# src/kubemetrics/core/dispatcher.py
"""
Drives the walkers over one summary document.

Node metrics are yielded before any pod metrics, and pods, volumes and
containers follow document order. Each nesting level extends the labels of
its parent into a new mapping, so siblings never see each other's labels.
"""

from typing import Iterator, List, Optional

from ..models.events import MetricEvent
from ..models.summary import ContainerStats, NodeStats, PodStats, SummaryDocument
from .walker import (
    Labels,
    ScrapeContext,
    cpu_metrics,
    fs_metrics,
    make_labels,
    memory_metrics,
    network_metrics,
    rlimit_metrics,
    uptime_metrics,
)


def system_container_events(
    ctx: ScrapeContext, node_name: Optional[str], container: ContainerStats
) -> Iterator[MetricEvent]:
    stem = "sys-container"
    labels = make_labels({"node": node_name, "name": container.name})
    yield from uptime_metrics(ctx, stem, container.start_time, labels)
    yield from cpu_metrics(ctx, stem, container.cpu, labels)
    yield from memory_metrics(ctx, stem, container.memory, labels)


def node_events(ctx: ScrapeContext, node: NodeStats) -> Iterator[MetricEvent]:
    stem = "node"
    labels = make_labels({"node": node.node_name})

    yield from uptime_metrics(ctx, stem, node.start_time, labels)
    yield from cpu_metrics(ctx, stem, node.cpu, labels)
    yield from memory_metrics(ctx, stem, node.memory, labels)
    yield from network_metrics(ctx, stem, node.network, labels)
    yield from fs_metrics(ctx, f"{stem}.fs", node.fs, labels)
    if node.runtime is not None:
        yield from fs_metrics(ctx, f"{stem}.imagefs", node.runtime.image_fs, labels)
    yield from rlimit_metrics(ctx, node.node_name, node.rlimit)
    for container in node.system_containers or []:
        yield from system_container_events(ctx, node.node_name, container)


def container_events(ctx: ScrapeContext, pod_labels: Labels, container: ContainerStats) -> Iterator[MetricEvent]:
    stem = "container"
    labels = make_labels(pod_labels, {"container-name": container.name})
    yield from uptime_metrics(ctx, stem, container.start_time, labels)
    yield from cpu_metrics(ctx, stem, container.cpu, labels)
    yield from memory_metrics(ctx, stem, container.memory, labels)
    yield from fs_metrics(ctx, f"{stem}.rootfs", container.rootfs, labels)
    yield from fs_metrics(ctx, f"{stem}.logs", container.logs, labels)


def pod_labels(node_name: Optional[str], pod: PodStats) -> Labels:
    """``pod-<key>`` for every podRef field, plus the node when it is known."""
    labels = {f"pod-{key}": value for key, value in (pod.pod_ref or {}).items()}
    if node_name is not None:
        labels["node"] = node_name
    return make_labels(labels)


def pod_events(ctx: ScrapeContext, node_name: Optional[str], pod: PodStats) -> Iterator[MetricEvent]:
    stem = "pod"
    labels = pod_labels(node_name, pod)

    yield from uptime_metrics(ctx, stem, pod.start_time, labels)
    yield from cpu_metrics(ctx, stem, pod.cpu, labels)
    yield from memory_metrics(ctx, stem, pod.memory, labels)
    yield from network_metrics(ctx, stem, pod.network, labels)
    yield from fs_metrics(ctx, f"{stem}.ephemeral-storage", pod.ephemeral_storage, labels)
    for volume in pod.volume or []:
        yield from fs_metrics(ctx, f"{stem}.volume", volume, make_labels(labels, {"name": volume.name}))
    for container in pod.containers or []:
        yield from container_events(ctx, labels, container)


def summary_events(ctx: ScrapeContext, document: SummaryDocument) -> Iterator[MetricEvent]:
    node_name = None
    if document.node is not None:
        node_name = document.node.node_name
        yield from node_events(ctx, document.node)
    for pod in document.pods or []:
        yield from pod_events(ctx, node_name, pod)


def collect_events(ctx: ScrapeContext, document: SummaryDocument) -> List[MetricEvent]:
    """Walk the whole document before anything is exported."""
    return list(summary_events(ctx, document))
