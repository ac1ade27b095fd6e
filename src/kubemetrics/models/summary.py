# src/kubemetrics/models/summary.py
"""
Pydantic models for the kubelet Summary API document (``/stats/summary``).

Every field is optional: the kubelet omits sub-documents and counters it
cannot measure, and the walkers skip whatever is missing. Attribute names are
the snake_case form of the JSON keys, which are accepted through camelCase
aliases. Unknown keys are ignored.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Number = Union[int, float]


class SummaryModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class CPUStats(SummaryModel):
    time: Optional[str] = None
    usage_nano_cores: Optional[Number] = None


class MemoryStats(SummaryModel):
    time: Optional[str] = None
    available_bytes: Optional[Number] = None
    usage_bytes: Optional[Number] = None
    working_set_bytes: Optional[Number] = None
    rss_bytes: Optional[Number] = None
    page_faults: Optional[Number] = None
    major_page_faults: Optional[Number] = None


class InterfaceStats(SummaryModel):
    name: Optional[str] = None
    rx_bytes: Optional[Number] = None
    rx_errors: Optional[Number] = None
    tx_bytes: Optional[Number] = None
    tx_errors: Optional[Number] = None


class NetworkStats(SummaryModel):
    time: Optional[str] = None
    interfaces: Optional[List[InterfaceStats]] = None


class FsStats(SummaryModel):
    time: Optional[str] = None
    available_bytes: Optional[Number] = None
    capacity_bytes: Optional[Number] = None
    used_bytes: Optional[Number] = None
    inodes_free: Optional[Number] = None
    inodes: Optional[Number] = None
    inodes_used: Optional[Number] = None


class VolumeStats(FsStats):
    name: Optional[str] = None


class RlimitStats(SummaryModel):
    time: Optional[str] = None
    maxpid: Optional[Number] = None
    curproc: Optional[Number] = None


class RuntimeStats(SummaryModel):
    image_fs: Optional[FsStats] = None


class ContainerStats(SummaryModel):
    name: Optional[str] = None
    start_time: Optional[str] = None
    cpu: Optional[CPUStats] = None
    memory: Optional[MemoryStats] = None
    rootfs: Optional[FsStats] = None
    logs: Optional[FsStats] = None


class NodeStats(SummaryModel):
    node_name: Optional[str] = None
    start_time: Optional[str] = None
    cpu: Optional[CPUStats] = None
    memory: Optional[MemoryStats] = None
    network: Optional[NetworkStats] = None
    fs: Optional[FsStats] = None
    runtime: Optional[RuntimeStats] = None
    rlimit: Optional[RlimitStats] = None
    system_containers: Optional[List[ContainerStats]] = None


class PodStats(SummaryModel):
    pod_ref: Optional[Dict[str, Any]] = None
    start_time: Optional[str] = None
    cpu: Optional[CPUStats] = None
    memory: Optional[MemoryStats] = None
    network: Optional[NetworkStats] = None
    ephemeral_storage: Optional[FsStats] = Field(None, alias="ephemeral-storage")
    volume: Optional[List[VolumeStats]] = None
    containers: Optional[List[ContainerStats]] = None


class SummaryDocument(SummaryModel):
    node: Optional[NodeStats] = None
    pods: Optional[List[PodStats]] = None
