# tests/conftest.py

from datetime import datetime, timezone

import pytest

from kubemetrics.core.tagging import TagTemplate
from kubemetrics.core.walker import ScrapeContext
from kubemetrics.exporters.base_exporter import BaseExporter

SCRAPED_AT = datetime(2023, 1, 1, 2, 0, 0, tzinfo=timezone.utc)

CONFIG_ENV_VARS = (
    "KUBEMETRICS_TAG",
    "SCRAPE_INTERVAL",
    "USE_REST_CLIENT",
    "NODE_NAME",
    "NODE_NAMES",
    "KUBELET_PORT",
    "KUBECONFIG",
    "KUBERNETES_URL",
    "KUBERNETES_CLIENT_CERT",
    "KUBERNETES_CLIENT_KEY",
    "KUBERNETES_CA_FILE",
    "KUBERNETES_INSECURE_SSL",
    "KUBERNETES_BEARER_TOKEN_FILE",
    "KUBERNETES_BEARER_TOKEN",
    "KUBERNETES_SERVICE_HOST",
    "KUBERNETES_SERVICE_PORT",
    "OUTPUT_PATH",
)


class RecordingExporter(BaseExporter):
    """Keeps every exported event in memory."""

    def __init__(self):
        self.events = []
        self.closed = False

    async def emit(self, events):
        self.events.extend(events)
        return len(events)

    async def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def mock_settings_env_vars(monkeypatch, tmp_path):
    """
    Pytest fixture isolating every test from the real environment.

    It removes all collector settings so each test starts from the defaults,
    and points the service account directory at an empty temporary path.
    """
    for key in CONFIG_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("KUBERNETES_SECRET_DIR", str(tmp_path / "serviceaccount"))


@pytest.fixture
def exporter():
    return RecordingExporter()


@pytest.fixture
def ctx():
    return ScrapeContext(template=TagTemplate.compile("kubernetes.metrics.*"), scraped_at=SCRAPED_AT)


def _cpu(nano_cores):
    return {"time": "2023-01-01T01:00:00Z", "usageNanoCores": nano_cores, "usageCoreNanoSeconds": 123456789}


def _memory(**fields):
    return {"time": "2023-01-01T01:00:00Z", **fields}


def _fs(**fields):
    return {"time": "2023-01-01T01:00:00Z", **fields}


@pytest.fixture
def summary_document():
    """A realistic kubelet /stats/summary payload for one node and one pod."""
    return {
        "node": {
            "nodeName": "node-1",
            "startTime": "2023-01-01T00:00:00Z",
            "cpu": _cpu(2_000_000),
            "memory": _memory(availableBytes=1000, usageBytes=2000, workingSetBytes=1500),
            "network": {
                "time": "2023-01-01T01:00:00Z",
                "name": "eth0",
                "interfaces": [
                    {"name": "eth0", "rxBytes": 10, "rxErrors": 0, "txBytes": 20, "txErrors": 0},
                    {"name": "cni0", "rxBytes": 30},
                ],
            },
            "fs": _fs(availableBytes=5, capacityBytes=10, usedBytes=5, inodesFree=7, inodes=9, inodesUsed=2),
            "runtime": {"imageFs": _fs(availableBytes=50, capacityBytes=100)},
            "rlimit": {"time": "2023-01-01T01:00:00Z", "maxpid": 4194304, "curproc": 321},
            "systemContainers": [
                {
                    "name": "kubelet",
                    "startTime": "2023-01-01T01:00:00Z",
                    "cpu": _cpu(4_000_000),
                    "memory": _memory(rssBytes=64, pageFaults=3, majorPageFaults=1),
                }
            ],
        },
        "pods": [
            {
                "podRef": {"name": "web-0", "namespace": "default", "uid": "1234"},
                "startTime": "2023-01-01T01:30:00Z",
                "cpu": _cpu(1_000_000),
                "memory": _memory(workingSetBytes=300),
                "network": {
                    "time": "2023-01-01T01:00:00Z",
                    "interfaces": [{"name": "eth0", "rxBytes": 1, "txBytes": 2}],
                },
                "ephemeral-storage": _fs(usedBytes=42),
                "volume": [
                    {"time": "2023-01-01T01:00:00Z", "name": "v1", "availableBytes": 11},
                    {"time": "2023-01-01T01:00:00Z", "name": "v2", "availableBytes": 22},
                ],
                "containers": [
                    {
                        "name": "app",
                        "startTime": "2023-01-01T01:45:00Z",
                        "cpu": _cpu(500_000),
                        "memory": _memory(usageBytes=256),
                        "rootfs": _fs(usedBytes=4096),
                        "logs": _fs(usedBytes=512),
                    }
                ],
            }
        ],
    }
