# tests/models/test_summary_models.py

import pytest
from pydantic import ValidationError

from kubemetrics.models.summary import PodStats, SummaryDocument


def test_camel_case_aliases(summary_document):
    document = SummaryDocument.model_validate(summary_document)

    assert document.node.node_name == "node-1"
    assert document.node.runtime.image_fs.capacity_bytes == 100
    assert document.node.system_containers[0].memory.major_page_faults == 1
    pod = document.pods[0]
    assert pod.pod_ref == {"name": "web-0", "namespace": "default", "uid": "1234"}
    assert pod.ephemeral_storage.used_bytes == 42
    assert [v.name for v in pod.volume] == ["v1", "v2"]


def test_integer_readings_stay_integers():
    document = SummaryDocument.model_validate({"node": {"cpu": {"usageNanoCores": 2000000}}})
    assert isinstance(document.node.cpu.usage_nano_cores, int)


def test_unknown_fields_are_ignored():
    pod = PodStats.model_validate({"podRef": {"name": "p"}, "process_stats": {"process_count": 3}, "swap": {}})
    assert pod.pod_ref == {"name": "p"}


def test_everything_is_optional():
    document = SummaryDocument.model_validate({"node": {}, "pods": [{}]})
    assert document.node.cpu is None
    assert document.pods[0].containers is None


def test_wrong_types_are_rejected():
    with pytest.raises(ValidationError):
        SummaryDocument.model_validate({"pods": {"name": "not-a-list"}})
