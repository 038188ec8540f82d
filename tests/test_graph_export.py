import json

import pytest
from pydantic import ValidationError

from nodegraph.graph.graph_export import (
    GraphStructureModel,
    structure_from_json,
    structure_to_json,
)
from nodegraph.graph.graph_schema import GraphStructure


def _cyclic_snapshot() -> GraphStructure:
    leaf = GraphStructure(type=1, id="A", props={"k": "v"})
    b = GraphStructure(type=2, id="B", props={}, targets=[leaf])
    return GraphStructure(type=1, id="A", props={"k": "v"}, targets=[b])


def test_json_omits_targets_on_truncated_nodes():
    payload = json.loads(structure_to_json(_cyclic_snapshot()))

    assert payload["targets"][0]["targets"][0] == {
        "type": 1,
        "id": "A",
        "props": {"k": "v"},
    }


def test_json_keeps_empty_targets_on_leaves():
    snapshot = GraphStructure(type=1, id="A", props={}, targets=[])

    assert json.loads(structure_to_json(snapshot)) == {
        "type": 1,
        "id": "A",
        "props": {},
        "targets": [],
    }


def test_structure_survives_json_export():
    snapshot = _cyclic_snapshot()

    assert structure_from_json(structure_to_json(snapshot, indent=2)) == snapshot


def test_model_rejects_malformed_payload():
    with pytest.raises(ValidationError):
        GraphStructureModel.model_validate({"id": "A", "props": {}})

    with pytest.raises(ValidationError):
        GraphStructureModel.model_validate(
            {"type": 1, "id": "A", "props": {}, "targets": [{"id": "B"}]}
        )


def test_model_from_structure_matches_to_dict():
    snapshot = _cyclic_snapshot()

    assert GraphStructureModel.from_structure(snapshot).to_dict() == snapshot.to_dict()
