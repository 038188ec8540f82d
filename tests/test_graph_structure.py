from __future__ import annotations

import asyncio

import pytest

from nodegraph.config.settings import GraphConfig
from nodegraph.graph.graph_manager import GraphManager

from conftest import node


class LazyNode:
    """Node whose props come from a slow source."""

    def __init__(self, node_type: int, node_id: str, props: dict) -> None:
        self.node_type = node_type
        self._id = node_id
        self._props = props

    def get_node_id(self) -> str:
        return self._id

    async def get_node_props(self) -> dict:
        await asyncio.sleep(0)
        return dict(self._props)


class ExplodingNode(LazyNode):
    async def get_node_props(self) -> dict:
        raise ConnectionError("props backend down")


@pytest.mark.asyncio
async def test_two_node_scenario(any_manager: GraphManager):
    a = node("A")
    b = node("B")
    await any_manager.add_node(a)
    await any_manager.add_node(b)
    await any_manager.add_edge(a, b)

    structure = await any_manager.get_node_structure(a)

    assert structure.to_dict() == {
        "type": 1,
        "id": "A",
        "props": {},
        "targets": [{"type": 1, "id": "B", "props": {}, "targets": []}],
    }


@pytest.mark.asyncio
async def test_cycle_is_truncated_at_repeated_ancestor(any_manager: GraphManager):
    a, b = node("A"), node("B")
    await any_manager.add_edge(a, b)
    await any_manager.add_edge(b, a)

    structure = await any_manager.get_node_structure(a)

    (b_struct,) = structure.targets
    assert b_struct.id == "B"
    (a_leaf,) = b_struct.targets
    assert a_leaf.id == "A"
    assert a_leaf.truncated
    assert "targets" not in a_leaf.to_dict()


@pytest.mark.asyncio
async def test_self_loop_emits_leaf(manager: GraphManager):
    a = node("A", name="loop")
    await manager.add_edge(a, a)

    structure = await manager.get_node_structure(a)

    assert structure.to_dict() == {
        "type": 1,
        "id": "A",
        "props": {"name": "loop"},
        "targets": [{"type": 1, "id": "A", "props": {"name": "loop"}}],
    }


@pytest.mark.asyncio
async def test_shared_node_is_expanded_on_every_path(manager: GraphManager):
    a, b, c, d, e = (node(x) for x in "ABCDE")
    await manager.add_edge(a, b)
    await manager.add_edge(a, c)
    await manager.add_edge(b, d)
    await manager.add_edge(c, d)
    await manager.add_edge(d, e)

    structure = await manager.get_node_structure(a)

    via_b, via_c = structure.targets
    assert [t.id for t in via_b.targets] == ["D"]
    assert [t.id for t in via_c.targets] == ["D"]
    assert via_b.targets[0].targets[0].id == "E"
    assert via_c.targets[0].targets[0].id == "E"
    assert via_c.targets[0].targets[0].targets == []


@pytest.mark.asyncio
async def test_target_order_follows_insertion(manager: GraphManager):
    root = node("root")
    for name in ("z", "a", "m"):
        await manager.add_edge(root, node(name))

    structure = await manager.get_node_structure(root)

    assert [t.id for t in structure.targets] == ["z", "a", "m"]


@pytest.mark.asyncio
async def test_lazy_props_are_awaited(manager: GraphManager):
    a = LazyNode(4, "A", {"port": "8080"})
    b = LazyNode(5, "B", {"version": "20"})
    await manager.add_edge(a, b)

    structure = await manager.get_node_structure(a)

    assert structure.to_dict() == {
        "type": 4,
        "id": "A",
        "props": {"port": "8080"},
        "targets": [{"type": 5, "id": "B", "props": {"version": "20"}, "targets": []}],
    }


@pytest.mark.asyncio
async def test_failure_aborts_whole_snapshot(manager: GraphManager):
    a = node("A")
    broken = ExplodingNode(1, "B", {})
    await manager.add_edge(a, broken)

    with pytest.raises(ConnectionError):
        await manager.get_node_structure(a)


@pytest.mark.asyncio
async def test_depth_limit_truncates(manager: GraphManager):
    a, b, c = node("A"), node("B"), node("C")
    await manager.add_edge(a, b)
    await manager.add_edge(b, c)

    structure = await manager.get_node_structure(a, max_depth=1)

    (b_struct,) = structure.targets
    assert b_struct.id == "B"
    assert b_struct.truncated

    root_only = await manager.get_node_structure(a, max_depth=0)
    assert root_only.to_dict() == {"type": 1, "id": "A", "props": {}}


@pytest.mark.asyncio
async def test_configured_depth_is_the_default():
    manager = GraphManager(config=GraphConfig(structure_max_depth=1))
    a, b, c = node("A"), node("B"), node("C")
    await manager.add_edge(a, b)
    await manager.add_edge(b, c)

    structure = await manager.get_node_structure(a)
    assert structure.targets[0].truncated

    deeper = await manager.get_node_structure(a, max_depth=5)
    assert [t.id for t in deeper.targets[0].targets] == ["C"]


@pytest.mark.asyncio
async def test_negative_depth_is_rejected(manager: GraphManager):
    a = node("A")
    await manager.add_node(a)

    with pytest.raises(ValueError):
        await manager.get_node_structure(a, max_depth=-1)
