from __future__ import annotations

import asyncio
from typing import Any, List, Tuple

import pytest

from nodegraph.graph.edge_index import NetworkXEdgeIndex
from nodegraph.graph.graph_manager import GraphManager
from nodegraph.graph.graph_schema import GraphEvent, GraphNode
from nodegraph.graph.node_store import InMemoryNodeStore


class EventRecorder:
    def __init__(self, manager: GraphManager) -> None:
        self.events: List[Tuple[str, tuple]] = []
        for event in GraphEvent:
            manager.subscribe(event, self._recorder(event.value))

    def _recorder(self, name: str):
        def _record(*args: Any) -> None:
            self.events.append((name, args))

        return _record

    def names(self) -> List[str]:
        return [name for name, _ in self.events]

    def clear(self) -> None:
        self.events.clear()


class AsyncNodeStore(InMemoryNodeStore):
    """Node store whose every call suspends, like a remote backend."""

    async def put(self, node):
        await asyncio.sleep(0)
        return super().put(node)

    async def delete(self, node_id):
        await asyncio.sleep(0)
        return super().delete(node_id)

    async def get(self, node_id):
        await asyncio.sleep(0)
        return super().get(node_id)

    async def get_record(self, node_id):
        await asyncio.sleep(0)
        return super().get_record(node_id)

    async def contains(self, node_id):
        await asyncio.sleep(0)
        return super().contains(node_id)

    async def all(self):
        for node in list(super().all()):
            await asyncio.sleep(0)
            yield node

    async def by_type(self, node_type):
        for node in list(super().by_type(node_type)):
            await asyncio.sleep(0)
            yield node

    async def count(self):
        await asyncio.sleep(0)
        return super().count()


class AsyncEdgeIndex(NetworkXEdgeIndex):
    """Edge index whose every call suspends, like a remote backend."""

    async def register(self, node_id):
        await asyncio.sleep(0)
        return super().register(node_id)

    async def unregister(self, node_id):
        await asyncio.sleep(0)
        return super().unregister(node_id)

    async def add(self, source, target):
        await asyncio.sleep(0)
        return super().add(source, target)

    async def remove(self, source, target):
        await asyncio.sleep(0)
        return super().remove(source, target)

    async def drop_all_edges_of(self, node_id):
        await asyncio.sleep(0)
        return super().drop_all_edges_of(node_id)

    async def has_edge(self, source, target):
        await asyncio.sleep(0)
        return super().has_edge(source, target)

    async def targets_of(self, node_id):
        await asyncio.sleep(0)
        return list(super().targets_of(node_id))

    async def sources_of(self, node_id):
        await asyncio.sleep(0)
        return list(super().sources_of(node_id))

    async def target_count(self, node_id):
        await asyncio.sleep(0)
        return super().target_count(node_id)

    async def source_count(self, node_id):
        await asyncio.sleep(0)
        return super().source_count(node_id)

    async def edge_count(self):
        await asyncio.sleep(0)
        return super().edge_count()


def node(node_id: str, node_type: int = 1, **props: Any) -> GraphNode:
    return GraphNode(node_type=node_type, id=node_id, props=props)


@pytest.fixture()
def manager() -> GraphManager:
    return GraphManager()


@pytest.fixture()
def async_manager() -> GraphManager:
    return GraphManager(node_store=AsyncNodeStore(), edge_index=AsyncEdgeIndex())


@pytest.fixture(params=["sync", "async"])
def any_manager(request) -> GraphManager:
    if request.param == "sync":
        return GraphManager()
    return GraphManager(node_store=AsyncNodeStore(), edge_index=AsyncEdgeIndex())


@pytest.fixture()
def recorder(manager: GraphManager) -> EventRecorder:
    return EventRecorder(manager)
