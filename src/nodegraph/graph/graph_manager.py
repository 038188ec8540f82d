from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncIterator, Callable, Dict, Optional, Tuple

from nodegraph.config.settings import GraphConfig
from nodegraph.errors import InvalidNodeError, MissingEndpointError
from nodegraph.events.event_bus import EventBus, Subscription
from nodegraph.graph.edge_index import EdgeIndexPort, NetworkXEdgeIndex
from nodegraph.graph.graph_schema import (
    GraphEvent,
    GraphStructure,
    PutOutcome,
    is_graph_entity,
)
from nodegraph.graph.graph_structure import StructureSerializer
from nodegraph.graph.node_store import InMemoryNodeStore, NodeStorePort
from nodegraph.utils.helpers import collect, iterate, resolve

logger = logging.getLogger("nodegraph.manager")


class GraphManager:
    """
    Single entry point for mutating and querying a property graph.

    Every operation is a coroutine, whether the node store and edge index
    answer immediately or have to wait on an external resource.

    Mutations go through one asyncio lock per manager, so the
    read-check-write steps of two calls never interleave. Events are
    published inside that lock, after the change is applied: by the time
    a mutation returns, its subscribers have already run.

    Reads take no lock. They copy id lists at call time and skip ids
    that no longer resolve.
    """

    def __init__(
        self,
        *,
        node_store: Optional[NodeStorePort] = None,
        edge_index: Optional[EdgeIndexPort] = None,
        event_bus: Optional[EventBus] = None,
        config: Optional[GraphConfig] = None,
    ) -> None:
        self.node_store = node_store if node_store is not None else InMemoryNodeStore()
        self.edge_index = edge_index if edge_index is not None else NetworkXEdgeIndex()
        self.events = event_bus if event_bus is not None else EventBus(name="graph")
        self.config = config if config is not None else GraphConfig()

        self._mutation_lock = asyncio.Lock()
        self._serializer = StructureSerializer(self)
        self._relays: Dict[str, Tuple[Any, Callable[[], None]]] = {}

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def subscribe(self, event: GraphEvent | str, handler: Callable[..., Any]) -> Subscription:
        return self.events.subscribe(event, handler)

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    async def add_node(self, node: Any) -> bool:
        """
        Insert ``node`` or update the stored node with the same id.

        A first insert publishes ``graph_update``; an update publishes
        ``node_update(node)`` and then ``graph_update``.
        """
        _require_entity(node)
        async with self._mutation_lock:
            await self._put_node(node)
        return True

    async def remove_node(self, node: Any) -> bool:
        """
        Remove ``node`` and every edge touching it.

        Returns False, without publishing, when the id is not stored.
        """
        node_id = node.get_node_id()

        async with self._mutation_lock:
            if not await resolve(self.node_store.contains(node_id)):
                return False

            dropped = await resolve(self.edge_index.drop_all_edges_of(node_id))
            await resolve(self.node_store.delete(node_id))
            await resolve(self.edge_index.unregister(node_id))
            self._detach_relay(node_id)

            logger.debug("removed node %s (%s incident edges)", node_id, dropped)
            self.events.publish(GraphEvent.NODE_REMOVE, node)
            self.events.publish(GraphEvent.GRAPH_UPDATE)

        return True

    async def get_node_by_id(self, node_id: str) -> Optional[Any]:
        return await resolve(self.node_store.get(node_id))

    async def get_all_nodes(self) -> AsyncIterator[Any]:
        async for node in iterate(self.node_store.all()):
            yield node

    async def get_nodes_by_type(self, node_type: int) -> AsyncIterator[Any]:
        async for node in iterate(self.node_store.by_type(node_type)):
            yield node

    async def node_count(self) -> int:
        return int(await resolve(self.node_store.count()))

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------

    async def add_edge(self, source: Any, target: Any) -> bool:
        """
        Add the directed edge ``source -> target``.

        Endpoints missing from the store are added first, each with its
        own events. Returns False if the edge was already present.
        """
        _require_entity(source)
        _require_entity(target)
        source_id = source.get_node_id()
        target_id = target.get_node_id()

        async with self._mutation_lock:
            for endpoint in (source, target):
                endpoint_id = endpoint.get_node_id()
                if await resolve(self.node_store.contains(endpoint_id)):
                    continue
                if not self.config.auto_materialize_endpoints:
                    raise MissingEndpointError(endpoint_id)
                await self._put_node(endpoint)

            added = bool(await resolve(self.edge_index.add(source_id, target_id)))
            if added:
                logger.debug("added edge %s -> %s", source_id, target_id)
                self.events.publish(GraphEvent.EDGE_ADD, source, target)
                self.events.publish(GraphEvent.GRAPH_UPDATE)

        return added

    async def remove_edge(self, source: Any, target: Any) -> bool:
        """
        Remove the directed edge ``source -> target`` if present.

        Endpoints are never removed, whether or not they are stored.
        """
        source_id = source.get_node_id()
        target_id = target.get_node_id()

        async with self._mutation_lock:
            removed = bool(await resolve(self.edge_index.remove(source_id, target_id)))
            if removed:
                logger.debug("removed edge %s -> %s", source_id, target_id)
                self.events.publish(GraphEvent.EDGE_REMOVE, source, target)
                self.events.publish(GraphEvent.GRAPH_UPDATE)

        return removed

    async def has_edge(self, source: Any, target: Any) -> bool:
        return bool(
            await resolve(
                self.edge_index.has_edge(source.get_node_id(), target.get_node_id())
            )
        )

    async def edge_count(self) -> int:
        return int(await resolve(self.edge_index.edge_count()))

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    async def get_targets(self, node: Any) -> AsyncIterator[Any]:
        target_ids = await collect(self.edge_index.targets_of(node.get_node_id()))
        async for target in self._resolve_ids(target_ids):
            yield target

    async def get_sources(self, node: Any) -> AsyncIterator[Any]:
        source_ids = await collect(self.edge_index.sources_of(node.get_node_id()))
        async for source in self._resolve_ids(source_ids):
            yield source

    async def get_target_edge_count(self, node: Any) -> int:
        return int(await resolve(self.edge_index.target_count(node.get_node_id())))

    async def get_source_edge_count(self, node: Any) -> int:
        return int(await resolve(self.edge_index.source_count(node.get_node_id())))

    async def get_node_structure(
        self,
        node: Any,
        *,
        max_depth: Optional[int] = None,
    ) -> GraphStructure:
        """
        Snapshot ``node`` and its reachable subgraph.

        ``max_depth`` falls back to the configured default when omitted.
        """
        if max_depth is None:
            max_depth = self.config.default_max_depth
        return await self._serializer.serialize(node, max_depth=max_depth)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _put_node(self, node: Any) -> PutOutcome:
        # caller holds the mutation lock
        node_id = node.get_node_id()
        outcome = PutOutcome(await resolve(self.node_store.put(node)))
        await resolve(self.edge_index.register(node_id))

        record = await resolve(self.node_store.get_record(node_id))
        if record is not None and record.emits_updates:
            self._attach_relay(node_id, node)
        else:
            self._detach_relay(node_id)

        if outcome is PutOutcome.UPDATED:
            logger.debug("updated node %s", node_id)
            self.events.publish(GraphEvent.NODE_UPDATE, node)
        else:
            logger.debug("created node %s (type=%s)", node_id, node.node_type)
        self.events.publish(GraphEvent.GRAPH_UPDATE)

        return outcome

    async def _resolve_ids(self, node_ids: list) -> AsyncIterator[Any]:
        for node_id in node_ids:
            node = await resolve(self.node_store.get(node_id))
            if node is not None:
                yield node

    def _attach_relay(self, node_id: str, node: Any) -> None:
        if not self.config.relay_node_updates:
            return

        current = self._relays.get(node_id)
        if current is not None and current[0] is node:
            return
        self._detach_relay(node_id)

        def _on_node_updated() -> None:
            self._relay_node_update(node)

        node.add_update_listener(_on_node_updated)
        self._relays[node_id] = (node, _on_node_updated)

    def _detach_relay(self, node_id: str) -> None:
        current = self._relays.pop(node_id, None)
        if current is not None:
            node, listener = current
            node.remove_update_listener(listener)

    def _relay_node_update(self, node: Any) -> None:
        logger.debug("node %s announced an update", node.get_node_id())
        self.events.publish(GraphEvent.NODE_UPDATE, node)
        self.events.publish(GraphEvent.GRAPH_UPDATE)


def _require_entity(node: Any) -> None:
    if not is_graph_entity(node):
        raise InvalidNodeError(
            f"{node!r} does not expose node_type, get_node_id and get_node_props"
        )
