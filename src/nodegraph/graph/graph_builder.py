from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Tuple

from nodegraph.graph.graph_manager import GraphManager


@dataclass(frozen=True)
class BuildReport:
    nodes_added: int
    edges_added: int
    edges_existing: int


class GraphBuilder:
    """
    Loads a graph from node and edge collections through a manager.

    Edges are ``(source, target)`` node pairs; each goes through
    ``GraphManager.add_edge``, so unknown endpoints are registered on the
    way and every change is published.
    """

    def __init__(self, manager: GraphManager) -> None:
        self.manager = manager

    async def add_nodes(self, nodes: Iterable[Any]) -> int:
        count = 0
        for node in nodes:
            await self.manager.add_node(node)
            count += 1
        return count

    async def add_edges(self, edges: Iterable[Tuple[Any, Any]]) -> Tuple[int, int]:
        added = 0
        existing = 0
        for source, target in edges:
            if await self.manager.add_edge(source, target):
                added += 1
            else:
                existing += 1
        return added, existing

    async def build(
        self,
        *,
        nodes: Iterable[Any] = (),
        edges: Iterable[Tuple[Any, Any]] = (),
    ) -> BuildReport:
        nodes_added = await self.add_nodes(nodes)
        edges_added, edges_existing = await self.add_edges(edges)
        return BuildReport(
            nodes_added=nodes_added,
            edges_added=edges_added,
            edges_existing=edges_existing,
        )
