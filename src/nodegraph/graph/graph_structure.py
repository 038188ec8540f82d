from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List, Optional, Set

from nodegraph.graph.graph_schema import GraphStructure
from nodegraph.utils.helpers import resolve

if TYPE_CHECKING:
    from nodegraph.graph.graph_manager import GraphManager


class StructureSerializer:
    """
    Builds recursive snapshots of a node and the subgraph it reaches.

    Cycles are cut with the set of ids on the current ancestor path, not
    a global visited set: a node shared by two sibling branches is
    expanded under both, while a node that reappears beneath itself is
    emitted as a leaf without ``targets``.

    The snapshot is all-or-nothing. Any error raised while resolving
    props or listing targets propagates and no partial structure is
    returned.
    """

    def __init__(self, manager: "GraphManager") -> None:
        self.manager = manager

    async def serialize(
        self,
        node: Any,
        *,
        max_depth: Optional[int] = None,
    ) -> GraphStructure:
        if max_depth is not None and max_depth < 0:
            raise ValueError("max_depth must be >= 0")

        path: Set[str] = set()
        return await self._build(node, path=path, depth=0, max_depth=max_depth)

    async def _build(
        self,
        node: Any,
        *,
        path: Set[str],
        depth: int,
        max_depth: Optional[int],
    ) -> GraphStructure:
        node_id = node.get_node_id()
        props = dict(await resolve(node.get_node_props()) or {})

        if max_depth is not None and depth >= max_depth:
            return GraphStructure(type=node.node_type, id=node_id, props=props)

        path.add(node_id)
        try:
            children: List[GraphStructure] = []
            async for target in self.manager.get_targets(node):
                target_id = target.get_node_id()

                if target_id in path:
                    logging.getLogger("nodegraph.structure").debug(
                        "cycle at %s -> %s; emitting leaf",
                        node_id,
                        target_id,
                    )
                    children.append(await self._leaf(target))
                    continue

                children.append(
                    await self._build(
                        target,
                        path=path,
                        depth=depth + 1,
                        max_depth=max_depth,
                    )
                )
        finally:
            path.discard(node_id)

        return GraphStructure(
            type=node.node_type,
            id=node_id,
            props=props,
            targets=children,
        )

    async def _leaf(self, node: Any) -> GraphStructure:
        props = dict(await resolve(node.get_node_props()) or {})
        return GraphStructure(type=node.node_type, id=node.get_node_id(), props=props)
