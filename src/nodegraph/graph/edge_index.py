from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Iterator, Union

import networkx as nx

from nodegraph.errors import MissingEndpointError
from nodegraph.utils.helpers import MaybeAwaitable


class EdgeIndexPort(ABC):
    """
    Directed adjacency over node ids.

    Forward (id -> targets) and reverse (id -> sources) indices are
    always mutated as a pair.
    """

    # -------------------- Membership --------------------

    @abstractmethod
    def register(self, node_id: str) -> MaybeAwaitable: ...

    @abstractmethod
    def unregister(self, node_id: str) -> MaybeAwaitable: ...

    # -------------------- Write --------------------

    @abstractmethod
    def add(self, source: str, target: str) -> Union[bool, Awaitable[bool]]: ...

    @abstractmethod
    def remove(self, source: str, target: str) -> Union[bool, Awaitable[bool]]: ...

    @abstractmethod
    def drop_all_edges_of(self, node_id: str) -> Union[int, Awaitable[int]]: ...

    # -------------------- Read --------------------

    @abstractmethod
    def has_edge(self, source: str, target: str) -> Union[bool, Awaitable[bool]]: ...

    @abstractmethod
    def targets_of(self, node_id: str) -> MaybeAwaitable: ...

    @abstractmethod
    def sources_of(self, node_id: str) -> MaybeAwaitable: ...

    @abstractmethod
    def target_count(self, node_id: str) -> Union[int, Awaitable[int]]: ...

    @abstractmethod
    def source_count(self, node_id: str) -> Union[int, Awaitable[int]]: ...

    @abstractmethod
    def edge_count(self) -> Union[int, Awaitable[int]]: ...


class NetworkXEdgeIndex(EdgeIndexPort):
    """
    In-memory adjacency index backed by a ``networkx.DiGraph``.

    The digraph keeps successor and predecessor dicts per vertex, which
    are the forward and reverse indices; ``add_edge``/``remove_edge``
    update both. Vertices are registered explicitly so that an edge can
    never introduce an unknown endpoint.
    """

    def __init__(self) -> None:
        self._graph = nx.DiGraph()

    # -------------------- Membership --------------------

    def register(self, node_id: str) -> None:
        self._graph.add_node(node_id)

    def unregister(self, node_id: str) -> None:
        if node_id in self._graph:
            # remove_node drops incident edges in both directions too
            self._graph.remove_node(node_id)

    def is_registered(self, node_id: str) -> bool:
        return node_id in self._graph

    # -------------------- Edges --------------------

    def add(self, source: str, target: str) -> bool:
        for endpoint in (source, target):
            if endpoint not in self._graph:
                raise MissingEndpointError(endpoint)

        if self._graph.has_edge(source, target):
            return False

        self._graph.add_edge(source, target)
        return True

    def remove(self, source: str, target: str) -> bool:
        if not self._graph.has_edge(source, target):
            return False

        self._graph.remove_edge(source, target)
        return True

    def drop_all_edges_of(self, node_id: str) -> int:
        if node_id not in self._graph:
            return 0

        incident = list(self._graph.out_edges(node_id))
        incident.extend(
            (u, v) for u, v in self._graph.in_edges(node_id) if u != v
        )
        self._graph.remove_edges_from(incident)
        return len(incident)

    def has_edge(self, source: str, target: str) -> bool:
        return self._graph.has_edge(source, target)

    # -------------------- Traversal --------------------

    def targets_of(self, node_id: str) -> Iterator[str]:
        return self._iter_adjacent(self._graph.succ, node_id)

    def sources_of(self, node_id: str) -> Iterator[str]:
        return self._iter_adjacent(self._graph.pred, node_id)

    def target_count(self, node_id: str) -> int:
        if node_id not in self._graph:
            return 0
        return len(self._graph.succ[node_id])

    def source_count(self, node_id: str) -> int:
        if node_id not in self._graph:
            return 0
        return len(self._graph.pred[node_id])

    # -------------------- Analytics --------------------

    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def vertex_count(self) -> int:
        return self._graph.number_of_nodes()

    @staticmethod
    def _iter_adjacent(adjacency: Any, node_id: str) -> Iterator[str]:
        if node_id not in adjacency:
            return
        yield from list(adjacency[node_id])
