from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Dict, Iterable, Iterator, Optional, Union

from nodegraph.graph.graph_schema import NodeRecord, PutOutcome
from nodegraph.utils.helpers import MaybeAwaitable


class NodeStorePort(ABC):
    """
    Owns node identity and typed lookup.

    Implementations may answer immediately or return awaitables; the
    graph manager resolves both the same way.
    """

    # -------------------- Write --------------------

    @abstractmethod
    def put(self, node: Any) -> Union[PutOutcome, Awaitable[PutOutcome]]: ...

    @abstractmethod
    def delete(self, node_id: str) -> Union[bool, Awaitable[bool]]: ...

    # -------------------- Read --------------------

    @abstractmethod
    def get(self, node_id: str) -> MaybeAwaitable: ...

    @abstractmethod
    def get_record(self, node_id: str) -> MaybeAwaitable: ...

    @abstractmethod
    def contains(self, node_id: str) -> Union[bool, Awaitable[bool]]: ...

    @abstractmethod
    def all(self) -> MaybeAwaitable: ...

    @abstractmethod
    def by_type(self, node_type: int) -> MaybeAwaitable: ...

    @abstractmethod
    def count(self) -> Union[int, Awaitable[int]]: ...


class InMemoryNodeStore(NodeStorePort):
    """
    Dict-backed node store keyed by node id.
    """

    def __init__(self) -> None:
        self._records: Dict[str, NodeRecord] = {}

    def put(self, node: Any) -> PutOutcome:
        node_id = node.get_node_id()
        outcome = (
            PutOutcome.UPDATED if node_id in self._records else PutOutcome.CREATED
        )
        self._records[node_id] = NodeRecord.create(node)
        return outcome

    def delete(self, node_id: str) -> bool:
        return self._records.pop(node_id, None) is not None

    def get(self, node_id: str) -> Optional[Any]:
        record = self._records.get(node_id)
        return record.node if record is not None else None

    def get_record(self, node_id: str) -> Optional[NodeRecord]:
        return self._records.get(node_id)

    def contains(self, node_id: str) -> bool:
        return node_id in self._records

    def all(self) -> Iterator[Any]:
        # Generators snapshot on first next(), so each call reflects the
        # state at iteration start.
        return self._iter_nodes(None)

    def by_type(self, node_type: int) -> Iterator[Any]:
        return self._iter_nodes(node_type)

    def count(self) -> int:
        return len(self._records)

    def _iter_nodes(self, node_type: Optional[int]) -> Iterator[Any]:
        records: Iterable[NodeRecord] = list(self._records.values())
        for record in records:
            if node_type is None or record.node.node_type == node_type:
                yield record.node
