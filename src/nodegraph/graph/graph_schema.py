from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Protocol,
    Union,
    runtime_checkable,
)

Props = Dict[str, Any]
UpdateListener = Callable[[], None]


# ---------------------------------------------------------------------
# Entity capabilities
# ---------------------------------------------------------------------


@runtime_checkable
class GraphEntity(Protocol):
    """
    Capability set every node must expose.

    ``get_node_props`` may return the mapping directly or an awaitable
    resolving to it.
    """

    node_type: int

    def get_node_id(self) -> str: ...

    def get_node_props(self) -> Union[Props, Awaitable[Props]]: ...


@runtime_checkable
class UpdateEmittingEntity(GraphEntity, Protocol):
    """
    Optional capability: a node that announces its own content changes.
    """

    def add_update_listener(self, listener: UpdateListener) -> None: ...

    def remove_update_listener(self, listener: UpdateListener) -> None: ...


def is_graph_entity(value: Any) -> bool:
    return isinstance(value, GraphEntity) and isinstance(value.node_type, int)


def emits_updates(value: Any) -> bool:
    return is_graph_entity(value) and isinstance(value, UpdateEmittingEntity)


# ---------------------------------------------------------------------
# Ready-made nodes
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class GraphNode:
    """
    Plain typed node with an eagerly available property map.
    """

    node_type: int
    id: str
    props: Props = field(default_factory=dict)

    def get_node_id(self) -> str:
        return self.id

    def get_node_props(self) -> Props:
        return self.props


class EventGraphNode:
    """
    Mutable node that notifies listeners when its content changes.

    Listeners are plain callables; ``mark_updated`` calls them in
    registration order.
    """

    def __init__(
        self,
        node_type: int,
        id: str,
        props: Optional[Props] = None,
    ) -> None:
        self.node_type = node_type
        self.id = id
        self._props: Props = dict(props or {})
        self._listeners: List[UpdateListener] = []

    def get_node_id(self) -> str:
        return self.id

    def get_node_props(self) -> Props:
        return dict(self._props)

    def set_props(self, props: Mapping[str, Any]) -> None:
        self._props = dict(props)
        self.mark_updated()

    def add_update_listener(self, listener: UpdateListener) -> None:
        self._listeners.append(listener)

    def remove_update_listener(self, listener: UpdateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def listener_count(self) -> int:
        return len(self._listeners)

    def mark_updated(self) -> None:
        for listener in list(self._listeners):
            listener()

    def __repr__(self) -> str:
        return f"EventGraphNode(node_type={self.node_type!r}, id={self.id!r})"


# ---------------------------------------------------------------------
# Store bookkeeping
# ---------------------------------------------------------------------


class PutOutcome(str, Enum):
    CREATED = "created"
    UPDATED = "updated"


@dataclass(frozen=True)
class NodeRecord:
    """
    Stored node plus the capabilities detected when it was registered.
    """

    node: Any
    emits_updates: bool = False

    @staticmethod
    def create(node: Any) -> "NodeRecord":
        return NodeRecord(node=node, emits_updates=emits_updates(node))


class GraphEvent(str, Enum):
    """
    Names of the notifications published by a graph manager.
    """

    GRAPH_UPDATE = "graph_update"
    NODE_UPDATE = "node_update"
    NODE_REMOVE = "node_remove"
    EDGE_ADD = "edge_add"
    EDGE_REMOVE = "edge_remove"


# ---------------------------------------------------------------------
# Structural snapshot
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class GraphStructure:
    """
    Recursive snapshot of a node and what it reaches.

    ``targets`` is None where recursion was truncated (a repeated
    ancestor or the depth limit).
    """

    type: int
    id: str
    props: Props
    targets: Optional[List["GraphStructure"]] = None

    @property
    def truncated(self) -> bool:
        return self.targets is None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type,
            "id": self.id,
            "props": dict(self.props),
        }
        if self.targets is not None:
            data["targets"] = [t.to_dict() for t in self.targets]
        return data

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "GraphStructure":
        raw_targets = data.get("targets")
        return GraphStructure(
            type=int(data["type"]),
            id=str(data["id"]),
            props=dict(data.get("props") or {}),
            targets=(
                None
                if raw_targets is None
                else [GraphStructure.from_dict(t) for t in raw_targets]
            ),
        )
