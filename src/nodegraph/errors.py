"""
Exception hierarchy for nodegraph.

Absence of a node or edge is never an error; these are raised only for
precondition violations. Backend faults propagate as whatever the
backend raised.
"""

from __future__ import annotations


class GraphError(Exception):
    """Base class for graph errors."""


class MissingEndpointError(GraphError, KeyError):
    """An edge references a node id that is not registered."""

    def __init__(self, node_id: str) -> None:
        super().__init__(node_id)
        self.node_id = node_id

    def __str__(self) -> str:
        return f"edge endpoint {self.node_id!r} is not registered"


class InvalidNodeError(GraphError, TypeError):
    """A value without node_type/get_node_id/get_node_props was registered."""
