"""
nodegraph
=========

A directed, typed property-graph store with change notification and
cycle-safe structural snapshots.

Core idea:
- One async facade over node and edge backends that may answer
  immediately or wait on a remote resource.

Public API:
- GraphManager
- GraphNode / EventGraphNode
- GraphStructure
- EventBus
- GraphConfig
"""

from nodegraph.config.settings import GraphConfig
from nodegraph.errors import GraphError, InvalidNodeError, MissingEndpointError
from nodegraph.events.event_bus import EventBus, Subscription
from nodegraph.graph.graph_manager import GraphManager
from nodegraph.graph.graph_schema import (
    EventGraphNode,
    GraphEvent,
    GraphNode,
    GraphStructure,
)

__all__ = [
    "GraphConfig",
    "GraphError",
    "InvalidNodeError",
    "MissingEndpointError",
    "EventBus",
    "Subscription",
    "GraphManager",
    "EventGraphNode",
    "GraphEvent",
    "GraphNode",
    "GraphStructure",
]

__version__ = "0.1.0"
