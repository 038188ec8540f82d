"""
Graph subsystem for nodegraph.

Defines the property-graph core:
- node identity and typed lookup
- paired forward/reverse adjacency
- the mutation and query facade
- cycle-safe structural snapshots
"""

from nodegraph.graph.graph_schema import (
    EventGraphNode,
    GraphEntity,
    GraphEvent,
    GraphNode,
    GraphStructure,
    NodeRecord,
    PutOutcome,
    UpdateEmittingEntity,
)
from nodegraph.graph.node_store import NodeStorePort, InMemoryNodeStore
from nodegraph.graph.edge_index import EdgeIndexPort, NetworkXEdgeIndex
from nodegraph.graph.graph_manager import GraphManager
from nodegraph.graph.graph_structure import StructureSerializer
from nodegraph.graph.graph_builder import BuildReport, GraphBuilder
from nodegraph.graph.graph_export import (
    GraphStructureModel,
    structure_from_json,
    structure_to_json,
)

__all__ = [
    "EventGraphNode",
    "GraphEntity",
    "GraphEvent",
    "GraphNode",
    "GraphStructure",
    "NodeRecord",
    "PutOutcome",
    "UpdateEmittingEntity",
    "NodeStorePort",
    "InMemoryNodeStore",
    "EdgeIndexPort",
    "NetworkXEdgeIndex",
    "GraphManager",
    "StructureSerializer",
    "BuildReport",
    "GraphBuilder",
    "GraphStructureModel",
    "structure_from_json",
    "structure_to_json",
]
