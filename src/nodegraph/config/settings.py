from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------
# Graph mutation & export policy
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class GraphConfig:
    """
    Controls how a graph manager mutates, relays and exports the graph.
    """

    # add_edge registers missing endpoints instead of rejecting the edge
    auto_materialize_endpoints: bool = True

    # re-publish updates announced by the nodes themselves
    relay_node_updates: bool = True

    # default snapshot depth; 0 means unlimited
    structure_max_depth: int = 0

    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.structure_max_depth < 0:
            raise ValueError("structure_max_depth must be >= 0")

    @property
    def default_max_depth(self) -> int | None:
        return self.structure_max_depth or None
