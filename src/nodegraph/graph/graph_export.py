from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from nodegraph.graph.graph_schema import GraphStructure


class GraphStructureModel(BaseModel):
    """
    Wire shape of a structural snapshot.

    ``targets`` is absent on truncated nodes and is left out of the
    serialized output in that case.
    """

    type: int
    id: str
    targets: Optional[List["GraphStructureModel"]] = None
    props: Dict[str, Any] = Field(default_factory=dict)

    @staticmethod
    def from_structure(structure: GraphStructure) -> "GraphStructureModel":
        return GraphStructureModel.model_validate(structure.to_dict())

    def to_structure(self) -> GraphStructure:
        return GraphStructure.from_dict(self.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


GraphStructureModel.model_rebuild()


def structure_to_json(structure: GraphStructure, *, indent: Optional[int] = None) -> str:
    return GraphStructureModel.from_structure(structure).model_dump_json(
        exclude_none=True,
        indent=indent,
    )


def structure_from_json(payload: str | bytes) -> GraphStructure:
    return GraphStructureModel.model_validate_json(payload).to_structure()
