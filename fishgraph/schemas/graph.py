"""
Graph schemas for FishGraph.

Defines Pydantic models for the skill graph including:
- Skill nodes with layout hints (progression score/depth)
- Raw edges (IDs only) and resolved edges (node references)
- Structural edge keys used wherever set semantics are needed
- The AND-of-OR prerequisite model derived from Appendix A
"""

from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field


# -----------------------------------------------------------------------------
# Nodes
# -----------------------------------------------------------------------------


class SkillNode(BaseModel):
    """
    One curriculum skill.

    Only identity, text and the two derived layout fields live here.
    Traversal scratch state is kept by the engine, never on the node.
    """
    id: str                                  # e.g. "ADT 12"
    description: str = ""
    prereq_count: int = Field(default=0, ge=0)  # raw Appendix A entries
    progression_score: float = Field(default=0.0, ge=0.0, le=1.0)
    progression_depth: int = Field(default=0, ge=0)

    model_config = ConfigDict(validate_assignment=True)


# -----------------------------------------------------------------------------
# Edges
# -----------------------------------------------------------------------------


class EdgeKey(NamedTuple):
    """Composite (source, target) key for edge identity."""
    source: str
    target: str

    @property
    def label(self) -> str:
        """Legacy string form, e.g. 'ADT 1=>ADT 2'."""
        return f"{self.source}=>{self.target}"


class EdgeType(str, Enum):
    REQUIRED = "required"
    OR = "or"


class RawEdge(BaseModel):
    """Edge as loaded from edges.json: source is a prerequisite of target."""
    source: str
    target: str

    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> EdgeKey:
        return EdgeKey(self.source, self.target)


class ResolvedEdge(BaseModel):
    """Edge whose endpoints were looked up in the node set."""
    source: SkillNode
    target: SkillNode

    @property
    def key(self) -> EdgeKey:
        return EdgeKey(self.source.id, self.target.id)

    def to_raw(self) -> RawEdge:
        return RawEdge(source=self.source.id, target=self.target.id)


# -----------------------------------------------------------------------------
# Prerequisite model
# -----------------------------------------------------------------------------


class PrerequisiteModel(BaseModel):
    """
    AND-of-OR prerequisite groups per target skill.

    Each entry in groups_by_target[target] is a group of alternatives:
    - group of size 1 => hard requirement
    - group of size > 1 => any one alternative satisfies the group
    """
    groups_by_target: dict[str, list[list[str]]] = {}
    edge_type_by_key: dict[EdgeKey, EdgeType] = {}

    model_config = ConfigDict(frozen=True)

    @property
    def group_count_by_target(self) -> dict[str, int]:
        return {target: len(groups) for target, groups in self.groups_by_target.items()}

    def groups_for(self, target_id: str) -> list[list[str]]:
        """Groups for one target (empty when the target has none)."""
        return self.groups_by_target.get(target_id, [])

    def edge_type(self, source_id: str, target_id: str) -> EdgeType | None:
        """Styling class for an edge, or None if Appendix A never mentions it."""
        return self.edge_type_by_key.get(EdgeKey(source_id, target_id))
