"""
Engine settings schema for FishGraph.

Tunables for the progression scorer and the active graph view.
Loaded from YAML by fishgraph.utils.settings_loader.
"""

from enum import Enum

from pydantic import BaseModel, Field


class OffOffDisplay(str, Enum):
    """How not-started skills appear in the active view."""
    DIM = "dim"        # keep the node, report it as suppressed
    REMOVE = "remove"  # drop the node and its edges

    @classmethod
    def normalize(cls, value: object) -> "OffOffDisplay":
        if isinstance(value, cls):
            return value
        return cls.REMOVE if value == cls.REMOVE.value else cls.DIM


class ScoreWeights(BaseModel):
    """Weights of the raw progression score (depth dominates)."""
    depth: float = Field(default=0.70, ge=0.0)
    in_degree: float = Field(default=0.45, ge=0.0)
    out_degree: float = Field(default=0.25, ge=0.0)  # subtracted


class EngineSettings(BaseModel):
    score_weights: ScoreWeights = ScoreWeights()
    ready_list_limit: int = Field(default=40, ge=0)
    off_off_display: OffOffDisplay = OffOffDisplay.DIM
    transitive_reduction: bool = False
