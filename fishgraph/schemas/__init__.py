"""
FishGraph Schemas - Pydantic models for the prerequisite-graph engine.

This module exports all schema classes for:
- Graph: skill nodes, raw/resolved edges, prerequisite model
- Progress: mastery status, readiness metrics, progression scores
- Settings: engine tunables
"""

# Graph schemas
from .graph import (
    SkillNode,
    EdgeKey,
    EdgeType,
    RawEdge,
    ResolvedEdge,
    PrerequisiteModel,
)

# Progress schemas
from .progress import (
    ProgressStatus,
    ProgressCounts,
    ProgressMetrics,
    ProgressionResult,
)

# Settings schemas
from .settings import (
    OffOffDisplay,
    ScoreWeights,
    EngineSettings,
)

__all__ = [
    # Graph
    'SkillNode',
    'EdgeKey',
    'EdgeType',
    'RawEdge',
    'ResolvedEdge',
    'PrerequisiteModel',
    # Progress
    'ProgressStatus',
    'ProgressCounts',
    'ProgressMetrics',
    'ProgressionResult',
    # Settings
    'OffOffDisplay',
    'ScoreWeights',
    'EngineSettings',
]
