"""
FishGraph Engine - Prerequisite-graph computations.

This module provides:
- build_prerequisite_model: AND/OR groups and edge types from Appendix A
- calculate_progression_metrics: topological depth and progression score
- transitive_reduce_links: redundant-edge removal on DAGs
- compute_progress_metrics: readiness and ready-now skills
- SkillGraph / GraphView: assembled graph and per-interaction views
"""

from .prerequisites import (
    build_prerequisite_model,
    build_groups_for_target,
    set_edge_type,
)

from .progression import (
    calculate_progression_metrics,
    compute_depths,
    normalize_scores,
    apply_progression,
    edge_keys,
)

from .reduction import (
    transitive_reduce_links,
    dedupe_edges,
)

from .metrics import (
    compute_progress_metrics,
    group_satisfied,
)

from .graph import (
    SkillGraph,
    GraphView,
)

__all__ = [
    # Prerequisites
    "build_prerequisite_model",
    "build_groups_for_target",
    "set_edge_type",
    # Progression
    "calculate_progression_metrics",
    "compute_depths",
    "normalize_scores",
    "apply_progression",
    "edge_keys",
    # Reduction
    "transitive_reduce_links",
    "dedupe_edges",
    # Metrics
    "compute_progress_metrics",
    "group_satisfied",
    # Graph
    "SkillGraph",
    "GraphView",
]
