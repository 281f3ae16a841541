"""
FishGraph - Prerequisite-graph engine for curriculum skill maps.

Turns Appendix A prerequisite text into a normalized directed graph,
scores skills along a growth axis, simplifies edges by transitive
reduction, and computes readiness from learner progress.
"""

from fishgraph.engine import (
    SkillGraph,
    GraphView,
    build_prerequisite_model,
    calculate_progression_metrics,
    transitive_reduce_links,
    compute_progress_metrics,
)
from fishgraph.utils import expand_skill_token, load_settings

__version__ = "0.1.0"

__all__ = [
    "SkillGraph",
    "GraphView",
    "build_prerequisite_model",
    "calculate_progression_metrics",
    "transitive_reduce_links",
    "compute_progress_metrics",
    "expand_skill_token",
    "load_settings",
]
