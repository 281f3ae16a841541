"""
Graph leveler and progression scorer.

Assigns each skill a longest-path depth from the roots and a bounded
0-1 progression score usable as a growth-axis coordinate:

    raw = 0.70 * depth_norm + 0.45 * in_norm - 0.25 * out_norm

Raw scores are min-max normalized across nodes (constant 0.5 when all
raw scores are equal). Cycles never raise: nodes left unresolved by the
Kahn pass get a depth estimated from their resolved prerequisites.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Optional

from fishgraph.schemas import (
    EdgeKey,
    ProgressionResult,
    RawEdge,
    ResolvedEdge,
    ScoreWeights,
    SkillNode,
)


logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 0.5


@dataclass
class _LevelScratch:
    """Per-call traversal state, discarded after leveling."""
    incoming: dict[str, list[str]] = field(default_factory=dict)
    outgoing: dict[str, list[str]] = field(default_factory=dict)
    in_degree: dict[str, int] = field(default_factory=dict)
    out_degree: dict[str, int] = field(default_factory=dict)

    @classmethod
    def build(cls, node_ids: list[str], edges: Iterable[EdgeKey]) -> "_LevelScratch":
        scratch = cls(
            incoming={node_id: [] for node_id in node_ids},
            outgoing={node_id: [] for node_id in node_ids},
            in_degree={node_id: 0 for node_id in node_ids},
            out_degree={node_id: 0 for node_id in node_ids},
        )
        for source_id, target_id in edges:
            if source_id not in scratch.outgoing or target_id not in scratch.incoming:
                continue
            scratch.outgoing[source_id].append(target_id)
            scratch.incoming[target_id].append(source_id)
            scratch.in_degree[target_id] += 1
            scratch.out_degree[source_id] += 1
        return scratch


def edge_keys(edges: Iterable[object]) -> list[EdgeKey]:
    """Accept RawEdge, ResolvedEdge, EdgeKey/tuples or {source, target} dicts."""
    keys = []
    for edge in edges or []:
        if isinstance(edge, (RawEdge, ResolvedEdge)):
            keys.append(edge.key)
        elif isinstance(edge, dict):
            keys.append(EdgeKey(str(edge.get("source")), str(edge.get("target"))))
        else:
            source_id, target_id = edge
            keys.append(EdgeKey(source_id, target_id))
    return keys


def compute_depths(node_ids: list[str], edges: Iterable[object]) -> dict[str, int]:
    """
    Longest-path depth from zero-in-degree roots.

    Nodes never dequeued (cycle members and anything downstream of a
    cycle) get 1 + max depth of their resolved direct prerequisites, or
    0 if none of them resolved.
    """
    node_ids = list(dict.fromkeys(node_ids))
    scratch = _LevelScratch.build(node_ids, edge_keys(edges))
    return _depths_from_scratch(node_ids, scratch)


def _depths_from_scratch(node_ids: list[str], scratch: _LevelScratch) -> dict[str, int]:
    remaining = dict(scratch.in_degree)
    depth = {node_id: 0 for node_id in node_ids}
    queue = deque(node_id for node_id in node_ids if remaining[node_id] == 0)
    resolved: set[str] = set()

    while queue:
        current_id = queue.popleft()
        resolved.add(current_id)
        for next_id in scratch.outgoing[current_id]:
            depth[next_id] = max(depth[next_id], depth[current_id] + 1)
            remaining[next_id] -= 1
            if remaining[next_id] == 0:
                queue.append(next_id)

    unresolved = [node_id for node_id in node_ids if node_id not in resolved]
    if unresolved:
        logger.debug(f"{len(unresolved)} nodes in or behind cycles; estimating depth")
    for node_id in unresolved:
        prereq_depths = [depth[p] for p in scratch.incoming[node_id] if p in resolved]
        depth[node_id] = max(prereq_depths) + 1 if prereq_depths else 0

    return depth


def calculate_progression_metrics(
    nodes: Iterable[SkillNode],
    edges: Iterable[object],
    weights: Optional[ScoreWeights] = None,
) -> ProgressionResult:
    """
    Compute depth and normalized progression score for every node.

    Args:
        nodes: skill nodes (only IDs are read)
        edges: full edge set; edges touching unknown nodes are ignored
        weights: raw-score weights (defaults 0.70 / 0.45 / 0.25)

    Returns:
        ProgressionResult with score_by_id, depth_by_id and max_depth
    """
    weights = weights or ScoreWeights()
    node_ids = list(dict.fromkeys(node.id for node in nodes))
    scratch = _LevelScratch.build(node_ids, edge_keys(edges))
    depth = _depths_from_scratch(node_ids, scratch)

    max_depth = max([1, *depth.values()])
    max_in = max([1, *scratch.in_degree.values()])
    max_out = max([1, *scratch.out_degree.values()])

    raw_scores = {}
    for node_id in node_ids:
        depth_norm = depth[node_id] / max_depth
        in_norm = scratch.in_degree[node_id] / max_in
        out_norm = scratch.out_degree[node_id] / max_out
        raw_scores[node_id] = (
            weights.depth * depth_norm
            + weights.in_degree * in_norm
            - weights.out_degree * out_norm
        )

    scores = normalize_scores(raw_scores)
    return ProgressionResult(score_by_id=scores, depth_by_id=depth, max_depth=max_depth)


def normalize_scores(raw_scores: dict[str, float]) -> dict[str, float]:
    """Min-max normalize to [0, 1]; all-equal input maps to 0.5."""
    if not raw_scores:
        return {}
    raw_min = min(raw_scores.values())
    raw_max = max(raw_scores.values())
    if raw_max == raw_min:
        return {node_id: NEUTRAL_SCORE for node_id in raw_scores}
    span = raw_max - raw_min
    return {
        node_id: min(1.0, max(0.0, (raw - raw_min) / span))
        for node_id, raw in raw_scores.items()
    }


def apply_progression(nodes: Iterable[SkillNode], result: ProgressionResult):
    """Write score and depth onto node records."""
    for node in nodes:
        node.progression_score = result.score_by_id.get(node.id, NEUTRAL_SCORE)
        node.progression_depth = result.depth_by_id.get(node.id, 0)
