"""
Progress metrics calculator.

readiness = satisfied prerequisite groups / total prerequisite groups,
where a group is satisfied when any alternative in it is mastered.
Nodes without groups are fully ready. Pure with respect to its inputs.
"""

import logging
from typing import Iterable, Mapping, Optional, Union

from fishgraph.schemas import (
    PrerequisiteModel,
    ProgressCounts,
    ProgressMetrics,
    ProgressStatus,
    SkillNode,
)


logger = logging.getLogger(__name__)

GroupsByTarget = Mapping[str, list[list[str]]]


def group_satisfied(group: Iterable[str], progress_state: Mapping[str, object]) -> bool:
    return any(
        ProgressStatus.normalize(progress_state.get(alternative_id)) == ProgressStatus.MASTERED
        for alternative_id in group
    )


def compute_progress_metrics(
    nodes: Iterable[Union[SkillNode, str]],
    groups_by_target: Union[PrerequisiteModel, GroupsByTarget],
    progress_state: Optional[Mapping[str, object]],
) -> ProgressMetrics:
    """
    Compute readiness and summary counts for every node.

    Args:
        nodes: skill nodes (or bare IDs), in display order
        groups_by_target: PrerequisiteModel or its groups_by_target mapping
        progress_state: skill_id -> status; read only, never modified

    Returns:
        ProgressMetrics; ready_now_ids keeps node order
    """
    if isinstance(groups_by_target, PrerequisiteModel):
        groups_by_target = groups_by_target.groups_by_target
    progress_state = progress_state or {}

    state_by_id: dict[str, ProgressStatus] = {}
    readiness_by_id: dict[str, float] = {}
    satisfied_by_id: dict[str, int] = {}
    total_by_id: dict[str, int] = {}
    ready_now_ids: list[str] = []
    tally = {status: 0 for status in ProgressStatus}

    for node in nodes:
        node_id = node if isinstance(node, str) else node.id
        if node_id in state_by_id:
            continue
        status = ProgressStatus.normalize(progress_state.get(node_id))
        state_by_id[node_id] = status
        tally[status] += 1

        groups = groups_by_target.get(node_id) or []
        total = len(groups)
        satisfied = sum(1 for group in groups if group_satisfied(group, progress_state))
        readiness = 1.0 if total == 0 else satisfied / total

        readiness_by_id[node_id] = readiness
        satisfied_by_id[node_id] = satisfied
        total_by_id[node_id] = total

        if status != ProgressStatus.MASTERED and readiness >= 1:
            ready_now_ids.append(node_id)

    counts = ProgressCounts(
        not_started=tally[ProgressStatus.NOT_STARTED],
        in_progress=tally[ProgressStatus.IN_PROGRESS],
        mastered=tally[ProgressStatus.MASTERED],
        ready_now=len(ready_now_ids),
    )
    logger.debug(f"Progress metrics: {counts}")

    return ProgressMetrics(
        state_by_id=state_by_id,
        readiness_by_id=readiness_by_id,
        satisfied_by_id=satisfied_by_id,
        total_by_id=total_by_id,
        ready_now_ids=ready_now_ids,
        counts=counts,
    )
