"""
Prerequisite model builder.

Parses Appendix A prerequisites into explicit AND/OR groups per target
skill and classifies each (source, target) pair for edge styling.
"""

import logging
from typing import Iterable, Mapping, Optional

from fishgraph.schemas import EdgeKey, EdgeType, PrerequisiteModel
from fishgraph.utils.token_parser import (
    ParseDiagnostics,
    SkipReason,
    expand_or_alternatives,
    expand_skill_token,
    is_none_token,
    normalize_token_text,
)


logger = logging.getLogger(__name__)


def set_edge_type(
    edge_type_by_key: dict[EdgeKey, EdgeType],
    source_id: str,
    target_id: str,
    edge_type: EdgeType,
):
    """Record an edge type; REQUIRED is never downgraded to OR."""
    key = EdgeKey(source_id, target_id)
    if edge_type == EdgeType.REQUIRED or edge_type_by_key.get(key) != EdgeType.REQUIRED:
        edge_type_by_key[key] = edge_type


def build_groups_for_target(
    target_id: str,
    raw_prerequisites: Iterable[object],
    valid_ids: set[str],
    edge_type_by_key: dict[EdgeKey, EdgeType],
    diagnostics: Optional[ParseDiagnostics] = None,
) -> list[list[str]]:
    """
    Build the ordered group list for one target.

    An OR wrapper yields one group from the union of both sides; any
    other token yields one singleton group per expanded ID.
    """
    groups: list[list[str]] = []

    for raw_token in raw_prerequisites or []:
        token = normalize_token_text(raw_token)
        if not token:
            if diagnostics is not None:
                diagnostics.record(token, SkipReason.EMPTY, target_id)
            continue
        if is_none_token(token):
            if diagnostics is not None:
                diagnostics.record(token, SkipReason.NONE, target_id)
            continue

        alternatives = expand_or_alternatives(token, diagnostics, target_id)
        if alternatives is not None:
            group = _known_ids(alternatives, valid_ids, diagnostics, target_id)
            if not group:
                if diagnostics is not None:
                    diagnostics.record(token, SkipReason.EMPTY_GROUP, target_id)
                continue
            groups.append(group)
            edge_type = EdgeType.OR if len(group) > 1 else EdgeType.REQUIRED
            for source_id in group:
                set_edge_type(edge_type_by_key, source_id, target_id, edge_type)
            continue

        expanded = expand_skill_token(token, diagnostics, target_id)
        for source_id in _known_ids(expanded, valid_ids, diagnostics, target_id):
            groups.append([source_id])
            set_edge_type(edge_type_by_key, source_id, target_id, EdgeType.REQUIRED)

    return groups


def build_prerequisite_model(
    appendix_a: Optional[Mapping[str, Iterable[object]]],
    valid_node_ids: Iterable[str],
    diagnostics: Optional[ParseDiagnostics] = None,
) -> PrerequisiteModel:
    """
    Build the AND-of-OR prerequisite model.

    Args:
        appendix_a: target_id -> raw prerequisite strings
        valid_node_ids: complete set of known skill IDs
        diagnostics: optional collector for dropped tokens

    Returns:
        PrerequisiteModel with groups_by_target and edge_type_by_key.
        Targets that are not known skills are ignored.
    """
    valid_ids = set(valid_node_ids)
    groups_by_target: dict[str, list[list[str]]] = {}
    edge_type_by_key: dict[EdgeKey, EdgeType] = {}

    for target_id, raw_prerequisites in (appendix_a or {}).items():
        if target_id not in valid_ids:
            if diagnostics is not None:
                diagnostics.record(target_id, SkipReason.UNKNOWN_SKILL, target_id)
            continue
        groups_by_target[target_id] = build_groups_for_target(
            target_id, raw_prerequisites, valid_ids, edge_type_by_key, diagnostics
        )

    logger.debug(
        f"Built prerequisite model: {len(groups_by_target)} targets, "
        f"{len(edge_type_by_key)} typed edges"
    )
    return PrerequisiteModel(groups_by_target=groups_by_target, edge_type_by_key=edge_type_by_key)


def _known_ids(
    skill_ids: list[str],
    valid_ids: set[str],
    diagnostics: Optional[ParseDiagnostics],
    target_id: str,
) -> list[str]:
    known = []
    for skill_id in skill_ids:
        if skill_id in valid_ids:
            known.append(skill_id)
        elif diagnostics is not None:
            diagnostics.record(skill_id, SkipReason.UNKNOWN_SKILL, target_id)
    return known
