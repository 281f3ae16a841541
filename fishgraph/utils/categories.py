"""
Skill-code categories and ordering helpers.

Skill IDs look like "COG 7"; the prefix names the developmental domain.
"""

import re
from typing import Any, Iterable


CATEGORY_LABELS = {
    'ADT': 'Adaptive Behavior (ADT)',
    'AFF': 'Affective (AFF)',
    'COG': 'Cognitive (COG)',
    'SEN': 'Sensorimotor (SEN)',
    'SOC': 'Social (SOC)',
    'S&L': 'Speech & Language (S&L)',
    'SandL': 'Speech & Language (S&L)',  # group_by_category spells & as "and"
    'VOC': 'Vocational (VOC)',
}

KNOWN_PREFIXES = ('ADT', 'AFF', 'COG', 'SEN', 'SOC', 'S&L', 'VOC')
OTHER_CATEGORY = 'Other'

_DIGIT_RUN = re.compile(r'(\d+)')


def skill_prefix(skill_id: str) -> str:
    return skill_id.split(' ')[0]


def category_of(skill_id: str) -> str:
    """Known code prefix of a skill ID, else 'Other'."""
    prefix = skill_prefix(skill_id)
    return prefix if prefix in KNOWN_PREFIXES else OTHER_CATEGORY


def natural_sort_key(skill_id: str) -> tuple:
    """Sort key that puts "COG 2" before "COG 10"."""
    parts = _DIGIT_RUN.split(skill_id.lower())
    return tuple((0, int(part)) if part.isdigit() else (1, part) for part in parts)


def prereq_sort_key(skill_id: str, prereq_count: int) -> tuple:
    """Most raw prerequisites first, then natural order."""
    return (-prereq_count, natural_sort_key(skill_id))


def group_by_category(data: dict[str, Any], skill_ids: Iterable[str]) -> dict[str, dict[str, Any]]:
    """
    Group data entries by skill prefix, following the order of skill_ids.

    '&' in the prefix becomes 'and' ("S&L" -> "SandL") so the key is
    safe to use as an element ID downstream.
    """
    grouped: dict[str, dict[str, Any]] = {}
    for skill_id in skill_ids:
        if skill_id not in data:
            continue
        category = skill_prefix(skill_id).replace('&', 'and')
        grouped.setdefault(category, {})[skill_id] = data[skill_id]
    return grouped
