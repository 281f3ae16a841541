"""
Prerequisite token parser for Appendix A text.

Expands loosely formatted prerequisite strings into atomic skill IDs:
- Ranges: "ADT 2-5" -> ADT 2, ADT 3, ADT 4, ADT 5 (descending ranges too)
- Single codes: "cog 07" -> COG 7
- OR wrappers: "ADT 3 (or ADT 4)" -> one alternative set

Nothing here raises on bad input. Dropped tokens can be reported through
an optional ParseDiagnostics collector.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


SKILL_CODE_PATTERN = re.compile(r'^([A-Z&]+)\s*(\d+)$', re.IGNORECASE | re.ASCII)
RANGE_PATTERN = re.compile(
    r'^([A-Z&]+)\s*(\d+)\s*[–-]\s*(?:([A-Z&]+)\s*)?(\d+)$',
    re.IGNORECASE | re.ASCII,
)
OR_PATTERN = re.compile(r'^(.+?)\s*\(\s*or\s+(.+?)\s*\)$', re.IGNORECASE)
NONE_PATTERN = re.compile(r'^none\b', re.IGNORECASE)

CANONICAL_DASH = '–'

# Dash variants seen in scraped/imported curriculum text
DASH_VARIANTS = (
    'â€“',  # en dash read as cp1252
    'â€”',  # em dash read as cp1252
    '—',
)

_WHITESPACE = re.compile(r'\s+')


class SkipReason(str, Enum):
    EMPTY = "empty"
    NONE = "none"
    UNRECOGNIZED = "unrecognized"
    PREFIX_MISMATCH = "prefix-mismatch"
    UNKNOWN_SKILL = "unknown-skill"
    EMPTY_GROUP = "empty-group"


@dataclass
class SkippedToken:
    """One dropped token and why it was dropped."""
    token: str
    reason: SkipReason
    target_id: Optional[str] = None


@dataclass
class ParseDiagnostics:
    """Collects skipped tokens; purely informational."""
    skipped: list[SkippedToken] = field(default_factory=list)

    def record(self, token: str, reason: SkipReason, target_id: Optional[str] = None):
        self.skipped.append(SkippedToken(token=token, reason=reason, target_id=target_id))

    def reasons(self) -> list[SkipReason]:
        return [item.reason for item in self.skipped]

    def __len__(self) -> int:
        return len(self.skipped)


def normalize_token_text(value: object) -> str:
    """Normalize whitespace and dash variants so tokens compare cleanly."""
    if value is None:
        return ''
    text = str(value)
    for variant in DASH_VARIANTS:
        text = text.replace(variant, CANONICAL_DASH)
    return _WHITESPACE.sub(' ', text).strip()


def format_skill_id(prefix: str, number: int) -> str:
    return f"{prefix.upper()} {number}"


def expand_skill_token(
    token: object,
    diagnostics: Optional[ParseDiagnostics] = None,
    target_id: Optional[str] = None,
) -> list[str]:
    """
    Expand one token into skill IDs.

    Shapes are tried in order: range, single code. Anything else
    expands to an empty list.

    Examples:
        "ADT 2-5"   -> ["ADT 2", "ADT 3", "ADT 4", "ADT 5"]
        "ADT 5-2"   -> ["ADT 5", "ADT 4", "ADT 3", "ADT 2"]
        "adt 007"   -> ["ADT 7"]
        "see notes" -> []
    """
    normalized = normalize_token_text(token)
    if not normalized:
        if diagnostics is not None:
            diagnostics.record(normalized, SkipReason.EMPTY, target_id)
        return []

    range_match = RANGE_PATTERN.match(normalized)
    if range_match:
        start_prefix = range_match.group(1).upper()
        end_prefix = (range_match.group(3) or start_prefix).upper()
        if start_prefix == end_prefix:
            start = int(range_match.group(2))
            end = int(range_match.group(4))
            step = 1 if start <= end else -1
            return [format_skill_id(start_prefix, n) for n in range(start, end + step, step)]
        if diagnostics is not None:
            diagnostics.record(normalized, SkipReason.PREFIX_MISMATCH, target_id)
        return []

    code_match = SKILL_CODE_PATTERN.match(normalized)
    if code_match:
        return [format_skill_id(code_match.group(1), int(code_match.group(2)))]

    if diagnostics is not None:
        diagnostics.record(normalized, SkipReason.UNRECOGNIZED, target_id)
    return []


def split_or_wrapper(token: object) -> Optional[tuple[str, str]]:
    """Return the two sides of an "A (or B)" token, or None if it isn't one."""
    match = OR_PATTERN.match(normalize_token_text(token))
    if not match:
        return None
    return match.group(1), match.group(2)


def expand_or_alternatives(
    token: object,
    diagnostics: Optional[ParseDiagnostics] = None,
    target_id: Optional[str] = None,
) -> Optional[list[str]]:
    """
    Expand an "A (or B)" token into one de-duplicated alternative list.

    Both sides may be ranges or single codes. Returns None when the
    token is not an OR wrapper, so callers can fall back to
    expand_skill_token.
    """
    sides = split_or_wrapper(token)
    if sides is None:
        return None

    alternatives: list[str] = []
    for side in sides:
        for skill_id in expand_skill_token(side, diagnostics, target_id):
            if skill_id not in alternatives:
                alternatives.append(skill_id)
    return alternatives


def is_none_token(token: object) -> bool:
    """True for "None", "none listed", etc."""
    return bool(NONE_PATTERN.match(normalize_token_text(token)))
