"""FishGraph utilities."""

from .token_parser import (
    normalize_token_text,
    expand_skill_token,
    expand_or_alternatives,
    split_or_wrapper,
    is_none_token,
    ParseDiagnostics,
    SkippedToken,
    SkipReason,
)
from .categories import (
    CATEGORY_LABELS,
    category_of,
    natural_sort_key,
    prereq_sort_key,
    group_by_category,
)
from .settings_loader import load_settings, find_settings

__all__ = [
    "normalize_token_text",
    "expand_skill_token",
    "expand_or_alternatives",
    "split_or_wrapper",
    "is_none_token",
    "ParseDiagnostics",
    "SkippedToken",
    "SkipReason",
    "CATEGORY_LABELS",
    "category_of",
    "natural_sort_key",
    "prereq_sort_key",
    "group_by_category",
    "load_settings",
    "find_settings",
]
