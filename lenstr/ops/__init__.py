"""
Operations on lenstr strings.

Provides:
- mutate: In-place structural edits that consume and return a StringBuffer
- query: Read-only comparison and search over any string-like
- segment: split / partition / split_lines / join
"""

from . import mutate, query, segment
from .mutate import (
    capitalize,
    center,
    expand_tabs,
    lower,
    pad,
    pad_left,
    pad_right,
    replace,
    swapcase,
    title,
    trim,
    trim_left,
    trim_right,
    upper,
    zfill,
)
from .query import (
    Ordering,
    compare,
    compare_ignore_case,
    count,
    ends_with,
    includes,
    index_of,
    is_alpha,
    is_alphanumeric,
    is_digit,
    is_space,
    last_index_of,
    starts_with,
)
from .segment import join, partition, split, split_lines

# =============================================================================
# Public API - See lenstr/__init__.py for documentation mapping guidelines
# =============================================================================
__all__ = [
    "mutate",
    "query",
    "segment",
    # Mutation
    *mutate.__all__,
    # Query
    *query.__all__,
    # Segmentation
    *segment.__all__,
]
