"""
Query engine - read-only comparisons and searches.

All functions accept any string-like (StringView, StringBuffer, bytes,
bytearray), never copy their inputs and never take ownership. Searches scan
left to right; a miss is reported as ``None``, never as a sentinel offset.
"""

from __future__ import annotations

from enum import IntEnum

from .. import _ascii
from ..exceptions import ValidationError
from ..string.buffer import StringLike, resolve_span

__all__ = [
    "Ordering",
    "compare",
    "compare_ignore_case",
    "includes",
    "starts_with",
    "ends_with",
    "index_of",
    "last_index_of",
    "count",
    "is_alphanumeric",
    "is_alpha",
    "is_digit",
    "is_space",
]


class Ordering(IntEnum):
    """Three-way comparison result."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


def _compare(a: StringLike, b: StringLike, table: bytes | None) -> Ordering:
    a_src, a_start, a_end = resolve_span(a, "a")
    b_src, b_start, b_end = resolve_span(b, "b")
    shared = min(a_end - a_start, b_end - b_start)
    left = a_src[a_start : a_start + shared]
    right = b_src[b_start : b_start + shared]
    if table is not None:
        left = left.translate(table)
        right = right.translate(table)
    if left < right:
        return Ordering.LESS
    if left > right:
        return Ordering.GREATER
    return Ordering.EQUAL


def compare(a: StringLike, b: StringLike) -> Ordering:
    """
    Compare byte-by-byte over the shorter of the two lengths.

    Only the shared prefix is compared: if it matches, the result is
    ``EQUAL`` even when the lengths differ. Use ``==`` for exact equality.

    Example:
        >>> compare(b"abc", b"abd")
        <Ordering.LESS: -1>
        >>> compare(b"ab", b"abc")
        <Ordering.EQUAL: 0>
    """
    return _compare(a, b, None)


def compare_ignore_case(a: StringLike, b: StringLike) -> Ordering:
    """Like ``compare`` after folding ASCII letters to lower case."""
    return _compare(a, b, _ascii.TO_LOWER)


def includes(source: StringLike, needle: StringLike) -> bool:
    """True if ``needle`` occurs in ``source``; an empty needle always does."""
    return index_of(source, needle) is not None


def starts_with(source: StringLike, prefix: StringLike) -> bool:
    """True if ``source`` begins with ``prefix``."""
    src, start, end = resolve_span(source, "source")
    p_src, p_start, p_end = resolve_span(prefix, "prefix")
    return src.startswith(p_src[p_start:p_end], start, end)


def ends_with(source: StringLike, suffix: StringLike) -> bool:
    """True if ``source`` ends with ``suffix``."""
    src, start, end = resolve_span(source, "source")
    s_src, s_start, s_end = resolve_span(suffix, "suffix")
    return src.endswith(s_src[s_start:s_end], start, end)


def index_of(source: StringLike, needle: StringLike) -> int | None:
    """
    Offset of the first match of ``needle``, or None.

    An empty needle matches at offset 0.

    Example:
        >>> index_of(b"hello", b"l")
        2
        >>> index_of(b"hello", b"z") is None
        True
    """
    src, start, end = resolve_span(source, "source")
    n_src, n_start, n_end = resolve_span(needle, "needle")
    found = src.find(n_src[n_start:n_end], start, end)
    return None if found < 0 else found - start


def last_index_of(source: StringLike, needle: StringLike) -> int | None:
    """
    Offset of the last match of ``needle``, or None.

    An empty needle matches at ``len(source)``.
    """
    src, start, end = resolve_span(source, "source")
    n_src, n_start, n_end = resolve_span(needle, "needle")
    found = src.rfind(n_src[n_start:n_end], start, end)
    return None if found < 0 else found - start


def count(source: StringLike, sub: StringLike) -> int:
    """
    Number of non-overlapping matches of ``sub``.

    Each match consumes its bytes: ``count(b"aaa", b"aa") == 1``.

    Raises
    ------
        ValidationError: If ``sub`` is empty (code="EMPTY_PATTERN").
    """
    src, start, end = resolve_span(source, "source")
    s_src, s_start, s_end = resolve_span(sub, "sub")
    if s_end == s_start:
        raise ValidationError(
            "count() requires a non-empty pattern",
            code="EMPTY_PATTERN",
            details={"argument": "sub"},
        )
    return src.count(s_src[s_start:s_end], start, end)


def _all_in(source: StringLike, allowed: frozenset[int]) -> bool:
    src, start, end = resolve_span(source, "source")
    if end == start:
        return False
    return all(src[i] in allowed for i in range(start, end))


def is_alphanumeric(source: StringLike) -> bool:
    """True if non-empty and every byte is an ASCII letter or digit."""
    return _all_in(source, _ascii.ALNUM)


def is_alpha(source: StringLike) -> bool:
    """True if non-empty and every byte is an ASCII letter."""
    return _all_in(source, _ascii.ALPHA)


def is_digit(source: StringLike) -> bool:
    """True if non-empty and every byte is an ASCII digit."""
    return _all_in(source, _ascii.DIGITS)


def is_space(source: StringLike) -> bool:
    """True if non-empty and every byte is ASCII whitespace."""
    return _all_in(source, _ascii.WHITESPACE)
