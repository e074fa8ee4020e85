"""
Segmentation engine - split, partition, split_lines and join.

Segmenting functions scan a borrowed source first and only then copy each
field into its own owned StringBuffer, collected in a StringArray. If an
allocation fails part-way, the elements created so far are released before
the error propagates.
"""

from __future__ import annotations

from collections.abc import Iterable

from .. import _ascii
from .._logging import scoped_logger
from ..exceptions import AllocationError
from ..string import _storage
from ..string.array import StringArray
from ..string.buffer import StringBuffer, StringLike, resolve_span, snapshot

__all__ = ["split", "join", "partition", "split_lines"]

_log = scoped_logger("segment")


def _collect(source: bytes | bytearray, ranges: list[tuple[int, int]]) -> StringArray:
    """Copy each ``source[a:b]`` into an owned element."""
    items: list[StringBuffer] = []
    try:
        for lo, hi in ranges:
            items.append(StringBuffer._adopt(_storage.allocate(source, lo, hi)))
    except AllocationError:
        for item in items:
            item.release()
        _log.error("Allocation failed while segmenting", extra={"length": len(ranges)})
        raise
    return StringArray(items)


def split(source: StringLike, delimiter: StringLike) -> StringArray:
    """
    Split on every non-overlapping occurrence of ``delimiter``.

    Adjacent delimiters produce empty fields, and the last field runs to
    the end of the input. An empty delimiter yields an empty array.

    Example:
        >>> split(b"a,b,,c", b",").tolist()
        [b'a', b'b', b'', b'c']
        >>> split(b"abc", b";").tolist()
        [b'abc']
    """
    src, start, end = resolve_span(source, "source")
    delim = snapshot(delimiter, "delimiter")
    if not delim:
        return StringArray()

    ranges: list[tuple[int, int]] = []
    field_start = start
    i = src.find(delim, field_start, end)
    while i >= 0:
        ranges.append((field_start, i))
        field_start = i + len(delim)
        i = src.find(delim, field_start, end)
    ranges.append((field_start, end))
    return _collect(src, ranges)


def partition(source: StringLike, separator: StringLike) -> StringArray:
    """
    Split around the first ``separator`` into exactly three elements.

    Returns ``(before, separator, after)``. Without a match the result is
    ``(source, b"", b"")``. An empty separator yields an empty array.

    Example:
        >>> partition(b"key=value=x", b"=").tolist()
        [b'key', b'=', b'value=x']
    """
    src, start, end = resolve_span(source, "source")
    sep = snapshot(separator, "separator")
    if not sep:
        return StringArray()

    i = src.find(sep, start, end)
    if i < 0:
        return _collect(src, [(start, end), (end, end), (end, end)])
    ranges = [(start, i), (i, i + len(sep)), (i + len(sep), end)]
    return _collect(src, ranges)


def split_lines(source: StringLike) -> StringArray:
    """
    Split on line boundaries, dropping the terminators.

    Boundaries are ``\\n``, ``\\v``, ``\\f``, ``\\x1c``, ``\\x1d``, ``\\x1e``,
    ``\\x85``, ``\\r`` and ``\\r\\n`` (one boundary). A trailing boundary does
    not produce an empty last line; empty input yields an empty array.

    Example:
        >>> split_lines(b"a\\r\\nb\\rc\\nd").tolist()
        [b'a', b'b', b'c', b'd']
    """
    src, start, end = resolve_span(source, "source")
    ranges: list[tuple[int, int]] = []
    line_start = start
    i = start
    while i < end:
        b = src[i]
        if b in _ascii.LINE_BOUNDARIES:
            ranges.append((line_start, i))
            if b == _ascii.CR and i + 1 < end and src[i + 1] == _ascii.LF:
                i += 1
            line_start = i + 1
        i += 1
    if line_start < end:
        ranges.append((line_start, end))
    return _collect(src, ranges)


def join(parts: Iterable[StringLike], separator: StringLike) -> StringBuffer:
    """
    Concatenate ``parts`` with ``separator`` between neighbours.

    The result size is computed up front and allocated once. No parts gives
    an empty buffer; one part gives a copy of it.

    Example:
        >>> join([b"a", b"b", b"", b"c"], b",").tobytes()
        b'a,b,,c'
    """
    sep = snapshot(separator, "separator")
    spans = [resolve_span(part, "parts") for part in parts]
    total = sum(hi - lo for _, lo, hi in spans) + len(sep) * max(0, len(spans) - 1)

    data = _storage.allocate(b"")
    _storage.grow(data, total)
    pos = 0
    for index, (src, lo, hi) in enumerate(spans):
        if index:
            data[pos : pos + len(sep)] = sep
            pos += len(sep)
        data[pos : pos + hi - lo] = src[lo:hi]
        pos += hi - lo
    return StringBuffer._adopt(data)
