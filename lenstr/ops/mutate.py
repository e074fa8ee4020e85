"""
Mutation engine - in-place structural edits on owned buffers.

Every operation takes a StringBuffer, edits its storage in place (growing or
shrinking it as needed) and returns a new handle for the same storage. The
handle passed in is *moved*: only the returned one may be used afterwards.

    >>> buf = lenstr.copy(b"  -42  ")
    >>> buf = lenstr.trim(buf)
    >>> buf = lenstr.zfill(buf, 6)
    >>> buf.tobytes()
    b'-00042'

Arguments are validated before the buffer is consumed, so a rejected call
leaves the input handle live. If growing fails (out of memory, or the
storage is pinned by a ctypes/NumPy export) the storage is handed back to
the input handle unchanged.

Resize discipline: growth happens before any byte is shifted and content is
then copied right-to-left; shrinking compacts left-to-right first and
truncates last. Source and destination ranges therefore never clobber bytes
that are still to be read.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from .. import _ascii
from .._config import resolve_tab_size
from .._logging import scoped_logger
from ..exceptions import OwnershipError, StateError, ValidationError
from ..string import _storage
from ..string.buffer import StringBuffer, StringLike, snapshot

__all__ = [
    "trim_left",
    "trim_right",
    "trim",
    "pad_left",
    "pad_right",
    "pad",
    "center",
    "expand_tabs",
    "zfill",
    "lower",
    "upper",
    "swapcase",
    "capitalize",
    "title",
    "replace",
]

_log = scoped_logger("mutate")

_SPACE = ord(" ")


# =============================================================================
# Ownership and argument helpers
# =============================================================================


@contextmanager
def _owned(buf: Any, operation: str, *, resizes: bool = True) -> Iterator[bytearray]:
    """
    Consume ``buf`` for the duration of an edit and yield its storage.

    Edits raise only before they shift any byte, so on any exception the
    unchanged storage goes back to ``buf``.
    """
    if not isinstance(buf, StringBuffer):
        raise OwnershipError(
            f"{operation}() requires an owned StringBuffer, got {type(buf).__name__}. "
            "Copy borrowed values first with lenstr.copy().",
            details={"operation": operation, "type": type(buf).__name__},
        )
    data = buf._live_data()
    if resizes:
        try:
            _storage.ensure_resizable(data)
        except StateError:
            _log.warning("Resize of exported buffer refused", extra={"operation": operation})
            raise
    buf._detach()
    try:
        yield data
    except Exception:
        buf._reattach(data)
        raise


def _needs_width(buf: Any, width: int) -> bool:
    """True if ``buf`` is a live buffer shorter than ``width``."""
    return isinstance(buf, StringBuffer) and buf.live and len(buf) < width


def _result(data: bytearray, operation: str, length: int) -> StringBuffer:
    new_length = _storage.length_of(data)
    if new_length != length:
        _log.debug(
            f"{operation} resized buffer",
            extra={"length": length, "new_length": new_length},
        )
    return StringBuffer._adopt(data)


def _fill_byte(fill: Any) -> int:
    """Normalize a fill argument (int or 1-byte bytes-like) to a byte value."""
    if isinstance(fill, int) and not isinstance(fill, bool) and 0 <= fill <= 255:
        return fill
    if isinstance(fill, (bytes, bytearray)) and len(fill) == 1:
        return fill[0]
    raise ValidationError(
        f"fill must be a single byte (int 0-255 or length-1 bytes), got {fill!r}",
        code="INVALID_FILL",
        details={"fill": repr(fill)},
    )


def _check_int(value: Any, name: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(
            f"{name} must be an int, got {type(value).__name__}",
            code="INVALID_ARGUMENT",
            details={name: repr(value)},
        )


def _check_amount(value: int, name: str) -> None:
    _check_int(value, name)
    if value < 0:
        raise ValidationError(
            f"{name} must be >= 0, got {value}",
            code="NEGATIVE_AMOUNT",
            details={name: value},
        )


# =============================================================================
# Storage-level edits (operate on an already consumed bytearray)
# =============================================================================


def _trim_left(data: bytearray) -> None:
    n = _storage.length_of(data)
    i = 0
    while i < n and data[i] in _ascii.WHITESPACE:
        i += 1
    if i:
        _storage.move(data, 0, i, n - i)
        _storage.shrink(data, n - i)


def _trim_right(data: bytearray) -> None:
    n = _storage.length_of(data)
    j = n
    while j > 0 and data[j - 1] in _ascii.WHITESPACE:
        j -= 1
    if j != n:
        _storage.shrink(data, j)


def _pad_left(data: bytearray, amount: int, byte: int) -> None:
    n = _storage.length_of(data)
    _storage.grow(data, amount)
    _storage.move(data, amount, 0, n)
    _storage.fill(data, 0, amount, byte)


def _pad_right(data: bytearray, amount: int, byte: int) -> None:
    n = _storage.length_of(data)
    _storage.grow(data, amount)
    _storage.fill(data, n, amount, byte)


def _translate(data: bytearray, table: bytes) -> None:
    n = _storage.length_of(data)
    data[:n] = data[:n].translate(table)


def _replace(data: bytearray, old: bytes, new: bytes, max_count: int) -> int:
    """Replace up to ``max_count`` matches (negative = all); return the count."""
    n = _storage.length_of(data)
    old_len = len(old)
    new_len = len(new)

    positions: list[int] = []
    i = data.find(old, 0, n)
    while i >= 0 and (max_count < 0 or len(positions) < max_count):
        positions.append(i)
        i = data.find(old, i + old_len, n)
    if not positions:
        return 0

    new_length = n + len(positions) * (new_len - old_len)

    if new_len > old_len:
        # Grow first, then rebuild from the end so unread bytes stay ahead
        # of the write position.
        _storage.grow(data, new_length - n)
        end = new_length
        seg_end = n
        for pos in reversed(positions):
            run = seg_end - (pos + old_len)
            end -= run
            _storage.move(data, end, pos + old_len, run)
            end -= new_len
            data[end : end + new_len] = new
            seg_end = pos
    else:
        write = read = positions[0]
        for pos in positions:
            run = pos - read
            _storage.move(data, write, read, run)
            write += run
            data[write : write + new_len] = new
            write += new_len
            read = pos + old_len
        _storage.move(data, write, read, n - read)
        _storage.shrink(data, new_length)

    return len(positions)


# =============================================================================
# Trim
# =============================================================================


def trim_left(buf: StringBuffer) -> StringBuffer:
    """Remove leading ASCII whitespace."""
    with _owned(buf, "trim_left") as data:
        length = _storage.length_of(data)
        _trim_left(data)
    return _result(data, "trim_left", length)


def trim_right(buf: StringBuffer) -> StringBuffer:
    """Remove trailing ASCII whitespace."""
    with _owned(buf, "trim_right") as data:
        length = _storage.length_of(data)
        _trim_right(data)
    return _result(data, "trim_right", length)


def trim(buf: StringBuffer) -> StringBuffer:
    """
    Remove leading and trailing ASCII whitespace.

    Whitespace is space, ``\\t``, ``\\n``, ``\\r``, ``\\v`` and ``\\f``.

    Example:
        >>> lenstr.trim(lenstr.copy(b"\\t hi \\n")).tobytes()
        b'hi'
    """
    with _owned(buf, "trim") as data:
        length = _storage.length_of(data)
        _trim_right(data)
        _trim_left(data)
    return _result(data, "trim", length)


# =============================================================================
# Padding and alignment
# =============================================================================


def pad_left(buf: StringBuffer, amount: int, fill: int | bytes = b" ") -> StringBuffer:
    """Prepend ``amount`` copies of ``fill``."""
    _check_amount(amount, "amount")
    byte = _fill_byte(fill)
    with _owned(buf, "pad_left", resizes=amount > 0) as data:
        length = _storage.length_of(data)
        _pad_left(data, amount, byte)
    return _result(data, "pad_left", length)


def pad_right(buf: StringBuffer, amount: int, fill: int | bytes = b" ") -> StringBuffer:
    """Append ``amount`` copies of ``fill``."""
    _check_amount(amount, "amount")
    byte = _fill_byte(fill)
    with _owned(buf, "pad_right", resizes=amount > 0) as data:
        length = _storage.length_of(data)
        _pad_right(data, amount, byte)
    return _result(data, "pad_right", length)


def pad(buf: StringBuffer, amount: int, fill: int | bytes = b" ") -> StringBuffer:
    """
    Add ``amount`` copies of ``fill`` on each side.

    Example:
        >>> lenstr.pad(lenstr.copy(b"ab"), 2, b"*").tobytes()
        b'**ab**'
    """
    _check_amount(amount, "amount")
    byte = _fill_byte(fill)
    with _owned(buf, "pad", resizes=amount > 0) as data:
        length = _storage.length_of(data)
        _storage.grow(data, 2 * amount)
        _storage.move(data, amount, 0, length)
        _storage.fill(data, 0, amount, byte)
        _storage.fill(data, amount + length, amount, byte)
    return _result(data, "pad", length)


def center(buf: StringBuffer, width: int, fill: int | bytes = b" ") -> StringBuffer:
    """
    Center the content in a field of ``width`` bytes.

    The left side gets ``(width - len) // 2`` fill bytes and the right side
    the rest, so an odd difference puts the extra byte on the right. No-op
    when the content is already ``width`` bytes or longer.

    Example:
        >>> lenstr.center(lenstr.copy(b"ab"), 7, b"*").tobytes()
        b'**ab***'
    """
    _check_int(width, "width")
    byte = _fill_byte(fill)
    with _owned(buf, "center", resizes=_needs_width(buf, width)) as data:
        n = _storage.length_of(data)
        if n < width:
            left = (width - n) // 2
            right = width - n - left
            _storage.grow(data, width - n)
            _storage.move(data, left, 0, n)
            _storage.fill(data, 0, left, byte)
            _storage.fill(data, left + n, right, byte)
    return _result(data, "center", n)


def zfill(buf: StringBuffer, width: int) -> StringBuffer:
    """
    Left-fill with ``0`` up to ``width`` bytes, keeping a leading sign first.

    Example:
        >>> lenstr.zfill(lenstr.copy(b"-42"), 6).tobytes()
        b'-00042'
    """
    _check_int(width, "width")
    with _owned(buf, "zfill", resizes=_needs_width(buf, width)) as data:
        n = _storage.length_of(data)
        if n < width:
            zeros = width - n
            _storage.grow(data, zeros)
            if n and data[0] in _ascii.SIGNS:
                _storage.move(data, zeros + 1, 1, n - 1)
                _storage.fill(data, 1, zeros, _ascii.ZERO)
            else:
                _storage.move(data, zeros, 0, n)
                _storage.fill(data, 0, zeros, _ascii.ZERO)
    return _result(data, "zfill", n)


def expand_tabs(buf: StringBuffer, tab_size: int | None = None) -> StringBuffer:
    """
    Replace each tab with spaces up to the next multiple of ``tab_size``.

    Columns restart after ``\\n`` or ``\\r``. ``tab_size=0`` deletes tabs.
    When ``tab_size`` is None the width comes from ``LENSTR_TAB_SIZE``
    (default 8).

    Example:
        >>> lenstr.expand_tabs(lenstr.copy(b"a\\tbc\\td"), 4).tobytes()
        b'a   bc  d'
    """
    tab_size = resolve_tab_size(tab_size)
    with _owned(buf, "expand_tabs") as data:
        n = _storage.length_of(data)
        if tab_size == 0:
            _replace(data, b"\t", b"", -1)
        else:
            # First pass: width of every tab and the final length.
            tabs: list[tuple[int, int]] = []
            column = 0
            total = 0
            for i in range(n):
                b = data[i]
                if b == _ascii.TAB:
                    width = tab_size - column % tab_size
                    tabs.append((i, width))
                    column += width
                    total += width
                else:
                    total += 1
                    column = 0 if b in (_ascii.LF, _ascii.CR) else column + 1

            # Second pass: grow once, rewrite right-to-left.
            if tabs:
                _storage.grow(data, total - n)
                end = total
                seg_end = n
                for pos, width in reversed(tabs):
                    run = seg_end - (pos + 1)
                    end -= run
                    _storage.move(data, end, pos + 1, run)
                    end -= width
                    _storage.fill(data, end, width, _SPACE)
                    seg_end = pos
    return _result(data, "expand_tabs", n)


# =============================================================================
# Case
# =============================================================================


def lower(buf: StringBuffer) -> StringBuffer:
    """ASCII lower-case every byte."""
    with _owned(buf, "lower", resizes=False) as data:
        _translate(data, _ascii.TO_LOWER)
    return StringBuffer._adopt(data)


def upper(buf: StringBuffer) -> StringBuffer:
    """ASCII upper-case every byte."""
    with _owned(buf, "upper", resizes=False) as data:
        _translate(data, _ascii.TO_UPPER)
    return StringBuffer._adopt(data)


def swapcase(buf: StringBuffer) -> StringBuffer:
    """Swap ASCII case of every letter."""
    with _owned(buf, "swapcase", resizes=False) as data:
        _translate(data, _ascii.SWAP_CASE)
    return StringBuffer._adopt(data)


def capitalize(buf: StringBuffer) -> StringBuffer:
    """Lower-case everything, then upper-case the first byte."""
    with _owned(buf, "capitalize", resizes=False) as data:
        _translate(data, _ascii.TO_LOWER)
        if _storage.length_of(data):
            data[0] = _ascii.TO_UPPER[data[0]]
    return StringBuffer._adopt(data)


def title(buf: StringBuffer) -> StringBuffer:
    """
    Upper-case the first byte and each byte following ASCII whitespace.

    Every other byte is lower-cased. Only whitespace starts a word, so
    ``b"o'neil"`` stays ``b"O'neil"``.
    """
    with _owned(buf, "title", resizes=False) as data:
        word_start = True
        for i in range(_storage.length_of(data)):
            b = data[i]
            data[i] = _ascii.TO_UPPER[b] if word_start else _ascii.TO_LOWER[b]
            word_start = b in _ascii.WHITESPACE
    return StringBuffer._adopt(data)


# =============================================================================
# Replace
# =============================================================================


def replace(
    buf: StringBuffer,
    old: StringLike,
    new: StringLike,
    max_count: int = -1,
) -> StringBuffer:
    """
    Replace non-overlapping occurrences of ``old`` with ``new``.

    Matches are found left to right and consume their bytes, so
    ``b"aaaa"`` contains two matches of ``b"aa"``, not three. At most
    ``max_count`` matches are replaced (negative = all, 0 = none).

    ``old`` and ``new`` may be views of ``buf`` itself; they are copied
    before the edit starts.

    Args:
        buf: Buffer to edit (consumed).
        old: Non-empty pattern to find.
        new: Replacement bytes.
        max_count: Maximum replacements, or -1 for all.

    Returns
    -------
        The edited buffer.

    Raises
    ------
        ValidationError: If ``old`` is empty (code="EMPTY_PATTERN").
        OwnershipError: If ``buf`` is not a StringBuffer.

    Example:
        >>> lenstr.replace(lenstr.copy(b"aaaa"), b"aa", b"b", 1).tobytes()
        b'baa'
    """
    _check_int(max_count, "max_count")
    old_bytes = snapshot(old, "old")
    new_bytes = snapshot(new, "new")
    if not old_bytes:
        raise ValidationError(
            "replace() requires a non-empty pattern",
            code="EMPTY_PATTERN",
            details={"argument": "old"},
        )
    with _owned(buf, "replace") as data:
        length = _storage.length_of(data)
        _replace(data, old_bytes, new_bytes, max_count)
    return _result(data, "replace", length)
