"""
String containers - StringBuffer and StringView.

Memory Safety Contract:
- A StringBuffer exclusively owns its storage (content + NUL terminator)
- release() frees the storage exactly once; releasing again is an error
- Mutation functions consume a StringBuffer and return a new handle for the
  same storage; the consumed handle is *moved* and refuses further use
- A StringView borrows bytes from a StringBuffer, bytes or bytearray and is
  never released; a view taken from a buffer goes stale as soon as that
  buffer is mutated, moved or released
- ctypes / NumPy exports share storage with the buffer and pin it: while an
  export is alive, operations that resize the buffer raise StateError

Slicing:
- ``buf[a:b]`` and ``view[a:b]`` return a *view* (no copy)
- ``copy()`` and ``StringBuffer.from_bytes()`` always copy
"""

from __future__ import annotations

import ctypes
from collections.abc import Iterator
from enum import Enum
from typing import Any, Union, overload

from .._logging import scoped_logger
from ..exceptions import StateError, ValidationError
from . import _storage

_log = scoped_logger("buffer")

StringLike = Union["StringView", "StringBuffer", bytes, bytearray]


class _HandleState(Enum):
    LIVE = "live"
    MOVED = "moved"
    RELEASED = "released"


def _quote(content: bytes) -> str:
    """Render content as a double-quoted, escaped literal."""
    return '"' + repr(content)[2:-1].replace('"', '\\"') + '"'


def resolve_span(value: Any, name: str = "value") -> tuple[bytes | bytearray, int, int]:
    """
    Resolve any string-like value to ``(source, start, end)``.

    No bytes are copied. The returned source is only valid until the owning
    buffer (if any) is mutated.

    Raises
    ------
        ValidationError: If ``value`` is not string-like (code="INVALID_TYPE").
        StateError: If ``value`` is a released/moved buffer or a stale view.
    """
    if isinstance(value, StringView):
        return value._span()
    if isinstance(value, StringBuffer):
        data = value._live_data()
        return data, 0, _storage.length_of(data)
    if isinstance(value, (bytes, bytearray)):
        return value, 0, len(value)
    raise ValidationError(
        f"{name} must be a StringView, StringBuffer, bytes or bytearray, "
        f"got {type(value).__name__}",
        code="INVALID_TYPE",
        details={"argument": name, "type": type(value).__name__},
    )


def snapshot(value: Any, name: str = "value") -> bytes:
    """Copy the bytes of any string-like value into an immutable ``bytes``."""
    source, start, end = resolve_span(value, name)
    return bytes(source[start:end])


class StringView:
    """
    Borrowed, immutable ``(source, start, length)`` byte range.

    A view never owns memory: it wraps a literal, a caller's bytearray, or
    the content of a StringBuffer, and has no release obligation. Creating a
    sub-view (slicing) reuses the same source.

    Views taken from a StringBuffer are checked on every access; once the
    buffer is mutated, moved or released they raise
    ``StateError(code="STATE_STALE_VIEW")``.

    Example:
        >>> view = StringView(b"key=value", 4)
        >>> view.tobytes()
        b'value'
        >>> view[:3]
        StringView("val", len=3)
    """

    __slots__ = ("_source", "_start", "_length", "_owner")

    def __init__(self, source: StringLike, start: int = 0, length: int | None = None):
        owner: StringBuffer | None = None
        if isinstance(source, StringView):
            owner = source._owner
            base_source, base_start, base_end = source._span()
        elif isinstance(source, StringBuffer):
            owner = source
            base_source = source._live_data()
            base_start, base_end = 0, _storage.length_of(base_source)
        elif isinstance(source, (bytes, bytearray)):
            base_source, base_start, base_end = source, 0, len(source)
        else:
            raise ValidationError(
                f"StringView source must be a StringView, StringBuffer, bytes or bytearray, "
                f"got {type(source).__name__}",
                code="INVALID_TYPE",
                details={"type": type(source).__name__},
            )

        available = base_end - base_start
        if length is None:
            length = available - start
        if start < 0 or length < 0 or start + length > available:
            raise ValidationError(
                f"View range [{start}, {start + length}) out of bounds for length {available}",
                code="LENGTH_OUT_OF_RANGE",
                details={"start": start, "length": length, "available": available},
            )

        self._source = base_source
        self._start = base_start + start
        self._length = length
        self._owner = owner

    @classmethod
    def from_parts(cls, data: bytes | bytearray, length: int) -> StringView:
        """
        Wrap the first ``length`` bytes of ``data`` without copying.

        Raises
        ------
            ValidationError: If ``length`` is negative or exceeds ``len(data)``.
        """
        return cls(data, 0, length)

    @classmethod
    def from_cstring(cls, data: bytes | bytearray) -> StringView:
        """
        Wrap ``data`` up to its first NUL byte (or all of it when none).

        Example:
            >>> StringView.from_cstring(b"abc\\x00junk").tobytes()
            b'abc'
        """
        nul = data.find(b"\x00")
        return cls(data, 0, len(data) if nul < 0 else nul)

    @classmethod
    def empty(cls) -> StringView:
        """Return an empty view."""
        return cls(b"")

    def _span(self) -> tuple[bytes | bytearray, int, int]:
        """Return ``(source, start, end)`` after checking the borrow is still valid."""
        owner = self._owner
        if owner is not None and (owner._state is not _HandleState.LIVE or owner._data is not self._source):
            raise StateError(
                "StringView is stale: the buffer it borrows from was mutated, moved or released. "
                "Take a new view from the current handle.",
                code="STATE_STALE_VIEW",
            )
        end = self._start + self._length
        if owner is None and end > len(self._source):
            raise StateError(
                f"StringView is stale: source shrank to {len(self._source)} bytes, view ends at {end}",
                code="STATE_STALE_VIEW",
                details={"end": end, "source_length": len(self._source)},
            )
        return self._source, self._start, end

    def __len__(self) -> int:
        return self._length

    @overload
    def __getitem__(self, idx: int) -> int: ...

    @overload
    def __getitem__(self, idx: slice) -> StringView: ...

    def __getitem__(self, idx: int | slice) -> int | StringView:
        """
        Get a byte value by index, or a sub-view by slice.

        Slices must have step 1 and share the source (no copy).
        """
        source, start, _ = self._span()
        if isinstance(idx, slice):
            lo, hi, step = idx.indices(self._length)
            if step != 1:
                raise ValidationError(
                    "StringView slices do not support a step",
                    code="INVALID_ARGUMENT",
                    details={"step": step},
                )
            sub = StringView.__new__(StringView)
            sub._source = source
            sub._start = start + lo
            sub._length = max(0, hi - lo)
            sub._owner = self._owner
            return sub

        if idx < 0:
            idx = self._length + idx
        if idx < 0 or idx >= self._length:
            raise IndexError(f"Byte index {idx} out of range [0, {self._length})")
        return source[start + idx]

    def __iter__(self) -> Iterator[int]:
        source, start, end = self._span()
        for i in range(start, end):
            yield source[i]

    def tobytes(self) -> bytes:
        """Copy the viewed bytes into a new ``bytes`` object."""
        source, start, end = self._span()
        return bytes(source[start:end])

    def __bytes__(self) -> bytes:
        return self.tobytes()

    def copy(self) -> StringBuffer:
        """Copy the viewed bytes into a new owned StringBuffer."""
        return StringBuffer(self)

    def __eq__(self, other: object) -> bool:
        """Exact byte equality with any string-like value."""
        if not isinstance(other, (StringView, StringBuffer, bytes, bytearray)):
            return NotImplemented
        source, start, end = self._span()
        other_source, other_start, other_end = resolve_span(other)
        if end - start != other_end - other_start:
            return False
        return source[start:end] == other_source[other_start:other_end]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        try:
            content = self.tobytes()
        except StateError:
            return "StringView(<stale>)"
        return f"StringView({_quote(content)}, len={self._length})"


class StringBuffer:
    """
    Owned byte string with an explicit release obligation.

    Storage is a ``bytearray`` of ``len(buf) + 1`` bytes whose last byte is
    always NUL, so the content can be handed to C consumers as-is.

    Lifecycle
    ---------

    **Create** by copying any string-like value:

        >>> buf = StringBuffer.from_bytes(b"  hello  ")

    **Mutate** through ``lenstr.ops.mutate``. Each call consumes the handle
    and returns the new one; only the returned handle may be used:

        >>> trimmed = lenstr.trim(buf)
        >>> trimmed.tobytes()
        b'hello'
        >>> len(buf)
        StateError: StringBuffer was moved by a mutation ...

    **Release** exactly once, or use a ``with`` block:

        >>> trimmed.release()
        >>> trimmed.release()
        StateError: StringBuffer already released

    Interop
    -------

    ``as_ctypes()`` and ``np.asarray(buf)`` share storage without copying.
    While such an export is alive the buffer cannot be resized; operations
    that need to grow or shrink it raise ``StateError(code="STATE_EXPORTED")``.

    See Also
    --------
    StringView : Borrowed, non-owning counterpart.
    StringArray : Owned collection returned by segmentation.
    """

    __slots__ = ("_data", "_state", "__weakref__")

    def __init__(self, value: StringLike = b"") -> None:
        """
        Copy ``value`` into newly allocated storage.

        Raises
        ------
            AllocationError: If memory cannot be obtained.
            ValidationError: If ``value`` is not string-like.
        """
        source, start, end = resolve_span(value)
        self._data: bytearray | None = _storage.allocate(source, start, end)
        self._state = _HandleState.LIVE

    @classmethod
    def from_bytes(cls, value: StringLike) -> StringBuffer:
        """Allocate a new buffer holding a copy of ``value``."""
        return cls(value)

    @classmethod
    def _adopt(cls, data: bytearray) -> StringBuffer:
        """Wrap storage that already satisfies the terminator layout (internal)."""
        buf = cls.__new__(cls)
        buf._data = data
        buf._state = _HandleState.LIVE
        return buf

    # =========================================================================
    # Ownership
    # =========================================================================

    def _live_data(self) -> bytearray:
        if self._state is _HandleState.LIVE:
            return self._data  # type: ignore[return-value]
        if self._state is _HandleState.MOVED:
            raise StateError(
                "StringBuffer was moved by a mutation. Use the handle the mutation returned.",
                code="STATE_MOVED",
            )
        raise StateError("StringBuffer already released", code="STATE_RELEASED")

    def _detach(self) -> bytearray:
        """Hand the storage to a mutation; this handle becomes moved."""
        data = self._live_data()
        self._data = None
        self._state = _HandleState.MOVED
        return data

    def _reattach(self, data: bytearray) -> None:
        """Give storage back after a mutation aborted before changing it."""
        self._data = data
        self._state = _HandleState.LIVE

    def release(self) -> None:
        """
        Free the storage and wipe this handle to the empty state.

        Raises
        ------
            StateError: If the buffer was already released
                (code="STATE_RELEASED") or moved (code="STATE_MOVED").
        """
        if self._state is not _HandleState.LIVE:
            _log.warning(
                "Release of a non-live StringBuffer",
                extra={"state": self._state.value, "handle": hex(id(self))},
            )
        self._live_data()
        self._data = None
        self._state = _HandleState.RELEASED

    @property
    def released(self) -> bool:
        """True once release() has been called."""
        return self._state is _HandleState.RELEASED

    @property
    def live(self) -> bool:
        """True while this handle owns storage (not released, not moved)."""
        return self._state is _HandleState.LIVE

    @property
    def capacity(self) -> int:
        """Allocated bytes, terminator included (``len(buf) + 1``)."""
        return len(self._live_data())

    def __enter__(self) -> StringBuffer:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit - releases the buffer if still live."""
        if self._state is _HandleState.LIVE:
            self.release()

    # =========================================================================
    # Read access
    # =========================================================================

    def __len__(self) -> int:
        """Content length; 0 after release."""
        if self._state is _HandleState.RELEASED:
            return 0
        return _storage.length_of(self._live_data())

    def view(self) -> StringView:
        """Borrow the whole content as a StringView."""
        return StringView(self)

    @overload
    def __getitem__(self, idx: int) -> int: ...

    @overload
    def __getitem__(self, idx: slice) -> StringView: ...

    def __getitem__(self, idx: int | slice) -> int | StringView:
        """Get a byte value by index, or a borrowed StringView by slice."""
        return StringView(self)[idx]

    def __iter__(self) -> Iterator[int]:
        return iter(StringView(self))

    def tobytes(self) -> bytes:
        """Copy the content (terminator excluded) into a new ``bytes``."""
        data = self._live_data()
        return bytes(data[:-1])

    def __bytes__(self) -> bytes:
        return self.tobytes()

    def copy(self) -> StringBuffer:
        """Return an independent owned copy."""
        return StringBuffer(self)

    def __eq__(self, other: object) -> bool:
        """Exact byte equality with any string-like value."""
        if not isinstance(other, (StringView, StringBuffer, bytes, bytearray)):
            return NotImplemented
        return StringView(self) == other

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._state is not _HandleState.LIVE:
            return f"StringBuffer(<{self._state.value}>)"
        return f"StringBuffer({_quote(self.tobytes())}, len={len(self)})"

    # =========================================================================
    # Interop (zero-copy ctypes / NumPy)
    # =========================================================================

    def as_ctypes(self) -> ctypes.Array:
        """
        Expose the storage as a ``ctypes.c_char`` array, terminator included.

        The array shares memory with the buffer (zero-copy) and pins it:
        operations that resize the buffer fail with ``STATE_EXPORTED`` until
        the array is dropped.

        Example:
            >>> arr = buf.as_ctypes()
            >>> ctypes.string_at(ctypes.addressof(arr))
            b'hello'
            >>> del arr  # unpin before growing/shrinking
        """
        data = self._live_data()
        return (ctypes.c_char * len(data)).from_buffer(data)

    @property
    def __array_interface__(self) -> dict:
        """
        NumPy array interface for zero-copy, read-only access to the content.

        ``np.asarray(buf)`` yields a ``uint8`` array over the content (no
        terminator). The array pins the buffer like ``as_ctypes()``.
        """
        data = self._live_data()
        content = memoryview(data)[: _storage.length_of(data)].toreadonly()
        return {
            "version": 3,
            "shape": (len(content),),
            "typestr": "|u1",
            "data": content,
        }
