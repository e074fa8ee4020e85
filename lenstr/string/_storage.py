"""
Storage primitives for owned buffers.

Every owned buffer is a ``bytearray`` holding the content plus one trailing
NUL terminator. These helpers are the only places that allocate, resize or
shift that storage; they convert MemoryError and BufferError into lenstr
errors.

Layout invariant: ``len(data) == length + 1`` and ``data[length] == 0``.
"""

from __future__ import annotations

from ..exceptions import AllocationError, StateError

TERMINATOR = 0


def allocate(payload: bytes | bytearray, start: int = 0, end: int | None = None) -> bytearray:
    """Copy ``payload[start:end]`` into fresh storage with a terminator.

    Raises
    ------
        AllocationError: If the interpreter cannot provide the memory.
    """
    if end is None:
        end = len(payload)
    length = end - start
    try:
        data = bytearray(length + 1)
    except MemoryError:
        raise AllocationError(
            f"Failed to allocate {length + 1} bytes",
            details={"requested": length + 1},
        ) from None
    data[:length] = payload[start:end]
    return data


def length_of(data: bytearray) -> int:
    """Content length of storage (terminator excluded)."""
    return len(data) - 1


def ensure_resizable(data: bytearray) -> None:
    """Fail early if a buffer export (ctypes array, NumPy view) pins ``data``.

    ``bytearray`` refuses to change size while any export is alive.

    Raises
    ------
        StateError: With code ``STATE_EXPORTED`` when pinned.
    """
    try:
        data.append(TERMINATOR)
    except BufferError:
        raise StateError(
            "Buffer is exported (ctypes array or NumPy view still alive) and cannot be resized. "
            "Drop the exported object before mutating.",
            code="STATE_EXPORTED",
            details={"length": length_of(data)},
        ) from None
    del data[-1]


def grow(data: bytearray, extra: int) -> None:
    """Extend storage by ``extra`` bytes; the terminator moves to the new end.

    The grown region is zero-filled. Content bytes are not shifted.
    """
    if extra <= 0:
        return
    try:
        data.extend(bytes(extra))
    except MemoryError:
        raise AllocationError(
            f"Failed to grow buffer by {extra} bytes",
            details={"length": length_of(data), "extra": extra},
        ) from None
    except BufferError:
        raise StateError(
            "Buffer is exported and cannot be resized.",
            code="STATE_EXPORTED",
            details={"length": length_of(data)},
        ) from None


def shrink(data: bytearray, new_length: int) -> None:
    """Truncate storage to ``new_length`` content bytes and re-terminate."""
    del data[new_length + 1 :]
    data[new_length] = TERMINATOR


def move(data: bytearray, dst: int, src: int, count: int) -> None:
    """Shift ``count`` bytes from ``src`` to ``dst`` within ``data``.

    Overlapping ranges are handled like ``memmove``. The temporary
    memoryview is released before returning so the storage stays resizable.
    """
    if count <= 0 or dst == src:
        return
    with memoryview(data) as mv:
        mv[dst : dst + count] = mv[src : src + count]


def fill(data: bytearray, start: int, count: int, byte: int) -> None:
    """Overwrite ``count`` bytes at ``start`` with ``byte``."""
    if count > 0:
        data[start : start + count] = bytes((byte,)) * count
