"""
Owned string collection.

Wraps the results of segmentation (split, partition, split_lines) as an
ordered sequence of independently owned StringBuffers. Releasing the
collection releases every element, then the collection itself.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any, overload

from .._logging import scoped_logger
from ..exceptions import OwnershipError, StateError
from .buffer import StringBuffer, StringLike, _quote

_log = scoped_logger("array")


def _render(item: StringBuffer) -> str:
    if not item.live:
        return "<released>" if item.released else "<moved>"
    return _quote(item.tobytes())


class StringArray(Sequence[StringBuffer]):
    """
    Ordered collection of owned StringBuffers.

    Returned by ``split()``, ``partition()`` and ``split_lines()``.
    Implements ``collections.abc.Sequence[StringBuffer]``.

    Example:
        >>> parts = lenstr.split(b"a,b,,c", b",")
        >>> len(parts)
        4
        >>> parts.tolist()
        [b'a', b'b', b'', b'c']
        >>> parts.release()

    Memory Management
    -----------------

    Elements belong to the array. Mutating an element through
    ``lenstr.ops.mutate`` moves it out of its slot, so the slot must be
    refilled with the returned handle:

        >>> parts[0] = lenstr.upper(parts[0])

    ``release()`` releases every live element and then the array; use
    ``with`` for scoped cleanup.
    """

    __slots__ = ("_items", "_released")

    def __init__(self, items: Iterable[StringBuffer] = ()) -> None:
        """
        Take ownership of already-owned buffers.

        Use ``from_values()`` to build an array from arbitrary string-likes.
        """
        self._items: list[StringBuffer] = list(items)
        self._released = False

    @classmethod
    def from_values(cls, values: Iterable[StringLike]) -> StringArray:
        """Copy each string-like value into a new owned element."""
        return cls(StringBuffer(value) for value in values)

    def _live_items(self) -> list[StringBuffer]:
        if self._released:
            raise StateError("StringArray already released", code="STATE_RELEASED")
        return self._items

    def __len__(self) -> int:
        """Number of elements; 0 after release."""
        if self._released:
            return 0
        return len(self._items)

    @overload
    def __getitem__(self, idx: int) -> StringBuffer: ...

    @overload
    def __getitem__(self, idx: slice) -> list[StringBuffer]: ...

    def __getitem__(self, idx: int | slice) -> StringBuffer | list[StringBuffer]:
        """
        Get an element by index, or a list of elements by slice.

        Elements are returned by reference; they stay owned by the array.
        """
        return self._live_items()[idx]

    def __setitem__(self, idx: int, value: StringBuffer) -> None:
        """
        Store a (typically freshly mutated) buffer back into its slot.

        Raises
        ------
            OwnershipError: If ``value`` is not a live StringBuffer
                (code="NOT_OWNED").
        """
        items = self._live_items()
        if not isinstance(value, StringBuffer) or not value.live:
            raise OwnershipError(
                "StringArray slots only hold live StringBuffers; "
                "use append() to copy other values.",
                details={"type": type(value).__name__},
            )
        items[idx] = value

    def __iter__(self) -> Iterator[StringBuffer]:
        return iter(self._live_items())

    def append(self, value: StringLike) -> None:
        """Copy ``value`` into a new owned element at the end."""
        self._live_items().append(StringBuffer(value))

    def tolist(self) -> list[bytes]:
        """
        Copy every element into a Python list of ``bytes``.

        The list stays valid after the array is released.
        """
        return [item.tobytes() for item in self._live_items()]

    def release(self) -> None:
        """
        Release every live element, then the array.

        Elements that were already released or moved out are skipped.

        Raises
        ------
            StateError: If the array was already released (code="STATE_RELEASED").
        """
        items = self._live_items()
        for item in items:
            if item.live:
                item.release()
        _log.debug("Released StringArray", extra={"length": len(items)})
        items.clear()
        self._released = True

    @property
    def released(self) -> bool:
        """True once release() has been called."""
        return self._released

    def __enter__(self) -> StringArray:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit - releases the array if still live."""
        if not self._released:
            self.release()

    def __eq__(self, other: object) -> bool:
        """Compare element-wise with another StringArray or a list of string-likes."""
        if isinstance(other, (StringArray, list, tuple)):
            if len(self) != len(other):
                return False
            return all(mine == theirs for mine, theirs in zip(self, other))
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._released:
            return "StringArray(<released>)"
        items = self._items
        if len(items) <= 10:
            shown = ", ".join(_render(item) for item in items)
        else:
            head = ", ".join(_render(item) for item in items[:5])
            tail = ", ".join(_render(item) for item in items[-3:])
            shown = f"{head}, ..., {tail}"
        return f"StringArray([{shown}], len={len(items)})"
