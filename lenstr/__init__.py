"""
Lenstr - Length-prefixed byte strings with explicit ownership.

Lenstr replaces NUL-terminated strings with a (bytes, length) value type and
a library of trimming, padding, casing, searching, splitting, joining and
replacing operations. Bytes are raw 8-bit code units; case and whitespace
logic is ASCII-only.

Quick Start
-----------

    >>> import lenstr
    >>>
    >>> buf = lenstr.copy(b"  hello world  ")
    >>> buf = lenstr.trim(buf)
    >>> buf = lenstr.title(buf)
    >>> buf
    StringBuffer("Hello World", len=11)
    >>> buf.release()

Owned vs Borrowed
-----------------

- `StringBuffer` owns its storage and must be released exactly once
  (``release()`` or a ``with`` block).
- `StringView` borrows bytes from a literal, a bytearray or a buffer and is
  never released.

Only buffers can be mutated. Each mutation consumes the handle it is given
and returns the handle to use from then on:

    >>> buf = lenstr.copy(b"a,b")
    >>> new = lenstr.replace(buf, b",", b", ")
    >>> buf.tobytes()
    StateError: StringBuffer was moved by a mutation ...

Searching
---------

Misses are ``None``, never a magic offset:

    >>> lenstr.index_of(b"hello", b"z") is None
    True

Segmentation
------------

    >>> with lenstr.split(b"a,b,,c", b",") as parts:
    ...     parts.tolist()
    [b'a', b'b', b'', b'c']
    >>> lenstr.join([b"a", b"b"], b"-")
    StringBuffer("a-b", len=3)
"""

from lenstr._logging import setup_logging as setup_logging
from lenstr._version import __version__ as __version__

# Exceptions (commonly-used exceptions at root; all via lenstr.exceptions)
from lenstr.exceptions import (
    AllocationError as AllocationError,
)
from lenstr.exceptions import (
    LenstrError,
)
from lenstr.exceptions import (
    OwnershipError as OwnershipError,
)
from lenstr.exceptions import (
    StateError as StateError,
)
from lenstr.exceptions import (
    ValidationError as ValidationError,
)

# Operations
from lenstr.ops import (
    Ordering,
    capitalize,
    center,
    compare,
    compare_ignore_case,
    count,
    ends_with,
    expand_tabs,
    includes,
    index_of,
    is_alpha,
    is_alphanumeric,
    is_digit,
    is_space,
    join,
    last_index_of,
    lower,
    pad,
    pad_left,
    pad_right,
    partition,
    replace,
    split,
    split_lines,
    starts_with,
    swapcase,
    title,
    trim,
    trim_left,
    trim_right,
    upper,
    zfill,
)

# Strings
from lenstr.string import StringArray, StringBuffer, StringLike, StringView


def copy(value: StringLike) -> StringBuffer:
    """Copy any string-like value into a new owned StringBuffer.

    Args:
        value: StringView, StringBuffer, bytes or bytearray.

    Example:
        >>> buf = lenstr.copy(b"abc")
        >>> len(buf), buf.capacity
        (3, 4)
    """
    return StringBuffer(value)


# =============================================================================
# Public API - Mapped 1:1 to Documentation
# =============================================================================
#
# Comments group related exports into sections. Other symbols remain
# importable via submodules (e.g., from lenstr.ops.mutate import pad_left).
#
__all__ = [
    # Strings
    "StringBuffer",
    "StringView",
    "StringArray",
    "copy",
    # Mutation
    "trim",
    "trim_left",
    "trim_right",
    "pad",
    "pad_left",
    "pad_right",
    "center",
    "zfill",
    "expand_tabs",
    "lower",
    "upper",
    "swapcase",
    "capitalize",
    "title",
    "replace",
    # Query
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
    # Segmentation
    "split",
    "join",
    "partition",
    "split_lines",
    # Logging
    "setup_logging",
    # Exceptions
    "LenstrError",
    "AllocationError",
    "StateError",
    "OwnershipError",
    "ValidationError",
]
