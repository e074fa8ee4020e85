"""
Lenstr exceptions.

This module defines the exception hierarchy for lenstr:

    LenstrError (base)
    ├── AllocationError - Storage could not be obtained (also MemoryError)
    ├── StateError - Handle is released, moved, stale, or pinned by an export
    ├── OwnershipError - Mutation attempted on a value that is not owned
    └── ValidationError - Invalid parameter value

Usage:
    try:
        buf = lenstr.replace(buf, b"", b"x")
    except lenstr.ValidationError as e:
        print(f"Bad argument ({e.code}): {e}")
    except lenstr.LenstrError as e:
        # Catch any lenstr error with structured details
        print(f"Error {e.code}: {e}")
        print(f"Details: {e.details}")

Search misses are not errors: ``index_of`` and friends return ``None``.
"""

from typing import Any

__all__ = [
    # Base
    "LenstrError",
    # Resource
    "AllocationError",
    # State
    "StateError",
    # Ownership
    "OwnershipError",
    # Validation
    "ValidationError",
]


class LenstrError(Exception):
    """
    Base exception for all lenstr errors.

    All lenstr-specific exceptions inherit from this class, enabling:
    - Catch-all handling: ``except lenstr.LenstrError``
    - Stable string-based error codes for programmatic handling
    - Structured details for debugging and logging

    Attributes
    ----------
    message : str
        Human-readable error description.
    code : str
        Stable, string-based error code (e.g., "STATE_RELEASED").
        Use this for programmatic error handling.
    details : dict[str, Any]
        Structured context (e.g., {"length": 3, "requested": 10}).

    Example
    -------
    >>> buf = lenstr.copy(b"abc")
    >>> buf.release()
    >>> try:
    ...     buf.release()
    ... except lenstr.LenstrError as e:
    ...     print(e.code)
    STATE_RELEASED
    """

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, code={self.code!r})"


# =============================================================================
# Resource Errors
# =============================================================================


class AllocationError(LenstrError, MemoryError):
    """
    Buffer storage could not be allocated or grown.

    Raised when creating, copying, padding, or growing a buffer needs more
    memory than the interpreter can provide. The operation is aborted and
    the input buffer keeps its storage and contents.

    Example:
        >>> try:
        ...     buf = lenstr.pad_right(buf, 1 << 62)
        ... except MemoryError:
        ...     print("too big")
    """

    def __init__(
        self,
        message: str,
        code: str = "ALLOCATION_FAILED",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


# =============================================================================
# State Errors
# =============================================================================


class StateError(LenstrError, RuntimeError):
    """
    Invalid handle state error.

    Raised when an operation is attempted on a handle in an invalid state:
    - Using or releasing an already released buffer (``STATE_RELEASED``)
    - Using a buffer after a mutation consumed it (``STATE_MOVED``)
    - Reading a view whose owner changed since it was taken
      (``STATE_STALE_VIEW``)
    - Resizing a buffer while a ctypes/NumPy export pins it
      (``STATE_EXPORTED``)
    """

    def __init__(
        self,
        message: str,
        code: str = "STATE_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


# =============================================================================
# Ownership Errors
# =============================================================================


class OwnershipError(LenstrError, TypeError):
    """
    Mutation requested on a value the caller does not own.

    Mutation functions only accept ``StringBuffer``. Views, ``bytes`` and
    other borrowed values must be copied first::

        >>> buf = lenstr.trim(lenstr.copy(view))
    """

    def __init__(
        self,
        message: str,
        code: str = "NOT_OWNED",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(LenstrError, ValueError):
    """
    Invalid parameter value.

    Raised when a function receives an argument of an unsupported type or
    an inappropriate value (e.g., an empty search pattern for ``replace``).

    This exception inherits from both LenstrError and ValueError, so both work::

        except lenstr.LenstrError:   # catches all lenstr errors
        except ValueError:           # catches validation errors (Pythonic)

    Example:
        >>> lenstr.count(b"abc", b"")
        ValidationError: count() requires a non-empty pattern
    """

    def __init__(
        self,
        message: str,
        code: str = "INVALID_ARGUMENT",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)
