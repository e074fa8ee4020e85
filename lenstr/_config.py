"""Environment-driven defaults for lenstr operations."""

from __future__ import annotations

__all__ = ["DEFAULT_TAB_SIZE", "resolve_tab_size"]

import os

from .exceptions import ValidationError

DEFAULT_TAB_SIZE = 8


def resolve_tab_size(tab_size: int | None = None) -> int:
    """Resolve tab width from argument/env/default.

    Args:
        tab_size: Explicit width, or None to consult ``LENSTR_TAB_SIZE``.

    Raises
    ------
        ValidationError: If the resolved width is negative, the argument
            is not an int, or the environment value is not an integer.
    """
    if tab_size is None:
        raw = os.environ.get("LENSTR_TAB_SIZE")
        if raw is None or not raw.strip():
            return DEFAULT_TAB_SIZE
        try:
            tab_size = int(raw)
        except ValueError:
            raise ValidationError(
                f"LENSTR_TAB_SIZE must be an integer, got {raw!r}",
                code="INVALID_ARGUMENT",
                details={"env": "LENSTR_TAB_SIZE", "value": raw},
            ) from None
    elif not isinstance(tab_size, int) or isinstance(tab_size, bool):
        raise ValidationError(
            f"tab_size must be an int, got {type(tab_size).__name__}",
            code="INVALID_ARGUMENT",
            details={"tab_size": repr(tab_size)},
        )

    if tab_size < 0:
        raise ValidationError(
            f"tab_size must be >= 0, got {tab_size}",
            code="INVALID_ARGUMENT",
            details={"tab_size": tab_size},
        )
    return tab_size
