"""
Lenstr exceptions.

This module defines the exception hierarchy for lenstr:

    LenstrError (base)
    ├── AllocationError - Storage could not be obtained (also MemoryError)
    ├── StateError - Handle is released, moved, stale, or pinned by an export
    ├── OwnershipError - Mutation attempted on a value that is not owned
    └── ValidationError - Invalid parameter value
"""

from .exceptions import (
    AllocationError,
    LenstrError,
    OwnershipError,
    StateError,
    ValidationError,
)

# =============================================================================
# Public API - See lenstr/__init__.py for documentation mapping guidelines
# =============================================================================
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
