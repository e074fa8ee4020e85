"""
String module - Owned buffers, borrowed views and collections.

Provides:
- StringBuffer: Owned byte string with an explicit release obligation
- StringView: Borrowed, non-owning byte range
- StringArray: Owned collection of StringBuffers
"""

from .array import StringArray
from .buffer import StringBuffer, StringLike, StringView

# =============================================================================
# Public API - See lenstr/__init__.py for documentation mapping guidelines
# =============================================================================
__all__ = [
    # Owned
    "StringBuffer",
    # Borrowed
    "StringView",
    # Collections
    "StringArray",
    # Typing
    "StringLike",
]
