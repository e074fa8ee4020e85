"""
Core string type tests.

Tests for lenstr.string:
- StringBuffer lifecycle (release, move, context manager)
- StringView borrowing and staleness
- StringArray ownership of its elements
- Zero-copy ctypes / NumPy exports

Maps to: lenstr/string/
"""
