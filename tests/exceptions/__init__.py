"""
Exception handling tests.

Tests for lenstr.exceptions module:
- Exception hierarchy and builtin base classes
- Stable error codes and structured details

Maps to: lenstr/exceptions/
"""
