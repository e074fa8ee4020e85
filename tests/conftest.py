"""
Global pytest fixtures for lenstr tests.

This module provides:
- The imported ``lenstr`` package as a fixture
- A buffer factory that releases whatever is still live after each test
- Logging isolation (handlers and level restored after each test)

=============================================================================
Skip Policy
=============================================================================

pytest.importorskip(): Missing optional dependencies (numpy). These are
prerequisites, not lenstr bugs.
"""

import logging

import pytest


@pytest.fixture(scope="session")
def lenstr():
    """Import and return the lenstr package."""
    import lenstr

    return lenstr


# =============================================================================
# Buffer Fixtures
# =============================================================================


@pytest.fixture
def make_buffer():
    """
    Factory for owned buffers that are released at teardown.

    Usage:
        def test_trim(make_buffer):
            buf = make_buffer(b"  hi  ")
            buf = lenstr.trim(buf)

    Only the handles created by the factory are tracked. Handles that were
    moved by a mutation are skipped; results returned by mutations are not
    tracked and should be released by the test (or used in a ``with`` block).
    """
    from lenstr import StringBuffer

    created: list[StringBuffer] = []

    def factory(value=b""):
        buf = StringBuffer(value)
        created.append(buf)
        return buf

    yield factory

    for buf in created:
        if buf.live:
            buf.release()


# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def restore_logging():
    """Restore the lenstr logger's handlers and level after each test."""
    from lenstr._logging import logger

    handlers = logger.handlers[:]
    level = logger.level
    yield
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "interop: marks ctypes / NumPy export tests")
