"""
Configuration resolution tests.

Tests for lenstr._config (argument, then environment, then default).
"""

import pytest

from lenstr import ValidationError


class TestResolveTabSize:
    """resolve_tab_size()."""

    def test_default(self, monkeypatch):
        """Without argument or env the default is 8."""
        from lenstr._config import DEFAULT_TAB_SIZE, resolve_tab_size

        monkeypatch.delenv("LENSTR_TAB_SIZE", raising=False)

        assert resolve_tab_size() == DEFAULT_TAB_SIZE == 8

    def test_env(self, monkeypatch):
        """LENSTR_TAB_SIZE is used when no argument is given."""
        from lenstr._config import resolve_tab_size

        monkeypatch.setenv("LENSTR_TAB_SIZE", " 4 ")

        assert resolve_tab_size() == 4

    def test_blank_env_uses_default(self, monkeypatch):
        """A blank variable counts as unset."""
        from lenstr._config import resolve_tab_size

        monkeypatch.setenv("LENSTR_TAB_SIZE", "  ")

        assert resolve_tab_size() == 8

    def test_argument_wins(self, monkeypatch):
        """An explicit argument beats the environment."""
        from lenstr._config import resolve_tab_size

        monkeypatch.setenv("LENSTR_TAB_SIZE", "4")

        assert resolve_tab_size(2) == 2
        assert resolve_tab_size(0) == 0

    def test_invalid_env(self, monkeypatch):
        """A non-integer variable raises when used."""
        from lenstr._config import resolve_tab_size

        monkeypatch.setenv("LENSTR_TAB_SIZE", "wide")

        with pytest.raises(ValidationError) as exc_info:
            resolve_tab_size()
        assert exc_info.value.details["env"] == "LENSTR_TAB_SIZE"

    @pytest.mark.parametrize("env", [None, "-3"])
    def test_negative(self, monkeypatch, env):
        """Negative widths are rejected from either source."""
        from lenstr._config import resolve_tab_size

        if env is None:
            monkeypatch.delenv("LENSTR_TAB_SIZE", raising=False)
            arg = -1
        else:
            monkeypatch.setenv("LENSTR_TAB_SIZE", env)
            arg = None

        with pytest.raises(ValidationError) as exc_info:
            resolve_tab_size(arg)
        assert exc_info.value.code == "INVALID_ARGUMENT"

    @pytest.mark.parametrize("arg", [2.5, True, "4"])
    def test_non_int_argument(self, arg):
        """Only ints are accepted as an explicit width."""
        from lenstr._config import resolve_tab_size

        with pytest.raises(ValidationError) as exc_info:
            resolve_tab_size(arg)
        assert exc_info.value.code == "INVALID_ARGUMENT"
