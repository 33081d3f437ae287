"""Tests for configuration management."""

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    get_environment,
    get_environment_info,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("UISCHEMA_JSON_INDENT", raising=False)
        assert get_environment(EnvVar.JSON_INDENT) == 2

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("UISCHEMA_JSON_INDENT", "8")
        assert get_environment(EnvVar.JSON_INDENT, override=0) == 0

    @pytest.mark.unit
    def test_int_type_conversion(self, monkeypatch):
        """Integer type conversion from string."""
        monkeypatch.setenv("UISCHEMA_JSON_INDENT", "4")
        result = get_environment(EnvVar.JSON_INDENT)
        assert result == 4
        assert isinstance(result, int)

    @pytest.mark.unit
    def test_invalid_int_returns_default(self, monkeypatch):
        """Unparseable integers fall back to the default."""
        monkeypatch.setenv("UISCHEMA_JSON_INDENT", "wide")
        assert get_environment(EnvVar.JSON_INDENT) == 2

    @pytest.mark.unit
    def test_bool_type_conversion_true(self, monkeypatch):
        """Boolean type conversion for true values."""
        for value in ("true", "1", "yes", "TRUE", "Yes"):
            monkeypatch.setenv("UISCHEMA_A11Y_STRICT", value)
            assert get_environment(EnvVar.A11Y_STRICT) is True

    @pytest.mark.unit
    def test_bool_type_conversion_false(self, monkeypatch):
        """Boolean type conversion for false values."""
        for value in ("false", "0", "no", "FALSE", "No"):
            monkeypatch.setenv("UISCHEMA_A11Y_STRICT", value)
            assert get_environment(EnvVar.A11Y_STRICT) is False

    @pytest.mark.unit
    def test_unrecognized_bool_returns_default(self, monkeypatch):
        """Unrecognized boolean strings fall back to the default."""
        monkeypatch.setenv("UISCHEMA_A11Y_STRICT", "maybe")
        assert get_environment(EnvVar.A11Y_STRICT) is False

    @pytest.mark.unit
    def test_string_type(self, monkeypatch):
        """String type returns as-is."""
        monkeypatch.setenv("UISCHEMA_SCHEMA_VERSION", "0.2.0")
        assert get_environment(EnvVar.SCHEMA_VERSION) == "0.2.0"


class TestIntrospection:
    """Tests for environment metadata helpers."""

    @pytest.mark.unit
    def test_get_environment_info(self):
        """Info returns the EnvConfig record."""
        info = get_environment_info(EnvVar.LOG_LEVEL)
        assert isinstance(info, EnvConfig)
        assert info.name == "UISCHEMA_LOG_LEVEL"
        assert info.default == "INFO"

    @pytest.mark.unit
    def test_all_names_are_prefixed(self):
        """Every variable lives in the UISCHEMA_ namespace."""
        for var in EnvVar:
            assert var.value.name.startswith("UISCHEMA_")
            assert var.value.description

    @pytest.mark.unit
    def test_list_by_category(self):
        """Category filter returns only matching variables."""
        cli_vars = list_environment_variables("cli")
        assert set(cli_vars) == {EnvVar.A11Y_STRICT, EnvVar.JSON_INDENT}

    @pytest.mark.unit
    def test_list_all(self):
        """No category returns every variable."""
        assert list_environment_variables() == list(EnvVar)
