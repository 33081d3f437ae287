"""Centralized environment configuration management for uischema.

Provides a unified interface for all environment variables with:
- Single `get_environment()` function for all configuration
- Type-safe enum with metadata (default, type, description)
- Consistent resolution: override > environment > default

Example:
    >>> from uischema.config import EnvVar, get_environment
    >>>
    >>> indent = get_environment(EnvVar.JSON_INDENT)  # Returns int
    >>> strict = get_environment(EnvVar.A11Y_STRICT)  # Returns bool
    >>>
    >>> # Override at runtime
    >>> indent = get_environment(EnvVar.JSON_INDENT, override=4)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, overload

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "UISCHEMA_LOG_LEVEL").
        default: Default value if not set in environment.
        var_type: Python type for value conversion (str, int, bool).
        description: Human-readable description.
        category: Grouping category for documentation.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by uischema.

    Each member contains an EnvConfig with name, default, type, and description.
    Use with `get_environment()` for type-safe access.

    Categories:
        - logging: Log verbosity
        - schema: Document defaults
        - cli: Command line behavior
    """

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    LOG_LEVEL = EnvConfig(
        name="UISCHEMA_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level for the command line (DEBUG, INFO, WARNING)",
        category="logging",
    )

    # -------------------------------------------------------------------------
    # Schema
    # -------------------------------------------------------------------------
    SCHEMA_VERSION = EnvConfig(
        name="UISCHEMA_SCHEMA_VERSION",
        default="0.1.0",
        var_type=str,
        description="schemaVersion stamped on documents built by the tools",
        category="schema",
    )

    # -------------------------------------------------------------------------
    # Command line
    # -------------------------------------------------------------------------
    A11Y_STRICT = EnvConfig(
        name="UISCHEMA_A11Y_STRICT",
        default=False,
        var_type=bool,
        description="Treat accessibility issues as failures in `validate`",
        category="cli",
    )
    JSON_INDENT = EnvConfig(
        name="UISCHEMA_JSON_INDENT",
        default=2,
        var_type=int,
        description="Indentation for JSON printed by the command line",
        category="cli",
    )


# =============================================================================
# Type Conversion Helpers
# =============================================================================


def _parse_bool(value: str) -> bool | None:
    """Parse string to boolean.

    Recognizes: true/false, 1/0, yes/no (case-insensitive).
    Returns None for unrecognized values.
    """
    normalized = value.lower().strip()
    if normalized in ("true", "1", "yes"):
        return True
    if normalized in ("false", "0", "no"):
        return False
    return None


def _convert_value(value: str | None, var_type: type, default: Any) -> Any:
    """Convert string value to target type.

    Args:
        value: Raw string value from environment (or None).
        var_type: Target Python type.
        default: Default value if conversion fails or value is None.

    Returns:
        Converted value or default.
    """
    if value is None:
        return default

    if var_type is str:
        return value

    if var_type is int:
        try:
            return int(value)
        except ValueError:
            return default

    if var_type is bool:
        result = _parse_bool(value)
        return result if result is not None else default

    # Unknown type, return as-is
    return value


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: int) -> int: ...
@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: bool) -> bool: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get environment variable value with type conversion.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Args:
        env_var: Environment variable enum member.
        override: Optional override value (bypasses env lookup).

    Returns:
        Value converted to the appropriate type (str, int, or bool).

    Example:
        >>> get_environment(EnvVar.JSON_INDENT)
        2
        >>> get_environment(EnvVar.JSON_INDENT, override=4)
        4
    """
    config: EnvConfig = env_var.value

    if override is not None:
        return override

    raw_value = os.environ.get(config.name)
    return _convert_value(raw_value, config.var_type, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable.

    Args:
        env_var: Environment variable enum member.

    Returns:
        EnvConfig with name, default, type, and description.
    """
    return env_var.value


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List all environment variables, optionally filtered by category.

    Args:
        category: Filter by category (logging, schema, cli).
                 None returns all variables.

    Returns:
        List of EnvVar enum members.
    """
    if category is None:
        return list(EnvVar)

    return [var for var in EnvVar if var.value.category == category]


__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Introspection
    "list_environment_variables",
]
