"""Centralized configuration management for uischema.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from uischema.config import EnvVar, get_environment
    >>>
    >>> strict = get_environment(EnvVar.A11Y_STRICT)  # Returns bool: False
    >>> for var in list_environment_variables("cli"):
    ...     info = get_environment_info(var)
    ...     print(f"{info.name}: {info.description}")

Environment Variable Categories:
    logging: Log verbosity for the command line
    schema: Defaults stamped on generated documents
    cli: Command line output and strictness
"""

from .lib import (
    EnvConfig,
    EnvVar,
    get_environment,
    get_environment_info,
    list_environment_variables,
)

__all__ = [
    "EnvConfig",
    "EnvVar",
    "get_environment",
    "get_environment_info",
    "list_environment_variables",
]
