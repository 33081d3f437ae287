"""Command line interface for uischema."""

from .lib import COMMANDS, main, show_help

__all__ = ["COMMANDS", "main", "show_help"]
