"""Structural validation utilities."""

from uischema.validation.lib import (
    SchemaError,
    ValidationResult,
    is_valid,
    validate_document,
    validate_node,
)

__all__ = [
    "SchemaError",
    "ValidationResult",
    "validate_document",
    "validate_node",
    "is_valid",
]
