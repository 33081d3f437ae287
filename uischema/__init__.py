"""uischema: Intermediate representation for AI-generated user interfaces."""

from uischema.a11y import A11yIssue, validate_a11y
from uischema.patch import (
    PatchError,
    PatchOperation,
    PatchParseError,
    PatchStream,
    apply_patch,
    apply_patches,
    parse_jsonl_patches,
    serialize_patches_to_jsonl,
)
from uischema.schema import (
    SCHEMA_VERSION,
    ComponentType,
    Document,
    Node,
    Props,
    export_json_schema,
)
from uischema.shorthand import ShorthandSyntaxError, expand_shorthand, parse_shorthand
from uischema.validation import SchemaError, ValidationResult, is_valid, validate_document, validate_node

__all__ = [
    # Document model
    "SCHEMA_VERSION",
    "ComponentType",
    "Document",
    "Node",
    "Props",
    "export_json_schema",
    # Validation
    "SchemaError",
    "ValidationResult",
    "validate_document",
    "validate_node",
    "is_valid",
    "A11yIssue",
    "validate_a11y",
    # Shorthand
    "ShorthandSyntaxError",
    "parse_shorthand",
    "expand_shorthand",
    # Patches
    "PatchError",
    "PatchParseError",
    "PatchOperation",
    "PatchStream",
    "apply_patch",
    "apply_patches",
    "parse_jsonl_patches",
    "serialize_patches_to_jsonl",
]
