"""Structural validation of raw documents.

Validation is a single recursive pydantic pass over the input. The
interactive ariaLabel rule runs inside that pass, switched on through the
validation context, so the resulting error list covers type errors, unknown
keys and missing labels together.

Nothing here raises for bad input: every failure is returned as a
SchemaError in a ValidationResult.
"""

from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from uischema.schema import REQUIRE_ARIA_LABEL, SLOT_TAGS, Document, Node

PathPart = str | int


@dataclass(frozen=True)
class SchemaError:
    """Represents a structural validation error.

    Attributes:
        path: Keys and zero-based indices from the document root.
        message: Human-readable error description.
        error_type: Machine-readable error classification.
    """

    path: tuple[PathPart, ...]
    message: str
    error_type: str

    def format_path(self) -> str:
        """Dotted rendering for log output, e.g. ``root.children.1.type``."""
        return ".".join(str(part) for part in self.path) or "<document>"


@dataclass
class ValidationResult:
    """Outcome of structural validation.

    Attributes:
        document: The typed tree when validation succeeded.
        errors: Ordered errors when it failed.
    """

    document: Document | Node | None = None
    errors: list[SchemaError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.document is not None and not self.errors


_ARIA_LABEL_PATH: tuple[PathPart, ...] = ("props", "ariaLabel")


def _error_path(loc: tuple[PathPart, ...], error_type: str) -> tuple[PathPart, ...]:
    """Translate a pydantic error location into a document path.

    Drops the union tag pydantic inserts below each slot name and points
    ariaLabel errors at the label itself rather than the node.
    """
    path: list[PathPart] = []
    i = 0
    while i < len(loc):
        part = loc[i]
        path.append(part)
        if part == "slots" and i + 2 < len(loc) and loc[i + 2] in SLOT_TAGS:
            path.append(loc[i + 1])
            i += 3
            continue
        i += 1
    if error_type == "aria_label_required":
        path.extend(_ARIA_LABEL_PATH)
    return tuple(path)


def _collect_errors(exc: PydanticValidationError) -> list[SchemaError]:
    return [
        SchemaError(
            path=_error_path(tuple(err["loc"]), err["type"]),
            message=err["msg"],
            error_type=err["type"],
        )
        for err in exc.errors(include_url=False)
    ]


def validate_document(data: Any) -> ValidationResult:
    """Validate a raw value as a Document.

    Checks, in one pass:
        - Required fields and field types at every level
        - Unknown keys on every object except props
        - Wire key names only, so ``schema_version`` is an unknown key
        - Core or extension component types
        - Non-empty ariaLabel on interactive components

    Args:
        data: Any value, typically decoded JSON.

    Returns:
        ValidationResult with the typed Document, or the ordered errors.

    Example:
        >>> result = validate_document({"root": {"type": "Button"}})
        >>> result.errors[0].path
        ('root', 'props', 'ariaLabel')
    """
    try:
        document = Document.model_validate(
            data, context={REQUIRE_ARIA_LABEL: True}, by_alias=True, by_name=False
        )
    except PydanticValidationError as exc:
        return ValidationResult(errors=_collect_errors(exc))
    return ValidationResult(document=document)


def validate_node(data: Any) -> ValidationResult:
    """Validate a raw value as a bare Node.

    Same rules as validate_document; paths start at the node itself.
    """
    try:
        node = Node.model_validate(
            data, context={REQUIRE_ARIA_LABEL: True}, by_alias=True, by_name=False
        )
    except PydanticValidationError as exc:
        return ValidationResult(errors=_collect_errors(exc))
    return ValidationResult(document=node)


def is_valid(data: Any) -> bool:
    """Check if a raw value is a valid Document.

    Example:
        >>> if is_valid(payload):
        ...     render(payload)
    """
    return validate_document(data).success


__all__ = [
    "SchemaError",
    "ValidationResult",
    "validate_document",
    "validate_node",
    "is_valid",
]
