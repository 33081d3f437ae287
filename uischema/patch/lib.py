"""JSON-Pointer patch engine for incremental tree construction.

Patches address locations with RFC 6901 pointers and apply one of four
operations: ``set``, ``replace``, ``add`` and ``remove``. This is the subset
a generator needs to grow a UI tree line by line; it is not a general
JSON Patch implementation.

Trees are plain JSON values (dicts, lists, scalars). Applying a patch never
mutates its input. Only the containers on the path from the root to the
changed location are copied; every other subtree in the result is the same
object as in the input, so consumers can detect change by identity.

Example:
    >>> tree = {"type": "Container", "props": {"ariaLabel": "Loading..."}}
    >>> patches = parse_jsonl_patches(
    ...     '{"op":"set","path":"/props/ariaLabel","value":"Dashboard"}\\n'
    ...     '{"op":"add","path":"/children","value":{"type":"Text"}}'
    ... )
    >>> apply_patches(tree, patches)["children"]
    [{'type': 'Text'}]
"""

import json
import re
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, StrictStr
from pydantic import ValidationError as PydanticValidationError

from uischema.schema import WireModel

APPEND_SEGMENT = "-"
MAX_POINTER_DEPTH = 256

_ARRAY_INDEX = re.compile(r"^(0|[1-9]\d*)$")


class PatchOp(str, Enum):
    """Supported patch operations."""

    SET = "set"
    ADD = "add"
    REPLACE = "replace"
    REMOVE = "remove"


class PatchError(ValueError):
    """Raised when a patch cannot be applied.

    Attributes:
        operation_index: Position of the failing operation within the
            apply_patches call, when known.
        last_good: Tree produced by the operations before the failing one.
            Equals the input root when the first operation fails.
    """

    def __init__(
        self,
        message: str,
        operation_index: int | None = None,
        last_good: Any = None,
    ):
        super().__init__(message)
        self.operation_index = operation_index
        self.last_good = last_good


class PatchParseError(PatchError):
    """Raised when a JSONL line is not a valid patch operation.

    Attributes:
        line: Raw content of the offending line.
        line_number: One-based line number within the parsed text.
    """

    def __init__(self, message: str, line: str, line_number: int):
        super().__init__(message)
        self.line = line
        self.line_number = line_number


class PatchOperation(BaseModel):
    """One ``{op, path, value?}`` instruction.

    ``value`` is optional on the wire and an explicit ``null`` is a real
    value, so presence is tracked separately through ``has_value``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    op: Literal["set", "add", "replace", "remove"]
    path: StrictStr
    value: Any = None

    @property
    def has_value(self) -> bool:
        return "value" in self.model_fields_set

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)

    def to_json(self) -> str:
        return self.model_dump_json(exclude_unset=True)


# =============================================================================
# JSON Pointer
# =============================================================================


def unescape_segment(segment: str) -> str:
    """Decode ``~1`` to ``/`` and then ``~0`` to ``~``."""
    return segment.replace("~1", "/").replace("~0", "~")


def escape_segment(segment: str) -> str:
    """Encode a key for use as one pointer segment.

    Example:
        >>> escape_segment("a/b~c")
        'a~1b~0c'
    """
    return segment.replace("~", "~0").replace("/", "~1")


def parse_pointer(path: str) -> list[str]:
    """Split a pointer into decoded segments.

    The empty pointer and ``/`` both address the whole tree.

    Raises:
        PatchError: If a non-empty pointer does not start with ``/``.
    """
    if path in ("", "/"):
        return []
    if not path.startswith("/"):
        raise PatchError(f"Invalid JSON Pointer {path!r}: must start with '/'")
    return [unescape_segment(segment) for segment in path[1:].split("/")]


def is_array_index(segment: str) -> bool:
    """Whether a segment is a canonical non-negative array index."""
    return bool(_ARRAY_INDEX.match(segment))


# =============================================================================
# Tree Update
# =============================================================================

_MISSING = object()


def _pointer_prefix(segments: list[str], depth: int) -> str:
    return "/" + "/".join(escape_segment(s) for s in segments[:depth])


def _list_index(segment: str, segments: list[str], depth: int) -> int:
    if not is_array_index(segment):
        raise PatchError(
            f"Expected array index at {_pointer_prefix(segments, depth + 1)}, "
            f"got {segment!r}"
        )
    return int(segment)


def _child(container: Any, segment: str, segments: list[str], depth: int, op: str) -> Any:
    """Look up the intermediate value below ``container``, or _MISSING."""
    if isinstance(container, dict):
        value = container.get(segment, _MISSING)
        return _MISSING if value is None else value
    if isinstance(container, list):
        if segment == APPEND_SEGMENT:
            if op == PatchOp.REMOVE:
                return _MISSING
            raise PatchError(
                f"'-' may only be the last segment: {_pointer_prefix(segments, depth + 1)}"
            )
        index = _list_index(segment, segments, depth)
        if index < len(container):
            value = container[index]
            return _MISSING if value is None else value
        if index == len(container) or op == PatchOp.REMOVE:
            return _MISSING
        raise PatchError(
            f"Array index {index} out of range at {_pointer_prefix(segments, depth + 1)}"
        )
    if op == PatchOp.REMOVE:
        return _MISSING
    raise PatchError(
        f"Cannot traverse into {type(container).__name__} at "
        f"{_pointer_prefix(segments, depth)}"
    )


def _with_child(container: Any, segment: str, value: Any) -> Any:
    """Copy of ``container`` with one slot replaced or appended."""
    if isinstance(container, dict):
        return {**container, segment: value}
    updated = list(container)
    index = int(segment)
    if index == len(updated):
        updated.append(value)
    else:
        updated[index] = value
    return updated


def _apply_leaf(container: Any, segment: str, patch: PatchOperation, segments: list[str]) -> Any:
    depth = len(segments) - 1
    where = _pointer_prefix(segments, len(segments))
    op = patch.op

    if isinstance(container, list):
        if segment == APPEND_SEGMENT:
            if op == PatchOp.ADD:
                return [*container, patch.value]
            if op == PatchOp.REMOVE:
                return container
            raise PatchError(f"Cannot {op} at append position {where}")
        index = _list_index(segment, segments, depth)
        if op == PatchOp.REMOVE:
            if index >= len(container):
                return container
            return container[:index] + container[index + 1 :]
        if index > len(container):
            raise PatchError(f"Array index {index} out of range at {where}")
        if op == PatchOp.ADD:
            return container[:index] + [patch.value] + container[index:]
        return _with_child(container, segment, patch.value)

    if isinstance(container, dict):
        if op == PatchOp.REMOVE:
            if segment not in container:
                return container
            return {k: v for k, v in container.items() if k != segment}
        if op == PatchOp.ADD:
            current = container.get(segment)
            if current is None:
                return {**container, segment: [patch.value]}
            if isinstance(current, list):
                return {**container, segment: [*current, patch.value]}
            raise PatchError(f"Cannot add to non-array at {where}")
        return {**container, segment: patch.value}

    if op == PatchOp.REMOVE:
        return container
    raise PatchError(
        f"Cannot {op} {where}: parent is {type(container).__name__}, not a container"
    )


def _update(container: Any, segments: list[str], depth: int, patch: PatchOperation) -> Any:
    segment = segments[depth]
    if depth == len(segments) - 1:
        return _apply_leaf(container, segment, patch, segments)

    child = _child(container, segment, segments, depth, patch.op)
    if child is _MISSING:
        if patch.op == PatchOp.REMOVE:
            return container
        upcoming = segments[depth + 1]
        child = [] if is_array_index(upcoming) or upcoming == APPEND_SEGMENT else {}

    updated = _update(child, segments, depth + 1, patch)
    if updated is child:
        return container
    return _with_child(container, segment, updated)


def apply_patch(root: Any, patch: PatchOperation | Mapping[str, Any]) -> Any:
    """Apply one operation and return the new tree.

    Args:
        root: Current tree (JSON value or typed model).
        patch: Operation to apply.

    Returns:
        New tree sharing every untouched subtree with ``root``.

    Raises:
        PatchError: For invalid pointers, index/type mismatches, adding to
            a non-array, root-level add/remove, a missing value, and
            pointers longer than MAX_POINTER_DEPTH segments.
    """
    patch = coerce_patch(patch)
    if isinstance(root, WireModel):
        root = root.to_dict()

    segments = parse_pointer(patch.path)
    if len(segments) > MAX_POINTER_DEPTH:
        raise PatchError(
            f"Pointer has {len(segments)} segments, limit is {MAX_POINTER_DEPTH}"
        )
    if patch.op != PatchOp.REMOVE and not patch.has_value:
        raise PatchError(f"'{patch.op}' at {patch.path or '/'} requires a value")

    if not segments:
        if patch.op in (PatchOp.SET, PatchOp.REPLACE):
            return patch.value
        raise PatchError(f"Cannot {patch.op} at the root")

    return _update(root, segments, 0, patch)


def apply_patches(root: Any, patches: Iterable[PatchOperation | Mapping[str, Any]]) -> Any:
    """Apply operations in order, each to the result of the previous one.

    Args:
        root: Starting tree. Never modified.
        patches: Ordered operations.

    Returns:
        The final tree.

    Raises:
        PatchError: On the first failing operation. ``operation_index`` and
            ``last_good`` describe how far the call got.
    """
    result = root
    for index, patch in enumerate(patches):
        try:
            result = apply_patch(result, patch)
        except PatchError as exc:
            raise PatchError(
                f"Patch {index} failed: {exc}",
                operation_index=index,
                last_good=result,
            ) from exc
    return result


# =============================================================================
# JSONL
# =============================================================================


def coerce_patch(patch: PatchOperation | Mapping[str, Any]) -> PatchOperation:
    """Accept a PatchOperation or a raw mapping of the same shape."""
    if isinstance(patch, PatchOperation):
        return patch
    try:
        return PatchOperation.model_validate(patch)
    except PydanticValidationError as exc:
        raise PatchError(f"Invalid patch operation {patch!r}: {exc}") from exc


def parse_jsonl_patches(text: str) -> list[PatchOperation]:
    """Parse newline-delimited JSON into patch operations.

    Blank lines are skipped. Each remaining line must hold one complete
    operation; partial lines are the caller's to buffer.

    Raises:
        PatchParseError: For the first line that is not valid JSON or not a
            valid operation. The whole batch is rejected.
    """
    patches: list[PatchOperation] = []
    for line_number, line in enumerate(text.split("\n"), start=1):
        stripped = line.strip()
        if not stripped:
            continue
        try:
            raw = json.loads(stripped)
        except json.JSONDecodeError as exc:
            raise PatchParseError(
                f"Invalid JSON in patch line {line_number}: {stripped}. Error: {exc}",
                line=stripped,
                line_number=line_number,
            ) from exc
        try:
            patches.append(PatchOperation.model_validate(raw))
        except PydanticValidationError as exc:
            raise PatchParseError(
                f"Invalid patch operation in line {line_number}: {stripped}",
                line=stripped,
                line_number=line_number,
            ) from exc
    return patches


def serialize_patches_to_jsonl(patches: Iterable[PatchOperation | Mapping[str, Any]]) -> str:
    """Encode operations one per line, joined by ``\\n``."""
    return "\n".join(coerce_patch(patch).to_json() for patch in patches)


# =============================================================================
# Factories
# =============================================================================


def create_set_patch(path: str, value: Any) -> PatchOperation:
    return PatchOperation(op="set", path=path, value=value)


def create_add_patch(path: str, value: Any) -> PatchOperation:
    return PatchOperation(op="add", path=path, value=value)


def create_replace_patch(path: str, value: Any) -> PatchOperation:
    return PatchOperation(op="replace", path=path, value=value)


def create_remove_patch(path: str) -> PatchOperation:
    return PatchOperation(op="remove", path=path)


__all__ = [
    "APPEND_SEGMENT",
    "MAX_POINTER_DEPTH",
    "PatchOp",
    "PatchError",
    "PatchParseError",
    "PatchOperation",
    "escape_segment",
    "unescape_segment",
    "parse_pointer",
    "is_array_index",
    "apply_patch",
    "apply_patches",
    "coerce_patch",
    "parse_jsonl_patches",
    "serialize_patches_to_jsonl",
    "create_set_patch",
    "create_add_patch",
    "create_replace_patch",
    "create_remove_patch",
]
