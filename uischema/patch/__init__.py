"""Patch engine for incremental UI tree construction."""

from .lib import (
    APPEND_SEGMENT,
    MAX_POINTER_DEPTH,
    PatchError,
    PatchOp,
    PatchOperation,
    PatchParseError,
    apply_patch,
    apply_patches,
    coerce_patch,
    create_add_patch,
    create_remove_patch,
    create_replace_patch,
    create_set_patch,
    escape_segment,
    is_array_index,
    parse_jsonl_patches,
    parse_pointer,
    serialize_patches_to_jsonl,
    unescape_segment,
)
from .stream import PatchStream

__all__ = [
    "APPEND_SEGMENT",
    "MAX_POINTER_DEPTH",
    "PatchOp",
    "PatchError",
    "PatchParseError",
    "PatchOperation",
    "PatchStream",
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
