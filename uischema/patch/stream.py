"""Incremental application of a JSONL patch stream.

A generator emits patches one line at a time, and chunks arriving over a
socket rarely end on a line boundary. PatchStream buffers the partial
tail, applies each complete line as soon as it lands, and keeps the
latest good tree available for rendering.
"""

from typing import Any

from uischema.core.log import get_logger

from .lib import PatchError, PatchOperation, apply_patches, parse_jsonl_patches

logger = get_logger(__name__)


class PatchStream:
    """Line-buffered patch applicator.

    Example:
        >>> stream = PatchStream({"type": "Container"})
        >>> stream.feed('{"op":"set","path":"/props/ariaLabel","val')
        []
        >>> _ = stream.feed('ue":"Dashboard"}\\n')
        >>> stream.tree["props"]
        {'ariaLabel': 'Dashboard'}
    """

    def __init__(self, root: Any):
        self._tree = root
        self._buffer = ""
        self._applied = 0

    @property
    def tree(self) -> Any:
        """Tree after every patch applied so far."""
        return self._tree

    @property
    def applied(self) -> int:
        """Number of patches applied so far."""
        return self._applied

    @property
    def pending(self) -> str:
        """Buffered text not yet terminated by a newline."""
        return self._buffer

    def _apply(self, text: str) -> list[PatchOperation]:
        patches = parse_jsonl_patches(text)
        if not patches:
            return patches
        try:
            self._tree = apply_patches(self._tree, patches)
        except PatchError as exc:
            # Keep what applied cleanly before surfacing the failure.
            self._tree = exc.last_good
            if exc.operation_index is not None:
                self._applied += exc.operation_index
            raise
        self._applied += len(patches)
        logger.debug(f"Applied {len(patches)} patch(es), {self._applied} total")
        return patches

    def feed(self, chunk: str) -> list[PatchOperation]:
        """Buffer a chunk and apply every line it completes.

        Args:
            chunk: Raw text, possibly ending mid-line.

        Returns:
            Operations applied by this call, in order.

        Raises:
            PatchParseError: If a completed line is malformed.
            PatchError: If a completed operation cannot be applied. ``tree``
                then reflects the operations before it.
        """
        self._buffer += chunk
        complete, newline, rest = self._buffer.rpartition("\n")
        if not newline:
            return []
        self._buffer = rest
        return self._apply(complete)

    def close(self) -> list[PatchOperation]:
        """Apply any final line left without a trailing newline."""
        remaining, self._buffer = self._buffer, ""
        if remaining.strip():
            logger.debug("Flushing unterminated final patch line")
        return self._apply(remaining)


__all__ = ["PatchStream"]
