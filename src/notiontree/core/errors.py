"""Exception types raised while decoding block records.

Only two failures are ever surfaced by normalization:

- :class:`SpanParseError` when a rich-text value is not a valid span array.
  Fatal only for the ``title`` property; every other property treats it as
  "absent".
- :class:`FormatDecodeError` when a block's ``format`` payload does not fit
  the shape registered for its type. Always fatal for the format phase.

Both derive from :class:`ValueError` so callers that only care about "bad
input" can catch that.
"""

from __future__ import annotations

from typing import Any


class NotionTreeError(Exception):
    """Base class for every error raised by this package."""


class SpanParseError(NotionTreeError, ValueError):
    """A raw property value is not a structurally valid rich-text span array."""

    def __init__(self, reason: str, raw: Any = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.raw = raw


class FormatDecodeError(NotionTreeError, ValueError):
    """A ``format`` payload does not match the shape expected for its block type.

    Attributes
    ----------
    block_type:
        The raw ``type`` tag of the block whose format failed to decode.
    raw:
        The offending payload exactly as it was received.
    reason:
        Human-readable cause, usually pydantic's validation message.
    """

    def __init__(self, block_type: str, raw: Any, reason: str) -> None:
        super().__init__(f"cannot decode format for block type {block_type!r}: {reason}")
        self.block_type = block_type
        self.raw = raw
        self.reason = reason

    def raw_text(self) -> str:
        """Return the payload as text for diagnostics."""
        if isinstance(self.raw, bytes | bytearray):
            return bytes(self.raw).decode("utf-8", errors="replace")
        return str(self.raw)


__all__ = ["NotionTreeError", "SpanParseError", "FormatDecodeError"]
