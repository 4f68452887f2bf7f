"""
Rich-text span contract and resolver.

The service stores every text-bearing property (``title``, ``source``,
``checked`` ...) as a JSON array of *spans*. Each span is itself an array:

    [text]                      plain text
    [text, [[tag], [tag, arg]]] text with formatting attributes

For example, ``"Hello, **world**"`` arrives as::

    [["Hello, "], ["world", [["b"]]]]

Known attribute tags
--------------------
``b`` bold, ``i`` italic, ``s`` strikethrough, ``c`` inline code,
``_`` underline, ``a`` link (URL), ``h`` highlight (color), ``u`` user
mention (user ID), ``p`` page mention (page ID), ``d`` date (object),
``e`` equation (LaTeX), ``m`` comment (discussion ID).

Unknown tags are preserved verbatim rather than rejected, so that new
formatting introduced by the service never breaks decoding. Only structural
violations raise :class:`~notiontree.core.errors.SpanParseError`.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field

from notiontree.core.errors import SpanParseError

ATTR_BOLD = "b"
ATTR_ITALIC = "i"
ATTR_STRIKE = "s"
ATTR_CODE = "c"
ATTR_UNDERLINE = "_"
ATTR_LINK = "a"
ATTR_HIGHLIGHT = "h"
ATTR_USER = "u"
ATTR_PAGE = "p"
ATTR_DATE = "d"
ATTR_EQUATION = "e"
ATTR_COMMENT = "m"


class TextAttr(BaseModel):
    """A single formatting attribute attached to a span."""

    type: str = Field(..., description="Attribute tag, e.g. 'b' or 'a'.")
    value: Any = Field(default=None, description="Optional argument (URL, color, ID, date).")


class TextSpan(BaseModel):
    """A run of text sharing the same set of attributes."""

    text: str = Field(..., description="The span's literal text.")
    attrs: list[TextAttr] = Field(default_factory=list, description="Attributes in received order.")

    def has(self, tag: str) -> bool:
        """Return True if an attribute with ``tag`` is present."""
        return any(a.type == tag for a in self.attrs)

    def get(self, tag: str) -> Any:
        """Return the argument of the first ``tag`` attribute, or ``None``."""
        for a in self.attrs:
            if a.type == tag:
                return a.value
        return None

    @property
    def is_bold(self) -> bool:
        return self.has(ATTR_BOLD)

    @property
    def is_italic(self) -> bool:
        return self.has(ATTR_ITALIC)

    @property
    def link(self) -> str | None:
        v = self.get(ATTR_LINK)
        return v if isinstance(v, str) else None


def _parse_attr(raw: Any) -> TextAttr:
    if not isinstance(raw, list) or not raw:
        raise SpanParseError(f"attribute must be a non-empty list, got {raw!r}", raw)
    tag = raw[0]
    if not isinstance(tag, str):
        raise SpanParseError(f"attribute tag must be a string, got {tag!r}", raw)
    value = raw[1] if len(raw) > 1 else None
    return TextAttr(type=tag, value=value)


def _parse_span(raw: Any) -> TextSpan:
    if not isinstance(raw, list) or not raw:
        raise SpanParseError(f"span must be a non-empty list, got {raw!r}", raw)
    text = raw[0]
    if not isinstance(text, str):
        raise SpanParseError(f"span text must be a string, got {text!r}", raw)
    if len(raw) == 1:
        return TextSpan(text=text)
    raw_attrs = raw[1]
    if not isinstance(raw_attrs, list):
        raise SpanParseError(f"span attributes must be a list, got {raw_attrs!r}", raw)
    return TextSpan(text=text, attrs=[_parse_attr(a) for a in raw_attrs])


def parse_text_spans(raw: Any) -> list[TextSpan]:
    """Resolve a raw property value into an ordered list of spans.

    Parameters
    ----------
    raw:
        The decoded JSON value of a property (usually a list of lists).
        ``None`` is accepted and yields an empty list.

    Returns
    -------
    list[TextSpan]
        Spans in the order they were received.

    Raises
    ------
    SpanParseError
        If ``raw`` is not a list of spans, or any span/attribute is malformed.
    """
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise SpanParseError(f"rich text must be a list of spans, got {type(raw).__name__}", raw)
    return [_parse_span(s) for s in raw]


def flatten(spans: Iterable[TextSpan]) -> str:
    """Concatenate every span's text, without separators or markup."""
    return "".join(s.text for s in spans)


def first_span_text(spans: list[TextSpan]) -> str:
    """Return the text of the first span, or ``""`` when there are none."""
    if not spans:
        return ""
    return spans[0].text


__all__ = [
    "TextAttr",
    "TextSpan",
    "parse_text_spans",
    "flatten",
    "first_span_text",
]
