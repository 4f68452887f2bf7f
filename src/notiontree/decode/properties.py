"""
Property extraction: turn rich-text ``properties`` into scalar block fields.

Every property read goes through this module so the three reading rules stay
in one place:

- **first span** (:func:`extract_property`): single-token properties such as
  ``link``, ``source``, ``language``, ``size`` and ``checked`` only carry
  meaning in their first span;
- **whole flatten** (:func:`~notiontree.core.contracts.spans.flatten`): used
  for page/file/bookmark titles;
- **checkbox** (:func:`is_checked_value`): the literal ``"Yes"``, compared
  case-insensitively.

Extraction is best-effort. An absent or malformed property yields ``None``
and never fails the block; the only exception is the ``title`` property,
whose parse errors propagate from :func:`apply_properties`.
"""

from __future__ import annotations

from notiontree.core.contracts.block import Block, BlockType
from notiontree.core.contracts.spans import first_span_text, flatten, parse_text_spans
from notiontree.core.errors import SpanParseError
from notiontree.core.proxy import maybe_proxy_image_url
from notiontree.core.settings import get_logger

log = get_logger(__name__)

#: Types whose ``title`` property is a real title rather than inline content.
TITLED_TYPES: frozenset[str] = frozenset(
    {BlockType.PAGE.value, BlockType.FILE.value, BlockType.BOOKMARK.value}
)

CHECKED_LITERAL = "Yes"


def extract_property(block: Block, name: str) -> str | None:
    """Return the first-span text of property ``name``, or ``None``.

    ``None`` means the property is absent or could not be parsed; callers
    leave the destination field untouched in that case.
    """
    if name not in block.properties:
        return None
    try:
        spans = parse_text_spans(block.properties[name])
    except SpanParseError as e:
        log.debug("block %s: ignoring unparsable property %r: %s", block.id, name, e.reason)
        return None
    return first_span_text(spans)


def is_checked_value(text: str | None) -> bool:
    """Return True if ``text`` is the checkbox literal ``"Yes"`` (any case)."""
    if text is None:
        return False
    return text.casefold() == CHECKED_LITERAL.casefold()


def _apply_title(block: Block) -> None:
    if "title" not in block.properties:
        return
    spans = parse_text_spans(block.properties["title"])
    if block.type in TITLED_TYPES:
        block.title = flatten(spans)
        block.title_full = spans
    elif block.type == BlockType.CODE.value:
        block.code = first_span_text(spans)
    else:
        block.inline_content = spans


def apply_properties(block: Block) -> None:
    """Populate the property-derived fields of ``block`` in place.

    Raises
    ------
    SpanParseError
        If the ``title`` property is present but malformed. Fields set
        before that point are kept.
    """
    _apply_title(block)

    if block.type == BlockType.TODO.value:
        block.is_checked = is_checked_value(extract_property(block, "checked"))

    if (description := extract_property(block, "description")) is not None:
        block.description = description
    if (link := extract_property(block, "link")) is not None:
        block.link = link

    # A top-level "source" field on the record wins over the property.
    if not block.source and (source := extract_property(block, "source")) is not None:
        block.source = source
    if block.source and block.is_image():
        block.image_url = maybe_proxy_image_url(block.source)

    if (language := extract_property(block, "language")) is not None:
        block.code_language = language

    if block.type == BlockType.FILE.value:
        if (size := extract_property(block, "size")) is not None:
            block.file_size = size


__all__ = [
    "TITLED_TYPES",
    "extract_property",
    "is_checked_value",
    "apply_properties",
]
