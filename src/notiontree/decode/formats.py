"""
Format decoding: select and validate a block's type-specific ``format``.

Dispatch
--------
``FORMAT_MODELS`` maps a raw ``type`` tag to the record that describes its
``format`` payload. The three header levels share :class:`FormatHeader`.
Types missing from the table are skipped: a block type introduced by the
service later must never break decoding of existing documents.

Outcomes of :func:`decode_format`
---------------------------------
``Ok(None)``
    Empty payload, or a type with no registered format.
``Ok(variant)``
    Payload validated; computed fields filled.
``Err(FormatDecodeError)``
    Payload present but does not match the registered shape.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ValidationError

from notiontree.core.contracts.block import Block, BlockType
from notiontree.core.contracts.formats import (
    FormatBookmark,
    FormatColumn,
    FormatEmbed,
    FormatHeader,
    FormatImage,
    FormatPage,
    FormatTable,
    FormatText,
    FormatToggle,
    FormatVariant,
    FormatVideo,
)
from notiontree.core.errors import FormatDecodeError
from notiontree.core.proxy import maybe_proxy_image_url
from notiontree.core.result import Result, err, ok
from notiontree.core.settings import get_logger

log = get_logger(__name__)

FORMAT_MODELS: dict[str, type[BaseModel]] = {
    BlockType.PAGE.value: FormatPage,
    BlockType.BOOKMARK.value: FormatBookmark,
    BlockType.IMAGE.value: FormatImage,
    BlockType.COLUMN.value: FormatColumn,
    BlockType.TABLE.value: FormatTable,
    BlockType.TEXT.value: FormatText,
    BlockType.VIDEO.value: FormatVideo,
    BlockType.EMBED.value: FormatEmbed,
    BlockType.HEADER.value: FormatHeader,
    BlockType.SUB_HEADER.value: FormatHeader,
    BlockType.SUB_SUB_HEADER.value: FormatHeader,
    BlockType.TOGGLE.value: FormatToggle,
}


def is_empty_format(raw: Any) -> bool:
    """Return True for an absent payload (``None``, ``""`` or ``b""``)."""
    if raw is None:
        return True
    if isinstance(raw, str | bytes | bytearray):
        return len(raw) == 0
    return False


def _validate(model: type[BaseModel], raw: Any) -> BaseModel:
    if isinstance(raw, str | bytes | bytearray):
        return model.model_validate_json(raw)
    return model.model_validate(raw)


def _attach_computed(fmt: BaseModel) -> None:
    if isinstance(fmt, FormatPage):
        fmt.page_cover_url = maybe_proxy_image_url(fmt.page_cover)
    elif isinstance(fmt, FormatImage):
        fmt.image_url = maybe_proxy_image_url(fmt.display_source)


def decode_format(block: Block) -> Result[FormatVariant | None, FormatDecodeError]:
    """Decode ``block.format_raw`` according to ``block.type``.

    Pure: ``block`` is not modified. See the module docstring for outcomes.
    """
    raw = block.format_raw
    if is_empty_format(raw):
        return ok(None)
    model = FORMAT_MODELS.get(block.type)
    if model is None:
        return ok(None)
    try:
        fmt = _validate(model, raw)
    except ValidationError as e:
        return err(FormatDecodeError(block.type, raw, str(e)))
    _attach_computed(fmt)
    return ok(fmt)  # type: ignore[arg-type]


def apply_format(block: Block) -> None:
    """Decode the format of ``block`` and attach it in place.

    Leaves ``format_variant`` untouched when there is nothing to decode.

    Raises
    ------
    FormatDecodeError
        If the payload does not match the shape registered for the type.
    """
    result = decode_format(block)
    if result.is_err():
        e = result.unwrap_err()
        log.warning("block %s: %s; format: %s", block.id, e, e.raw_text())
        raise e
    fmt = result.unwrap()
    if fmt is not None:
        block.format_variant = fmt


__all__ = ["FORMAT_MODELS", "is_empty_format", "decode_format", "apply_format"]
