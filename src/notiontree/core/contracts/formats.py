"""
Per-type ``format`` payload contracts.

A block's ``format`` object has no shared schema: its shape depends entirely
on the block's ``type`` tag. Each record below describes one such shape.
Records carry a ``kind`` literal so that the decoded payload can live in a
single tagged-union field on :class:`~notiontree.core.contracts.block.Block`
(:data:`FormatVariant`), which makes "at most one format per block"
structural.

Conventions
-----------
- Unknown keys are ignored; the service adds format keys regularly. An
  incoming ``kind`` key is one of them: ``kind`` is always set from the
  record class, never from the payload.
- Explicit JSON ``null`` values are treated as "absent" and fall back to the
  field default.
- Values are validated strictly: a string where a number or boolean is
  expected is a shape change and fails decoding. Integers are accepted for
  float fields.
- Fields marked "computed" are never read from the payload; the format
  decoder fills them after validation.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import ConfigDict, Field, model_validator

from .base import RecordModel


class FormatBase(RecordModel):
    """Shared behaviour for every format record."""

    model_config = ConfigDict(strict=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_kind(cls, data: Any) -> Any:
        if isinstance(data, dict) and "kind" in data:
            return {k: v for k, v in data.items() if k != "kind"}
        return data


class FormatPage(FormatBase):
    """Format of a ``page`` block."""

    kind: Literal["page"] = "page"

    page_cover: str = Field(default="", description="e.g. '/images/page-cover/gradients_11.jpg'")
    page_cover_position: float = Field(default=0.0, description="Vertical cover offset, e.g. 0.6")
    page_font: str = ""
    page_full_width: bool = False
    page_icon: str = Field(default="", description="Icon URL or a single emoji.")
    page_small_text: bool = False
    block_color: str = ""

    page_cover_url: str = Field(default="", description="Computed: proxied page_cover.")


class FormatBookmark(FormatBase):
    """Format of a ``bookmark`` block."""

    kind: Literal["bookmark"] = "bookmark"

    bookmark_icon: str = ""
    bookmark_cover: str = ""


class FormatImage(FormatBase):
    """Format of an ``image`` block."""

    kind: Literal["image"] = "image"

    block_aspect_ratio: float = 0.0
    block_full_width: bool = False
    block_page_width: bool = False
    block_preserve_scale: bool = False
    block_width: float = 0.0
    display_source: str = ""

    image_url: str = Field(default="", description="Computed: proxied display_source.")


class FormatVideo(FormatBase):
    """Format of a ``video`` block."""

    kind: Literal["video"] = "video"

    block_width: int = 0
    block_height: int = 0
    display_source: str = ""
    block_full_width: bool = False
    block_page_width: bool = False
    block_aspect_ratio: float = 0.0
    block_preserve_scale: bool = False


class FormatText(FormatBase):
    """Format of a ``text`` block."""

    kind: Literal["text"] = "text"

    block_color: str = ""


class FormatHeader(FormatBase):
    """Format shared by ``header``, ``sub_header`` and ``sub_sub_header``."""

    kind: Literal["header"] = "header"

    block_color: str = ""


class FormatToggle(FormatBase):
    """Format of a ``toggle`` block."""

    kind: Literal["toggle"] = "toggle"

    block_color: str = ""


class TableProperty(FormatBase):
    """One column descriptor of a table; list order is display order."""

    width: int = 0
    visible: bool = False
    property: str = Field(default="", description="Key of the collection property shown.")


class FormatTable(FormatBase):
    """Format of a ``table`` block."""

    kind: Literal["table"] = "table"

    table_wrap: bool = False
    table_properties: list[TableProperty] = Field(default_factory=list)


class FormatColumn(FormatBase):
    """Format of a ``column`` block."""

    kind: Literal["column"] = "column"

    column_ratio: float = Field(default=0.0, description="e.g. 0.5 for a half-width column")


class FormatEmbed(FormatBase):
    """Format of an ``embed`` block."""

    kind: Literal["embed"] = "embed"

    block_full_width: bool = False
    block_height: float = 0.0
    block_page_width: bool = False
    block_preserve_scale: bool = False
    display_source: str = ""


FormatVariant = Annotated[
    FormatPage
    | FormatBookmark
    | FormatImage
    | FormatVideo
    | FormatText
    | FormatHeader
    | FormatToggle
    | FormatTable
    | FormatColumn
    | FormatEmbed,
    Field(discriminator="kind"),
]


__all__ = [
    "FormatBase",
    "FormatPage",
    "FormatBookmark",
    "FormatImage",
    "FormatVideo",
    "FormatText",
    "FormatHeader",
    "FormatToggle",
    "TableProperty",
    "FormatTable",
    "FormatColumn",
    "FormatEmbed",
    "FormatVariant",
]
