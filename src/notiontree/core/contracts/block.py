"""
Block Contract

A :class:`Block` is one node of a page's document tree as stored by the
note-taking service. It is created from a raw JSON record, then enriched in
place by :func:`notiontree.decode.normalizer.normalize`:

- the raw side-channels (``properties`` and ``format``) are always kept as
  received, even for block types this package does not know about;
- derived scalar fields (``title``, ``code``, ``is_checked`` ...) are filled
  from ``properties``;
- the type-specific ``format`` payload is decoded into ``format_variant``.

Tree linkage is by ID only. ``parent`` holds the ID of the block whose
``content`` list contains this block and is set by
:class:`notiontree.core.tree.arena.BlockTree`; it is never an object
reference, so blocks never form reference cycles.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum, IntEnum
from typing import Any

from pydantic import ConfigDict, Field

from .base import RecordModel
from .formats import (
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
from .spans import TextSpan

#: ``parent_table`` value for blocks whose parent is the workspace itself.
TABLE_SPACE = "space"


class BlockType(str, Enum):
    """Known values of a block's ``type`` tag plus an ``UNKNOWN`` catch-all."""

    PAGE = "page"
    TEXT = "text"
    BOOKMARK = "bookmark"
    BULLETED_LIST = "bulleted_list"
    NUMBERED_LIST = "numbered_list"
    TOGGLE = "toggle"
    TODO = "to_do"
    DIVIDER = "divider"
    IMAGE = "image"
    HEADER = "header"
    SUB_HEADER = "sub_header"
    SUB_SUB_HEADER = "sub_sub_header"
    QUOTE = "quote"
    COMMENT = "comment"
    CODE = "code"
    COLUMN_LIST = "column_list"
    COLUMN = "column"
    TABLE = "table"
    COLLECTION_VIEW = "collection_view"
    VIDEO = "video"
    FILE = "file"
    PDF = "pdf"
    GIST = "gist"
    TWEET = "tweet"
    EMBED = "embed"
    CALLOUT = "callout"
    TABLE_OF_CONTENTS = "table_of_contents"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, tag: str) -> BlockType:
        """Map a raw tag onto a member, falling back to ``UNKNOWN``."""
        try:
            return cls(tag)
        except ValueError:
            return cls.UNKNOWN


class BlockPageType(IntEnum):
    """How a ``page`` block relates to the block that holds it."""

    TOP_LEVEL = 0
    SUB_PAGE = 1
    LINK = 2


class Permission(RecordModel):
    """A sharing permission entry on a block."""

    role: str = ""
    type: str = ""
    user_id: str | None = None


def _ms_to_datetime(ms: int) -> datetime:
    # Whole seconds only: the millisecond remainder is truncated toward zero.
    seconds = ms // 1000 if ms >= 0 else -(-ms // 1000)
    return datetime.fromtimestamp(seconds, tz=UTC)


class Block(RecordModel):
    """A node of the document tree, decoded from one raw block record.

    A JSON ``null`` in any top-level field reads as that field's default.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # --- Identity ---
    id: str = Field(..., description="Unique block ID (UUID string).")
    alive: bool = Field(default=False, description="False when the block is deleted.")
    type: str = Field(default="", description="Raw type tag; open set.")
    version: int = 0

    # --- Raw side-channels ---
    properties: dict[str, Any] = Field(
        default_factory=dict, description="Property name -> raw rich-text value."
    )
    format_raw: Any = Field(
        default=None,
        alias="format",
        description="Raw format payload: JSON object, undecoded JSON text, or None.",
    )

    # --- Tree relations ---
    parent_id: str = ""
    parent_table: str = ""
    content_ids: list[str] = Field(default_factory=list, alias="content")
    parent: str | None = Field(
        default=None,
        exclude=True,
        description="ID of the block whose content holds this one; set by the arena.",
    )

    # --- Bookkeeping ---
    copied_from: str = ""
    collection_id: str = ""
    created_by: str = ""
    created_time: int = 0
    last_edited_by: str = ""
    last_edited_time: int = 0
    discussion_ids: list[str] = Field(default_factory=list, alias="discussion")
    file_ids: list[str] = Field(default_factory=list)
    ignore_block_count: bool = False
    permissions: list[Permission] | None = None
    view_ids: list[str] = Field(default_factory=list)

    # --- Derived from properties ---
    inline_content: list[TextSpan] = Field(default_factory=list)
    title: str = ""
    title_full: list[TextSpan] = Field(default_factory=list)
    is_checked: bool = False
    description: str = ""
    link: str = ""
    # Bookmark/gist/file/embed URL; for images prefer image_url.
    source: str = ""
    file_size: str = ""
    image_url: str = ""
    code: str = ""
    code_language: str = ""

    # --- Derived from format ---
    format_variant: FormatVariant | None = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Block:
        """Build a block from a record-map entry or a bare block value.

        Record-map entries look like ``{"role": "reader", "value": {...}}``.
        """
        value = record.get("value", record)
        return cls.model_validate(value)

    # ------------------------------------------------------------------ #
    # Type queries
    # ------------------------------------------------------------------ #

    @property
    def kind(self) -> BlockType:
        return BlockType.parse(self.type)

    def is_page(self) -> bool:
        """True for sub-pages and links to pages alike."""
        return self.type == BlockType.PAGE.value

    def is_image(self) -> bool:
        return self.type == BlockType.IMAGE.value

    def is_code(self) -> bool:
        return self.type == BlockType.CODE.value

    def is_link_to_page(self) -> bool:
        """True if this page block lives directly under the workspace."""
        if not self.is_page():
            return False
        return self.parent_table == TABLE_SPACE

    def get_page_type(self) -> BlockPageType:
        """Classify a page by its linked parent.

        Requires the arena to have linked the tree first; an unlinked block
        is always reported as top-level.
        """
        if self.parent is None:
            return BlockPageType.TOP_LEVEL
        if self.parent_id == self.parent:
            return BlockPageType.SUB_PAGE
        return BlockPageType.LINK

    # ------------------------------------------------------------------ #
    # Timestamps
    # ------------------------------------------------------------------ #

    def created_on(self) -> datetime:
        """Creation time in UTC, truncated to whole seconds."""
        return _ms_to_datetime(self.created_time)

    def updated_on(self) -> datetime:
        """Last edit time in UTC, truncated to whole seconds."""
        return _ms_to_datetime(self.last_edited_time)

    # ------------------------------------------------------------------ #
    # Format accessors
    # ------------------------------------------------------------------ #

    @property
    def format_page(self) -> FormatPage | None:
        return self.format_variant if isinstance(self.format_variant, FormatPage) else None

    @property
    def format_bookmark(self) -> FormatBookmark | None:
        return self.format_variant if isinstance(self.format_variant, FormatBookmark) else None

    @property
    def format_image(self) -> FormatImage | None:
        return self.format_variant if isinstance(self.format_variant, FormatImage) else None

    @property
    def format_column(self) -> FormatColumn | None:
        return self.format_variant if isinstance(self.format_variant, FormatColumn) else None

    @property
    def format_text(self) -> FormatText | None:
        return self.format_variant if isinstance(self.format_variant, FormatText) else None

    @property
    def format_table(self) -> FormatTable | None:
        return self.format_variant if isinstance(self.format_variant, FormatTable) else None

    @property
    def format_video(self) -> FormatVideo | None:
        return self.format_variant if isinstance(self.format_variant, FormatVideo) else None

    @property
    def format_embed(self) -> FormatEmbed | None:
        return self.format_variant if isinstance(self.format_variant, FormatEmbed) else None

    @property
    def format_toggle(self) -> FormatToggle | None:
        return self.format_variant if isinstance(self.format_variant, FormatToggle) else None

    @property
    def format_header(self) -> FormatHeader | None:
        return self.format_variant if isinstance(self.format_variant, FormatHeader) else None


__all__ = [
    "Block",
    "BlockType",
    "BlockPageType",
    "Permission",
    "TABLE_SPACE",
]
