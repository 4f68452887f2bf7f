"""Unit tests for the Block contract and its query methods."""

from __future__ import annotations

from datetime import UTC, datetime

from notiontree.core.contracts.block import (
    TABLE_SPACE,
    Block,
    BlockPageType,
    BlockType,
)


def test_raw_aliases_are_decoded() -> None:
    """Raw record keys map onto the typed fields."""
    b = Block.model_validate(
        {
            "id": "a",
            "type": "page",
            "alive": True,
            "content": ["c1", "c2"],
            "discussion": ["d1"],
            "format": {"page_icon": "x"},
            "parent_id": "p",
            "parent_table": "block",
            "permissions": [{"role": "editor", "type": "user_permission", "user_id": "u1"}],
            "version": 3,
            "some_future_key": True,
        }
    )
    assert b.content_ids == ["c1", "c2"]
    assert b.discussion_ids == ["d1"]
    assert b.format_raw == {"page_icon": "x"}
    assert b.permissions is not None and b.permissions[0].user_id == "u1"
    assert b.version == 3
    assert b.properties == {}


def test_from_record_unwraps_value() -> None:
    """Record-map entries and bare values are both accepted."""
    wrapped = Block.from_record({"role": "reader", "value": {"id": "a", "type": "text"}})
    bare = Block.from_record({"id": "b", "type": "text"})
    assert wrapped.id == "a" and bare.id == "b"


def test_kind_maps_unknown_tags() -> None:
    """Unrecognised tags map to UNKNOWN but the raw tag is preserved."""
    b = Block(id="a", type="mystery")
    assert b.kind is BlockType.UNKNOWN
    assert b.type == "mystery"
    assert Block(id="b", type="to_do").kind is BlockType.TODO


def test_type_predicates() -> None:
    """`is_page`/`is_image`/`is_code` compare the raw tag."""
    assert Block(id="a", type="page").is_page()
    assert Block(id="a", type="image").is_image()
    assert Block(id="a", type="code").is_code()
    assert not Block(id="a", type="text").is_page()


def test_is_link_to_page() -> None:
    """Only pages parented by the workspace are links."""
    assert Block(id="a", type="page", parent_table=TABLE_SPACE).is_link_to_page()
    assert not Block(id="a", type="page", parent_table="block").is_link_to_page()
    assert not Block(id="a", type="text", parent_table=TABLE_SPACE).is_link_to_page()


def test_get_page_type() -> None:
    """Classification follows the linked parent ID."""
    top = Block(id="a", type="page", parent_id="x")
    sub = Block(id="b", type="page", parent_id="holder", parent="holder")
    link = Block(id="c", type="page", parent_id="elsewhere", parent="holder")
    assert top.get_page_type() is BlockPageType.TOP_LEVEL
    assert sub.get_page_type() is BlockPageType.SUB_PAGE
    assert link.get_page_type() is BlockPageType.LINK


def test_timestamps_truncate_to_seconds() -> None:
    """Milliseconds are dropped, never rounded."""
    b = Block(id="a", created_time=1609459200500, last_edited_time=1609459201999)
    assert b.created_on() == datetime(2021, 1, 1, tzinfo=UTC)
    assert b.created_on().timestamp() == 1609459200
    assert b.updated_on().timestamp() == 1609459201


def test_parent_is_not_serialized() -> None:
    """Arena linkage is runtime state, not part of the record."""
    b = Block(id="a", parent="p")
    assert "parent" not in b.model_dump()


def test_no_format_accessor_without_variant() -> None:
    """All format accessors are empty on a fresh block."""
    b = Block(id="a", type="page")
    assert b.format_variant is None
    assert b.format_page is None and b.format_bookmark is None and b.format_embed is None


def test_nulls_read_as_defaults() -> None:
    """JSON nulls in record fields fall back to the field defaults."""
    b = Block.model_validate(
        {
            "id": "b",
            "type": "text",
            "properties": None,
            "content": None,
            "parent_id": None,
            "copied_from": None,
            "format": None,
            "permissions": [{"role": "reader", "type": None, "user_id": None}],
        }
    )
    assert b.properties == {}
    assert b.content_ids == []
    assert b.parent_id == "" and b.copied_from == ""
    assert b.format_raw is None
    assert b.permissions is not None and b.permissions[0].type == ""


def test_negative_timestamps_truncate_toward_zero() -> None:
    """Pre-epoch times drop the millisecond remainder toward zero."""
    b = Block(id="a", created_time=-1500, last_edited_time=-999)
    assert b.created_on().timestamp() == -1
    assert b.updated_on().timestamp() == 0
