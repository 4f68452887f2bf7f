"""Unit tests for the ID-keyed block arena."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from notiontree import Block, BlockPageType, BlockTree
from notiontree.core.errors import FormatDecodeError


def _record(value: dict[str, Any]) -> dict[str, Any]:
    return {"role": "reader", "value": value}


def _record_map() -> dict[str, Any]:
    return {
        "block": {
            "root": _record(
                {
                    "id": "root",
                    "type": "page",
                    "alive": True,
                    "parent_id": "space-1",
                    "parent_table": "space",
                    "content": ["child", "para", "linked", "gone"],
                    "properties": {"title": [["Root"]]},
                    "format": {"page_icon": "📄"},
                }
            ),
            "child": _record(
                {
                    "id": "child",
                    "type": "page",
                    "alive": True,
                    "parent_id": "root",
                    "parent_table": "block",
                    "properties": {"title": [["Sub"]]},
                }
            ),
            "para": _record(
                {
                    "id": "para",
                    "type": "text",
                    "alive": True,
                    "parent_id": "root",
                    "parent_table": "block",
                    "properties": {"title": [["Body"]]},
                }
            ),
            "linked": _record(
                {
                    "id": "linked",
                    "type": "page",
                    "alive": True,
                    "parent_id": "another-page",
                    "parent_table": "block",
                    "properties": {"title": [["Elsewhere"]]},
                }
            ),
            "empty": {"role": "none"},
        }
    }


def test_from_record_map_normalizes_and_links() -> None:
    """Blocks are decoded, normalized and linked in one call."""
    tree = BlockTree.from_record_map(_record_map())
    assert set(tree.ids()) == {"root", "child", "para", "linked"}
    assert "empty" not in tree

    root = tree.get("root")
    assert root is not None
    assert root.title == "Root"
    assert root.format_page is not None
    assert root.is_link_to_page()
    assert [b.id for b in tree.content_of(root)] == ["child", "para", "linked"]


def test_page_classification_after_linking() -> None:
    """Sub-pages and links to pages are told apart by their parent IDs."""
    tree = BlockTree.from_record_map(_record_map())
    root, child, linked = tree.get("root"), tree.get("child"), tree.get("linked")
    assert root is not None and child is not None and linked is not None
    assert root.get_page_type() is BlockPageType.TOP_LEVEL
    assert child.get_page_type() is BlockPageType.SUB_PAGE
    assert linked.get_page_type() is BlockPageType.LINK
    assert tree.parent_of(child) is root
    assert tree.parent_of(root) is None


def test_link_counts_missing_children() -> None:
    """Unresolvable content IDs are skipped and counted."""
    tree = BlockTree.from_record_map(_record_map())
    assert tree.link() == 1


def test_walk_is_depth_first_and_cycle_safe() -> None:
    """Walking visits each block once in content order."""
    a = Block(id="a", type="page", content=["b", "c"])
    b = Block(id="b", type="text", content=["a"])
    c = Block(id="c", type="text")
    tree = BlockTree([a, b, c])
    tree.link()
    assert [x.id for x in tree.walk("a")] == ["a", "b", "c"]
    assert list(tree.walk("missing")) == []


def test_pages_and_len() -> None:
    """`pages()` filters page blocks; `len` counts all blocks."""
    tree = BlockTree.from_record_map(_record_map())
    assert [p.id for p in tree.pages()] == ["root", "child", "linked"]
    assert len(tree) == 4


def _broken_map() -> dict[str, Any]:
    rm = _record_map()
    rm["block"]["pic"] = _record(
        {
            "id": "pic",
            "type": "image",
            "alive": True,
            "parent_id": "root",
            "parent_table": "block",
            "properties": {"title": [["A cat"]]},
            "format": '{"block_width": ',
        }
    )
    return rm


def test_strict_mode_raises_on_broken_block() -> None:
    """By default the first normalization error propagates."""
    with pytest.raises(FormatDecodeError):
        BlockTree.from_record_map(_broken_map())


def test_lenient_mode_keeps_partial_block() -> None:
    """With strict=False the broken block is kept with its property fields."""
    tree = BlockTree.from_record_map(_broken_map(), strict=False)
    pic = tree.get("pic")
    assert pic is not None
    assert pic.inline_content[0].text == "A cat"
    assert pic.format_variant is None


def test_bare_block_table_is_accepted() -> None:
    """The block table can be passed without the outer record map."""
    tree = BlockTree.from_record_map(_record_map()["block"])
    assert "root" in tree


def _undecodable_map() -> dict[str, Any]:
    rm = _record_map()
    rm["block"]["bad"] = _record({"id": "bad", "type": "text", "content": "not-a-list"})
    return rm


def test_strict_mode_raises_on_undecodable_record() -> None:
    """A record that does not fit the block shape fails the whole load."""
    with pytest.raises(ValidationError):
        BlockTree.from_record_map(_undecodable_map())


def test_lenient_mode_skips_undecodable_record() -> None:
    """With strict=False the record is dropped and the rest still loads."""
    tree = BlockTree.from_record_map(_undecodable_map(), strict=False)
    assert "bad" not in tree
    assert set(tree.ids()) == {"root", "child", "para", "linked"}


def test_null_fields_in_records_load() -> None:
    """Nulls written by the service do not break decoding."""
    rm = _record_map()
    rm["block"]["para"]["value"].update(
        {"copied_from": None, "content": None, "discussion": None}
    )
    tree = BlockTree.from_record_map(rm)
    para = tree.get("para")
    assert para is not None
    assert para.copied_from == ""
    assert para.content_ids == []
    assert para.title == "Body"
