"""
In-memory block arena with ID-based tree linkage.

The arena owns every :class:`Block` of a page, keyed by ID. Parent/child
relations are resolved by lookup instead of object references:

- ``block.content_ids`` lists children in display order;
- ``block.parent`` is the ID of the block whose ``content_ids`` contains the
  block, written by :meth:`BlockTree.link`.

A page block reachable from another page's content but whose raw
``parent_id`` points elsewhere is a *link* to that page, not a sub-page;
:meth:`Block.get_page_type` uses the linkage established here to tell them
apart.

Building from a record map
--------------------------
The service returns blocks as ``{"block": {id: {"role": ..., "value": {...}}}}``.
:meth:`BlockTree.from_record_map` decodes, normalizes and links such a map in
one call.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import ValidationError

from notiontree.core.contracts.block import Block
from notiontree.core.errors import NotionTreeError
from notiontree.core.settings import get_logger
from notiontree.decode.normalizer import normalize

log = get_logger(__name__)


class BlockTree:
    """
    Arena of blocks keyed by ID.

    Attributes
    ----------
    _blocks : dict[str, Block]
        The owned blocks, in insertion order.
    """

    __slots__ = ("_blocks",)

    def __init__(self, blocks: list[Block] | None = None) -> None:
        self._blocks: dict[str, Block] = {}
        for b in blocks or []:
            self.add(b)

    # ------------------------------- Store API ------------------------------

    def add(self, block: Block) -> None:
        """Insert ``block``, replacing any block with the same ID."""
        self._blocks[block.id] = block

    def get(self, block_id: str) -> Block | None:
        return self._blocks.get(block_id)

    def ids(self) -> tuple[str, ...]:
        """Return block IDs in insertion order."""
        return tuple(self._blocks)

    def __contains__(self, block_id: object) -> bool:
        return block_id in self._blocks

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[Block]:
        return iter(self._blocks.values())

    # ------------------------------- Linkage --------------------------------

    def link(self) -> int:
        """
        Set ``parent`` on every block referenced from another block's content.

        Existing linkage is cleared first, so calling this again after adding
        blocks is safe.

        Returns
        -------
        int
            Number of content IDs that could not be resolved in the arena.
        """
        for b in self._blocks.values():
            b.parent = None
        missing = 0
        for holder in self._blocks.values():
            for child_id in holder.content_ids:
                child = self._blocks.get(child_id)
                if child is None:
                    missing += 1
                    log.debug("block %s: content %s not in tree", holder.id, child_id)
                    continue
                child.parent = holder.id
        return missing

    def parent_of(self, block: Block) -> Block | None:
        """Return the linked parent block, or ``None`` for a root."""
        if block.parent is None:
            return None
        return self._blocks.get(block.parent)

    def content_of(self, block: Block) -> list[Block]:
        """Return the children of ``block`` in display order, skipping missing IDs."""
        return [self._blocks[i] for i in block.content_ids if i in self._blocks]

    def walk(self, root_id: str) -> Iterator[Block]:
        """Yield ``root_id`` and its descendants depth-first, each block once."""
        seen: set[str] = set()
        stack = [root_id]
        while stack:
            block_id = stack.pop()
            if block_id in seen:
                continue
            seen.add(block_id)
            block = self._blocks.get(block_id)
            if block is None:
                continue
            yield block
            stack.extend(reversed(block.content_ids))

    def pages(self) -> list[Block]:
        """Return every page block in insertion order."""
        return [b for b in self._blocks.values() if b.is_page()]

    # ------------------------------- Loading --------------------------------

    @classmethod
    def from_record_map(cls, record_map: Mapping[str, Any], *, strict: bool = True) -> BlockTree:
        """
        Decode, normalize and link the blocks of a record map.

        Parameters
        ----------
        record_map : Mapping[str, Any]
            Either the full map (with a ``"block"`` key) or the block table
            itself (``{id: {"value": {...}}}``).
        strict : bool
            When True, the first decode or normalization error is raised.
            When False, a record that does not decode is logged and skipped,
            and a normalization error is logged and the partially normalized
            block is kept.

        Raises
        ------
        pydantic.ValidationError, SpanParseError, FormatDecodeError
            Only when ``strict`` is True.
        """
        table = record_map.get("block", record_map)
        tree = cls()
        for block_id, record in table.items():
            if not isinstance(record, Mapping) or not record.get("value"):
                log.warning("record %s has no block value; skipped", block_id)
                continue
            try:
                block = Block.from_record(dict(record))
            except ValidationError as e:
                if strict:
                    raise
                log.warning("record %s does not decode; skipped: %s", block_id, e)
                continue
            try:
                normalize(block)
            except NotionTreeError as e:
                if strict:
                    raise
                log.warning("block %s kept partially normalized: %s", block.id, e)
            tree.add(block)
        tree.link()
        return tree


__all__ = ["BlockTree"]
