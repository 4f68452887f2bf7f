"""Block normalizer: run the property phase, then the format phase.

``normalize`` mutates a freshly decoded :class:`Block` in place. It is a pure
function of the block's raw ``properties`` and ``format``, so calling it
again on the same block yields the same derived fields. Deleted blocks
(``alive == False``) are normalized like any other.

Errors
------
The first fatal error is raised and normalization stops there; fields that
were already derived stay set:

- :class:`~notiontree.core.errors.SpanParseError` from the ``title`` property;
- :class:`~notiontree.core.errors.FormatDecodeError` from the format phase.
"""

from __future__ import annotations

from notiontree.core.contracts.block import Block

from .formats import apply_format
from .properties import apply_properties


def normalize(block: Block) -> Block:
    """Derive scalar and format fields for ``block`` and return it."""
    apply_properties(block)
    apply_format(block)
    return block


__all__ = ["normalize"]
