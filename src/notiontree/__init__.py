"""notiontree: decode note-taking service block records into a typed tree.

Typical use::

    from notiontree import Block, normalize

    block = normalize(Block.model_validate(raw_block_json))
"""

from __future__ import annotations

from notiontree.core.contracts.block import Block, BlockPageType, BlockType
from notiontree.core.contracts.spans import TextSpan, flatten, parse_text_spans
from notiontree.core.errors import FormatDecodeError, NotionTreeError, SpanParseError
from notiontree.core.tree.arena import BlockTree
from notiontree.decode.normalizer import normalize

__all__ = [
    "__version__",
    "Block",
    "BlockPageType",
    "BlockTree",
    "BlockType",
    "FormatDecodeError",
    "NotionTreeError",
    "SpanParseError",
    "TextSpan",
    "flatten",
    "normalize",
    "parse_text_spans",
]
__version__ = "0.1.0"
