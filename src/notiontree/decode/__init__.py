"""Decode pipeline entry points.

- :func:`normalize` — property phase then format phase, in place.
- :func:`decode_format` — pure format decoding returning a ``Result``.
- :func:`extract_property` — tolerant first-span property read.
"""

from __future__ import annotations

from .formats import decode_format
from .normalizer import normalize
from .properties import extract_property

__all__ = ["normalize", "decode_format", "extract_property"]
