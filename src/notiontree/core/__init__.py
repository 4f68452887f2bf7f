"""Core package initializer for notiontree.

Holds the block contracts, settings/logging, error types and the block arena.
"""

from __future__ import annotations

__all__ = ["__doc__"]
