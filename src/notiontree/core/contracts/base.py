"""Shared base for models decoded from raw service records.

The service writes JSON ``null`` for fields it has nothing to say about.
Such keys are dropped before validation so the field keeps its default
(empty string, empty list, ``False`` ...), the same as if the key were
missing.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, model_validator


class RecordModel(BaseModel):
    """A model whose ``null`` input values fall back to field defaults."""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


__all__ = ["RecordModel"]
