"""Typed Result container used where a failure must be returned, not raised.

The format decoder returns ``Result[FormatVariant | None, FormatDecodeError]``
so that "skipped" (``Ok(None)``), "decoded" (``Ok(variant)``) and "malformed"
(``Err(error)``) are three distinct, type-checked outcomes. Property extraction,
by contrast, is tolerant and simply returns ``str | None``.

Example
-------
>>> from notiontree.core.result import ok, err, Result
>>> def parse_width(x: str) -> Result[int, str]:
...     return ok(int(x)) if x.isdigit() else err("not a width")
>>> parse_width("120").unwrap()
120
>>> parse_width("wide").unwrap_err()
'not a width'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, cast

T = TypeVar("T")
E = TypeVar("E")


class Result(Generic[T, E]):
    """Sum type representing either success (`Ok[T]`) or failure (`Err[E]`)."""

    def is_ok(self) -> bool:
        """Return ``True`` if this is an :class:`Ok` value."""
        return isinstance(self, Ok)

    def is_err(self) -> bool:
        """Return ``True`` if this is an :class:`Err` value."""
        return isinstance(self, Err)

    def unwrap(self) -> T:
        """Return the inner value if ``Ok``.

        An ``Err`` whose payload is an exception is re-raised as-is so the
        caller sees the original error type; any other payload is wrapped in
        a :class:`RuntimeError`.
        """
        if isinstance(self, Ok):
            return cast(Ok[T, E], self).value
        error = cast(Err[T, E], self).error
        if isinstance(error, BaseException):
            raise error
        raise RuntimeError(f"Attempted to unwrap Err: {self!r}")

    def unwrap_err(self) -> E:
        """Return the error value if ``Err``, else raise."""
        if isinstance(self, Err):
            return cast(Err[T, E], self).error
        raise RuntimeError(f"Attempted to unwrap_err on Ok: {self!r}")

    def __repr__(self) -> str:  # pragma: no cover - trivial representation
        if isinstance(self, Ok):
            return f"Ok({cast(Ok[T, E], self).value!r})"
        if isinstance(self, Err):
            return f"Err({cast(Err[T, E], self).error!r})"
        return "Result(?)"


@dataclass(frozen=True)
class Ok(Result[T, E]):
    """Successful result wrapping a value of type ``T``."""

    value: T


@dataclass(frozen=True)
class Err(Result[T, E]):
    """Failed result wrapping an error payload of type ``E``."""

    error: E


def ok(value: T) -> Result[T, E]:
    """Construct :class:`Ok` with better type inference at call sites."""
    return Ok(value)


def err(error: E) -> Result[T, E]:
    """Construct :class:`Err` with better type inference at call sites."""
    return Err(error)
