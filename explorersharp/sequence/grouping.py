"""Keyed group produced by ``Sequence.group_by``."""

from __future__ import annotations

from collections.abc import Iterable

from .core import Sequence


class Grouping(Sequence):
    """Elements sharing one ``key``; iterates like any other sequence."""

    def __init__(self, key: object, values: Iterable[object]) -> None:
        super().__init__(values)
        self.key = key

    def __repr__(self) -> str:
        return f"<Grouping key={self.key!r}>"


__all__ = ["Grouping"]
