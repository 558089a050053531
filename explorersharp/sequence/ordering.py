"""Stable multi-key ordering for sequences."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from functools import cmp_to_key

from .core import Sequence, default_compare


@dataclass(frozen=True)
class SortKey:
    """One ordering level: key extractor, three-way comparator, direction."""

    key: Callable[[object], object]
    compare: Callable[[object, object], int]
    descending: bool = False

    def __call__(self, a: object, b: object) -> int:
        result = self.compare(self.key(a), self.key(b))
        return -result if self.descending else result


class OrderedSequence(Sequence):
    """Sequence sorted by one or more ``SortKey`` levels.

    Ties at one level fall through to the next; full ties keep source order
    because ``sorted`` is stable.
    """

    def __init__(self, upstream: Sequence, keys: tuple[SortKey, ...]) -> None:
        super().__init__(upstream)
        self._upstream = upstream
        self._keys = keys

    def _compare(self, a: object, b: object) -> int:
        for sort_key in self._keys:
            result = sort_key(a, b)
            if result != 0:
                return result
        return 0

    def __iter__(self) -> Iterator[object]:
        if self._cached is not None:
            return iter(self._cached)
        return iter(sorted(self._upstream, key=cmp_to_key(self._compare)))

    def _materialize(self) -> list[object]:
        if self._cached is None:
            self._cached = sorted(self._upstream, key=cmp_to_key(self._compare))
        return self._cached

    def then_by(
        self,
        key: Callable[[object], object],
        compare: Callable[[object, object], int] | None = None,
    ) -> OrderedSequence:
        return OrderedSequence(
            self._upstream,
            self._keys + (SortKey(key, compare or default_compare, False),),
        )

    def then_by_descending(
        self,
        key: Callable[[object], object],
        compare: Callable[[object, object], int] | None = None,
    ) -> OrderedSequence:
        return OrderedSequence(
            self._upstream,
            self._keys + (SortKey(key, compare or default_compare, True),),
        )


__all__ = [
    "OrderedSequence",
    "SortKey",
]
