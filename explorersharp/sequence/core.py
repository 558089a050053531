"""Lazy composable sequence over any iterable source.

Every non-terminal operation returns a new ``Sequence`` that re-reads its
upstream each time it is iterated. Nothing runs until a terminal operation
(``to_list``, ``count``, ``first``, a ``for`` loop, ...) pulls elements.
``to_list`` caches the materialized elements on the sequence it was called on.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Iterator, Mapping

from .errors import EmptySequenceError, MultipleElementsError, NoMatchingElementError

_MISSING = object()


class _Deferred:
    """Re-iterable wrapper that builds a fresh generator per iteration."""

    __slots__ = ("_factory",)

    def __init__(self, factory: Callable[[], Iterator[object]]) -> None:
        self._factory = factory

    def __iter__(self) -> Iterator[object]:
        return self._factory()


def default_compare(a: object, b: object) -> int:
    """Three-way compare using ``<``/``>``."""
    if a < b:  # type: ignore[operator]
        return -1
    if a > b:  # type: ignore[operator]
        return 1
    return 0


def _identity(item: object) -> object:
    return item


class Sequence:
    """LINQ-style lazy sequence."""

    def __init__(self, source: Iterable[object]) -> None:
        self._source = source
        self._cached: list[object] | None = None

    def __iter__(self) -> Iterator[object]:
        if self._cached is not None:
            return iter(self._cached)
        return iter(self._source)

    def __repr__(self) -> str:
        state = "materialized" if self._cached is not None else "lazy"
        return f"<{type(self).__name__} {state}>"

    def _chain(self, factory: Callable[[], Iterator[object]]) -> Sequence:
        return Sequence(_Deferred(factory))

    @classmethod
    def empty(cls) -> Sequence:
        return Sequence(())

    @classmethod
    def of(cls, *items: object) -> Sequence:
        return Sequence(items)

    @property
    def value(self) -> list[object]:
        """Materialized elements; same as ``to_list()``."""
        return self.to_list()

    # -- Transformation --

    def where(self, predicate: Callable[[object], bool]) -> Sequence:
        """Keep elements matching ``predicate``, preserving order."""

        def run() -> Iterator[object]:
            for item in self:
                if predicate(item):
                    yield item

        return self._chain(run)

    def select(self, selector: Callable[[object], object]) -> Sequence:
        def run() -> Iterator[object]:
            for item in self:
                yield selector(item)

        return self._chain(run)

    def select_many(self, selector: Callable[[object], Iterable[object]]) -> Sequence:
        """Project each element to an iterable and flatten the results."""

        def run() -> Iterator[object]:
            for item in self:
                yield from selector(item)

        return self._chain(run)

    def indexed(self) -> Sequence:
        """Pair every element with its position: ``(item, index)``."""

        def run() -> Iterator[object]:
            for index, item in enumerate(self):
                yield (item, index)

        return self._chain(run)

    def of_type(self, cls: type) -> Sequence:
        return self.where(lambda item: isinstance(item, cls))

    def convert_all(self, converter: Callable[[object], object]) -> list[object]:
        """Eagerly apply ``converter`` and return a new list."""
        return [converter(item) for item in self]

    def concat(self, *items: object) -> Sequence:
        def run() -> Iterator[object]:
            yield from self
            yield from items

        return self._chain(run)

    def default_if_empty(self, default: object) -> Sequence:
        def run() -> Iterator[object]:
            empty = True
            for item in self:
                empty = False
                yield item
            if empty:
                yield default

        return self._chain(run)

    def zip(self, other: Iterable[object], result_selector: Callable[[object, object], object]) -> Sequence:
        def run() -> Iterator[object]:
            for left, right in zip(self, other):
                yield result_selector(left, right)

        return self._chain(run)

    # -- Set operations --

    def distinct(self, key: Callable[[object], object] | None = None) -> Sequence:
        """Drop later elements whose key was already seen."""
        key_fn = key or _identity

        def run() -> Iterator[object]:
            seen: set[object] = set()
            for item in self:
                item_key = key_fn(item)
                if item_key in seen:
                    continue
                seen.add(item_key)
                yield item

        return self._chain(run)

    def union(self, other: Iterable[object], key: Callable[[object], object] | None = None) -> Sequence:
        def run() -> Iterator[object]:
            yield from self
            yield from other

        return self._chain(run).distinct(key)

    def intersect(self, other: Iterable[object], key: Callable[[object], object] | None = None) -> Sequence:
        """Elements of this sequence whose key also occurs in ``other``, once each."""
        key_fn = key or _identity

        def run() -> Iterator[object]:
            other_keys = {key_fn(item) for item in other}
            yielded: set[object] = set()
            for item in self:
                item_key = key_fn(item)
                if item_key in other_keys and item_key not in yielded:
                    yielded.add(item_key)
                    yield item

        return self._chain(run)

    def except_(self, other: Iterable[object], key: Callable[[object], object] | None = None) -> Sequence:
        """Elements of this sequence whose key does not occur in ``other``.

        Duplicates in this sequence are kept.
        """
        key_fn = key or _identity

        def run() -> Iterator[object]:
            other_keys = {key_fn(item) for item in other}
            for item in self:
                if key_fn(item) not in other_keys:
                    yield item

        return self._chain(run)

    # -- Partitioning --

    def skip(self, count: int) -> Sequence:
        def run() -> Iterator[object]:
            for index, item in enumerate(self):
                if index >= count:
                    yield item

        return self._chain(run)

    def take(self, count: int) -> Sequence:
        def run() -> Iterator[object]:
            if count <= 0:
                return
            for index, item in enumerate(self):
                yield item
                if index + 1 >= count:
                    return

        return self._chain(run)

    def skip_while(self, predicate: Callable[[object], bool]) -> Sequence:
        def run() -> Iterator[object]:
            yielding = False
            for item in self:
                if not yielding and not predicate(item):
                    yielding = True
                if yielding:
                    yield item

        return self._chain(run)

    def take_while(self, predicate: Callable[[object], bool]) -> Sequence:
        def run() -> Iterator[object]:
            for item in self:
                if not predicate(item):
                    return
                yield item

        return self._chain(run)

    # -- Materialization --

    def _materialize(self) -> list[object]:
        if self._cached is None:
            self._cached = list(self._source)
        return self._cached

    def to_list(self) -> list[object]:
        """Materialize once and return a copy of the cached elements."""
        return list(self._materialize())

    def to_dict(
        self,
        key: Callable[[object], object],
        element: Callable[[object], object] | None = None,
    ) -> dict[object, object]:
        """Build a dict; later elements overwrite earlier ones with equal keys."""
        element_fn = element or _identity
        return {key(item): element_fn(item) for item in self}

    # -- Aggregation --

    def aggregate(self, seed: object, func: Callable[[object, object], object]) -> object:
        acc = seed
        for item in self:
            acc = func(acc, item)
        return acc

    def count(self, predicate: Callable[[object], bool] | None = None) -> int:
        if predicate is None:
            return sum(1 for _item in self)
        return sum(1 for item in self if predicate(item))

    def any(self, predicate: Callable[[object], bool] | None = None) -> bool:
        if predicate is None:
            for _item in self:
                return True
            return False
        return any(predicate(item) for item in self)

    def all(self, predicate: Callable[[object], bool]) -> bool:
        return all(predicate(item) for item in self)

    def sum(self) -> object:
        total = 0
        for item in self:
            total += item  # type: ignore[operator]
        return total

    def average(self) -> float:
        """Arithmetic mean; ``nan`` for an empty sequence."""
        total = 0.0
        count = 0
        for item in self:
            total += item  # type: ignore[operator]
            count += 1
        return math.nan if count == 0 else total / count

    def min(self) -> object:
        result = _MISSING
        for item in self:
            if result is _MISSING or item < result:  # type: ignore[operator]
                result = item
        if result is _MISSING:
            raise EmptySequenceError("Sequence contains no elements")
        return result

    def max(self) -> object:
        result = _MISSING
        for item in self:
            if result is _MISSING or item > result:  # type: ignore[operator]
                result = item
        if result is _MISSING:
            raise EmptySequenceError("Sequence contains no elements")
        return result

    # -- Element operations --

    def contains(self, value: object) -> bool:
        return any(item == value for item in self)

    def first(self, predicate: Callable[[object], bool] | None = None) -> object:
        for item in self:
            if predicate is None or predicate(item):
                return item
        raise NoMatchingElementError("No matching element")

    def first_or_default(
        self,
        predicate: Callable[[object], bool] | None = None,
        default: object = None,
    ) -> object:
        try:
            return self.first(predicate)
        except NoMatchingElementError:
            return default

    def last(self, predicate: Callable[[object], bool] | None = None) -> object:
        found = _MISSING
        for item in self:
            if predicate is None or predicate(item):
                found = item
        if found is _MISSING:
            raise NoMatchingElementError("No matching element")
        return found

    def last_or_default(
        self,
        predicate: Callable[[object], bool] | None = None,
        default: object = None,
    ) -> object:
        try:
            return self.last(predicate)
        except NoMatchingElementError:
            return default

    def single(self, predicate: Callable[[object], bool] | None = None) -> object:
        """Return the only matching element.

        Raises ``NoMatchingElementError`` when nothing matches and
        ``MultipleElementsError`` when more than one element does.
        """
        found = _MISSING
        for item in self:
            if predicate is not None and not predicate(item):
                continue
            if found is not _MISSING:
                raise MultipleElementsError("More than one matching element")
            found = item
        if found is _MISSING:
            raise NoMatchingElementError("No matching element")
        return found

    def single_or_default(
        self,
        predicate: Callable[[object], bool] | None = None,
        default: object = None,
    ) -> object:
        try:
            return self.single(predicate)
        except NoMatchingElementError:
            return default

    def element_at(self, index: int) -> object:
        if index < 0:
            raise IndexError("Index out of range")
        for position, item in enumerate(self):
            if position == index:
                return item
        raise IndexError("Index out of range")

    def element_at_or_default(self, index: int, default: object = None) -> object:
        try:
            return self.element_at(index)
        except IndexError:
            return default

    # -- Ordering --

    def order_by(
        self,
        key: Callable[[object], object],
        compare: Callable[[object, object], int] | None = None,
    ):
        """Stable sort by ``key``; chain ``then_by`` for secondary keys."""
        from .ordering import OrderedSequence, SortKey

        return OrderedSequence(self, (SortKey(key, compare or default_compare, False),))

    def order_by_descending(
        self,
        key: Callable[[object], object],
        compare: Callable[[object, object], int] | None = None,
    ):
        from .ordering import OrderedSequence, SortKey

        return OrderedSequence(self, (SortKey(key, compare or default_compare, True),))

    def reverse(self) -> Sequence:
        def run() -> Iterator[object]:
            yield from reversed(list(self))

        return self._chain(run)

    # -- Join & group --

    def join(
        self,
        inner: Iterable[object],
        outer_key: Callable[[object], object],
        inner_key: Callable[[object], object],
        result_selector: Callable[[object, object], object],
    ) -> Sequence:
        """Inner equi-join; outer order is kept, matches follow inner order."""

        def run() -> Iterator[object]:
            lookup: dict[object, list[object]] = {}
            for item in inner:
                lookup.setdefault(inner_key(item), []).append(item)
            for outer in self:
                for match in lookup.get(outer_key(outer), ()):
                    yield result_selector(outer, match)

        return self._chain(run)

    def group_by(
        self,
        key: Callable[[object], object],
        element: Callable[[object], object] | None = None,
    ) -> Sequence:
        """Group elements by key in first-seen key order."""
        from .grouping import Grouping

        element_fn = element or _identity

        def run() -> Iterator[object]:
            groups: dict[object, list[object]] = {}
            for item in self:
                groups.setdefault(key(item), []).append(element_fn(item))
            for group_key, values in groups.items():
                yield Grouping(group_key, values)

        return self._chain(run)

    # -- Equality & side effects --

    def sequence_equal(
        self,
        other: Iterable[object],
        equals: Callable[[object, object], bool] | None = None,
    ) -> bool:
        left_iter = iter(self)
        right_iter = iter(other)
        while True:
            left = next(left_iter, _MISSING)
            right = next(right_iter, _MISSING)
            if left is _MISSING and right is _MISSING:
                return True
            if left is _MISSING or right is _MISSING:
                return False
            same = equals(left, right) if equals is not None else left == right
            if not same:
                return False

    def for_each(self, action: Callable[[object], None]) -> None:
        for item in self:
            action(item)


def linq(source: Iterable[object] | Mapping[object, object] | None = None) -> Sequence:
    """Wrap ``source`` as a ``Sequence``.

    ``None`` becomes an empty sequence and mappings enumerate their values.
    """
    if source is None:
        return Sequence(())
    if isinstance(source, Mapping):
        return Sequence(_Deferred(lambda: iter(source.values())))
    return Sequence(source)


__all__ = [
    "Sequence",
    "default_compare",
    "linq",
]
