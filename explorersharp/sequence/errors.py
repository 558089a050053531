"""Exception types raised by terminal sequence operations."""

from __future__ import annotations


class SequenceError(Exception):
    """Base class for sequence element/aggregation failures."""


class NoMatchingElementError(SequenceError, LookupError):
    """Raised by ``first``/``last``/``single`` when nothing matches."""


class MultipleElementsError(SequenceError, ValueError):
    """Raised by ``single`` when more than one element matches."""


class EmptySequenceError(SequenceError, ValueError):
    """Raised by ``min``/``max`` on a sequence with no elements."""


__all__ = [
    "SequenceError",
    "NoMatchingElementError",
    "MultipleElementsError",
    "EmptySequenceError",
]
