"""LINQ-style lazy sequence utilities.

``linq(source)`` wraps lists, sets, dicts (values), generators or ``None``
into a ``Sequence`` whose operations compose lazily until materialized.
"""

from __future__ import annotations

from .core import Sequence, default_compare, linq
from .errors import EmptySequenceError, MultipleElementsError, NoMatchingElementError, SequenceError
from .grouping import Grouping
from .ordering import OrderedSequence, SortKey

__all__ = [
    "Sequence",
    "OrderedSequence",
    "Grouping",
    "SortKey",
    "default_compare",
    "linq",
    "SequenceError",
    "NoMatchingElementError",
    "MultipleElementsError",
    "EmptySequenceError",
]
