"""Primitives behind ``Dictionary`` — classification, iteration, and merging.

Re-exports public symbols so callers can write::

    from py_dict.utils import iterate, is_iterable, update
"""

from py_dict.utils.classify import (
    MAX_SAFE_INTEGER,
    Shape,
    classify,
    declared_length,
    get_type,
    is_array_like,
    is_iterable,
    is_length,
    own_items,
    own_keys,
    owns,
)
from py_dict.utils.iteration import IterResult, NotIterableError, SnapshotIterator, iterate, length
from py_dict.utils.merge import (
    PAIR_LENGTH,
    PairLengthError,
    SequenceElementError,
    assign,
    order_ambiguous_pair,
    update,
)

__all__ = [
    "MAX_SAFE_INTEGER",
    "PAIR_LENGTH",
    "IterResult",
    "NotIterableError",
    "PairLengthError",
    "SequenceElementError",
    "Shape",
    "SnapshotIterator",
    "assign",
    "classify",
    "declared_length",
    "get_type",
    "is_array_like",
    "is_iterable",
    "is_length",
    "iterate",
    "length",
    "order_ambiguous_pair",
    "own_items",
    "own_keys",
    "owns",
    "update",
]
