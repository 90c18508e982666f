"""Update merging — fold loosely shaped input into a mapping.

``update(target, source)`` accepts three shapes of seed data:

1. **A keyed container** (a mapping, or any object with own
   attributes) — its own entries are shallow-merged into the target.
   Existing keys keep their position and take the new value; new keys
   are appended in the source's order.
2. **A sequence of pairs** (``[["a", 1], ("b", 2), "cd"]``) — each
   element must iterate to exactly two values, used as key and value
   in that order.  A string of length two is a pair of characters.
3. **A sequence of two-key mappings** (``[{"name": ..., "age": ...}]``)
   — iterating a mapping yields its *keys*, so each element gives two
   key names and no obvious order.  The two names are ordered by the
   code point of their first character, larger first: the larger
   becomes the dictionary key and the smaller its value.  The rule is
   arbitrary but stable, and existing data depends on it.

A stream source (generator, iterator) is drained and treated as a
sequence of pairs.  ``None`` is a no-op.

Errors (all raised to the caller, nothing is recovered):
    - ``NotIterableError`` (TypeError) — the source itself can't be walked.
    - ``SequenceElementError`` (TypeError) — a sequence element can't be
      walked (``None``, a number, a malformed length).
    - ``PairLengthError`` (ValueError) — an element walks to anything
      other than two values.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

from py_dict.logging import Logger, LogLevel
from py_dict.utils.classify import Shape, classify, get_type, is_iterable, own_items
from py_dict.utils.iteration import NotIterableError, iterate

PAIR_LENGTH = 2
"""Number of values every sequence element must yield."""

LOG_SOURCE = "merge"


class SequenceElementError(TypeError):
    """Raise when a sequence element cannot be read as a pair."""

    def __init__(self, index: int) -> None:
        """Record the position of the offending element."""
        self.index = index
        msg = f"cannot convert dictionary sequence element #{index} to a sequence"
        super().__init__(msg)


class PairLengthError(ValueError):
    """Raise when a sequence element does not yield exactly two values."""

    def __init__(self, index: int, length: int) -> None:
        """Record the position and the number of values found."""
        self.index = index
        self.length = length
        msg = (
            f"dictionary update sequence element #{index} has length {length}; "
            f"{PAIR_LENGTH} is required"
        )
        super().__init__(msg)


def _record(
    logger: Logger | None, level: LogLevel, message: str, *, index: int | None = None
) -> None:
    if logger is not None:
        logger.log(level, message, source=LOG_SOURCE, index=index)


def _first_code(key: object) -> int | None:
    text = str(key)
    return ord(text[0]) if text else None


def order_ambiguous_pair(first: Any, second: Any) -> tuple[Any, Any]:
    """Order two key names by descending first-character code point.

    Ties, and names whose text is empty, keep their original order.

    Returns:
        ``(key, value)`` — the name to store under, and the value to store.

    """
    first_code = _first_code(first)
    second_code = _first_code(second)
    if first_code is not None and second_code is not None and second_code > first_code:
        return second, first
    return first, second


def assign(target: MutableMapping[Any, Any] | None, *sources: Any) -> MutableMapping[Any, Any]:
    """Copy the own entries of each source into *target*, left to right.

    ``None`` sources are skipped.  Later sources overwrite earlier ones.

    Returns:
        The target, for chaining.

    Raises:
        TypeError: If *target* is None.

    """
    if target is None:
        msg = "Cannot convert first argument to object"
        raise TypeError(msg)
    for source in sources:
        if source is None:
            continue
        for key, value in own_items(source):
            target[key] = value
    return target


def _split_pair(element: Any, index: int, logger: Logger | None) -> tuple[Any, Any]:
    """Read one sequence element as ``(key, value)``."""
    if not is_iterable(element):
        message = f"'{get_type(element)}' element is not a sequence"
        _record(logger, LogLevel.ERROR, message, index=index)
        raise SequenceElementError(index)

    pair = iterate(element, reuse_result=True)
    if pair.length != PAIR_LENGTH:
        _record(logger, LogLevel.ERROR, f"element has length {pair.length}", index=index)
        raise PairLengthError(index, pair.length)

    # The record is overwritten on every step, so take the values out now.
    first = pair.next().value
    second = pair.next().value

    if classify(element) is not Shape.KEYED:
        return first, second

    key, value = order_ambiguous_pair(first, second)
    _record(
        logger,
        LogLevel.WARNING,
        f"two-key {get_type(element)} read as {key!r} -> {value!r} by first character",
        index=index,
    )
    return key, value


def update(target: MutableMapping[Any, Any], source: Any, *, logger: Logger | None = None) -> None:
    """Merge *source* into *target* in place.

    Args:
        target: The mapping to write into.
        source: A keyed container, a sequence (or stream) of pairs, or None.
        logger: Optional audit log for the merge decisions.

    Raises:
        NotIterableError: If *source* is not iterable.
        SequenceElementError: If a sequence element is not iterable.
        PairLengthError: If a sequence element does not yield two values.

    """
    shape = classify(source)
    if shape is Shape.ABSENT:
        return
    if shape is Shape.KEYED:
        assign(target, source)
        _record(logger, LogLevel.DEBUG, f"merged own entries of {get_type(source)}")
        return
    if shape not in {Shape.SEQUENCE, Shape.STREAM}:
        raise NotIterableError(source)

    elements = iterate(source)
    if elements.length == 0:
        return

    for index, element in enumerate(elements):
        key, value = _split_pair(element, index, logger)
        target[key] = value
    _record(logger, LogLevel.DEBUG, f"merged {elements.length} pairs from {get_type(source)}")
