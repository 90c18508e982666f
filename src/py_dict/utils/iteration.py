"""Snapshot iteration — one cursor type for sequences, streams, and keyed containers.

``iterate(value)`` takes a *snapshot* of whatever can be walked and
returns a cursor over it:

- **sequence** — a positional copy of elements ``0 .. length - 1``.
  The copy is shallow: elements are shared, not cloned.
- **stream** — the stream is drained into a list once.
- **keyed** — the container's own keys, in enumeration order.

The snapshot is taken once.  Mutating the source afterwards changes
nothing the cursor yields, and ``restart()`` replays the same snapshot.

Each ``next()`` returns an ``IterResult`` record (value, done, index).
Past the end the cursor keeps answering ``done=True, value=None``; it
never raises.

Result reuse:
    With ``reuse_result=True`` the cursor allocates one record up front
    and overwrites it on every ``next()``.  Read the fields you need
    straight away: the record you hold changes under you on the next
    call.  The record belongs to that one cursor, so two reusing
    cursors never clobber each other.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from py_dict.utils.classify import Shape, classify, declared_length, get_type, own_keys


class NotIterableError(TypeError):
    """Raise when a value that must be iterable is not."""

    def __init__(self, value: object) -> None:
        """Build the message from the offending value's type name."""
        self.type_name = get_type(value)
        msg = f"'{self.type_name}' object is not iterable"
        super().__init__(msg)


@dataclass
class IterResult:
    """One step of a ``SnapshotIterator``.

    Attributes:
        value: The element (or key) at ``index``, or None once exhausted.
        done: True once the cursor has moved past the snapshot.
        index: The position this step read from.

    """

    value: Any
    done: bool
    index: int


class SnapshotIterator:
    """A restartable cursor over a fixed snapshot of elements."""

    def __init__(self, items: list[Any], *, reuse_result: bool = False) -> None:
        """Create a cursor positioned at the start of *items*.

        Args:
            items: The snapshot.  The cursor takes ownership of the list.
            reuse_result: Overwrite and return one record on every step.

        """
        self._items = items
        self._length = len(items)
        self._position = 0
        self._result = IterResult(value=None, done=False, index=0) if reuse_result else None

    @property
    def length(self) -> int:
        """Return the snapshot size, fixed at creation."""
        return self._length

    @property
    def position(self) -> int:
        """Return the index the next step will read."""
        return self._position

    @property
    def reuses_result(self) -> bool:
        """Return True if every step returns the same record."""
        return self._result is not None

    def next(self) -> IterResult:
        """Read the current position, then advance by one."""
        index = self._position
        done = index >= self._length
        value = None if done else self._items[index]
        self._position += 1

        if self._result is None:
            return IterResult(value=value, done=done, index=index)
        self._result.value = value
        self._result.done = done
        self._result.index = index
        return self._result

    def restart(self) -> None:
        """Move back to position zero without re-taking the snapshot."""
        self._position = 0

    def __iter__(self) -> Iterator[Any]:
        """Yield the remaining values, advancing the cursor as it goes."""
        while not (step := self.next()).done:
            yield step.value

    def __repr__(self) -> str:
        """Show position and length."""
        return f"SnapshotIterator(position={self._position}, length={self._length})"


def _snapshot(value: Any, shape: Shape) -> list[Any]:
    """Copy out the elements (or own keys) that *value* iterates over."""
    if shape is Shape.KEYED:
        return own_keys(value)
    if shape is Shape.STREAM:
        return list(value)
    count = int(declared_length(value))
    if hasattr(type(value), "__getitem__"):
        return [value[i] for i in range(count)]
    # Sized but unindexable (sets, views): enumeration order is position.
    return list(value)[:count]


def iterate(value: Any, *, reuse_result: bool = False) -> SnapshotIterator:
    """Return a ``SnapshotIterator`` over *value*.

    Args:
        value: A sequence, stream, or keyed container.
        reuse_result: Return one overwritten record from every ``next()``.

    Raises:
        NotIterableError: If *value* is absent, primitive, or declares a
            malformed length.

    """
    shape = classify(value)
    if shape not in {Shape.SEQUENCE, Shape.STREAM, Shape.KEYED}:
        raise NotIterableError(value)
    return SnapshotIterator(_snapshot(value, shape), reuse_result=reuse_result)


def length(value: Any) -> int:
    """Return how many elements *value* iterates over.

    Sequences report their declared length, keyed containers the number
    of own keys.  A stream is drained to count it.

    Raises:
        NotIterableError: If *value* is not iterable.

    """
    shape = classify(value)
    if shape is Shape.SEQUENCE:
        return int(declared_length(value))
    if shape is Shape.KEYED:
        return len(own_keys(value))
    if shape is Shape.STREAM:
        return sum(1 for _ in value)
    raise NotIterableError(value)
