"""Type classification — decide how a value can be walked.

Every decision the dictionary makes about an input ("can I iterate
this?", "is this a sequence of pairs or a mapping?") comes down to
inspecting the value's *shape* at runtime.  Nothing is cached: each
call looks at the value afresh.

Shapes:
    - **absent** — ``None``.
    - **primitive** — numbers and booleans.  Never iterable.
    - **sequence** — has a valid length (``str``, ``list``, ``tuple``,
      ``bytes``, ``set``, any class with a sane ``__len__``).  This is
      what the rest of the package calls *array-like*.
    - **stream** — implements ``__iter__`` but has no length
      (generators, iterators).  Walked by materializing it once.
    - **keyed** — a mapping, or any other object whose own keys are the
      names in its ``__dict__`` (plain instances, functions; for a class,
      only its data attributes).
    - **malformed** — declares a length that is not a valid length
      (negative, fractional, huge, or beyond what
      ``__len__`` can report).  Rejected everywhere.

A valid length is a non-negative integral number no larger than
``MAX_SAFE_INTEGER`` (2**53 - 1).
"""

from __future__ import annotations

import numbers
from collections.abc import Mapping
from enum import StrEnum
from typing import Any

MAX_SAFE_INTEGER = 2**53 - 1
"""Largest length a value may declare and still count as array-like."""

_NO_LENGTH = object()


class Shape(StrEnum):
    """Runtime shape of a value, as seen by the iteration layer."""

    ABSENT = "absent"
    PRIMITIVE = "primitive"
    SEQUENCE = "sequence"
    STREAM = "stream"
    KEYED = "keyed"
    MALFORMED = "malformed"


def is_length(value: object) -> bool:
    """Return True if *value* is usable as the length of a sequence.

    Booleans are rejected even though ``bool`` is an ``int`` subclass.
    NaN and infinities fail the integral check.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return value > -1 and value % 1 == 0 and value <= MAX_SAFE_INTEGER


def declared_length(value: object) -> Any:
    """Return the raw length *value* declares, or a private marker if none.

    The type's ``__len__`` is called directly so that a malformed result
    is returned as-is rather than rejected by the ``len()`` builtin.
    Mappings never declare a length here.
    """
    if value is None or isinstance(value, Mapping):
        return _NO_LENGTH
    length_method = getattr(type(value), "__len__", None)
    if length_method is None:
        return _NO_LENGTH
    return length_method(value)


def classify(value: object) -> Shape:
    """Return the shape of *value*."""
    if value is None:
        return Shape.ABSENT
    if isinstance(value, numbers.Number):
        return Shape.PRIMITIVE
    if isinstance(value, Mapping):
        return Shape.KEYED
    try:
        raw = declared_length(value)
    except OverflowError:
        # __len__ results beyond ssize_t cannot even be reported.
        return Shape.MALFORMED
    if raw is not _NO_LENGTH:
        return Shape.SEQUENCE if is_length(raw) else Shape.MALFORMED
    if hasattr(type(value), "__iter__"):
        return Shape.STREAM
    return Shape.KEYED


def is_array_like(value: object) -> bool:
    """Return True if *value* is not None and declares a valid length."""
    return classify(value) is Shape.SEQUENCE


def is_iterable(value: object) -> bool:
    """Return True if *value* can be handed to ``iterate``.

    Keyed containers without a length are iterable (over their own
    keys); anything declaring a malformed length is not.
    """
    return classify(value) in {Shape.SEQUENCE, Shape.STREAM, Shape.KEYED}


def get_type(value: object) -> str:
    """Return the type name used in diagnostic messages (e.g. ``'int'``)."""
    return type(value).__name__


def _own_attributes(value: Any) -> dict[str, Any]:
    """Return the ``__dict__`` entries of *value* that count as own keys.

    A class's ``__dict__`` also holds its methods, descriptors and dunder
    entries; only its plain data attributes are kept.
    """
    attrs = getattr(value, "__dict__", None)
    if attrs is None:
        return {}
    if not isinstance(value, type):
        return dict(attrs)
    return {
        name: attr
        for name, attr in attrs.items()
        if not (name.startswith("__") and name.endswith("__"))
        and not callable(attr)
        and not hasattr(type(attr), "__get__")
    }


def own_keys(value: Any) -> list[Any]:
    """Return the own keys of a keyed container, in enumeration order.

    Mappings yield their keys; other objects yield the names in their
    ``__dict__`` (methods, descriptors and dunder names are never own
    keys).  Objects without a ``__dict__`` have none.
    """
    if isinstance(value, Mapping):
        return list(value.keys())
    return list(_own_attributes(value))


def own_items(value: Any) -> list[tuple[Any, Any]]:
    """Return the own ``(key, value)`` entries of a keyed container."""
    if isinstance(value, Mapping):
        return [(key, value[key]) for key in value]
    return list(_own_attributes(value).items())


def owns(container: Any, key: object) -> bool:
    """Return True if *key* is an own key of *container*."""
    if isinstance(container, Mapping):
        return key in container
    return key in _own_attributes(container)
