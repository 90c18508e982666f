"""The ``Dictionary`` container.

A mutable mapping from string keys to arbitrary values that behaves
like the builtin ``dict`` while accepting much looser input:

    >>> Dictionary({"name": "John"})["name"]
    'John'
    >>> Dictionary([["a", 1], "bc"]).items()
    [('a', 1), ('b', 'c')]
    >>> Dictionary.fromkeys([1, 2], 0).keys()
    ['1', '2']

Key ideas:
    - **String keys** — every key is passed through ``str()`` on the way
      in, for writes and lookups alike.
    - **Own entries only** — entries live in a private table, so method
      names (``clear``, ``pop``, ...) are never mistaken for keys.
    - **Insertion order** — ``keys()``, ``values()`` and ``items()``
      return lists in the order keys were first written.
    - **Flexible seeding** — construction and ``update`` go through
      ``py_dict.utils.merge``, which decides how to read the input.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any

from py_dict.logging import Logger
from py_dict.utils import merge
from py_dict.utils.classify import is_iterable
from py_dict.utils.iteration import NotIterableError, iterate

_MISSING = object()


def _as_key(key: object) -> str:
    return key if isinstance(key, str) else str(key)


class Dictionary(MutableMapping[str, Any]):
    """An insertion-ordered mapping with string keys and flexible seeding."""

    def __init__(
        self, source: Any = None, /, *, logger: Logger | None = None, **kwargs: Any
    ) -> None:
        """Create a dictionary, optionally seeded.

        Args:
            source: A mapping, an object with attributes, a sequence (or
                stream) of pairs, or None for an empty dictionary.
            logger: Audit log that records how every ``update`` reads
                its input.
            **kwargs: Extra entries, merged after *source*.

        Raises:
            NotIterableError: If *source* is not iterable.

        """
        self._data: dict[str, Any] = {}
        self._logger = logger
        if source is not None and not is_iterable(source):
            raise NotIterableError(source)
        self.update(source, **kwargs)

    @property
    def logger(self) -> Logger | None:
        """Return the audit log, if one was given."""
        return self._logger

    # -- Mapping protocol -----------------------------------------------------

    def __getitem__(self, key: object) -> Any:
        """Return the value stored under *key*."""
        return self._data[_as_key(key)]

    def __setitem__(self, key: object, value: Any) -> None:
        """Store *value* under *key*, keeping the key's original position."""
        self._data[_as_key(key)] = value

    def __delitem__(self, key: object) -> None:
        """Remove *key*."""
        del self._data[_as_key(key)]

    def __contains__(self, key: object) -> bool:
        """Return True if *key* is an own entry."""
        return _as_key(key) in self._data

    def __iter__(self) -> Iterator[str]:
        """Iterate over keys in insertion order."""
        return iter(self._data)

    def __len__(self) -> int:
        """Return the number of entries."""
        return len(self._data)

    def __repr__(self) -> str:
        """Show the entries the way ``dict`` does."""
        return f"Dictionary({self._data!r})"

    def __or__(self, other: object) -> Dictionary:
        """Return a copy of this dictionary updated with *other*."""
        if not isinstance(other, Mapping):
            return NotImplemented
        result = self.copy()
        result.update(other)
        return result

    def __ror__(self, other: object) -> Dictionary:
        """Return *other* as a dictionary, updated with this one."""
        if not isinstance(other, Mapping):
            return NotImplemented
        result = Dictionary(other, logger=self._logger)
        result.update(self)
        return result

    def __ior__(self, other: Any) -> Dictionary:
        """Update in place with anything ``update`` accepts."""
        self.update(other)
        return self

    # -- dict methods ---------------------------------------------------------

    def get(self, key: object, default: Any = None) -> Any:
        """Return the value for *key*, or *default* if it is not an own entry.

        An entry whose value is None is still returned as None.
        """
        return self._data.get(_as_key(key), default)

    def items(self) -> list[tuple[str, Any]]:  # pyright: ignore[reportIncompatibleMethodOverride]
        """Return ``(key, value)`` pairs in insertion order."""
        return list(self._data.items())

    def keys(self) -> list[str]:  # pyright: ignore[reportIncompatibleMethodOverride]
        """Return the keys in insertion order."""
        return list(self._data)

    def values(self) -> list[Any]:  # pyright: ignore[reportIncompatibleMethodOverride]
        """Return the values in insertion order."""
        return list(self._data.values())

    def pop(self, key: object, default: Any = _MISSING) -> Any:
        """Remove *key* and return its value.

        Args:
            key: The key to remove.
            default: Returned when *key* is not an own entry.

        Raises:
            KeyError: If *key* is missing and no default was given.

        """
        name = _as_key(key)
        if name in self._data:
            return self._data.pop(name)
        if default is _MISSING:
            raise KeyError(key)
        return default

    def popitem(self) -> tuple[str, Any]:
        """Remove and return the first ``(key, value)`` pair.

        Raises:
            KeyError: If the dictionary is empty.

        """
        if not self._data:
            msg = "popitem(): dictionary is empty"
            raise KeyError(msg)
        key = next(iter(self._data))
        return key, self._data.pop(key)

    def setdefault(self, key: object, default: Any = None) -> Any:
        """Return the value for *key*, first storing *default* if it is missing."""
        name = _as_key(key)
        if name not in self._data:
            self._data[name] = default
        return self._data[name]

    def update(self, source: Any = None, /, **kwargs: Any) -> None:
        """Merge *source*, then any keyword entries, into this dictionary.

        See ``py_dict.utils.merge`` for how each input shape is read.

        Raises:
            NotIterableError: If *source* is not iterable.
            SequenceElementError: If a sequence element is not iterable.
            PairLengthError: If a sequence element does not yield two values.

        """
        merge.update(self, source, logger=self._logger)
        if kwargs:
            merge.update(self, kwargs, logger=self._logger)

    def copy(self) -> Dictionary:
        """Return a shallow copy: same values, new container, same order."""
        result = Dictionary(logger=self._logger)
        merge.assign(result, self)
        return result

    @classmethod
    def fromkeys(cls, keys: Any, value: Any = None) -> Dictionary:
        """Build a dictionary mapping every element of *keys* to *value*.

        Sequences contribute their elements, strings their characters,
        keyed containers their key names.  Every key shares the same
        *value* object.

        Raises:
            NotIterableError: If *keys* is not iterable.

        """
        result = cls()
        cursor = iterate(keys, reuse_result=True)
        while not (step := cursor.next()).done:
            result[step.value] = value
        return result

    def clear(self) -> None:
        """Remove every entry."""
        self._data.clear()
