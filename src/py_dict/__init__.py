"""py_dict — a ``dict``-style container with flexible, forgiving construction.

Re-exports public symbols so callers can write::

    from py_dict import Dictionary, length

The primitives the container is built on (classification, snapshot
iteration, merging) live in ``py_dict.utils`` for direct reuse.
"""

from py_dict.dictionary import Dictionary
from py_dict.logging import LogEntry, Logger, LogLevel
from py_dict.utils import NotIterableError, PairLengthError, SequenceElementError, length

__all__ = [
    "Dictionary",
    "LogEntry",
    "LogLevel",
    "Logger",
    "NotIterableError",
    "PairLengthError",
    "SequenceElementError",
    "length",
]
