"""Tests for update merging.

``update`` reads a source in one of three ways (keyed container,
sequence of pairs, sequence of two-key mappings) and writes the result
into a target mapping in place.
"""

from __future__ import annotations

from typing import Any

import pytest

from py_dict.logging import Logger, LogLevel
from py_dict.utils.merge import (
    PairLengthError,
    SequenceElementError,
    assign,
    order_ambiguous_pair,
    update,
)


class _Settings:
    def __init__(self) -> None:
        self.theme = "dark"
        self.size = 12


class TestKeyedSource:
    """Verify merging of mappings and objects."""

    def test_new_keys_are_added(self) -> None:
        """Keys from the source appear in the target."""
        target: dict[str, Any] = {"name": "John"}
        update(target, {"gender": "male"})
        assert target == {"name": "John", "gender": "male"}

    def test_order_is_preserved(self) -> None:
        """Existing keys keep their slot; new keys follow in source order."""
        target = {"x": 1, "y": 2}
        update(target, {"z": 4, "y": 3})
        assert list(target.items()) == [("x", 1), ("y", 3), ("z", 4)]

    def test_object_attributes_are_merged(self) -> None:
        """A plain object contributes its own attributes."""
        target: dict[str, Any] = {}
        update(target, _Settings())
        assert target == {"theme": "dark", "size": 12}

    def test_none_is_a_no_op(self) -> None:
        """Passing None leaves the target untouched."""
        target = {"a": 1}
        update(target, None)
        assert target == {"a": 1}


class TestPairSequence:
    """Verify merging of sequences of pairs."""

    def test_lists_and_tuples(self) -> None:
        """Two-element sequences are read as key then value."""
        target: dict[Any, Any] = {}
        update(target, [["a", 1], ("b", 2)])
        assert target == {"a": 1, "b": 2}

    def test_two_character_string(self) -> None:
        """A two-character string is a pair of characters."""
        target: dict[str, str] = {}
        update(target, ["hi"])
        assert target == {"h": "i"}

    def test_later_pairs_overwrite(self) -> None:
        """A repeated key takes the last value."""
        target: dict[str, int] = {}
        update(target, [("k", 1), ("k", 2)])
        expected = 2
        assert target["k"] == expected

    @pytest.mark.parametrize("source", [[], "", ()])
    def test_empty_sequence_is_a_no_op(self, source: Any) -> None:
        """An empty sequence changes nothing."""
        target = {"a": 1}
        update(target, source)
        assert target == {"a": 1}

    def test_generator_of_pairs(self) -> None:
        """A stream is drained and read as pairs."""
        target: dict[str, int] = {}
        update(target, ((name, len(name)) for name in ["ab", "cde"]))
        assert target == {"ab": 2, "cde": 3}

    def test_pair_from_iterator_keeps_order(self) -> None:
        """A stream element is read in order, not re-sorted."""
        target: dict[str, str] = {}
        update(target, [iter(["a", "z"])])
        assert target == {"a": "z"}


class TestTwoKeyMappings:
    """Verify the first-character rule for two-key mappings."""

    def test_larger_first_character_becomes_key(self) -> None:
        """'name' (n) outranks 'age' (a), so 'name' maps to 'age'."""
        target: dict[str, str] = {}
        update(target, [{"name": "John", "age": 20}])
        assert target == {"name": "age"}

    def test_rule_ignores_insertion_order(self) -> None:
        """Swapping the mapping's key order gives the same result."""
        target: dict[str, str] = {}
        update(target, [{"age": 20, "name": "John"}])
        assert target == {"name": "age"}

    @pytest.mark.parametrize(
        ("first", "second", "expected"),
        [
            ("age", "name", ("name", "age")),
            ("name", "age", ("name", "age")),
            ("ab", "ax", ("ab", "ax")),
            ("", "x", ("", "x")),
            (1, 2, (2, 1)),
        ],
    )
    def test_order_ambiguous_pair(self, first: Any, second: Any, expected: tuple[Any, Any]) -> None:
        """Descending first-character order; ties and empty names keep order."""
        assert order_ambiguous_pair(first, second) == expected


class TestElementErrors:
    """Verify rejection of malformed sequence elements."""

    def test_none_element(self) -> None:
        """A None element cannot be converted to a sequence."""
        with pytest.raises(
            SequenceElementError,
            match=r"cannot convert dictionary sequence element #0 to a sequence",
        ) as info:
            update({}, [None])
        assert info.value.index == 0

    def test_number_element(self) -> None:
        """A number element is reported with its position."""
        with pytest.raises(TypeError, match=r"element #1 to a sequence"):
            update({}, [("a", 1), 5])

    @pytest.mark.parametrize(
        ("element", "size"),
        [(["name"], 1), ([None], 1), ([1, 2, 3], 3), ({"a": 1, "b": 2, "c": 3}, 3), ("abc", 3)],
    )
    def test_wrong_length(self, element: Any, size: int) -> None:
        """Elements must yield exactly two values."""
        with pytest.raises(
            PairLengthError,
            match=rf"dictionary update sequence element #0 has length {size}; 2 is required",
        ) as info:
            update({}, [element])
        assert info.value.length == size

    def test_pair_length_error_is_value_error(self) -> None:
        """PairLengthError can be caught as ValueError."""
        with pytest.raises(ValueError, match="has length 0"):
            update({}, [[]])

    def test_earlier_pairs_remain_applied(self) -> None:
        """Pairs before the bad element have already been written."""
        target: dict[str, int] = {}
        with pytest.raises(PairLengthError):
            update(target, [("a", 1), ("b",)])
        assert target == {"a": 1}

    def test_non_iterable_source(self) -> None:
        """A number source is not iterable."""
        with pytest.raises(TypeError, match="'int' object is not iterable"):
            update({}, 42)


class TestAssign:
    """Verify own-entry copying."""

    def test_sources_apply_left_to_right(self) -> None:
        """Later sources overwrite earlier ones; None is skipped."""
        target: dict[str, int] = {}
        result = assign(target, {"a": 1}, None, {"a": 2, "b": 3})
        assert result is target
        assert target == {"a": 2, "b": 3}

    def test_none_target(self) -> None:
        """A None target is rejected."""
        with pytest.raises(TypeError, match="Cannot convert first argument to object"):
            assign(None, {"a": 1})


class TestMergeLogging:
    """Verify merge decisions are recorded when a logger is given."""

    def test_ambiguous_pair_is_logged(self) -> None:
        """The first-character rule leaves a warning naming the element."""
        logger = Logger()
        update({}, [("a", 1), {"name": "John", "age": 20}], logger=logger)
        warnings = logger.filter(min_level=LogLevel.WARNING)
        assert len(warnings) == 1
        assert warnings[0].index == 1
        assert "'name' -> 'age'" in warnings[0].message

    def test_rejected_element_is_logged(self) -> None:
        """An error entry is written before the exception is raised."""
        logger = Logger()
        with pytest.raises(PairLengthError):
            update({}, [["x"]], logger=logger)
        errors = logger.filter(min_level=LogLevel.ERROR)
        assert len(errors) == 1
        assert errors[0].index == 0

    def test_merges_are_logged_at_debug(self) -> None:
        """Each completed merge leaves a debug entry."""
        logger = Logger()
        update({}, {"a": 1}, logger=logger)
        update({}, [("b", 2)], logger=logger)
        expected = 2
        assert len(logger.filter(source="merge")) == expected
        assert all(e.level is LogLevel.DEBUG for e in logger.entries)

    def test_no_logger_records_nothing(self) -> None:
        """Without a logger the merge is silent."""
        target: dict[str, str] = {}
        update(target, [{"b": 1, "a": 2}])
        assert target == {"b": "a"}
