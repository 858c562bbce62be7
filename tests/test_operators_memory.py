"""Tests for in-memory specification operators (standard, set, string, null)."""

from __future__ import annotations

from typing import Any

import pytest

from query_specs.exceptions import OperatorNotFoundError
from query_specs.operators import SpecificationOperator
from query_specs.operators_memory import DEFAULT_MEMORY_REGISTRY
from query_specs.operators_memory.null import (
    IsEmptyOperator,
    IsNotEmptyOperator,
    IsNotNullOperator,
    IsNullOperator,
)
from query_specs.operators_memory.set import (
    BetweenOperator,
    InOperator,
    NotBetweenOperator,
    NotInOperator,
)
from query_specs.operators_memory.standard import (
    EqualOperator,
    GreaterEqualOperator,
    GreaterThanOperator,
    LessEqualOperator,
    LessThanOperator,
    NotEqualOperator,
)
from query_specs.operators_memory.string import (
    ContainsOperator,
    EndsWithOperator,
    IContainsOperator,
    IEndsWithOperator,
    ILikeOperator,
    IStartsWithOperator,
    LikeOperator,
    NotLikeOperator,
    StartsWithOperator,
)
from query_specs.strategy import MemoryOperator, MemoryOperatorRegistry

# ---------------------------------------------------------------------------
# Standard comparison
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("operator", "field_value", "condition_value", "expected"),
    [
        (EqualOperator(), 5, 5, True),
        (EqualOperator(), 5, 6, False),
        (EqualOperator(), None, None, True),
        (NotEqualOperator(), 5, 6, True),
        (NotEqualOperator(), 5, 5, False),
        (NotEqualOperator(), None, 5, False),
        (NotEqualOperator(), 5, None, True),
        (NotEqualOperator(), None, None, False),
        (GreaterThanOperator(), 5, 3, True),
        (GreaterThanOperator(), 3, 3, False),
        (GreaterThanOperator(), None, 3, False),
        (LessThanOperator(), 2, 3, True),
        (LessThanOperator(), None, 3, False),
        (GreaterEqualOperator(), 3, 3, True),
        (GreaterEqualOperator(), None, 3, False),
        (LessEqualOperator(), 3, 3, True),
        (LessEqualOperator(), 4, 3, False),
    ],
)
def test_standard_operators(
    operator: MemoryOperator, field_value: Any, condition_value: Any, expected: bool
):
    assert operator.evaluate(field_value, condition_value) is expected


# ---------------------------------------------------------------------------
# Set operators
# ---------------------------------------------------------------------------


def test_in_and_not_in():
    assert InOperator().evaluate(2, [1, 2, 3])
    assert not InOperator().evaluate(4, [1, 2, 3])
    assert not InOperator().evaluate(None, [None])
    assert NotInOperator().evaluate(4, [1, 2, 3])
    assert not NotInOperator().evaluate(2, [1, 2, 3])
    assert not NotInOperator().evaluate(None, [1])


def test_between_is_inclusive():
    assert BetweenOperator().evaluate(1, [1, 3])
    assert BetweenOperator().evaluate(3, (1, 3))
    assert not BetweenOperator().evaluate(4, [1, 3])
    assert not BetweenOperator().evaluate(None, [1, 3])
    assert NotBetweenOperator().evaluate(4, [1, 3])
    assert not NotBetweenOperator().evaluate(2, [1, 3])
    assert not NotBetweenOperator().evaluate(None, [1, 3])


def test_none_inside_the_condition_never_matches_like_sql():
    assert not NotInOperator().evaluate(4, [1, None])
    assert not NotInOperator().evaluate(1, [1, None])
    assert InOperator().evaluate(1, [1, None])
    assert not BetweenOperator().evaluate(2, [None, 3])
    assert not NotBetweenOperator().evaluate(2, [None, 3])
    assert NotBetweenOperator().evaluate(4, [None, 3])
    assert NotBetweenOperator().evaluate(0, [1, None])
    assert not GreaterThanOperator().evaluate(1, None)


def test_operator_hooks_are_abstract():
    from query_specs.operators_memory.set import _NullNeverMatches
    from query_specs.operators_memory.string import _TextOperator

    for base in (_NullNeverMatches, _TextOperator):
        with pytest.raises(TypeError):
            base()


# ---------------------------------------------------------------------------
# String operators
# ---------------------------------------------------------------------------


def test_like_patterns():
    assert LikeOperator().evaluate("hello world", "hello%")
    assert LikeOperator().evaluate("hat", "h_t")
    assert not LikeOperator().evaluate("Hello", "hello%")
    assert not LikeOperator().evaluate(None, "%")
    assert LikeOperator().evaluate("a.b", "a.b")
    assert not LikeOperator().evaluate("axb", "a.b")


def test_not_like_and_ilike():
    assert NotLikeOperator().evaluate("goodbye", "hello%")
    assert not NotLikeOperator().evaluate(None, "hello%")
    assert ILikeOperator().evaluate("HELLO world", "hello%")


def test_substring_operators():
    assert ContainsOperator().evaluate("a 100% match", "100%")
    assert not ContainsOperator().evaluate("a 100 match", "100%")
    assert IContainsOperator().evaluate("Python", "TH")
    assert StartsWithOperator().evaluate("prefix_rest", "prefix_")
    assert not StartsWithOperator().evaluate("prefixxrest", "prefix_")
    assert IStartsWithOperator().evaluate("Prefix", "pre")
    assert EndsWithOperator().evaluate("file.txt", ".txt")
    assert IEndsWithOperator().evaluate("FILE.TXT", ".txt")
    for operator in (ContainsOperator(), StartsWithOperator(), EndsWithOperator()):
        assert not operator.evaluate(None, "x")


# ---------------------------------------------------------------------------
# Null / empty
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("value", "is_null", "is_empty"),
    [
        (None, True, True),
        ("", False, True),
        ([], False, True),
        ("x", False, False),
        ([1], False, False),
        (0, False, False),
    ],
)
def test_null_and_empty(value: Any, is_null: bool, is_empty: bool):
    assert IsNullOperator().evaluate(value, None) is is_null
    assert IsNotNullOperator().evaluate(value, None) is not is_null
    assert IsEmptyOperator().evaluate(value, None) is is_empty
    assert IsNotEmptyOperator().evaluate(value, None) is not is_empty


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


def test_default_registry_covers_every_leaf_operator():
    expected = {op for op in SpecificationOperator if not op.is_logical}
    assert DEFAULT_MEMORY_REGISTRY.supported_operators == expected


def test_registry_register_and_evaluate():
    registry = MemoryOperatorRegistry()
    registry.register(EqualOperator())
    assert registry.has(SpecificationOperator.EQ)
    assert registry.evaluate(SpecificationOperator.EQ, 1, 1)
    assert registry.get(SpecificationOperator.NE) is None


def test_registry_unknown_operator_suggests():
    registry = MemoryOperatorRegistry()
    registry.register_all(LikeOperator(), ILikeOperator())
    with pytest.raises(OperatorNotFoundError) as exc_info:
        registry.evaluate(SpecificationOperator.NOT_LIKE, "a", "a")
    assert exc_info.value.operator == "not_like"
    assert "like" in exc_info.value.suggestions


def test_registry_custom_operator_override(registry):
    class AlwaysEqual(MemoryOperator):
        @property
        def name(self) -> SpecificationOperator:
            return SpecificationOperator.EQ

        def evaluate(self, field_value: Any, condition_value: Any) -> bool:
            return True

    registry.register(AlwaysEqual())
    assert registry.evaluate(SpecificationOperator.EQ, 1, 2)
    registry.unregister(SpecificationOperator.EQ)
    assert not registry.has(SpecificationOperator.EQ)
