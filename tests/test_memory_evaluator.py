"""Tests for InMemoryEvaluator."""

from __future__ import annotations

import pytest

from query_specs import InvalidPaging, SpecificationBuilder
from query_specs.memory import InMemoryEvaluator
from query_specs.ports import ISpecificationEvaluator


@pytest.fixture
def evaluator() -> InMemoryEvaluator:
    return InMemoryEvaluator()


def _ids(items):
    return [item.id for item in items]


def test_satisfies_evaluator_protocol(evaluator):
    assert isinstance(evaluator, ISpecificationEvaluator)


def test_empty_spec_returns_everything_in_id_order(evaluator, todos):
    shuffled = list(reversed(todos))
    result = evaluator.evaluate(shuffled, SpecificationBuilder().build())
    assert _ids(result) == list(range(1, 26))


def test_filter_then_order_then_page(evaluator, todos):
    spec = (
        SpecificationBuilder()
        .where("priority", "=", 1)
        .order_by_descending("id")
        .skip(1)
        .take(3)
        .build()
    )
    # priority 1: ids 1, 4, 7, 10, 13, 16, 19, 22, 25
    assert _ids(evaluator.evaluate(todos, spec)) == [22, 19, 16]


def test_ties_fall_back_to_tiebreaker(evaluator, todos):
    spec = SpecificationBuilder().order_by("priority").take(4).build()
    assert _ids(evaluator.evaluate(todos, spec)) == [3, 6, 9, 12]


def test_secondary_ordering(evaluator, todos):
    spec = (
        SpecificationBuilder()
        .order_by("completed")
        .order_by("-priority")
        .take(3)
        .build()
    )
    # not completed first, then priority 2 descending by id tiebreak
    assert _ids(evaluator.evaluate(todos, spec)) == [2, 5, 11]


def test_nulls_first_ascending_last_descending(evaluator, todos):
    ascending = evaluator.evaluate(
        todos, SpecificationBuilder().order_by("due_date").build()
    )
    assert _ids(ascending[:5]) == [5, 10, 15, 20, 25]
    assert ascending[5].id == 1

    descending = evaluator.evaluate(
        todos, SpecificationBuilder().order_by_descending("due_date").build()
    )
    assert descending[0].id == 24
    assert _ids(descending[-5:]) == [5, 10, 15, 20, 25]


def test_ordering_by_callable_and_related_path(evaluator, todos):
    by_tag_count = (
        SpecificationBuilder()
        .order_by_descending(lambda t: len(t.tags))
        .take(2)
        .build()
    )
    assert _ids(evaluator.evaluate(todos, by_tag_count)) == [6, 12]

    by_project = (
        SpecificationBuilder()
        .where("project_id", "is_not_null")
        .order_by("-project.name")
        .take(2)
        .build()
    )
    assert _ids(evaluator.evaluate(todos, by_project)) == [2, 4]


def test_callable_criterion(evaluator, todos):
    spec = SpecificationBuilder().where(lambda t: t.id % 10 == 0).build()
    assert _ids(evaluator.evaluate(todos, spec)) == [10, 20]


def test_projection_after_order_before_paging(evaluator, todos):
    spec = (
        SpecificationBuilder()
        .order_by_descending("id")
        .select(["id", "title"])
        .take(2)
        .build()
    )
    assert evaluator.evaluate(todos, spec) == [
        {"id": 25, "title": "todo 25"},
        {"id": 24, "title": "todo 24"},
    ]


def test_includes_are_ignored(evaluator, todos):
    spec = SpecificationBuilder().include("tags").include("project").build()
    assert len(evaluator.evaluate(todos, spec)) == 25


def test_skip_without_take_returns_remaining(evaluator, todos):
    spec = SpecificationBuilder().skip(20).build()
    assert _ids(evaluator.evaluate(todos, spec)) == [21, 22, 23, 24, 25]


def test_take_zero_is_empty(evaluator, todos):
    assert evaluator.evaluate(todos, SpecificationBuilder().take(0).build()) == []


def test_criteria_only_ignores_everything_else(evaluator, todos):
    spec = (
        SpecificationBuilder()
        .where("completed", "=", True)
        .order_by_descending("id")
        .select(["title"])
        .skip(1)
        .take(1)
        .build()
    )
    result = evaluator.evaluate(todos, spec, criteria_only=True)
    assert _ids(result) == [4, 8, 12, 16, 20, 24]


def test_count_ignores_window(evaluator, todos):
    spec = SpecificationBuilder().where("completed", "=", True).take(2).build()
    assert evaluator.count(todos, spec) == 6
    assert len(evaluator.evaluate(todos, spec)) == 2


def test_negative_paging_rejected(evaluator, todos):
    with pytest.raises(InvalidPaging):
        evaluator.evaluate(todos, SpecificationBuilder().take(-1).build())


def test_custom_tiebreaker(todos):
    evaluator = InMemoryEvaluator(tiebreaker="title")
    spec = SpecificationBuilder().order_by("priority").take(2).build()
    assert _ids(evaluator.evaluate(todos, spec)) == [3, 6]

    unordered = InMemoryEvaluator(tiebreaker=None)
    assert _ids(unordered.evaluate(todos[:3], SpecificationBuilder().build())) == [
        1,
        2,
        3,
    ]


def test_evaluates_mappings(evaluator):
    rows = [{"id": 2, "name": "b"}, {"id": 1, "name": None}, {"id": 3, "name": "a"}]
    spec = SpecificationBuilder().where("name", "is_not_null").order_by("name").build()
    assert evaluator.evaluate(rows, spec) == [
        {"id": 3, "name": "a"},
        {"id": 2, "name": "b"},
    ]
