"""Tests for Specification, Ordering, composite criteria and projections."""

from __future__ import annotations

import dataclasses

import pytest
from todo_models import TodoSummary, build_todos

from query_specs import (
    AttributeSpecification,
    BaseSpecification,
    FieldProjection,
    InvalidPaging,
    ModelProjection,
    Ordering,
    SortDirection,
    Specification,
    SpecificationBuilder,
    SpecificationOperator,
)
from query_specs.exceptions import OperatorNotFoundError
from query_specs.projection import as_projection, describe_projection
from query_specs.utils import resolve_field, resolve_path


@pytest.fixture
def todo():
    return build_todos()[5]  # id 6: no project, tags work + home


# -- Specification ----------------------------------------------------------


def test_specification_is_frozen():
    spec = SpecificationBuilder().take(1).build()
    with pytest.raises(dataclasses.FrozenInstanceError):
        spec.take = 5  # type: ignore[misc]


def test_derived_windows():
    spec = SpecificationBuilder().skip(10).take(5).select(["id"]).build()
    assert spec.is_paged
    assert spec.offset == 10
    assert spec.has_projection

    unpaged = spec.without_paging()
    assert unpaged.skip is None and unpaged.take is None
    assert not unpaged.is_paged

    assert spec.without_projection().projection is None
    assert spec.with_window(0, 1).take == 1
    # Originals are untouched
    assert spec.skip == 10 and spec.take == 5


def test_offset_defaults_to_zero():
    assert Specification().offset == 0


@pytest.mark.parametrize(
    ("skip", "take", "field"),
    [(-1, None, "skip"), (None, -5, "take"), (1.5, None, "skip"), (True, None, "skip")],
)
def test_validate_paging_rejects_invalid_window(skip, take, field):
    spec = Specification(skip=skip, take=take)
    with pytest.raises(InvalidPaging) as exc_info:
        spec.validate_paging()
    assert exc_info.value.field == field


def test_validate_paging_accepts_zero():
    Specification(skip=0, take=0).validate_paging()


def test_is_satisfied_by_ands_all_criteria(todo):
    spec = (
        SpecificationBuilder()
        .where("priority", "=", 0)
        .where(lambda t: t.completed is False)
        .build()
    )
    assert spec.is_satisfied_by(todo)
    assert not SpecificationBuilder().where("priority", "=", 1).build().is_satisfied_by(
        todo
    )


def test_to_dict_describes_every_part():
    def is_overdue(todo):
        return False

    spec = (
        SpecificationBuilder()
        .where("priority", ">=", 1)
        .where(is_overdue)
        .include("tags")
        .order_by("-due_date")
        .skip(10)
        .take(5)
        .select(["id", "title"])
        .no_tracking()
        .build()
    )
    data = spec.to_dict()
    assert data["criteria"][0] == {"op": ">=", "attr": "priority", "val": 1}
    assert "is_overdue" in data["criteria"][1]
    assert data["includes"] == ["tags"]
    assert data["order_by"] == [{"key": "due_date", "direction": "desc"}]
    assert data["skip"] == 10
    assert data["take"] == 5
    assert data["projection"] == "fields(id, title)"
    assert data["tracking_disabled"] is True


def test_to_dict_omits_defaults():
    assert Specification().to_dict() == {"criteria": []}


# -- Ordering ---------------------------------------------------------------


def test_ordering_parse():
    assert Ordering.parse("title") == Ordering("title", SortDirection.ASC)
    assert Ordering.parse("-title") == Ordering("title", SortDirection.DESC)
    assert Ordering.parse("-title").descending


def test_ordering_to_dict_with_callable():
    ordering = Ordering(len, SortDirection.DESC)
    assert ordering.to_dict() == {"key": "<len>", "direction": "desc"}


# -- Composite criteria -------------------------------------------------------


def test_and_or_not_composition(todo):
    high = AttributeSpecification("priority", ">", 1)
    pending = AttributeSpecification("completed", "=", False)

    assert (pending & ~high).is_satisfied_by(todo)
    assert (high | pending).is_satisfied_by(todo)
    assert not (high & pending).is_satisfied_by(todo)


def test_base_specification_requires_both_hooks():
    class OnlyPredicate(BaseSpecification):
        def is_satisfied_by(self, candidate):
            return True

    with pytest.raises(TypeError):
        BaseSpecification()
    with pytest.raises(TypeError):
        OnlyPredicate()


def test_composite_to_dict():
    spec = ~(
        AttributeSpecification("a", "=", 1) | AttributeSpecification("b", "<", 2)
    )
    assert spec.to_dict() == {
        "op": "not",
        "conditions": [
            {
                "op": "or",
                "conditions": [
                    {"op": "=", "attr": "a", "val": 1},
                    {"op": "<", "attr": "b", "val": 2},
                ],
            }
        ],
    }


def test_attribute_specification_traverses_collections(todo):
    assert AttributeSpecification("tags.name", "=", "home").is_satisfied_by(todo)
    assert not AttributeSpecification("tags.name", "=", "urgent").is_satisfied_by(
        todo
    )


def test_attribute_specification_missing_relation_never_matches(todo):
    assert todo.project is None
    assert not AttributeSpecification("project.name", "!=", "x").is_satisfied_by(todo)
    assert not AttributeSpecification("project.name", "is_null").is_satisfied_by(
        todo
    )


def test_attribute_specification_uses_custom_registry(registry, todo):
    registry.unregister(SpecificationOperator.EQ)
    spec = AttributeSpecification("priority", "=", 0, registry=registry)
    with pytest.raises(OperatorNotFoundError, match="Unknown operator"):
        spec.is_satisfied_by(todo)


# -- Path resolution ----------------------------------------------------------


def test_resolve_path_and_field(todo):
    assert resolve_path(todo, "title") == ["todo 06"]
    assert resolve_path(todo, "project.name") == []
    assert sorted(resolve_path(todo, "tags.name")) == ["home", "work"]
    assert resolve_field(todo, "project.name") is None
    assert resolve_field({"a": {"b": 2}}, "a.b") == 2


# -- Projections --------------------------------------------------------------


def test_field_projection(todo):
    projection = FieldProjection(("id", "title"))
    assert projection(todo) == {"id": 6, "title": "todo 06"}
    assert projection.describe() == "fields(id, title)"


def test_field_projection_requires_fields():
    with pytest.raises(ValueError):
        FieldProjection(())


def test_model_projection(todo):
    summary = ModelProjection(TodoSummary)(todo)
    assert summary == TodoSummary(id=6, title="todo 06", priority=0)


def test_as_projection_passes_callables_through():
    def project(todo):
        return todo.id

    assert as_projection(project) is project
    assert describe_projection(project).endswith("project")
