"""The operator vocabulary shared by every backend."""

from __future__ import annotations

from enum import Enum


class SpecificationOperator(str, Enum):
    """
    Operator names as they appear in ``where()`` calls and in ``to_dict()``.

    Members compare equal to their string value, so ``"="`` and
    ``SpecificationOperator.EQ`` are interchangeable.
    """

    EQ = "="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="

    IN = "in"
    NOT_IN = "not_in"
    BETWEEN = "between"
    NOT_BETWEEN = "not_between"

    # patterns use SQL wildcards: % any run, _ one character
    LIKE = "like"
    NOT_LIKE = "not_like"
    ILIKE = "ilike"

    # substring matches treat the value literally
    CONTAINS = "contains"
    ICONTAINS = "icontains"
    STARTSWITH = "startswith"
    ISTARTSWITH = "istartswith"
    ENDSWITH = "endswith"
    IENDSWITH = "iendswith"

    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"

    AND = "and"
    OR = "or"
    NOT = "not"

    @property
    def is_logical(self) -> bool:
        return self in _LOGICAL

    @classmethod
    def leaf_values(cls) -> frozenset[str]:
        """String values of every operator usable on a single attribute."""
        return frozenset(member.value for member in cls if not member.is_logical)


_LOGICAL = frozenset(
    {SpecificationOperator.AND, SpecificationOperator.OR, SpecificationOperator.NOT}
)
