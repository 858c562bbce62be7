from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from .base import BaseSpecification
from .exceptions import OperatorNotFoundError
from .operators import SpecificationOperator
from .operators_memory import DEFAULT_MEMORY_REGISTRY
from .utils import resolve_path

if TYPE_CHECKING:
    from .strategy import MemoryOperatorRegistry

T = TypeVar("T", contravariant=True)

_LEAF_OPERATORS = SpecificationOperator.leaf_values()


class AttributeSpecification(BaseSpecification[T]):
    """
    Specification that checks a single attribute value.

    This is the translatable criterion: ``to_dict()`` produces the leaf
    node the SQLAlchemy compiler turns into a column expression, while
    ``is_satisfied_by`` delegates to a :class:`MemoryOperatorRegistry`
    (strategy pattern).  Without an explicit registry the shared
    ``DEFAULT_MEMORY_REGISTRY`` is used.

    Dotted paths traverse relations: the candidate is satisfied when *any*
    value reached by the path satisfies the operator.
    """

    def __init__(
        self,
        attr: str,
        op: SpecificationOperator | str,
        val: Any = None,
        *,
        registry: MemoryOperatorRegistry | None = None,
    ) -> None:
        self.attr = attr
        self.op = _coerce_operator(op)
        self.val = val
        self._registry = registry if registry is not None else DEFAULT_MEMORY_REGISTRY

    def is_satisfied_by(self, candidate: T) -> bool:
        return any(
            self._registry.evaluate(self.op, value, self.val)
            for value in resolve_path(candidate, self.attr)
        )

    # -- serialisation -------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": self.op.value,
            "attr": self.attr,
            "val": self.val,
        }

    def __repr__(self) -> str:
        return f"AttributeSpecification({self.attr!r}, {self.op.value!r}, {self.val!r})"


def _coerce_operator(op: SpecificationOperator | str) -> SpecificationOperator:
    if isinstance(op, SpecificationOperator):
        if not op.is_logical:
            return op
        op_lower = op.value
    else:
        op_lower = str(op).lower()
    if op_lower not in _LEAF_OPERATORS:
        raise OperatorNotFoundError(op_lower, sorted(_LEAF_OPERATORS))
    return SpecificationOperator(op_lower)
