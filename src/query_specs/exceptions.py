"""
Errors raised while building or evaluating specifications.

Everything derives from :class:`SpecificationError`, and each error can
render itself for an API response with ``to_dict()``.  An empty result is
not an error: repositories answer "no rows" with ``[]`` or ``None``.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class SpecificationError(Exception):
    """Root of the query-specs error tree."""

    def to_dict(self) -> dict[str, Any]:
        return {"error": type(self).__name__, "message": str(self)}


class ValidationError(SpecificationError):
    """A specification holds a value evaluation cannot accept."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALIDATION_ERROR",
            "message": self.message,
            "path": self.path,
        }


class InvalidPaging(ValidationError):
    """A negative ``skip`` or ``take`` reached evaluation.

    Values are never clamped: the caller gets this error instead.
    """

    def __init__(self, field: str, value: Any) -> None:
        super().__init__(
            f"'{field}' must be a non-negative integer, got {value!r}", path=field
        )
        self.field = field
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        return {"error": "INVALID_PAGING", "field": self.field, "value": self.value}


class OperatorNotFoundError(SpecificationError):
    """An operator string that no registry knows, with close-match hints."""

    def __init__(self, operator: str, valid_operators: list[str]) -> None:
        self.operator = operator
        self.valid_operators = valid_operators
        self.suggestions = _closest(operator, valid_operators, limit=3)

        message = f"Unknown operator: '{operator}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        message += f" Known operators: {', '.join(sorted(valid_operators))}"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "OPERATOR_NOT_FOUND",
            "operator": self.operator,
            "suggestions": self.suggestions,
            "valid_operators": sorted(self.valid_operators),
        }


class UnsupportedExpression(SpecificationError):
    """
    A criterion, ordering key, include or projection has no SQL form.

    Only the SQLAlchemy evaluator raises this; the in-memory evaluator
    executes predicates directly.
    """

    def __init__(self, expression: Any, reason: str) -> None:
        self.expression = expression
        self.reason = reason
        super().__init__(f"Cannot translate {_describe(expression)}: {reason}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNSUPPORTED_EXPRESSION",
            "expression": _describe(self.expression),
            "reason": self.reason,
        }


class FieldNotFoundError(UnsupportedExpression):
    """
    An attribute path names something the mapped model does not have.

    The message lists close matches and a preview of the model's fields::

        Cannot translate 'titel': no such attribute on 'TodoRecord'.
        Did you mean one of these?
          • title
        Available fields: completed, description, due_date, id, ...
    """

    _PREVIEW = 15

    def __init__(
        self,
        invalid_field: str,
        model_name: str,
        available_fields: list[str],
        full_path: str | None = None,
        cutoff: float = 0.6,
    ) -> None:
        self.invalid_field = invalid_field
        self.model_name = model_name
        self.available_fields = available_fields
        self.full_path = full_path or invalid_field
        self.suggestions = _closest(
            invalid_field, available_fields, limit=5, cutoff=cutoff
        )
        super().__init__(self.full_path, self._reason())

    def _reason(self) -> str:
        lines = [f"no such attribute on '{self.model_name}'."]
        if self.suggestions:
            lines.append("Did you mean one of these?")
            lines.extend(f"  • {name}" for name in self.suggestions)
        fields = sorted(self.available_fields)
        preview = ", ".join(fields[: self._PREVIEW])
        if len(fields) > self._PREVIEW:
            preview += ", ..."
        lines.append(f"Available fields: {preview}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FIELD_NOT_FOUND",
            "field": self.invalid_field,
            "model": self.model_name,
            "full_path": self.full_path,
            "suggestions": self.suggestions,
            "available_fields": sorted(self.available_fields),
        }


class MissingProjection(SpecificationError):
    """A projected fetch was requested on a specification without projection."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(
            f"'{operation}' requires a specification with a projection; "
            f"call select() on the builder first"
        )


class EvaluationCancelled(SpecificationError):
    """The caller's cancellation signal was set before the query finished."""


class SessionManagementError(SpecificationError):
    """Raised when a repository is configured with no (or two) session sources."""


def _closest(
    word: str, choices: list[str], *, limit: int, cutoff: float = 0.6
) -> list[str]:
    return get_close_matches(word, choices, n=limit, cutoff=cutoff)


def _describe(expression: Any) -> str:
    if isinstance(expression, str):
        return f"'{expression}'"
    name = getattr(expression, "__qualname__", None) or type(expression).__name__
    return f"<{name}>"
