from .ast import AttributeSpecification
from .base import (
    AndSpecification,
    BaseSpecification,
    ISpecification,
    NotSpecification,
    OrSpecification,
)
from .builder import SpecificationBuilder
from .exceptions import (
    EvaluationCancelled,
    FieldNotFoundError,
    InvalidPaging,
    MissingProjection,
    OperatorNotFoundError,
    SessionManagementError,
    SpecificationError,
    UnsupportedExpression,
    ValidationError,
)
from .operators import SpecificationOperator
from .operators_memory import DEFAULT_MEMORY_REGISTRY, build_default_registry
from .pagination import PagedResult, PageInfo, calculate_page
from .ports import (
    IAsyncSpecificationEvaluator,
    ISpecificationEvaluator,
    ISpecificationRepository,
)
from .projection import FieldProjection, ModelProjection
from .repository import SpecificationRepository
from .specification import Ordering, SortDirection, Specification
from .strategy import MemoryOperator, MemoryOperatorRegistry

__all__ = [
    # Core types
    "Specification",
    "Ordering",
    "SortDirection",
    "FieldProjection",
    "ModelProjection",
    # Criteria
    "SpecificationOperator",
    "ISpecification",
    "AttributeSpecification",
    "BaseSpecification",
    "AndSpecification",
    "OrSpecification",
    "NotSpecification",
    # Builder
    "SpecificationBuilder",
    # Pagination
    "PagedResult",
    "PageInfo",
    "calculate_page",
    # Ports
    "ISpecificationEvaluator",
    "IAsyncSpecificationEvaluator",
    "ISpecificationRepository",
    # Repository and operator strategies
    "SpecificationRepository",
    "MemoryOperator",
    "MemoryOperatorRegistry",
    "DEFAULT_MEMORY_REGISTRY",
    "build_default_registry",
    # Exceptions
    "SpecificationError",
    "ValidationError",
    "InvalidPaging",
    "UnsupportedExpression",
    "FieldNotFoundError",
    "OperatorNotFoundError",
    "MissingProjection",
    "EvaluationCancelled",
    "SessionManagementError",
]
