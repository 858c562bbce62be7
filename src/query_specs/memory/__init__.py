from .evaluator import InMemoryEvaluator
from .repository import InMemorySpecificationRepository

__all__ = [
    "InMemoryEvaluator",
    "InMemorySpecificationRepository",
]
