from .ast import AttributeSpecification, SpecificationFactory
from .base import (
    AndSpecification,
    BaseSpecification,
    ISpecification,
    NotSpecification,
    OrSpecification,
)
from .binder import ParameterBinder, stringify_value
from .builder import SpecificationBuilder
from .evaluator import MemoryOperator, MemoryOperatorRegistry
from .exceptions import (
    FieldNotFoundError,
    OperatorNotFoundError,
    SpecificationError,
    ValidationError,
)
from .operators import SpecificationOperator
from .operators_memory import build_default_registry

__all__ = [
    # Core types
    "SpecificationOperator",
    "ISpecification",
    "AttributeSpecification",
    "SpecificationFactory",
    "BaseSpecification",
    "AndSpecification",
    "OrSpecification",
    "NotSpecification",
    # Builder
    "SpecificationBuilder",
    # Parameter extraction
    "ParameterBinder",
    "stringify_value",
    # Evaluator / strategy
    "MemoryOperator",
    "MemoryOperatorRegistry",
    "build_default_registry",
    # Exceptions
    "SpecificationError",
    "ValidationError",
    "OperatorNotFoundError",
    "FieldNotFoundError",
]
