"""
Post-filter evaluation of predicate leaves.

A remote endpoint only honours the equality terms that became request
parameters.  Every record it returns is therefore re-checked against the
full predicate, one ``attr <op> val`` leaf at a time, through the
operators registered here.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .operators import SpecificationOperator

if TYPE_CHECKING:
    from collections.abc import Iterator


class MemoryOperator(ABC):
    """Evaluates one comparison operator against a resolved record value."""

    @property
    @abstractmethod
    def name(self) -> SpecificationOperator:
        ...

    @abstractmethod
    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        """
        Args:
            field_value: Value read from the record (``None`` when absent).
            condition_value: Value written in the predicate.
        """
        ...


class MemoryOperatorRegistry:
    """
    Comparison operators available to the post-filter.

    Operators may be looked up by member or by wire value (``"="``,
    ``"startswith"``...).  Logical operators are never registered: the
    composite specifications combine their children themselves.

    Usage::

        registry = MemoryOperatorRegistry(*comparison_operators())
        registry.evaluate("=", record["ScreenName"], "alice")
    """

    def __init__(self, *operators: MemoryOperator) -> None:
        self._operators: dict[SpecificationOperator, MemoryOperator] = {}
        self.register_all(*operators)

    def register(self, operator: MemoryOperator) -> None:
        """Add *operator*, replacing any previous one with the same name."""
        self._operators[operator.name] = operator

    def register_all(self, *operators: MemoryOperator) -> None:
        for operator in operators:
            self.register(operator)

    def unregister(self, name: SpecificationOperator | str) -> None:
        key = _key(name)
        if key is not None:
            self._operators.pop(key, None)

    def get(self, name: SpecificationOperator | str) -> MemoryOperator | None:
        key = _key(name)
        return self._operators.get(key) if key is not None else None

    def has(self, name: SpecificationOperator | str) -> bool:
        return self.get(name) is not None

    @property
    def supported_operators(self) -> set[SpecificationOperator]:
        return set(self._operators)

    def __iter__(self) -> Iterator[MemoryOperator]:
        return iter(self._operators.values())

    def __len__(self) -> int:
        return len(self._operators)

    def evaluate(
        self,
        name: SpecificationOperator | str,
        field_value: Any,
        condition_value: Any,
    ) -> bool:
        """
        Apply operator *name* to a record value.

        Raises:
            ValueError: No operator is registered under *name*.
        """
        operator = self.get(name)
        if operator is None:
            raise ValueError(f"Unsupported operator for in-memory evaluation: {name}")
        return operator.evaluate(field_value, condition_value)


def _key(name: SpecificationOperator | str) -> SpecificationOperator | None:
    if isinstance(name, SpecificationOperator):
        return name
    try:
        return SpecificationOperator(name.lower())
    except ValueError:
        return None
