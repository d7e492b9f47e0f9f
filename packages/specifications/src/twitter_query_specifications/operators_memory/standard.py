"""Equality and ordering comparisons."""

from __future__ import annotations

import operator
from enum import Enum
from numbers import Number
from typing import TYPE_CHECKING, Any

from ..evaluator import MemoryOperator
from ..operators import SpecificationOperator

if TYPE_CHECKING:
    from collections.abc import Callable


def coerce_pair(field_value: Any, condition_value: Any) -> tuple[Any, Any]:
    """Bring a record value and a predicate value onto the same type.

    Response documents carry every value as text (user ids, page numbers),
    while predicates are usually written with ints.  An enum field also
    matches a predicate naming its member (``"EXISTS"`` for ``Exists``),
    the same spellings a processor accepts for its discriminant.
    """
    if isinstance(field_value, Enum) and isinstance(condition_value, str):
        members = type(field_value).__members__
        named = condition_value in members
        if named and not _is_value_of(field_value, condition_value):
            return field_value, members[condition_value]
        return field_value, condition_value
    if isinstance(field_value, str) and _is_number(condition_value):
        try:
            return type(condition_value)(field_value), condition_value
        except ValueError:
            return field_value, condition_value
    if _is_number(field_value) and isinstance(condition_value, str):
        try:
            return field_value, type(field_value)(condition_value)
        except ValueError:
            return field_value, condition_value
    return field_value, condition_value


def _is_value_of(member: Enum, text: str) -> bool:
    return any(m.value == text for m in type(member))


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


class ComparisonOperator(MemoryOperator):
    """
    A binary comparison after :func:`coerce_pair`.

    Ordering comparisons are false for a record that lacks the field.
    """

    def __init__(
        self,
        name: SpecificationOperator,
        compare: Callable[[Any, Any], Any],
        *,
        ordering: bool = True,
    ) -> None:
        self._name = name
        self._compare = compare
        self.ordering = ordering

    @property
    def name(self) -> SpecificationOperator:
        return self._name

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if self.ordering and field_value is None:
            return False
        return bool(self._compare(*coerce_pair(field_value, condition_value)))

    def __repr__(self) -> str:
        return f"ComparisonOperator({self._name.value!r})"


def comparison_operators() -> list[MemoryOperator]:
    return [
        ComparisonOperator(SpecificationOperator.EQ, operator.eq, ordering=False),
        ComparisonOperator(SpecificationOperator.NE, operator.ne, ordering=False),
        ComparisonOperator(SpecificationOperator.GT, operator.gt),
        ComparisonOperator(SpecificationOperator.LT, operator.lt),
        ComparisonOperator(SpecificationOperator.GE, operator.ge),
        ComparisonOperator(SpecificationOperator.LE, operator.le),
    ]
