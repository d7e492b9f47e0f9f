"""Membership: in, not_in."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..evaluator import MemoryOperator
from ..operators import SpecificationOperator
from .standard import coerce_pair


class MembershipOperator(MemoryOperator):
    """``field in values``; a bare string counts as a single value."""

    def __init__(self, *, negate: bool = False) -> None:
        self.negate = negate

    @property
    def name(self) -> SpecificationOperator:
        return SpecificationOperator.NOT_IN if self.negate else SpecificationOperator.IN

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        scalar = isinstance(condition_value, str | bytes)
        if scalar or not isinstance(condition_value, Iterable):
            condition_value = (condition_value,)
        found = any(
            left == right
            for left, right in (
                coerce_pair(field_value, candidate) for candidate in condition_value
            )
        )
        return found != self.negate
