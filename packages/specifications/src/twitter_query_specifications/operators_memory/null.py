"""Presence checks: is_null, is_not_null."""

from __future__ import annotations

from typing import Any

from ..evaluator import MemoryOperator
from ..operators import SpecificationOperator


class NullCheckOperator(MemoryOperator):
    """Tests whether the record carries a value; the predicate value is unused."""

    def __init__(self, *, expect_null: bool) -> None:
        self.expect_null = expect_null

    @property
    def name(self) -> SpecificationOperator:
        if self.expect_null:
            return SpecificationOperator.IS_NULL
        return SpecificationOperator.IS_NOT_NULL

    def evaluate(self, field_value: Any, _condition_value: Any) -> bool:
        return (field_value is None) == self.expect_null
