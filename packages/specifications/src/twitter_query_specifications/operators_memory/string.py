"""Text matching: contains, startswith, endswith."""

from __future__ import annotations

from typing import Any

from ..evaluator import MemoryOperator
from ..operators import SpecificationOperator

_METHODS = {
    SpecificationOperator.CONTAINS: str.__contains__,
    SpecificationOperator.STARTSWITH: str.startswith,
    SpecificationOperator.ENDSWITH: str.endswith,
}


class TextOperator(MemoryOperator):
    """Matches the text form of a value; a missing field never matches."""

    def __init__(self, name: SpecificationOperator) -> None:
        if name not in _METHODS:
            raise ValueError(f"{name.value!r} is not a text operator")
        self._name = name

    @property
    def name(self) -> SpecificationOperator:
        return self._name

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return bool(_METHODS[self._name](_text(field_value), _text(condition_value)))


def _text(value: Any) -> str:
    # str-valued enums render as their value, not "Type.MEMBER"
    return str(getattr(value, "value", value))


def text_operators() -> list[MemoryOperator]:
    return [TextOperator(name) for name in _METHODS]
