"""Wire names of the predicate operators, as they appear in ``to_dict()``."""

from __future__ import annotations

from enum import Enum


class SpecificationOperator(str, Enum):
    """
    Operators a predicate term or group may use.

    Only ``=`` under AND becomes a request parameter; the rest are
    applied to returned records by the in-memory registry.
    """

    EQ = "="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="

    IN = "in"
    NOT_IN = "not_in"

    CONTAINS = "contains"
    STARTSWITH = "startswith"
    ENDSWITH = "endswith"

    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"

    # groups
    AND = "and"
    OR = "or"
    NOT = "not"

    @property
    def is_logical(self) -> bool:
        return self in _LOGICAL

    @classmethod
    def term_operators(cls) -> frozenset[str]:
        """Wire names usable on a single ``attr <op> val`` term."""
        return frozenset(m.value for m in cls if not m.is_logical)


_LOGICAL = frozenset(
    {SpecificationOperator.AND, SpecificationOperator.OR, SpecificationOperator.NOT}
)
