"""
Built-in post-filter operators.

Usage::

    from twitter_query_specifications.operators_memory import build_default_registry

    registry = build_default_registry()
    registry.evaluate("startswith", record["ScreenName"], "al")
"""

from __future__ import annotations

from ..evaluator import MemoryOperatorRegistry
from .null import NullCheckOperator
from .set import MembershipOperator
from .standard import ComparisonOperator, coerce_pair, comparison_operators
from .string import TextOperator, text_operators


def build_default_registry() -> MemoryOperatorRegistry:
    """Return a new registry holding every built-in comparison operator.

    Each call builds a fresh instance, so callers may register or remove
    operators without affecting one another.
    """
    return MemoryOperatorRegistry(
        *comparison_operators(),
        MembershipOperator(),
        MembershipOperator(negate=True),
        *text_operators(),
        NullCheckOperator(expect_null=True),
        NullCheckOperator(expect_null=False),
    )


__all__ = [
    "build_default_registry",
    "coerce_pair",
    "ComparisonOperator",
    "MembershipOperator",
    "MemoryOperatorRegistry",
    "NullCheckOperator",
    "TextOperator",
]
