"""
Fluent construction of query predicates.

Example::

    spec = (
        SpecificationBuilder()
        .of_type(FriendshipType.EXISTS)
        .where_equal(SubjectUser="alice", FollowingUser="bob")
        .build()
    )
    # Type = Exists AND SubjectUser = alice AND FollowingUser = bob

    spec = (
        SpecificationBuilder()
        .of_type("Followers")
        .or_group()
            .where("Value", "startswith", "1")
            .where("Value", "startswith", "2")
        .end_group()
        .build()
    )
    # Type is sent to the endpoint, the OR group filters the results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .ast import AttributeSpecification
from .base import AndSpecification, ISpecification, NotSpecification, OrSpecification
from .operators_memory import build_default_registry

if TYPE_CHECKING:
    from .evaluator import MemoryOperatorRegistry
    from .operators import SpecificationOperator


@dataclass
class _Frame:
    op: str
    children: list[ISpecification[Any]] = field(default_factory=list)

    def close(self) -> ISpecification[Any]:
        if not self.children:
            raise ValueError("Cannot create an empty group")
        if self.op == "not":
            if len(self.children) != 1:
                raise ValueError("NOT group must contain exactly one condition")
            return NotSpecification(self.children[0])
        if len(self.children) == 1:
            return self.children[0]
        if self.op == "or":
            return OrSpecification(*self.children)
        return AndSpecification(*self.children)


class SpecificationBuilder:
    """
    Builds a predicate one condition at a time.

    Conditions at the same level are joined with AND.  ``or_group()``,
    ``and_group()`` and ``not_group()`` open a nested level that
    ``end_group()`` closes.
    """

    def __init__(self, registry: MemoryOperatorRegistry | None = None) -> None:
        self._registry = registry if registry is not None else build_default_registry()
        self._frames: list[_Frame] = [_Frame("and")]

    # -- conditions ----------------------------------------------------------

    def where(
        self,
        attr: str,
        op: SpecificationOperator | str,
        val: Any = None,
    ) -> SpecificationBuilder:
        return self.add(AttributeSpecification(attr, op, val, registry=self._registry))

    def where_equal(self, **fields: Any) -> SpecificationBuilder:
        """One equality condition per keyword, in keyword order."""
        for attr, val in fields.items():
            self.where(attr, "=", val)
        return self

    def of_type(self, value: Any, *, field_name: str = "Type") -> SpecificationBuilder:
        """Select the query kind (the resource's discriminant field)."""
        return self.where(field_name, "=", value)

    def add(self, spec: ISpecification[Any]) -> SpecificationBuilder:
        self._frames[-1].children.append(spec)
        return self

    # -- grouping ------------------------------------------------------------

    def and_group(self) -> SpecificationBuilder:
        return self._open("and")

    def or_group(self) -> SpecificationBuilder:
        return self._open("or")

    def not_group(self) -> SpecificationBuilder:
        """Negates the single condition added before ``end_group()``."""
        return self._open("not")

    def end_group(self) -> SpecificationBuilder:
        if len(self._frames) == 1:
            raise ValueError("No open group to close")
        closed = self._frames.pop().close()
        return self.add(closed)

    # -- result --------------------------------------------------------------

    def build(self) -> ISpecification[Any]:
        """
        Return the predicate built so far.

        Raises:
            ValueError: A group is still open, or nothing was added.
        """
        open_groups = len(self._frames) - 1
        if open_groups:
            raise ValueError(
                f"{open_groups} group(s) still open, call end_group() before build()"
            )
        if not self._frames[0].children:
            raise ValueError("No conditions added to builder")
        return self._frames[0].close()

    def reset(self) -> SpecificationBuilder:
        self._frames = [_Frame("and")]
        return self

    def _open(self, op: str) -> SpecificationBuilder:
        self._frames.append(_Frame(op))
        return self
