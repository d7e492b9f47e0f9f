"""Predicate protocol and the AND / OR / NOT composites."""

from __future__ import annotations

from typing import Any, ClassVar, Generic, Protocol, TypeVar, runtime_checkable

T = TypeVar("T", contravariant=True)


@runtime_checkable
class ISpecification(Protocol[T]):
    """
    A query predicate.

    Request processors read its ``to_dict()`` tree to find parameter
    bindings; the executor calls ``is_satisfied_by`` on every returned
    record for the terms the endpoint could not express.
    """

    def is_satisfied_by(self, candidate: T) -> bool: ...

    def to_dict(self) -> dict[str, Any]: ...


class BaseSpecification(Generic[T]):
    """Adds ``&``, ``|`` and ``~`` to a predicate."""

    def is_satisfied_by(self, candidate: T) -> bool:
        raise NotImplementedError

    def to_dict(self) -> dict[str, Any]:
        raise NotImplementedError

    def __and__(self, other: ISpecification[T]) -> AndSpecification[T]:
        return AndSpecification(self, other)

    def __or__(self, other: ISpecification[T]) -> OrSpecification[T]:
        return OrSpecification(self, other)

    def __invert__(self) -> NotSpecification[T]:
        return NotSpecification(self)

    def merge(self, other: ISpecification[T]) -> AndSpecification[T]:
        """Narrow this predicate by *other*, like chaining a second ``where``."""
        return AndSpecification(self, other)


class _Composite(BaseSpecification[T]):
    op: ClassVar[str]

    def __init__(self, *specifications: ISpecification[T]) -> None:
        flat: list[ISpecification[T]] = []
        for spec in specifications:
            # a AND (b AND c) is a AND b AND c; same for OR
            if type(spec) is type(self):
                flat.extend(spec.specifications)  # type: ignore[attr-defined]
            else:
                flat.append(spec)
        self.specifications: tuple[ISpecification[T], ...] = tuple(flat)

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": self.op,
            "conditions": [spec.to_dict() for spec in self.specifications],
        }

    def __repr__(self) -> str:
        inner = f" {self.op.upper()} ".join(repr(s) for s in self.specifications)
        return f"({inner})"


class AndSpecification(_Composite[T]):
    """Every child must hold.  Nested ANDs are flattened into one level."""

    op = "and"

    def is_satisfied_by(self, candidate: T) -> bool:
        return all(spec.is_satisfied_by(candidate) for spec in self.specifications)


class OrSpecification(_Composite[T]):
    """At least one child must hold."""

    op = "or"

    def is_satisfied_by(self, candidate: T) -> bool:
        return any(spec.is_satisfied_by(candidate) for spec in self.specifications)


class NotSpecification(BaseSpecification[T]):
    def __init__(self, specification: ISpecification[T]) -> None:
        self.specification = specification

    def is_satisfied_by(self, candidate: T) -> bool:
        return not self.specification.is_satisfied_by(candidate)

    def to_dict(self) -> dict[str, Any]:
        return {"op": "not", "conditions": [self.specification.to_dict()]}

    def __repr__(self) -> str:
        return f"NOT {self.specification!r}"
