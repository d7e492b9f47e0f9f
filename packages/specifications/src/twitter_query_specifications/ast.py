from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .base import (
    AndSpecification,
    BaseSpecification,
    ISpecification,
    NotSpecification,
    OrSpecification,
)
from .exceptions import OperatorNotFoundError, ValidationError
from .operators import SpecificationOperator

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from .evaluator import MemoryOperatorRegistry

T = TypeVar("T", contravariant=True)

_NOT = SpecificationOperator.NOT.value
_COMPOSITES = {
    SpecificationOperator.AND.value: AndSpecification,
    SpecificationOperator.OR.value: OrSpecification,
}
_COMPARISONS = SpecificationOperator.term_operators()


class AttributeSpecification(BaseSpecification[T]):
    """
    One ``attr <op> val`` term.

    Request processors read these leaves for parameter bindings.  When a
    record is checked, ``attr`` is looked up on the candidate (a key for
    mappings such as ``model_dump(by_alias=True)`` output, an attribute
    otherwise) and compared through the injected registry.
    """

    def __init__(
        self,
        attr: str,
        op: SpecificationOperator | str,
        val: Any,
        *,
        registry: MemoryOperatorRegistry,
    ) -> None:
        if registry is None:
            raise ValueError(
                "registry parameter is required. "
                "Use build_default_registry() from operators_memory to create one."
            )
        self.attr = attr
        self.op = SpecificationOperator(op.lower() if isinstance(op, str) else op)
        self.val = val
        self._registry = registry

    def is_satisfied_by(self, candidate: T) -> bool:
        actual = resolve(candidate, self.attr)
        return self._registry.evaluate(self.op, actual, self.val)

    def to_dict(self) -> dict[str, Any]:
        return {"op": self.op.value, "attr": self.attr, "val": self.val}

    def __repr__(self) -> str:
        return f"AttributeSpecification({self.attr!r} {self.op.value} {self.val!r})"


def resolve(candidate: Any, path: str) -> Any:
    """
    Read a dotted *path* from *candidate*.

    A missing step yields ``None``.  Reaching a list or tuple maps the rest
    of the path over its items.
    """
    value = candidate
    parts = path.split(".")
    for index, part in enumerate(parts):
        if value is None:
            return None
        if isinstance(value, list | tuple):
            rest = ".".join(parts[index:])
            return [resolve(item, rest) for item in value]
        if isinstance(value, dict):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


@dataclass(frozen=True)
class _Problem:
    path: str
    message: str
    operator: str | None = None

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class _TreeChecker:
    """Walks a dict predicate and yields every structural problem found."""

    def __init__(self, allowed_fields: Sequence[str] | None) -> None:
        self.allowed_fields = allowed_fields

    def check(self, node: Any, path: str) -> Iterator[_Problem]:
        if not isinstance(node, dict):
            yield _Problem(path, f"expected dict, got {type(node).__name__}")
            return
        op = node.get("op")
        if not op or not isinstance(op, str):
            yield _Problem(path, "missing or empty 'op' key")
            return
        op = op.lower()
        if op in _COMPOSITES or op == _NOT:
            yield from self._check_children(node, op, path)
            return
        if op not in _COMPARISONS:
            yield _Problem(path, f"unknown operator '{op}'", operator=op)
        attr = node.get("attr")
        if not attr or not isinstance(attr, str):
            yield _Problem(path, "missing 'attr'")
        elif self.allowed_fields is not None and attr not in self.allowed_fields:
            yield _Problem(path, f"field '{attr}' not allowed")

    def _check_children(
        self, node: dict[str, Any], op: str, path: str
    ) -> Iterator[_Problem]:
        if "conditions" not in node or not node["conditions"]:
            if "condition" in node:
                yield from self.check(node["condition"], f"{path}.condition")
            else:
                yield _Problem(path, f"logical '{op}' requires 'conditions'")
            return
        conditions = node["conditions"]
        if not isinstance(conditions, list):
            yield _Problem(path, "'conditions' must be a list")
            return
        if op == _NOT and len(conditions) != 1:
            yield _Problem(path, "'not' takes exactly one condition")
            return
        for index, child in enumerate(conditions):
            yield from self.check(child, f"{path}.conditions[{index}]")


class SpecificationFactory(Generic[T]):
    """
    Builds predicates from their ``to_dict()`` form.

    Predicates arrive this way from configuration files or API callers;
    ``from_dict(spec.to_dict())`` rebuilds an equivalent tree.
    """

    @staticmethod
    def from_dict(
        data: dict[str, Any],
        *,
        allowed_fields: Sequence[str] | None = None,
        registry: MemoryOperatorRegistry,
    ) -> ISpecification[T]:
        """
        Validate *data* and build the predicate tree.

        Raises:
            OperatorNotFoundError: A leaf uses an unknown operator.
            ValidationError: Any other structural problem, with its path.
        """
        problem = next(_TreeChecker(allowed_fields).check(data, "<root>"), None)
        if problem is not None:
            if problem.operator is not None:
                raise OperatorNotFoundError(
                    problem.operator, [m.value for m in SpecificationOperator]
                )
            raise ValidationError(problem.message, path=problem.path)
        return _build(data, registry)

    @staticmethod
    def from_json(
        text: str,
        *,
        allowed_fields: Sequence[str] | None = None,
        registry: MemoryOperatorRegistry,
    ) -> ISpecification[T]:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Invalid JSON: {exc}", path="<root>") from exc
        if not isinstance(data, dict):
            raise ValidationError(
                "Top-level JSON value must be an object", path="<root>"
            )
        return SpecificationFactory.from_dict(
            data, allowed_fields=allowed_fields, registry=registry
        )

    @staticmethod
    def validate(
        data: dict[str, Any],
        *,
        allowed_fields: Sequence[str] | None = None,
    ) -> list[str]:
        """Every problem as ``"<path>: <message>"``; empty when *data* is valid."""
        return [str(p) for p in _TreeChecker(allowed_fields).check(data, "<root>")]


def _build(
    data: dict[str, Any], registry: MemoryOperatorRegistry
) -> ISpecification[Any]:
    op = data["op"].lower()
    if op not in _COMPOSITES and op != _NOT:
        return AttributeSpecification(
            data["attr"], op, data.get("val"), registry=registry
        )
    nodes = data.get("conditions") or [data["condition"]]
    children = [_build(node, registry) for node in nodes]
    if op == _NOT:
        return NotSpecification(children[0])
    return _COMPOSITES[op](*children)
