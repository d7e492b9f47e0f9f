"""
Find the request parameters a predicate pins down.

A remote endpoint can only be asked for exact values, so the binder
looks for equality terms on the fields a resource recognises and turns
them into ``name → string`` bindings.  Everything else in the predicate
(ranges, OR/NOT groups, unknown fields) is left for in-memory filtering.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .exceptions import FieldNotFoundError, ValidationError
from .operators import SpecificationOperator

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .base import ISpecification

logger = logging.getLogger(__name__)


def stringify_value(value: Any) -> str:
    """Render a predicate value the way it is sent on the wire."""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ParameterBinder:
    """
    Extract ``field → value`` bindings from a predicate.

    Only ``AND`` composites are descended: a term under ``OR`` or ``NOT``
    cannot be expressed as a single request parameter.

    Parameters
    ----------
    recognized_fields:
        Field names that may become bindings.
    known_fields:
        Every field name a predicate may legitimately mention (defaults to
        ``recognized_fields``).  Only consulted in strict mode.
    strict:
        When ``True``, any term on a field outside ``known_fields`` raises
        :class:`FieldNotFoundError` instead of being ignored.
    resource_name:
        Used in error messages.
    """

    def __init__(
        self,
        recognized_fields: Iterable[str],
        *,
        known_fields: Iterable[str] | None = None,
        strict: bool = False,
        resource_name: str = "resource",
    ) -> None:
        self.recognized_fields: tuple[str, ...] = tuple(recognized_fields)
        self.known_fields: tuple[str, ...] = (
            tuple(known_fields) if known_fields is not None else self.recognized_fields
        )
        self.strict = strict
        self.resource_name = resource_name

    def bind(
        self, specification: ISpecification[Any] | Mapping[str, Any] | None
    ) -> MappingProxyType[str, str]:
        """Return the bindings found in *specification* (empty if none)."""
        bindings: dict[str, str] = {}
        if specification is None:
            return MappingProxyType(bindings)

        data = (
            dict(specification)
            if isinstance(specification, Mapping)
            else specification.to_dict()  # type: ignore[union-attr]
        )
        if self.strict:
            self._check_known(data)
        self._collect(data, bindings, path="<root>")
        logger.debug(
            "Bound %s parameters for %s: %s",
            len(bindings),
            self.resource_name,
            sorted(bindings),
        )
        return MappingProxyType(bindings)

    def _collect(self, node: Any, bindings: dict[str, str], *, path: str) -> None:
        if not isinstance(node, dict):
            return
        op = str(node.get("op", "")).lower()

        if op == SpecificationOperator.AND:
            for idx, child in enumerate(node.get("conditions", [])):
                self._collect(child, bindings, path=f"{path}.conditions[{idx}]")
            return
        if op != SpecificationOperator.EQ:
            return

        attr = node.get("attr")
        if attr not in self.recognized_fields or node.get("val") is None:
            return

        value = stringify_value(node["val"])
        existing = bindings.get(attr)
        if existing is not None and existing != value:
            raise ValidationError(
                f"Conflicting values for '{attr}': {existing!r} and {value!r}",
                path=path,
            )
        bindings[attr] = value

    def _check_known(self, node: Any) -> None:
        if not isinstance(node, dict):
            return
        if "attr" in node:
            attr = node["attr"]
            if attr not in self.known_fields:
                raise FieldNotFoundError(
                    attr, self.resource_name, list(self.known_fields)
                )
            return
        for child in node.get("conditions", []):
            self._check_known(child)
        if "condition" in node:
            self._check_known(node["condition"])
