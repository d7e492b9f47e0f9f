"""
Errors raised while building or reading a predicate.

Every error serialises through ``to_dict()``; the "not found" errors
carry close-match suggestions for what the caller probably meant.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


def suggest(
    word: str, candidates: list[str], *, n: int = 3, cutoff: float = 0.6
) -> list[str]:
    """Close matches for *word*, best first."""
    return get_close_matches(word, candidates, n=n, cutoff=cutoff)


class SpecificationError(Exception):
    """Root of the predicate errors."""

    code = "SPECIFICATION_ERROR"

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.__class__.__name__, "message": str(self)}


class ValidationError(SpecificationError):
    """A predicate tree is malformed at ``path`` (e.g. ``<root>.conditions[1]``)."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "message": self.message, "path": self.path}


class OperatorNotFoundError(SpecificationError):
    code = "OPERATOR_NOT_FOUND"

    def __init__(self, operator: str, valid_operators: list[str]) -> None:
        self.operator = operator
        self.valid_operators = sorted(valid_operators)
        self.suggestions = suggest(operator, self.valid_operators)
        hint = ""
        if self.suggestions:
            hint = f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(
            f"Unknown operator '{operator}'.{hint} "
            f"Valid operators: {' '.join(self.valid_operators)}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "operator": self.operator,
            "suggestions": self.suggestions,
            "valid_operators": self.valid_operators,
        }


class FieldNotFoundError(SpecificationError):
    """
    A predicate names a field the resource does not have.

    Raised only when unknown fields are rejected rather than ignored::

        Invalid field 'SubjectUsr' on 'Friendship'.
        Did you mean one of these?
          • SubjectUser

        Available fields: FollowingUser, IsFriend, SubjectUser, Type
    """

    code = "FIELD_NOT_FOUND"
    _PREVIEW = 15

    def __init__(
        self,
        invalid_field: str,
        resource_name: str,
        available_fields: list[str],
        cutoff: float = 0.6,
    ) -> None:
        self.invalid_field = invalid_field
        self.resource_name = resource_name
        self.available_fields = sorted(available_fields)
        self.suggestions = suggest(invalid_field, available_fields, n=5, cutoff=cutoff)
        super().__init__(self._describe())

    def _describe(self) -> str:
        lines = [f"Invalid field '{self.invalid_field}' on '{self.resource_name}'."]
        if self.suggestions:
            lines.append("Did you mean one of these?")
            lines.extend(f"  • {name}" for name in self.suggestions)
        shown = self.available_fields[: self._PREVIEW]
        more = ", ..." if len(self.available_fields) > self._PREVIEW else ""
        lines.append("")
        lines.append(f"Available fields: {', '.join(shown)}{more}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "field": self.invalid_field,
            "resource": self.resource_name,
            "suggestions": self.suggestions,
            "available_fields": self.available_fields,
        }
