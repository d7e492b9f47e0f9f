"""Request translation exceptions.

Every error names the offending field or value and exposes ``to_dict()``
for API-friendly error responses.
"""

from __future__ import annotations

from typing import Any

from twitter_query_specifications.exceptions import suggest


class TwitterQueryError(Exception):
    """Root exception for request translation."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class QueryValidationError(TwitterQueryError):
    """The query cannot be turned into a request; the caller must fix it."""


class MissingRequiredFieldError(QueryValidationError):
    """A field required by the selected request strategy was not bound."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"{field} is required.")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "MISSING_REQUIRED_FIELD",
            "field": self.field,
        }


class InvalidEnumValueError(QueryValidationError):
    """
    A discriminant value does not name any member of its enumeration.

    Provides fuzzy-matched suggestions for likely intended values.
    """

    def __init__(self, field: str, value: str, valid_values: list[str]) -> None:
        self.field = field
        self.value = value
        self.valid_values = valid_values
        self.suggestions = suggest(value, valid_values)

        message = f"Invalid value {value!r} for {field}."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        message += f" Valid values: {', '.join(valid_values)}"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_ENUM_VALUE",
            "field": self.field,
            "value": self.value,
            "suggestions": self.suggestions,
            "valid_values": list(self.valid_values),
        }


class UnhandledDiscriminantError(TwitterQueryError):
    """A valid discriminant has no request strategy registered.

    Signals a defect (an enum member was added without a strategy),
    never bad input.
    """

    def __init__(self, processor: str, discriminant: object) -> None:
        self.processor = processor
        self.discriminant = discriminant
        super().__init__(
            f"{processor} has no request strategy for {discriminant!r}; "
            f"every discriminant value must be registered"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNHANDLED_DISCRIMINANT",
            "processor": self.processor,
            "discriminant": str(self.discriminant),
        }


class MalformedResponseError(TwitterQueryError):
    """The response body does not have the shape the strategy expects."""

    _PREVIEW_LENGTH = 80

    def __init__(self, body: str, expected: str) -> None:
        self.body = body
        self.expected = expected
        preview = body[: self._PREVIEW_LENGTH]
        if len(body) > self._PREVIEW_LENGTH:
            preview += "..."
        super().__init__(f"Malformed response, expected {expected}: {preview!r}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "MALFORMED_RESPONSE",
            "expected": self.expected,
            "body": self.body,
        }


class OutOfSequenceCallError(TwitterQueryError):
    """A processor operation was called before the one it depends on."""

    def __init__(self, processor: str, operation: str, requires: str) -> None:
        self.processor = processor
        self.operation = operation
        self.requires = requires
        super().__init__(
            f"{processor}.{operation}() called before {requires}(); "
            f"no request state is available"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "OUT_OF_SEQUENCE_CALL",
            "processor": self.processor,
            "operation": self.operation,
            "requires": self.requires,
        }


class ProcessorNotFoundError(TwitterQueryError):
    """No processor is registered for the requested record type."""

    def __init__(self, record_type: type[Any], available: list[str]) -> None:
        self.record_type = record_type
        self.available = available
        super().__init__(
            f"No request processor registered for {record_type.__name__}. "
            f"Registered: {', '.join(sorted(available)) or '<none>'}"
        )


class ProcessorRegistrationError(TwitterQueryError):
    """Raised when a conflicting processor registration is detected."""


class TransportError(TwitterQueryError):
    """The HTTP exchange failed before a response document was available."""

    def __init__(
        self, url: str, message: str, status_code: int | None = None
    ) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(f"{message} ({url})")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "TRANSPORT_ERROR",
            "url": self.url,
            "status_code": self.status_code,
            "message": str(self),
        }
