"""Request descriptor and the state handed from build to parse."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class RequestDescriptor:
    """One outbound request, prior to transport.

    ``parameters`` holds ``key=value`` strings in insertion order; values
    are sent verbatim, without re-encoding.
    """

    base_url: str
    path: str
    parameters: tuple[str, ...] = ()
    discriminant: Enum | None = None
    method: str = "GET"

    @property
    def query_string(self) -> str:
        return "&".join(self.parameters)

    @property
    def url(self) -> str:
        url = self.base_url + self.path
        if self.parameters:
            url += "?" + self.query_string
        return url

    def __str__(self) -> str:
        return f"{self.method} {self.url}"


@dataclass(frozen=True)
class ProcessorState:
    """What a processor resolved while building a request.

    Returned alongside the descriptor it informed and required to parse
    that request's response.
    """

    discriminant: Enum
    fields: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)


@dataclass(frozen=True)
class PreparedRequest:
    """Result of a processor's build step."""

    descriptor: RequestDescriptor
    state: ProcessorState

    @property
    def url(self) -> str:
        return self.descriptor.url
