"""
Discriminant dispatch strategy.

Each discriminant value of a resource kind owns one self-contained
:class:`RequestStrategy` that knows its path, validates its own bindings
and parses its own responses.  A processor looks strategies up in a
:class:`StrategyTable`; supporting a new discriminant value means
registering a new strategy, never editing an existing one.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from .descriptor import PreparedRequest, ProcessorState, RequestDescriptor
from .exceptions import MissingRequiredFieldError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from enum import Enum

    from .document import ResponseDocument

TRecord = TypeVar("TRecord")


@dataclass(frozen=True)
class QueryParameter:
    """Maps a bound field onto a ``name=value`` query parameter."""

    field: str
    name: str
    required: bool = False


class RequestStrategy(ABC, Generic[TRecord]):
    """
    Build-and-parse routine for one discriminant value.

    Subclasses declare ``path`` and ``parameters`` (checked and emitted
    in declaration order) and implement :meth:`parse`.  Override
    :meth:`resolve_path` when a field becomes part of the path.
    """

    path: str = ""
    parameters: tuple[QueryParameter, ...] = ()

    @property
    @abstractmethod
    def discriminant(self) -> Enum:
        """The discriminant value this strategy handles."""
        ...

    @abstractmethod
    def parse(
        self, document: ResponseDocument, state: ProcessorState
    ) -> list[TRecord]:
        """Turn a response document into result records."""
        ...

    def resolve_path(
        self, bindings: Mapping[str, str], resolved: dict[str, str]
    ) -> str:
        return self.path

    def build(self, bindings: Mapping[str, str], base_url: str) -> PreparedRequest:
        """
        Validate *bindings* and assemble the request.

        Raises:
            MissingRequiredFieldError: For the first required parameter
                (in declaration order) that is not bound.
        """
        resolved: dict[str, str] = {}
        path = self.resolve_path(bindings, resolved)

        query: list[str] = []
        for param in self.parameters:
            if param.field not in bindings:
                if param.required:
                    raise MissingRequiredFieldError(param.field)
                continue
            value = bindings[param.field]
            resolved[param.field] = value
            query.append(f"{param.name}={value}")

        descriptor = RequestDescriptor(
            base_url=base_url,
            path=path,
            parameters=tuple(query),
            discriminant=self.discriminant,
        )
        state = ProcessorState(discriminant=self.discriminant, fields=resolved)
        return PreparedRequest(descriptor=descriptor, state=state)


class StrategyTable(Generic[TRecord]):
    """
    Registry of RequestStrategy instances keyed by discriminant value.

    Usage::

        table = StrategyTable()
        table.register(FriendshipExistsStrategy())

        strategy = table.get(FriendshipType.EXISTS)
    """

    def __init__(self, *strategies: RequestStrategy[TRecord]) -> None:
        self._strategies: dict[Enum, RequestStrategy[TRecord]] = {}
        self.register_all(*strategies)

    def register(self, strategy: RequestStrategy[TRecord]) -> None:
        self._strategies[strategy.discriminant] = strategy

    def register_all(self, *strategies: RequestStrategy[TRecord]) -> None:
        for strategy in strategies:
            self.register(strategy)

    def unregister(self, discriminant: Enum) -> None:
        self._strategies.pop(discriminant, None)

    def get(self, discriminant: Enum) -> RequestStrategy[TRecord] | None:
        return self._strategies.get(discriminant)

    def has(self, discriminant: Enum) -> bool:
        return discriminant in self._strategies

    @property
    def supported_discriminants(self) -> set[Enum]:
        return set(self._strategies.keys())
