"""RequestProcessor: the contract every resource kind implements."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from twitter_query_specifications import ParameterBinder

from .config import TwitterQueryConfig
from .document import ResponseDocument
from .exceptions import (
    InvalidEnumValueError,
    MissingRequiredFieldError,
    OutOfSequenceCallError,
    UnhandledDiscriminantError,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pydantic import BaseModel
    from twitter_query_specifications import ISpecification

    from .descriptor import PreparedRequest, ProcessorState
    from .strategy import RequestStrategy, StrategyTable

logger = logging.getLogger(__name__)

TRecord = TypeVar("TRecord")
TEnum = TypeVar("TEnum", bound=Enum)


class ProcessorPhase(str, Enum):
    """Where a processor instance is in its query cycle."""

    IDLE = "idle"
    BOUND = "bound"
    CONFIGURED = "configured"


def parse_enum(enum_type: type[TEnum], value: str, field: str) -> TEnum:
    """Match *value* exactly against the values, then the names, of *enum_type*."""
    for member in enum_type:
        if value == member.value:
            return member
    for member in enum_type:
        if value == member.name:
            return member
    raise InvalidEnumValueError(field, value, [str(m.value) for m in enum_type])


class RequestProcessor(ABC, Generic[TRecord]):
    """
    Translate one resource kind's queries into requests and back.

    Subclasses declare the resource vocabulary as class attributes and
    provide their :class:`StrategyTable`; the cycle itself lives here:

    ``extract_parameters`` → ``build_request`` → (transport) →
    ``parse_response``.

    ``build_request`` returns the :class:`ProcessorState` together with
    the descriptor; pass it back to ``parse_response`` explicitly, or let
    the processor use the state of its last build.  An instance serves one
    in-flight query at a time.
    """

    resource_name: ClassVar[str]
    record_type: ClassVar[type[BaseModel]]
    discriminant_type: ClassVar[type[Enum]]
    discriminant_field: ClassVar[str] = "Type"
    recognized_fields: ClassVar[tuple[str, ...]]

    def __init__(
        self,
        config: TwitterQueryConfig | None = None,
        *,
        strategies: StrategyTable[TRecord] | None = None,
    ) -> None:
        self.config = config or TwitterQueryConfig()
        self._strategies = (
            strategies if strategies is not None else self.default_strategies()
        )
        self._state: ProcessorState | None = None
        self._phase = ProcessorPhase.IDLE

    @classmethod
    @abstractmethod
    def default_strategies(cls) -> StrategyTable[TRecord]:
        """Return a fresh table with one strategy per discriminant value."""
        ...

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def phase(self) -> ProcessorPhase:
        return self._phase

    @property
    def state(self) -> ProcessorState | None:
        """State of the last build, until a response is parsed with it."""
        return self._state

    @classmethod
    def known_fields(cls) -> tuple[str, ...]:
        """Recognized fields plus every published field of the record type."""
        names = list(cls.recognized_fields)
        for name, info in cls.record_type.model_fields.items():
            alias = info.alias or name
            if alias not in names:
                names.append(alias)
        return tuple(names)

    # -- extract ---------------------------------------------------------------

    def extract_parameters(
        self, specification: ISpecification[Any] | Mapping[str, Any] | None
    ) -> Mapping[str, str]:
        """Return the recognized ``field → value`` bindings of *specification*."""
        binder = ParameterBinder(
            self.recognized_fields,
            known_fields=self.known_fields(),
            strict=self.config.strict_parameters,
            resource_name=self.resource_name,
        )
        bindings = binder.bind(specification)
        self._phase = ProcessorPhase.BOUND
        return bindings

    # -- build -----------------------------------------------------------------

    def build_request(self, bindings: Mapping[str, str] | None) -> PreparedRequest:
        """
        Validate *bindings* and build the request for their discriminant.

        Any state from an earlier build is dropped first, so a failed build
        leaves nothing for ``parse_response`` to use.

        Raises:
            MissingRequiredFieldError: The discriminant, or a field the
                selected strategy requires, is not bound.
            InvalidEnumValueError: The discriminant value is unknown.
            UnhandledDiscriminantError: The discriminant has no strategy.
        """
        self._state = None
        self._phase = ProcessorPhase.IDLE
        if not bindings or self.discriminant_field not in bindings:
            raise MissingRequiredFieldError(self.discriminant_field)

        discriminant = parse_enum(
            self.discriminant_type,
            bindings[self.discriminant_field],
            self.discriminant_field,
        )
        strategy = self._strategy_for(discriminant)
        prepared = strategy.build(bindings, self.base_url)

        self._state = prepared.state
        self._phase = ProcessorPhase.CONFIGURED
        logger.debug(
            "%s built %s for %s",
            type(self).__name__,
            prepared.descriptor,
            discriminant.value,
        )
        return prepared

    # -- parse -----------------------------------------------------------------

    def parse_response(
        self,
        document: ResponseDocument | str | bytes,
        state: ProcessorState | None = None,
    ) -> list[TRecord]:
        """
        Parse *document* into result records.

        Uses *state* when given, otherwise the state of the last
        ``build_request``; that remembered state is consumed either way,
        so it never informs a second response.

        Raises:
            OutOfSequenceCallError: No state is given or remembered.
            MalformedResponseError: The body does not match the strategy.
        """
        remembered, self._state = self._state, None
        self._phase = ProcessorPhase.IDLE
        if state is None:
            state = remembered
        if state is None:
            raise OutOfSequenceCallError(
                type(self).__name__, "parse_response", "build_request"
            )

        strategy = self._strategy_for(state.discriminant)
        return strategy.parse(ResponseDocument.coerce(document), state)

    def _strategy_for(self, discriminant: Enum) -> RequestStrategy[TRecord]:
        strategy = self._strategies.get(discriminant)
        if strategy is None:
            raise UnhandledDiscriminantError(type(self).__name__, discriminant)
        return strategy
