"""Turn query predicates into Twitter REST requests and parse the typed results."""

from __future__ import annotations

from .adapters import HttpxTransport, InMemoryTransport
from .config import TwitterQueryConfig
from .descriptor import PreparedRequest, ProcessorState, RequestDescriptor
from .document import ResponseDocument
from .exceptions import (
    InvalidEnumValueError,
    MalformedResponseError,
    MissingRequiredFieldError,
    OutOfSequenceCallError,
    ProcessorNotFoundError,
    ProcessorRegistrationError,
    QueryValidationError,
    TransportError,
    TwitterQueryError,
    UnhandledDiscriminantError,
)
from .executor import QueryExecutor
from .ports import ITransport
from .processor import ProcessorPhase, RequestProcessor, parse_enum
from .processors import (
    Friendship,
    FriendshipRequestProcessor,
    FriendshipType,
    SocialGraph,
    SocialGraphRequestProcessor,
    SocialGraphType,
)
from .registry import ProcessorRegistry, build_default_processor_registry
from .strategy import QueryParameter, RequestStrategy, StrategyTable

__all__ = [
    # Contract
    "RequestProcessor",
    "ProcessorPhase",
    "RequestStrategy",
    "StrategyTable",
    "QueryParameter",
    "parse_enum",
    # Data
    "RequestDescriptor",
    "ProcessorState",
    "PreparedRequest",
    "ResponseDocument",
    # Processors
    "Friendship",
    "FriendshipType",
    "FriendshipRequestProcessor",
    "SocialGraph",
    "SocialGraphType",
    "SocialGraphRequestProcessor",
    # Dispatch
    "ProcessorRegistry",
    "build_default_processor_registry",
    "QueryExecutor",
    "TwitterQueryConfig",
    # Transport
    "ITransport",
    "HttpxTransport",
    "InMemoryTransport",
    # Exceptions
    "TwitterQueryError",
    "QueryValidationError",
    "MissingRequiredFieldError",
    "InvalidEnumValueError",
    "UnhandledDiscriminantError",
    "MalformedResponseError",
    "OutOfSequenceCallError",
    "ProcessorNotFoundError",
    "ProcessorRegistrationError",
    "TransportError",
]
