"""ProcessorRegistry: record type → request processor factory."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .config import TwitterQueryConfig
from .exceptions import ProcessorNotFoundError, ProcessorRegistrationError
from .processors import FriendshipRequestProcessor, SocialGraphRequestProcessor

if TYPE_CHECKING:
    from collections.abc import Callable

    from .processor import RequestProcessor

logger = logging.getLogger(__name__)


class ProcessorRegistry:
    """Selects the request processor for a result-record type.

    Factories are registered rather than instances: a processor keeps the
    state of the query it is serving, so :meth:`create` hands out a fresh
    one per query.

    **Conflict detection:** registering a second, different factory for
    the same record type raises :class:`ProcessorRegistrationError`.
    """

    def __init__(self) -> None:
        self._factories: dict[type[Any], Callable[[], RequestProcessor[Any]]] = {}

    def register(
        self,
        record_type: type[Any],
        factory: Callable[[], RequestProcessor[Any]],
    ) -> None:
        existing = self._factories.get(record_type)
        if existing is not None and existing is not factory:
            msg = (
                f"Duplicate request processor for {record_type.__name__}: "
                f"{_describe(existing)} already registered, "
                f"cannot register {_describe(factory)}"
            )
            raise ProcessorRegistrationError(msg)
        self._factories[record_type] = factory
        logger.debug(
            "Registered request processor %s -> %s",
            record_type.__name__,
            _describe(factory),
        )

    def create(self, record_type: type[Any]) -> RequestProcessor[Any]:
        """Return a new processor for *record_type*."""
        factory = self._factories.get(record_type)
        if factory is None:
            raise ProcessorNotFoundError(
                record_type, [t.__name__ for t in self._factories]
            )
        return factory()

    def has(self, record_type: type[Any]) -> bool:
        return record_type in self._factories

    @property
    def record_types(self) -> list[type[Any]]:
        return list(self._factories)


def _describe(factory: Callable[..., Any]) -> str:
    return getattr(factory, "__name__", type(factory).__name__)


def build_default_processor_registry(
    config: TwitterQueryConfig | None = None,
) -> ProcessorRegistry:
    """Create a registry with every built-in processor bound to *config*."""
    config = config or TwitterQueryConfig()
    registry = ProcessorRegistry()
    for processor_cls in (FriendshipRequestProcessor, SocialGraphRequestProcessor):
        registry.register(
            processor_cls.record_type,
            _bind_config(processor_cls, config),
        )
    return registry


def _bind_config(
    processor_cls: type[RequestProcessor[Any]], config: TwitterQueryConfig
) -> Callable[[], RequestProcessor[Any]]:
    def factory() -> RequestProcessor[Any]:
        return processor_cls(config)

    factory.__name__ = processor_cls.__name__
    return factory
