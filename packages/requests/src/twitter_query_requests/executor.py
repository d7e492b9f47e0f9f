"""QueryExecutor: runs a predicate against the remote endpoint."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from twitter_query_specifications import SpecificationFactory, build_default_registry

from .registry import build_default_processor_registry

if TYPE_CHECKING:
    from pydantic import BaseModel
    from twitter_query_specifications import ISpecification, MemoryOperatorRegistry

    from .config import TwitterQueryConfig
    from .descriptor import PreparedRequest
    from .ports import ITransport
    from .processor import RequestProcessor
    from .registry import ProcessorRegistry

logger = logging.getLogger(__name__)

TRecord = TypeVar("TRecord", bound="BaseModel")


class QueryExecutor:
    """Dispatches queries to request processors and a transport.

    For each query a fresh processor is created, the predicate's bindings
    become a request, the transport fetches the response and the
    processor parses it.  Terms the endpoint could not express are then
    applied to the records in memory.

    Parameters
    ----------
    transport:
        :class:`~twitter_query_requests.ports.ITransport` implementation.
    registry:
        Processor registry; defaults to every built-in processor bound to
        *config*.
    config:
        Used only to build the default registry.
    operator_registry:
        In-memory operators for predicates given as dicts.
    """

    def __init__(
        self,
        transport: ITransport,
        registry: ProcessorRegistry | None = None,
        *,
        config: TwitterQueryConfig | None = None,
        operator_registry: MemoryOperatorRegistry | None = None,
    ) -> None:
        self._transport = transport
        self._registry = registry or build_default_processor_registry(config)
        self._operators = operator_registry or build_default_registry()

    async def execute(
        self,
        record_type: type[TRecord],
        specification: ISpecification[Any] | Mapping[str, Any],
    ) -> list[TRecord]:
        """Return the records of *record_type* that satisfy *specification*."""
        spec = self._as_specification(specification)
        processor: RequestProcessor[TRecord] = self._registry.create(record_type)
        bindings = processor.extract_parameters(spec)
        prepared = processor.build_request(bindings)
        records = await self.execute_prepared(processor, prepared)
        post_filter = self._post_filter(spec, processor.known_fields())
        if post_filter is None:
            return records
        return [
            record
            for record in records
            if post_filter.is_satisfied_by(record.model_dump(by_alias=True))
        ]

    async def execute_prepared(
        self,
        processor: RequestProcessor[TRecord],
        prepared: PreparedRequest,
    ) -> list[TRecord]:
        """Send an already-built request and parse its response."""
        name = processor.resource_name
        logger.info("Executing %s query: %s", name, prepared.descriptor)
        start = time.perf_counter()
        try:
            document = await self._transport.send(prepared.descriptor)
            records = processor.parse_response(document, prepared.state)
        except Exception:
            elapsed = (time.perf_counter() - start) * 1000
            logger.exception("%s query failed after %.2fms", name, elapsed)
            raise
        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "%s query returned %d record(s) in %.2fms", name, len(records), elapsed
        )
        return records

    def _as_specification(
        self, specification: ISpecification[Any] | Mapping[str, Any]
    ) -> ISpecification[Any]:
        if isinstance(specification, Mapping):
            return SpecificationFactory.from_dict(
                dict(specification), registry=self._operators
            )
        return specification

    def _post_filter(
        self, spec: ISpecification[Any], known: tuple[str, ...]
    ) -> ISpecification[Any] | None:
        """*spec* without terms on unknown fields; ``None`` when nothing is left.

        Unknown fields are ignored when binding, so they must not decide
        which records come back either.
        """
        tree = spec.to_dict()
        pruned = _drop_unknown_terms(tree, frozenset(known))
        if pruned is None:
            return None
        if pruned == tree:
            return spec
        logger.debug("Ignoring unknown fields in post-filter: %s", tree)
        return SpecificationFactory.from_dict(pruned, registry=self._operators)


def _drop_unknown_terms(
    node: dict[str, Any], known: frozenset[str]
) -> dict[str, Any] | None:
    if "attr" in node:
        return node if node["attr"] in known else None
    children = node.get("conditions") or [node["condition"]]
    kept = [c for c in (_drop_unknown_terms(c, known) for c in children) if c]
    if not kept:
        return None
    return {"op": node["op"], "conditions": kept}
