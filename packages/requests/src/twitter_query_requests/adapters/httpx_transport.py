"""HTTP transport using httpx."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from ..config import TwitterQueryConfig
from ..document import ResponseDocument
from ..exceptions import TransportError

if TYPE_CHECKING:
    from types import TracebackType

    from ..descriptor import RequestDescriptor

logger = logging.getLogger(__name__)


class HttpxTransport:
    """
    ``ITransport`` over an ``httpx.AsyncClient``.

    The descriptor's URL is sent as built, so parameter order and values
    reach the server verbatim.  Pass ``client`` to share a connection pool
    (or to inject ``httpx.MockTransport`` in tests); otherwise one is
    created from *config* and closed by :meth:`aclose`.
    """

    def __init__(
        self,
        config: TwitterQueryConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or TwitterQueryConfig()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=self.config.timeout,
            headers={"User-Agent": self.config.user_agent},
        )

    async def send(self, descriptor: RequestDescriptor) -> ResponseDocument:
        url = descriptor.url
        try:
            response = await self._client.request(descriptor.method, url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error("HTTP %s from %s", status, url)
            raise TransportError(url, f"HTTP {status}", status) from e
        except httpx.HTTPError as e:
            logger.error("Request to %s failed: %s", url, e)
            raise TransportError(url, str(e) or type(e).__name__) from e

        return ResponseDocument(
            body=response.text,
            status_code=response.status_code,
            headers=dict(response.headers),
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
