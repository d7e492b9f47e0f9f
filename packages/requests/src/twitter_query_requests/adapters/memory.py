"""InMemoryTransport: canned responses for tests and offline use."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..document import ResponseDocument
from ..exceptions import TransportError

if TYPE_CHECKING:
    from ..descriptor import RequestDescriptor


class InMemoryTransport:
    """In-memory implementation of ``ITransport``.

    Responses are keyed by the full request URL.  Every descriptor sent is
    recorded in ``requests`` in order.
    """

    def __init__(self, responses: dict[str, str] | None = None) -> None:
        self._responses: dict[str, ResponseDocument] = {}
        self.requests: list[RequestDescriptor] = []
        for url, body in (responses or {}).items():
            self.add_response(url, body)

    def add_response(self, url: str, body: str, status_code: int = 200) -> None:
        self._responses[url] = ResponseDocument(body=body, status_code=status_code)

    async def send(self, descriptor: RequestDescriptor) -> ResponseDocument:
        self.requests.append(descriptor)
        document = self._responses.get(descriptor.url)
        if document is None:
            raise TransportError(descriptor.url, "No canned response", 404)
        if document.status_code >= 400:
            raise TransportError(
                descriptor.url,
                f"HTTP {document.status_code}",
                document.status_code,
            )
        return document

    def clear(self) -> None:
        self._responses.clear()
        self.requests.clear()
