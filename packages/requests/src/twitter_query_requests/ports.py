"""ITransport - Protocol for issuing a prepared request."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .descriptor import RequestDescriptor
    from .document import ResponseDocument


@runtime_checkable
class ITransport(Protocol):
    """
    Abstract interface for the HTTP layer.

    Implementations own connection handling, authentication, timeouts and
    any retry policy; request translation never performs I/O itself.
    """

    async def send(self, descriptor: RequestDescriptor) -> ResponseDocument:
        """
        Issue *descriptor* and return the response body.

        Raises:
            TransportError: The exchange failed or returned an error status.
        """
        ...
