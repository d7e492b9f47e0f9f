from .httpx_transport import HttpxTransport
from .memory import InMemoryTransport

__all__ = ["HttpxTransport", "InMemoryTransport"]
