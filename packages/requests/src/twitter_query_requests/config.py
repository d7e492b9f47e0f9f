"""Configuration for request translation and transport."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_BASE_URL = "http://twitter.com/"


@dataclass(frozen=True)
class TwitterQueryConfig:
    """Configuration shared by processors and transports.

    Attributes:
        base_url: Endpoint prefix every request path is appended to.
            Must end with ``/``.
        timeout: Transport timeout per request, in seconds.
        user_agent: ``User-Agent`` header sent by HTTP transports.
        strict_parameters: Reject predicates that mention fields the
            resource does not know instead of ignoring them.
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0
    user_agent: str = "twitter-query/0.1.0"
    strict_parameters: bool = False

    def __post_init__(self) -> None:
        if not self.base_url.endswith("/"):
            raise ValueError(f"base_url must end with '/': {self.base_url!r}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive: {self.timeout!r}")
