"""Request processors, one module per resource kind."""

from .friendship import (
    Friendship,
    FriendshipExistsStrategy,
    FriendshipRequestProcessor,
    FriendshipType,
)
from .social_graph import (
    SocialGraph,
    SocialGraphIdsStrategy,
    SocialGraphRequestProcessor,
    SocialGraphType,
)

__all__ = [
    "Friendship",
    "FriendshipExistsStrategy",
    "FriendshipRequestProcessor",
    "FriendshipType",
    "SocialGraph",
    "SocialGraphIdsStrategy",
    "SocialGraphRequestProcessor",
    "SocialGraphType",
]
