"""Friendship queries: does one user follow another?"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import MalformedResponseError
from ..processor import RequestProcessor
from ..strategy import QueryParameter, RequestStrategy, StrategyTable

if TYPE_CHECKING:
    from ..descriptor import ProcessorState
    from ..document import ResponseDocument

_BOOLEAN_LITERALS = {"true": True, "false": False}


class FriendshipType(str, Enum):
    """Kinds of friendship query."""

    EXISTS = "Exists"


class Friendship(BaseModel):
    """Answer to a friendship query, with the query that produced it."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: FriendshipType = Field(..., alias="Type")
    subject_user: str | None = Field(
        default=None,
        alias="SubjectUser",
        description="ID or screen name of the subject user.",
    )
    following_user: str | None = Field(
        default=None,
        alias="FollowingUser",
        description="ID or screen name of the user tested for being followed.",
    )
    is_friend: bool = Field(
        ...,
        alias="IsFriend",
        description="Whether the subject user follows the following user.",
    )

    @property
    def value(self) -> bool:
        return self.is_friend


class FriendshipExistsStrategy(RequestStrategy[Friendship]):
    """``friendships/exists.xml?user_a=<subject>&user_b=<following>``."""

    path = "friendships/exists.xml"
    parameters = (
        QueryParameter("SubjectUser", "user_a", required=True),
        QueryParameter("FollowingUser", "user_b", required=True),
    )

    @property
    def discriminant(self) -> FriendshipType:
        return FriendshipType.EXISTS

    def parse(
        self, document: ResponseDocument, state: ProcessorState
    ) -> list[Friendship]:
        literal = document.value
        if literal not in _BOOLEAN_LITERALS:
            raise MalformedResponseError(document.body, "'true' or 'false'")
        return [
            Friendship(
                type=FriendshipType(state.discriminant),
                subject_user=state.get("SubjectUser"),
                following_user=state.get("FollowingUser"),
                is_friend=_BOOLEAN_LITERALS[literal],
            )
        ]


class FriendshipRequestProcessor(RequestProcessor[Friendship]):
    """Processes Friendship queries."""

    resource_name = "Friendship"
    record_type = Friendship
    discriminant_type = FriendshipType
    recognized_fields = ("Type", "SubjectUser", "FollowingUser")

    @classmethod
    def default_strategies(cls) -> StrategyTable[Friendship]:
        return StrategyTable(FriendshipExistsStrategy())
