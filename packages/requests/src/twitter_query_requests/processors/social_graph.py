"""SocialGraph queries: ids of a user's friends or followers."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import MalformedResponseError
from ..processor import RequestProcessor
from ..strategy import QueryParameter, RequestStrategy, StrategyTable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ..descriptor import ProcessorState
    from ..document import ResponseDocument


class SocialGraphType(str, Enum):
    """Which side of the social graph to list."""

    FRIENDS = "Friends"
    FOLLOWERS = "Followers"


class SocialGraph(BaseModel):
    """One id from a friends/followers listing, with the query that produced it."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: SocialGraphType = Field(..., alias="Type")
    id: str | None = Field(
        default=None,
        alias="ID",
        description="ID or screen name placed in the request path.",
    )
    user_id: str | None = Field(default=None, alias="UserID")
    screen_name: str | None = Field(default=None, alias="ScreenName")
    page: str | None = Field(default=None, alias="Page")
    value: str = Field(..., alias="Value", description="A user id from the listing.")


class SocialGraphIdsStrategy(RequestStrategy[SocialGraph]):
    """``<listing>/ids[/<ID>].xml?user_id=&screen_name=&page=``, all optional."""

    parameters = (
        QueryParameter("UserID", "user_id"),
        QueryParameter("ScreenName", "screen_name"),
        QueryParameter("Page", "page"),
    )

    def __init__(self, discriminant: SocialGraphType, listing: str) -> None:
        self._discriminant = discriminant
        self.listing = listing
        self.path = f"{listing}/ids.xml"

    @property
    def discriminant(self) -> SocialGraphType:
        return self._discriminant

    def resolve_path(
        self, bindings: Mapping[str, str], resolved: dict[str, str]
    ) -> str:
        if "ID" not in bindings:
            return self.path
        resolved["ID"] = bindings["ID"]
        return f"{self.listing}/ids/{bindings['ID']}.xml"

    def parse(
        self, document: ResponseDocument, state: ProcessorState
    ) -> list[SocialGraph]:
        expected = "an <ids> list of <id> elements"
        root = document.xml(expected)
        # cursored responses wrap the list: <id_list><ids>...</ids></id_list>
        if root.tag == "id_list":
            ids = root.find("ids")
            if ids is None:
                raise MalformedResponseError(document.body, expected)
            root = ids
        if root.tag != "ids":
            raise MalformedResponseError(document.body, expected)

        records = []
        for element in root.findall("id"):
            text = (element.text or "").strip()
            if not text:
                raise MalformedResponseError(document.body, expected)
            records.append(
                SocialGraph(
                    type=SocialGraphType(state.discriminant),
                    id=state.get("ID"),
                    user_id=state.get("UserID"),
                    screen_name=state.get("ScreenName"),
                    page=state.get("Page"),
                    value=text,
                )
            )
        return records


class SocialGraphRequestProcessor(RequestProcessor[SocialGraph]):
    """Processes SocialGraph queries."""

    resource_name = "SocialGraph"
    record_type = SocialGraph
    discriminant_type = SocialGraphType
    recognized_fields = ("Type", "ID", "UserID", "ScreenName", "Page")

    @classmethod
    def default_strategies(cls) -> StrategyTable[SocialGraph]:
        return StrategyTable(
            SocialGraphIdsStrategy(SocialGraphType.FRIENDS, "friends"),
            SocialGraphIdsStrategy(SocialGraphType.FOLLOWERS, "followers"),
        )
