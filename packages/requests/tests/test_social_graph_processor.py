"""Tests for SocialGraphRequestProcessor."""

from __future__ import annotations

import pytest

from twitter_query_requests import (
    InvalidEnumValueError,
    MalformedResponseError,
    MissingRequiredFieldError,
    SocialGraphType,
)

IDS_XML = """<?xml version="1.0"?>
<ids>
  <id>14957445</id>
  <id>6253282</id>
</ids>"""

CURSORED_XML = """<id_list>
  <ids><id>101</id></ids>
  <next_cursor>0</next_cursor>
  <previous_cursor>0</previous_cursor>
</id_list>"""


def test_friends_without_parameters(social_graph):
    prepared = social_graph.build_request({"Type": "Friends"})
    assert prepared.url == "http://twitter.com/friends/ids.xml"
    assert prepared.descriptor.parameters == ()


def test_followers_with_query_parameters(social_graph):
    prepared = social_graph.build_request(
        {"Page": "2", "ScreenName": "alice", "Type": "Followers", "UserID": "42"}
    )
    assert prepared.url == (
        "http://twitter.com/followers/ids.xml?user_id=42&screen_name=alice&page=2"
    )
    assert dict(prepared.state.fields) == {
        "UserID": "42",
        "ScreenName": "alice",
        "Page": "2",
    }


def test_id_goes_into_path(social_graph):
    prepared = social_graph.build_request({"Type": "Friends", "ID": "alice"})
    assert prepared.url == "http://twitter.com/friends/ids/alice.xml"
    assert prepared.state.get("ID") == "alice"


def test_missing_type(social_graph):
    with pytest.raises(MissingRequiredFieldError):
        social_graph.build_request({"ScreenName": "alice"})


def test_invalid_type_lists_valid_values(social_graph):
    with pytest.raises(InvalidEnumValueError) as exc_info:
        social_graph.build_request({"Type": "Follower"})
    assert exc_info.value.valid_values == ["Friends", "Followers"]
    assert "Followers" in exc_info.value.suggestions


def test_parse_ids(social_graph):
    social_graph.build_request({"Type": "Followers", "ScreenName": "alice"})
    records = social_graph.parse_response(IDS_XML)
    assert [r.value for r in records] == ["14957445", "6253282"]
    assert all(r.type is SocialGraphType.FOLLOWERS for r in records)
    assert all(r.screen_name == "alice" for r in records)
    assert records[0].id is None


def test_parse_cursored_ids(social_graph):
    prepared = social_graph.build_request({"Type": "Friends", "ID": "bob"})
    records = social_graph.parse_response(CURSORED_XML, prepared.state)
    assert [(r.id, r.value) for r in records] == [("bob", "101")]


def test_parse_empty_list(social_graph):
    social_graph.build_request({"Type": "Friends"})
    assert social_graph.parse_response("<ids/>") == []


@pytest.mark.parametrize(
    "body",
    ["true", "<users><id>1</id></users>", "<ids><id></id></ids>", "<id_list/>", "<ids>"],
)
def test_malformed_listing(social_graph, body):
    social_graph.build_request({"Type": "Friends"})
    with pytest.raises(MalformedResponseError) as exc_info:
        social_graph.parse_response(body)
    assert exc_info.value.expected == "an <ids> list of <id> elements"


def test_record_aliases(social_graph):
    social_graph.build_request({"Type": "Friends", "UserID": "7"})
    record = social_graph.parse_response("<ids><id>1</id></ids>")[0]
    assert record.model_dump(by_alias=True) == {
        "Type": SocialGraphType.FRIENDS,
        "ID": None,
        "UserID": "7",
        "ScreenName": None,
        "Page": None,
        "Value": "1",
    }
