"""Shared fixtures for request translation tests."""

from __future__ import annotations

import pytest

from twitter_query_requests import (
    FriendshipRequestProcessor,
    InMemoryTransport,
    SocialGraphRequestProcessor,
    TwitterQueryConfig,
)
from twitter_query_specifications import SpecificationBuilder


@pytest.fixture
def config() -> TwitterQueryConfig:
    return TwitterQueryConfig()


@pytest.fixture
def friendship(config) -> FriendshipRequestProcessor:
    return FriendshipRequestProcessor(config)


@pytest.fixture
def social_graph(config) -> SocialGraphRequestProcessor:
    return SocialGraphRequestProcessor(config)


@pytest.fixture
def builder() -> SpecificationBuilder:
    return SpecificationBuilder()


@pytest.fixture
def transport() -> InMemoryTransport:
    return InMemoryTransport()
