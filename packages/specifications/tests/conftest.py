"""Shared fixtures for specifications tests."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from twitter_query_specifications.operators_memory import build_default_registry


@dataclass
class UserRecord:
    screen_name: str
    followers: int
    location: str | None = None


@pytest.fixture
def registry():
    """Default in-memory operator registry for building specs."""
    return build_default_registry()


@pytest.fixture
def alice() -> UserRecord:
    return UserRecord(screen_name="alice", followers=120, location="Lisbon")


@pytest.fixture
def bob() -> UserRecord:
    return UserRecord(screen_name="bob", followers=8)
