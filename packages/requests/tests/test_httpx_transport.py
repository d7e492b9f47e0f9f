"""Tests for HttpxTransport using httpx.MockTransport."""

from __future__ import annotations

import httpx
import pytest

from twitter_query_requests import (
    HttpxTransport,
    ITransport,
    InMemoryTransport,
    RequestDescriptor,
    TransportError,
    TwitterQueryConfig,
)

DESCRIPTOR = RequestDescriptor(
    "http://twitter.com/",
    "friendships/exists.xml",
    ("user_a=alice", "user_b=bob"),
)


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_transports_satisfy_protocol():
    assert isinstance(HttpxTransport(client=_client(lambda r: None)), ITransport)
    assert isinstance(InMemoryTransport(), ITransport)


@pytest.mark.asyncio
async def test_send_returns_document():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="true", headers={"X-Test": "1"})

    async with _client(handler) as client:
        document = await HttpxTransport(client=client).send(DESCRIPTOR)

    assert document.body == "true"
    assert document.status_code == 200
    assert document.headers["x-test"] == "1"
    assert str(seen[0].url) == DESCRIPTOR.url
    assert seen[0].method == "GET"


@pytest.mark.asyncio
async def test_error_status_raises_transport_error():
    async with _client(lambda r: httpx.Response(401, text="nope")) as client:
        with pytest.raises(TransportError) as exc_info:
            await HttpxTransport(client=client).send(DESCRIPTOR)
    assert exc_info.value.status_code == 401
    assert exc_info.value.url == DESCRIPTOR.url


@pytest.mark.asyncio
async def test_connection_error_raises_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(TransportError, match="connection refused") as exc_info:
            await HttpxTransport(client=client).send(DESCRIPTOR)
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_owned_client_is_closed():
    async with HttpxTransport(TwitterQueryConfig(timeout=2.0)) as transport:
        client = transport._client
        assert client.headers["User-Agent"] == "twitter-query/0.1.0"
    assert client.is_closed


@pytest.mark.asyncio
async def test_injected_client_is_left_open():
    client = _client(lambda r: httpx.Response(200))
    await HttpxTransport(client=client).aclose()
    assert not client.is_closed
    await client.aclose()


@pytest.mark.asyncio
async def test_in_memory_transport_records_requests():
    transport = InMemoryTransport({DESCRIPTOR.url: "false"})
    document = await transport.send(DESCRIPTOR)
    assert document.body == "false"
    assert transport.requests == [DESCRIPTOR]

    transport.clear()
    with pytest.raises(TransportError) as exc_info:
        await transport.send(DESCRIPTOR)
    assert exc_info.value.status_code == 404
