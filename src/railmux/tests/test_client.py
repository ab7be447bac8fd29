"""Tests for the Railway GraphQL client against a mocked transport."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from railmux.client import BearerAuth, RailwayClient
from railmux.foundation.config import RAILWAY_API_URL, HttpSettings
from railmux.foundation.errors import ErrorCode, ProtocolError, TransportError


def client_for(handler: Callable[[httpx.Request], httpx.Response], **settings: object) -> RailwayClient:
    return RailwayClient(
        "tok_secret_123",
        "personal",
        settings=HttpSettings(**settings),
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_execute_returns_data_and_sends_auth() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": {"me": {"name": "Ada"}}})

    async with client_for(handler, user_agent="railmux-test") as client:
        data = await client.execute("query { me { name } }", {"x": 1})

    assert data == {"me": {"name": "Ada"}}
    request = seen[0]
    assert str(request.url) == RAILWAY_API_URL
    assert request.headers["Authorization"] == "Bearer tok_secret_123"
    assert request.headers["User-Agent"] == "railmux-test"
    assert json.loads(request.content) == {"query": "query { me { name } }", "variables": {"x": 1}}


@pytest.mark.asyncio
async def test_execute_omits_absent_variables() -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"data": None})

    async with client_for(handler) as client:
        assert await client.execute("query { me { id } }") == {}
    assert bodies == [{"query": "query { me { id } }"}]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "code"),
    [(401, ErrorCode.API_KEY_INVALID), (403, ErrorCode.API_KEY_INVALID), (500, ErrorCode.NETWORK_ERROR)],
)
async def test_http_error_status(status: int, code: ErrorCode) -> None:
    async with client_for(lambda r: httpx.Response(status, text="nope")) as client:
        with pytest.raises(TransportError) as info:
            await client.execute("query { me { id } }")
    assert str(info.value) == f"Railway API error ({status}): nope"
    assert info.value.status_code == status
    assert info.value.code == code


@pytest.mark.asyncio
async def test_graphql_errors_are_joined() -> None:
    body = {"data": None, "errors": [{"message": "Not Authorized"}, {"message": "Problem processing request"}]}
    async with client_for(lambda r: httpx.Response(200, json=body)) as client:
        with pytest.raises(ProtocolError) as info:
            await client.execute("query { project(id: \"x\") { id } }")
    assert str(info.value) == "GraphQL errors: Not Authorized, Problem processing request"
    assert info.value.messages == ("Not Authorized", "Problem processing request")
    assert info.value.code == ErrorCode.GRAPHQL_ERROR


@pytest.mark.asyncio
async def test_invalid_json_body() -> None:
    async with client_for(lambda r: httpx.Response(200, text="<html>oops</html>")) as client:
        with pytest.raises(ProtocolError, match="Invalid JSON"):
            await client.execute("query { me { id } }")


@pytest.mark.asyncio
async def test_network_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with client_for(handler) as client:
        with pytest.raises(TransportError) as info:
            await client.execute("query { me { id } }")
    assert str(info.value) == "Network error: connection refused"
    assert info.value.code == ErrorCode.NETWORK_ERROR


@pytest.mark.asyncio
async def test_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    async with client_for(handler, timeout=5) as client:
        with pytest.raises(TransportError) as info:
            await client.execute("query { me { id } }")
    assert info.value.code == ErrorCode.TIMEOUT
    assert "5.0s" in str(info.value)


def test_token_is_masked() -> None:
    client = RailwayClient("tok_secret_123", "personal", settings=HttpSettings())
    assert "tok_secret_123" not in repr(client)
    auth = BearerAuth(token="tok_secret_123")
    assert "tok_secret_123" not in repr(auth)
    assert auth.model_dump(mode="json")["token"] == "tok_..._123"
