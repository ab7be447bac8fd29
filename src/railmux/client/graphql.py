"""Railway GraphQL connection.

One `RailwayClient` is one authenticated channel to the Railway public API.
It exposes a single generic capability, `execute(document, variables)`,
which returns the response's ``data`` object or raises:

- `TransportError` for timeouts, network failures and non-2xx statuses
- `ProtocolError` for unparseable bodies and GraphQL ``errors`` arrays

Example:
    >>> async with RailwayClient(token="...", label="personal") as client:
    ...     data = await client.execute("query { me { name } }")
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

import httpx
from pydantic import SecretStr

from railmux.foundation.config import HttpSettings, WorkspaceCredential, get_settings
from railmux.foundation.errors import ErrorCode, ProtocolError, TransportError

from .auth import BearerAuth

logger = logging.getLogger("railmux.client")

JsonDict = dict[str, Any]


@runtime_checkable
class BackendConnection(Protocol):
    """Anything the router can dispatch GraphQL documents to."""

    async def execute(self, document: str, variables: Mapping[str, Any] | None = None) -> JsonDict: ...


class RailwayClient:
    """Authenticated GraphQL client for one Railway workspace.

    The underlying `httpx.AsyncClient` is created lazily on first use and
    released by `aclose()` (or leaving an ``async with`` block). Pass
    ``transport`` to substitute an `httpx.MockTransport` in tests.
    """

    __slots__ = ("_auth", "_label", "_settings", "_client", "_transport")

    def __init__(
        self,
        token: str | SecretStr,
        label: str = "default",
        *,
        settings: HttpSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._auth = BearerAuth(token=token if isinstance(token, SecretStr) else SecretStr(token))
        self._label = label
        self._settings = settings or get_settings().http
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_credential(
        cls,
        credential: WorkspaceCredential,
        *,
        settings: HttpSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> RailwayClient:
        return cls(credential.token, credential.label, settings=settings, transport=transport)

    @property
    def label(self) -> str:
        return self._label

    def __repr__(self) -> str:
        return f"RailwayClient(label={self._label!r}, api_url={self._settings.api_url!r})"

    # ─────────────────────────────────────────────────────────────────
    # HTTP Client
    # ─────────────────────────────────────────────────────────────────

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._settings.timeout,
                verify=self._settings.verify_ssl,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the httpx client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> RailwayClient:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    # ─────────────────────────────────────────────────────────────────
    # Execution
    # ─────────────────────────────────────────────────────────────────

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self._settings.user_agent,
        }
        return self._auth.apply(headers)

    async def execute(self, document: str, variables: Mapping[str, Any] | None = None) -> JsonDict:
        """Send one GraphQL document and return its ``data`` object."""
        body: JsonDict = {"query": document}
        if variables is not None:
            body["variables"] = dict(variables)

        start = time.perf_counter()
        try:
            response = await self._get_client().post(
                self._settings.api_url, json=body, headers=self._headers(),
            )
        except httpx.TimeoutException as e:
            raise TransportError(
                f"Railway API request timed out after {self._settings.timeout}s",
                code=ErrorCode.TIMEOUT,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Network error: {e}") from e
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(f"[{self._label}] POST {response.status_code} ({elapsed_ms:.1f}ms)")

        if not response.is_success:
            raise TransportError(
                f"Railway API error ({response.status_code}): {response.text}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ProtocolError(f"Invalid JSON from Railway API: {e}") from e
        if not isinstance(payload, dict):
            raise ProtocolError("Invalid response from Railway API: expected a JSON object")

        if errors := payload.get("errors"):
            messages = [
                str(err.get("message", err)) if isinstance(err, dict) else str(err)
                for err in errors
            ]
            raise ProtocolError(f"GraphQL errors: {', '.join(messages)}", messages=messages)

        return payload.get("data") or {}
