"""Tests for the remove.bg client."""

from __future__ import annotations

import dataclasses

import httpx
import pytest

from closet.config.settings import Settings
from closet.integrations.removebg import RemoveBgClient, RemoveBgError, RemoveBgErrorKind


def _client(settings: Settings, handler) -> RemoveBgClient:
    http = httpx.AsyncClient(
        base_url=settings.removebg_base_url,
        transport=httpx.MockTransport(handler),
    )
    return RemoveBgClient(settings, client=http)


@pytest.mark.asyncio
async def test_remove_background_posts_multipart_upload(settings: Settings) -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("X-Api-Key")
        seen["body"] = request.read()
        return httpx.Response(200, content=b"png-with-alpha")

    client = _client(settings, handler)
    try:
        result = await client.remove_background(b"jpeg-bytes")
    finally:
        await client.close()

    assert result == b"png-with-alpha"
    assert seen["url"] == "https://api.remove.bg/v1.0/removebg"
    assert seen["key"] == "test-removebg"
    body = seen["body"]
    assert isinstance(body, bytes)
    assert b'name="image_file"; filename="image.jpg"' in body
    assert b"jpeg-bytes" in body
    assert b'name="size"' in body and b"preview" in body


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "kind"),
    [
        (400, RemoveBgErrorKind.BAD_REQUEST),
        (402, RemoveBgErrorKind.QUOTA_EXCEEDED),
        (403, RemoveBgErrorKind.AUTH_ERROR),
        (429, RemoveBgErrorKind.RATE_LIMITED),
        (503, RemoveBgErrorKind.SERVER_ERROR),
    ],
)
async def test_error_statuses_map_to_kinds(settings: Settings, status: int, kind: RemoveBgErrorKind) -> None:
    client = _client(settings, lambda request: httpx.Response(status, json={"errors": []}))
    try:
        with pytest.raises(RemoveBgError) as excinfo:
            await client.remove_background(b"jpeg-bytes")
    finally:
        await client.close()

    assert excinfo.value.kind is kind
    assert excinfo.value.status_code == status


@pytest.mark.asyncio
async def test_server_error_message_includes_status(settings: Settings) -> None:
    client = _client(settings, lambda request: httpx.Response(500))
    try:
        with pytest.raises(RemoveBgError, match="Server error: 500"):
            await client.remove_background(b"jpeg-bytes")
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_missing_key_fails_before_request(settings: Settings) -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200)

    client = _client(dataclasses.replace(settings, removebg_api_key=""), handler)
    try:
        with pytest.raises(RemoveBgError) as excinfo:
            await client.remove_background(b"jpeg-bytes")
    finally:
        await client.close()

    assert excinfo.value.kind is RemoveBgErrorKind.MISSING_KEY
    assert calls == []


@pytest.mark.asyncio
async def test_ping_checks_account_endpoint(settings: Settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1.0/account"
        return httpx.Response(200, json={"data": {}})

    client = _client(settings, handler)
    try:
        assert await client.ping()
    finally:
        await client.close()
