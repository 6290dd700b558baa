"""Tests for the async HTTP client."""

import json

import httpx
import pytest

from kudos_wall.http import HttpClient, HttpError

BASE_URL = "http://api.test/api"


def _client(handler, token=None, **kwargs) -> HttpClient:
    return HttpClient(
        BASE_URL,
        token_provider=(lambda: token),
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_get_decodes_json_and_sends_bearer_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        seen["content_type"] = request.headers.get("Content-Type")
        return httpx.Response(200, json={"ok": True})

    body = await _client(handler, token="tok").get("/kudocards")
    assert body == {"ok": True}
    assert seen["url"] == "http://api.test/api/kudocards"
    assert seen["auth"] == "Bearer tok"
    assert seen["content_type"] == "application/json"


@pytest.mark.asyncio
async def test_no_authorization_header_without_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={})

    await _client(handler).get("/users")
    assert seen["auth"] is None


@pytest.mark.asyncio
async def test_caller_headers_override_defaults():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={})

    await _client(handler, token="tok").post("/x", body={}, headers={"Authorization": "Bearer other"})
    assert seen["auth"] == "Bearer other"


@pytest.mark.asyncio
async def test_patch_sends_json_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "u1"})

    await _client(handler).patch("/users/u1/role", body={"newRole": "TECH_LEAD"})
    assert seen["method"] == "PATCH"
    assert seen["body"] == {"newRole": "TECH_LEAD"}


@pytest.mark.asyncio
async def test_non_2xx_raises_http_error_with_status_and_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"message": "exists"})

    with pytest.raises(HttpError) as exc_info:
        await _client(handler).post("/auth/register", body={})
    assert exc_info.value.status_code == 409
    assert str(exc_info.value) == "exists"
    assert exc_info.value.data == {"message": "exists"}


@pytest.mark.asyncio
async def test_non_json_error_body_gets_default_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="<html>boom</html>")

    with pytest.raises(HttpError) as exc_info:
        await _client(handler).get("/users")
    assert exc_info.value.data == {"message": "Unknown error occurred"}


@pytest.mark.asyncio
async def test_empty_success_body_returns_none():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    assert await _client(handler).delete("/kudocards/1") is None


@pytest.mark.asyncio
async def test_transport_errors_propagate():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(httpx.ConnectError):
        await _client(handler).get("/users")
