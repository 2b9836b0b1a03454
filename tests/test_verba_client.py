"""Tests for the Verba HTTP client, using httpx.MockTransport as the backend."""

import json

import httpx
import pytest

from verba_mcp.client.verba_client import BackendTransportError, VerbaClient


def make_client(settings, responder):
    """VerbaClient whose requests are answered by `responder` and recorded."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return responder(request)

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return VerbaClient(settings, http_client=http_client), requests


@pytest.mark.asyncio
async def test_get_builds_url_and_headers(settings):
    client, requests = make_client(
        settings, lambda request: httpx.Response(200, json=[{"id": "p1"}])
    )

    async with client:
        result = await client.call("GET", "/projects")

    assert result.ok is True
    assert result.status == 200
    assert result.data == [{"id": "p1"}]

    request = requests[0]
    assert request.method == "GET"
    assert str(request.url) == "https://verba.test/api/v1/projects"
    assert request.headers["authorization"] == "Bearer test-token"
    assert request.headers["content-type"] == "application/json"
    assert request.content == b""


@pytest.mark.asyncio
async def test_body_serialized_as_utf8_json(settings):
    client, requests = make_client(
        settings, lambda request: httpx.Response(201, json={"id": "k1"})
    )

    async with client:
        result = await client.call("POST", "/projects/p1/keys", {"key": "hi", "defaultValue": "Grüß"})

    assert result.ok is True
    assert result.status == 201
    assert json.loads(requests[0].content.decode("utf-8")) == {"key": "hi", "defaultValue": "Grüß"}


@pytest.mark.asyncio
async def test_query_string_passed_through(settings):
    client, requests = make_client(settings, lambda request: httpx.Response(200, json=[]))

    async with client:
        await client.call("GET", "/projects/p1/keys?untranslated=true&locale=fr")

    assert requests[0].url.path == "/api/v1/projects/p1/keys"
    assert requests[0].url.params["untranslated"] == "true"
    assert requests[0].url.params["locale"] == "fr"


@pytest.mark.asyncio
async def test_error_status_is_not_raised(settings):
    client, _ = make_client(
        settings, lambda request: httpx.Response(404, json={"error": "Project not found"})
    )

    async with client:
        result = await client.call("GET", "/projects/missing")

    assert result.ok is False
    assert result.status == 404
    assert result.data == {"error": "Project not found"}


@pytest.mark.asyncio
async def test_invalid_json_body_raises(settings):
    client, _ = make_client(
        settings, lambda request: httpx.Response(502, text="<html>Bad Gateway</html>")
    )

    async with client:
        with pytest.raises(BackendTransportError, match="HTTP 502"):
            await client.call("GET", "/projects")


@pytest.mark.asyncio
async def test_connection_failure_propagates(settings):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client, _ = make_client(settings, refuse)

    async with client:
        with pytest.raises(httpx.ConnectError):
            await client.call("GET", "/projects")
