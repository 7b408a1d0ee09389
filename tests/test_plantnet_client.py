"""Tests for the Pl@ntNet HTTP adapter."""

import asyncio

import httpx
import pytest

from plant_relay.adapters.plantnet_client import (
    MODIFIERS,
    PLANTNET_API_URL,
    HttpxPlantNetClient,
)
from plant_relay.domain.errors import UpstreamError, UpstreamFailure
from plant_relay.domain.identification import UploadedImage
from tests.conftest import plantnet_payload

_IMAGE = UploadedImage(
    content=b"\xff\xd8\xffjpeg", content_type="image/jpeg", filename="leaf.jpg"
)


def _client(handler) -> HttpxPlantNetClient:  # type: ignore[no-untyped-def]
    transport = httpx.MockTransport(handler)
    return HttpxPlantNetClient(http_client=httpx.AsyncClient(transport=transport))


def test_identify_posts_multipart_with_bearer_token() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=plantnet_payload())

    payload = asyncio.run(_client(handler).identify(_IMAGE, "secret-key"))

    request = seen[0]
    assert str(request.url) == PLANTNET_API_URL
    assert request.headers["Authorization"] == "Bearer secret-key"
    assert b'name="images"; filename="leaf.jpg"' in request.content
    assert b"\xff\xd8\xffjpeg" in request.content
    assert b'name="organs"' in request.content
    assert MODIFIERS.encode() in request.content
    assert payload["results"]


def test_identify_maps_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(_client(handler).identify(_IMAGE, "key"))

    assert exc_info.value.failure == UpstreamFailure.TIMEOUT


def test_identify_maps_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(_client(handler).identify(_IMAGE, "key"))

    assert exc_info.value.failure == UpstreamFailure.NETWORK
    assert exc_info.value.details() is None


def test_identify_maps_http_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"statusCode": 404, "message": "Not Found"})

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(_client(handler).identify(_IMAGE, "key"))

    error = exc_info.value
    assert error.failure == UpstreamFailure.HTTP_STATUS
    assert error.status_code == 404
    assert error.details() == {
        "status": 404,
        "statusText": "Not Found",
        "data": {"statusCode": 404, "message": "Not Found"},
    }


def test_identify_rejects_non_json_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(_client(handler).identify(_IMAGE, "key"))

    assert exc_info.value.failure == UpstreamFailure.MALFORMED


def test_probe_sends_test_image() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"results": []})

    result = asyncio.run(_client(handler).probe("key"))

    assert result.status_code == 200
    assert result.data == {"results": []}
    assert b'filename="test.jpg"' in seen[0].content
    assert b"modifiers" not in seen[0].content
