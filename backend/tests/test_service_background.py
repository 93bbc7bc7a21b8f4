"""Tests for the remove.bg background removal client."""
import json
from urllib.parse import parse_qs

import httpx
import pytest

from character_studio.models.character import BackgroundRemovalStatus
from character_studio.services.background import RemoveBgClient


def _client(handler) -> RemoveBgClient:
    return RemoveBgClient(
        api_key="bg-key",
        url="https://removebg.test/v1.0/removebg",
        transport=httpx.MockTransport(handler),
    )


class TestRemoveBgClient:
    async def test_sends_form_fields_and_headers(self) -> None:
        captured: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["method"] = request.method
            captured["url"] = str(request.url)
            captured["headers"] = request.headers
            captured["form"] = parse_qs(request.content.decode())
            return httpx.Response(200, json={"data": {"result_b64": "bm9iZw=="}})

        await _client(handler).remove_background("b3JpZw==")

        assert captured["method"] == "POST"
        assert captured["url"] == "https://removebg.test/v1.0/removebg"
        assert captured["headers"]["X-Api-Key"] == "bg-key"
        assert captured["headers"]["Accept"] == "application/json"
        assert captured["form"] == {
            "image_file_b64": ["b3JpZw=="],
            "size": ["auto"],
            "format": ["png"],
        }

    async def test_success_replaces_image(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": {"result_b64": "bm9iZw=="}})

        result = await _client(handler).remove_background("b3JpZw==")

        assert result.status is BackgroundRemovalStatus.applied
        assert result.applied
        assert result.image_base64 == "bm9iZw=="

    @pytest.mark.parametrize("status_code", [400, 402, 403, 429, 500])
    async def test_non_ok_keeps_original(self, status_code: int) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json={"errors": [{"title": "nope"}]})

        result = await _client(handler).remove_background("b3JpZw==")

        assert result.status is BackgroundRemovalStatus.failed
        assert result.image_base64 == "b3JpZw=="
        assert str(status_code) in (result.reason or "")

    async def test_transport_error_keeps_original(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        result = await _client(handler).remove_background("b3JpZw==")

        assert result.status is BackgroundRemovalStatus.failed
        assert result.image_base64 == "b3JpZw=="
        assert "ConnectError" in (result.reason or "")

    async def test_invalid_json_keeps_original(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>oops</html>")

        result = await _client(handler).remove_background("b3JpZw==")

        assert result.status is BackgroundRemovalStatus.failed
        assert result.image_base64 == "b3JpZw=="

    @pytest.mark.parametrize(
        "body",
        [{}, {"data": {}}, {"data": None}, {"data": {"result_b64": ""}}, {"data": {"result_b64": 5}}],
    )
    async def test_unexpected_body_keeps_original(self, body: dict) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=json.dumps(body).encode())

        result = await _client(handler).remove_background("b3JpZw==")

        assert result.status is BackgroundRemovalStatus.failed
        assert result.image_base64 == "b3JpZw=="
