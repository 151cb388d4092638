"""Unit tests for RESTTransport body encoding and delegation."""

from __future__ import annotations

from unittest.mock import AsyncMock

import aiohttp
import pytest

from laakhay.social.runtime.rest import (
    FormBody,
    MultipartBody,
    MultipartFile,
    RawResponse,
    RequestExecutor,
    RESTTransport,
)
from laakhay.social.runtime.rest.transport import _encode_body


class TestEncodeBody:
    """Test mapping request bodies onto aiohttp arguments."""

    def test_none(self):
        assert _encode_body(None) == (None, None)

    def test_mapping_is_json(self):
        assert _encode_body({"text": "hi"}) == ({"text": "hi"}, None)

    def test_form_body_is_data(self):
        json_body, data = _encode_body(FormBody({"command": "INIT", "total_bytes": "10"}))
        assert json_body is None
        assert data == {"command": "INIT", "total_bytes": "10"}

    def test_multipart_body_is_form_data(self):
        body = MultipartBody(
            fields={"command": "APPEND", "media_id": "1"},
            files=(MultipartFile(name="media", payload=b"abc"),),
        )
        json_body, data = _encode_body(body)
        assert json_body is None
        assert isinstance(data, aiohttp.FormData)


class TestRESTTransport:
    """Test RESTTransport delegation to HTTPClient."""

    @pytest.fixture
    def transport(self):
        transport = RESTTransport(base_url="https://api.example.com")
        transport._http.request = AsyncMock(return_value=RawResponse(status=200))
        return transport

    def test_is_request_executor(self, transport):
        assert isinstance(transport, RequestExecutor)

    @pytest.mark.asyncio
    async def test_execute_get(self, transport):
        result = await transport.get("/2/users/me", params={"user.fields": "id"})

        assert result.status == 200
        transport._http.request.assert_awaited_once_with(
            "GET", "/2/users/me", params={"user.fields": "id"}, headers=None, json=None, data=None
        )

    @pytest.mark.asyncio
    async def test_execute_json_body(self, transport):
        await transport.execute("PUT", "/2/tweets/1/hidden", body={"hidden": True})

        transport._http.request.assert_awaited_once_with(
            "PUT", "/2/tweets/1/hidden", params=None, headers=None, json={"hidden": True}, data=None
        )

    @pytest.mark.asyncio
    async def test_post_form_body(self, transport):
        await transport.post(
            "https://upload.example.com/1.1/media/upload.json",
            body=FormBody({"command": "FINALIZE", "media_id": "7"}),
            headers={"Authorization": "Bearer t"},
        )

        _, kwargs = transport._http.request.call_args
        assert kwargs["data"] == {"command": "FINALIZE", "media_id": "7"}
        assert kwargs["json"] is None
        assert kwargs["headers"] == {"Authorization": "Bearer t"}

    @pytest.mark.asyncio
    async def test_close(self, transport):
        transport._http.close = AsyncMock()
        await transport.close()
        transport._http.close.assert_awaited_once()
