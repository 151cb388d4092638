"""Precise unit tests for RestRunner.

Tests focus on endpoint execution, parameter building, and error handling.
"""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from laakhay.social.core import TransportError
from laakhay.social.runtime.rest import (
    EnvelopeAdapter,
    RawResponse,
    ResponseAdapter,
    RestEndpointSpec,
    RestRunner,
    RESTTransport,
)


class TestRestRunner:
    """Test RestRunner endpoint execution."""

    @pytest.fixture
    def mock_transport(self):
        """Create mock REST transport."""
        transport = MagicMock(spec=RESTTransport)
        transport.execute = AsyncMock(return_value=RawResponse(status=200, body=b'{"data": []}'))
        return transport

    @pytest.fixture
    def runner(self, mock_transport):
        """Create RestRunner with mock transport."""
        return RestRunner(mock_transport)

    @pytest.fixture
    def mock_adapter(self):
        """Create mock response adapter."""
        adapter = MagicMock(spec=ResponseAdapter)
        adapter.parse = MagicMock(return_value={"parsed": "data"})
        return adapter

    @pytest.mark.asyncio
    async def test_run_get_endpoint(self, runner, mock_transport, mock_adapter):
        """Test running GET endpoint."""
        spec = RestEndpointSpec(
            id="test",
            method="GET",
            build_path=lambda p: f"/test/{p['id']}",
            build_query=lambda p: {"param": p.get("param")},
        )

        result = await runner.run(
            spec=spec, adapter=mock_adapter, params={"id": "123", "param": "value"}
        )

        assert result == {"parsed": "data"}
        mock_transport.execute.assert_awaited_once_with(
            "GET", "/test/123", params={"param": "value"}, headers=None, body=None
        )
        mock_adapter.parse.assert_called_once()

    @pytest.mark.asyncio
    async def test_run_post_endpoint(self, runner, mock_transport, mock_adapter):
        """Test running POST endpoint."""
        spec = RestEndpointSpec(
            id="test",
            method="post",
            build_path=lambda p: "/test",
            build_body=lambda p: {"data": p["data"]},
        )

        await runner.run(spec=spec, adapter=mock_adapter, params={"data": "value"})

        mock_transport.execute.assert_awaited_once_with(
            "POST", "/test", params=None, headers=None, body={"data": "value"}
        )

    @pytest.mark.asyncio
    async def test_empty_query_is_sent_as_none(self, runner, mock_transport, mock_adapter):
        spec = RestEndpointSpec(
            id="test", method="GET", build_path=lambda p: "/t", build_query=lambda p: {}
        )

        await runner.run(spec=spec, adapter=mock_adapter, params={})

        _, kwargs = mock_transport.execute.call_args
        assert kwargs["params"] is None

    @pytest.mark.asyncio
    async def test_default_and_spec_headers(self, mock_transport, mock_adapter):
        """Test default headers are evaluated per request and merged with spec headers."""
        runner = RestRunner(mock_transport, default_headers=lambda: {"Authorization": "Bearer t"})
        spec = RestEndpointSpec(
            id="test",
            method="GET",
            build_path=lambda p: "/t",
            build_headers=lambda p: {"X-Trace": p["trace"]},
        )

        await runner.run(spec=spec, adapter=mock_adapter, params={"trace": "1"})

        _, kwargs = mock_transport.execute.call_args
        assert kwargs["headers"] == {"Authorization": "Bearer t", "X-Trace": "1"}

    @pytest.mark.asyncio
    async def test_envelope_adapter(self, runner):
        spec = RestEndpointSpec(id="test", method="GET", build_path=lambda p: "/t")
        envelope = await runner.run(spec=spec, adapter=EnvelopeAdapter(), params={})
        assert envelope.data == []

    @pytest.mark.asyncio
    async def test_failure_is_logged_and_propagated(
        self, runner, mock_transport, mock_adapter, caplog
    ):
        mock_transport.execute.side_effect = TransportError("connection reset")
        spec = RestEndpointSpec(id="get_me", method="GET", build_path=lambda p: "/2/users/me")

        with caplog.at_level(logging.WARNING), pytest.raises(TransportError):
            await runner.run(spec=spec, adapter=mock_adapter, params={})

        record = next(r for r in caplog.records if r.getMessage() == "rest_request_failed")
        assert record.endpoint_id == "get_me"
        assert record.error_type == "TransportError"
        mock_adapter.parse.assert_not_called()

    def test_spec_paginated(self):
        spec = RestEndpointSpec(
            id="t", method="GET", build_path=lambda p: "/t", token_param="next_token"
        )
        assert spec.paginated
        assert not RestEndpointSpec(id="t", method="GET", build_path=lambda p: "/t").paginated
