"""Unit tests for MethodInvoker exit status mapping."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from laakhay.paging.core import ClientError, ProtocolError, ServerError, TransportError
from laakhay.paging.runtime.rest import HTTPClient, Invocation, MethodInvoker
from laakhay.paging.runtime.rest.http_client import RawResponse


@pytest.fixture
def mock_client():
    client = MagicMock(spec=HTTPClient)
    client.base_url = "http://10.0.0.5/YamahaExtendedControl"
    client.request = AsyncMock(return_value=RawResponse(status=200, content=b'{"response_code": 0}'))
    return client


class TestMethodInvoker:
    """Test MethodInvoker outcome mapping."""

    @pytest.mark.asyncio
    async def test_success(self, mock_client, sink):
        """Test successful call."""
        invoker = MethodInvoker(mock_client, sink)

        invocation = await invoker.get("/v1/main/getStatus", "zone=main")

        assert invocation.exit_status == 0
        assert invocation.ok
        assert invocation.body == {"response_code": 0}
        mock_client.request.assert_called_once_with(
            "GET",
            "http://10.0.0.5/YamahaExtendedControl/v1/main/getStatus",
            params=[("zone", "main")],
            json_body=None,
            headers=None,
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("status", "exit_status"), [(404, 4), (500, 100), (503, 103)])
    async def test_error_statuses(self, mock_client, status, exit_status):
        """Test 4xx/5xx exit statuses."""
        mock_client.request.return_value = RawResponse(status=status, content=b"oops")
        invocation = await MethodInvoker(mock_client).invoke("GET", "/x")

        assert invocation.exit_status == exit_status
        assert invocation.status == status
        assert invocation.body is None
        assert not invocation.ok

    @pytest.mark.asyncio
    async def test_unfollowed_redirect(self, mock_client):
        """Test unfollowed redirect exits with 1."""
        mock_client.request.return_value = RawResponse(status=302, content=b"")
        invocation = await MethodInvoker(mock_client).invoke("GET", "/x")

        assert invocation.exit_status == 1

    @pytest.mark.asyncio
    async def test_bad_request_maps_to_zero_but_is_not_ok(self, mock_client):
        """Test 400 maps to exit 0 but is not ok."""
        mock_client.request.return_value = RawResponse(status=400, content=b"")
        invocation = await MethodInvoker(mock_client).invoke("GET", "/x")

        assert invocation.exit_status == 0
        assert not invocation.ok
        with pytest.raises(ClientError):
            invocation.raise_for_status()

    @pytest.mark.asyncio
    async def test_transport_failure_returns_its_code(self, mock_client, sink):
        """Test transport failure is returned, not raised."""
        mock_client.request.side_effect = TransportError("refused", exit_code=7, url="u")
        invocation = await MethodInvoker(mock_client, sink).invoke("POST", "/x")

        assert invocation.exit_status == 7
        assert invocation.status is None
        assert sink.named("request_failed")[0]["exit_code"] == 7
        with pytest.raises(TransportError):
            invocation.raise_for_status()

    @pytest.mark.asyncio
    async def test_headers_are_traced_redacted(self, mock_client, sink):
        """Test headers reach the client but are traced redacted."""
        await MethodInvoker(mock_client, sink).post(
            "/v1/main/setPower", {"power": "on"}, headers={"Authorization": "Bearer s3cret"}
        )

        assert mock_client.request.call_args.kwargs["headers"] == {"Authorization": "Bearer s3cret"}
        assert mock_client.request.call_args.kwargs["json_body"] == {"power": "on"}
        assert "s3cret" not in repr(sink.events)
        assert sink.named("request_started")[0]["headers"] == {"Authorization": "Bearer XXX"}

    @pytest.mark.asyncio
    async def test_malformed_success_body(self, mock_client):
        """Test 2xx with a non-JSON body."""
        mock_client.request.return_value = RawResponse(status=200, content=b"<html>")
        invocation = await MethodInvoker(mock_client).invoke("GET", "/x")

        assert invocation.exit_status == 1
        with pytest.raises(ProtocolError):
            invocation.raise_for_status()


class TestInvocation:
    """Test Invocation helpers."""

    def test_raise_for_status_server_error(self):
        """Test raise_for_status on 5xx."""
        invocation = Invocation(method="GET", url="u", exit_status=100, status=500)
        with pytest.raises(ServerError) as exc_info:
            invocation.raise_for_status()
        assert exc_info.value.exit_status == 100

    def test_raise_for_status_success_returns_self(self):
        """Test raise_for_status on success."""
        invocation = Invocation(method="GET", url="u", exit_status=0, status=200, body=[])
        assert invocation.raise_for_status() is invocation
