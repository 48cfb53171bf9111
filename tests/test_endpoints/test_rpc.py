"""Tests for the JSON-RPC client — uses httpx mock transport."""

from __future__ import annotations

import json

import httpx
import pytest

from wave_wallet.endpoints.rpc import RPCClient
from wave_wallet.endpoints.selector import EndpointDescriptor, EndpointPurpose
from wave_wallet.errors.endpoint_errors import RPCError

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_URL = "https://rpc.test.com"


def _descriptor() -> EndpointDescriptor:
    return EndpointDescriptor(name="test-rpc", url=_URL, purpose=EndpointPurpose.STANDARD)


async def _client(handler) -> RPCClient:
    client = RPCClient(_descriptor())
    await client.connect()
    await client._client.aclose()
    client._client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=_URL)
    return client


def _result(value):
    def handler(request: httpx.Request):
        body = json.loads(request.content)
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": value})

    return handler


# ---------------------------------------------------------------------------
# Connection lifecycle
# ---------------------------------------------------------------------------


class TestRPCClientLifecycle:
    async def test_not_connected_by_default(self):
        client = RPCClient(_descriptor())
        assert client.is_connected is False

    async def test_connect_and_close(self):
        client = RPCClient(_descriptor())
        await client.connect()
        assert client.is_connected is True
        await client.close()
        assert client.is_connected is False

    async def test_close_idempotent(self):
        client = RPCClient(_descriptor())
        await client.close()

    async def test_not_connected_raises(self):
        client = RPCClient(_descriptor())
        with pytest.raises(RPCError, match="not connected"):
            await client.get_slot()


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class TestRPCCalls:
    async def test_request_body(self):
        seen = []

        def handler(request: httpx.Request):
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": 42})

        client = await _client(handler)
        assert await client.get_slot() == 42
        await client.get_slot()
        assert seen[0] == {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "getSlot",
            "params": [{"commitment": "confirmed"}],
        }
        assert seen[1]["id"] == 2
        await client.close()

    async def test_get_balance(self):
        client = await _client(_result({"context": {"slot": 1}, "value": 5000}))
        assert await client.get_balance("Addr111") == 5000
        await client.close()

    async def test_get_latest_blockhash(self):
        client = await _client(
            _result({"context": {"slot": 1}, "value": {"blockhash": "EkSnNW", "lastValidBlockHeight": 9}})
        )
        assert await client.get_latest_blockhash() == "EkSnNW"
        await client.close()

    async def test_blockhash_unexpected_shape(self):
        client = await _client(_result({"value": None}))
        with pytest.raises(RPCError, match="unexpected shape"):
            await client.get_latest_blockhash()
        await client.close()

    async def test_healthcheck(self):
        client = await _client(_result("ok"))
        assert await client.healthcheck() is True
        await client.close()


class TestRPCErrors:
    async def test_rpc_error_object(self):
        def handler(request: httpx.Request):
            return httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32601, "message": "Method not found"}},
            )

        client = await _client(handler)
        with pytest.raises(RPCError, match="Method not found") as exc_info:
            await client.call("nope")
        assert exc_info.value.rpc_code == -32601
        await client.close()

    async def test_http_status_error(self):
        def handler(request: httpx.Request):
            return httpx.Response(503, json={"message": "overloaded"})

        client = await _client(handler)
        with pytest.raises(RPCError, match="overloaded") as exc_info:
            await client.get_slot()
        assert exc_info.value.status_code == 503
        await client.close()

    async def test_invalid_json(self):
        def handler(request: httpx.Request):
            return httpx.Response(200, text="<html>")

        client = await _client(handler)
        with pytest.raises(RPCError, match="invalid JSON"):
            await client.get_slot()
        await client.close()

    async def test_missing_result(self):
        client = await _client(lambda request: httpx.Response(200, json={"jsonrpc": "2.0", "id": 1}))
        with pytest.raises(RPCError, match="no result"):
            await client.get_slot()
        await client.close()

    async def test_transport_error(self):
        def handler(request: httpx.Request):
            raise httpx.ConnectError("connection refused", request=request)

        client = await _client(handler)
        with pytest.raises(RPCError, match="connection refused"):
            await client.get_slot()
        await client.close()

    async def test_healthcheck_unhealthy(self):
        client = await _client(lambda request: httpx.Response(500, text="down"))
        assert await client.healthcheck() is False
        await client.close()
