"""JSON-RPC HTTP client for one remote endpoint.

Provides an async client over a single ``EndpointDescriptor``:
- ``getSlot`` — current slot
- ``getBalance`` — lamports held by an address
- ``getLatestBlockhash`` — recent blockhash for transaction building
- ``getHealth`` — node health check
"""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING, Any

import httpx

from wave_wallet.errors.endpoint_errors import RPCError

if TYPE_CHECKING:
    from wave_wallet.endpoints.selector import EndpointDescriptor


class RPCClient:
    """Async JSON-RPC 2.0 client bound to one endpoint.

    Usage::

        client = RPCClient(selector.resolve("standard"))
        await client.connect()
        try:
            slot = await client.get_slot()
        finally:
            await client.close()
    """

    def __init__(
        self,
        descriptor: EndpointDescriptor,
        *,
        timeout: float = 30.0,
        commitment: str = "confirmed",
    ) -> None:
        """Initialize the client.

        Args:
            descriptor: Endpoint to talk to.
            timeout: Per-request timeout in seconds.
            commitment: Default commitment level sent with reads.
        """
        self._descriptor = descriptor
        self._timeout = timeout
        self._commitment = commitment
        self._client: httpx.AsyncClient | None = None
        self._ids = itertools.count(1)

    @property
    def descriptor(self) -> EndpointDescriptor:
        return self._descriptor

    async def connect(self) -> None:  # noqa: ASYNC910
        """Create the underlying HTTP client."""
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            base_url=self._descriptor.url,
            headers={"Content-Type": "application/json"},
            timeout=self._timeout,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def is_connected(self) -> bool:
        """Check if the HTTP client is active."""
        return self._client is not None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def call(self, method: str, params: list[Any] | None = None) -> Any:
        """Send one JSON-RPC request and return its ``result``.

        Raises:
            RPCError: On transport errors, non-2xx responses, or a JSON-RPC
                error object in the response.
        """
        client = self._ensure_connected()
        body: dict[str, Any] = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
        }
        if params is not None:
            body["params"] = params

        try:
            response = await client.post("", json=body)
        except httpx.HTTPError as exc:
            msg = f"{self._descriptor.name} {method} failed: {exc}"
            raise RPCError(msg) from exc

        if response.status_code != 200:
            self._raise_for_status(response, method)

        try:
            payload = response.json()
        except ValueError as exc:
            msg = f"{self._descriptor.name} {method} returned invalid JSON"
            raise RPCError(msg) from exc

        error = payload.get("error") if isinstance(payload, dict) else None
        if error:
            code = error.get("code") if isinstance(error, dict) else None
            message = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            msg = f"{self._descriptor.name} {method} error: {message}"
            raise RPCError(msg, rpc_code=code)
        if not isinstance(payload, dict) or "result" not in payload:
            msg = f"{self._descriptor.name} {method} returned no result"
            raise RPCError(msg)
        return payload["result"]

    async def get_slot(self) -> int:
        """Current slot at the default commitment."""
        result = await self.call("getSlot", [{"commitment": self._commitment}])
        return int(result)

    async def get_balance(self, address: str) -> int:
        """Balance of *address* in lamports."""
        result = await self.call("getBalance", [address, {"commitment": self._commitment}])
        if isinstance(result, dict):
            return int(result.get("value", 0))
        return int(result)

    async def get_latest_blockhash(self) -> str:
        """Most recent blockhash."""
        result = await self.call("getLatestBlockhash", [{"commitment": self._commitment}])
        try:
            return str(result["value"]["blockhash"])
        except (KeyError, TypeError) as exc:
            msg = f"{self._descriptor.name} getLatestBlockhash returned an unexpected shape"
            raise RPCError(msg) from exc

    async def healthcheck(self) -> bool:
        """Return True if the node reports itself healthy."""
        try:
            return await self.call("getHealth") == "ok"
        except RPCError:
            return False

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _ensure_connected(self) -> httpx.AsyncClient:
        """Return the HTTP client, raising if not connected."""
        if self._client is None:
            msg = f"RPC client for {self._descriptor.name} not connected. Call connect() first."
            raise RPCError(msg, status_code=500)
        return self._client

    def _raise_for_status(self, response: httpx.Response, method: str) -> None:
        """Raise an RPCError from a non-2xx response."""
        status = response.status_code
        try:
            body = response.json()
            detail = body.get("message", response.text) if isinstance(body, dict) else response.text
        except Exception:  # noqa: BLE001
            detail = response.text

        message = f"{self._descriptor.name} {method} failed ({status}): {detail}"
        raise RPCError(message, status_code=status)
