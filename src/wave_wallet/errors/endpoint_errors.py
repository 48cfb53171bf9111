"""Endpoint selection and RPC errors."""

from __future__ import annotations

from wave_wallet.errors.wallet_errors import WalletError


class UndefinedEndpointPurpose(WalletError, LookupError):
    """Programming error: no endpoint is configured for the requested purpose."""

    def __init__(self, purpose: object) -> None:
        super().__init__(
            f"undefined endpoint purpose: {purpose!r}",
            status_code=500,
            code="undefined-endpoint-purpose",
        )
        self.purpose = purpose


class RPCError(WalletError):
    """Error from a remote RPC endpoint."""

    def __init__(self, message: str, *, status_code: int = 502, rpc_code: int | None = None) -> None:
        super().__init__(message, status_code=status_code, code="rpc-error")
        self.rpc_code = rpc_code
