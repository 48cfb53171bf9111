"""WalletError — base exception class for all wave-wallet errors."""

from __future__ import annotations


class WalletError(Exception):
    """Base error for all wallet core operations.

    Attributes:
        message: Human-readable error description.
        status_code: Suggested status code for surfaces that report one.
        code: Machine-readable error code string.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 500,
        code: str = "wallet-error",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
