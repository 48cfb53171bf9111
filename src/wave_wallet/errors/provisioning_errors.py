"""Errors raised while provisioning a wallet secret."""

from __future__ import annotations

from wave_wallet.errors.wallet_errors import WalletError


class InsufficientVocabulary(WalletError):
    """Phrase length exceeds the number of distinct vocabulary words.

    A configuration error: a correctly sized vocabulary never raises it.
    """

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(
            f"cannot sample {requested} distinct words from a vocabulary of {available}",
            status_code=500,
            code="insufficient-vocabulary",
        )
        self.requested = requested
        self.available = available


class InvalidSecretFormat(WalletError):
    """User-supplied secret material is malformed (user-correctable)."""

    def __init__(self, message: str, *, method: str = "") -> None:
        super().__init__(message, status_code=400, code="invalid-secret-format")
        self.method = method


class StorageFailure(WalletError):
    """The secure-storage collaborator failed to persist the secret."""

    def __init__(self, message: str = "secure storage failed to persist the secret") -> None:
        super().__init__(message, status_code=503, code="storage-failure")


class ProvisioningError(WalletError):
    """Base for provisioning state-machine misuse."""

    def __init__(self, message: str, *, code: str = "provisioning-error") -> None:
        super().__init__(message, status_code=409, code=code)


class InvalidTransition(ProvisioningError):
    """A transition not present in the provisioning transition table."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            f"cannot move from {current} to {target}",
            code="invalid-transition",
        )
        self.current = current
        self.target = target


class SessionActive(ProvisioningError):
    """A provisioning session is already open."""

    def __init__(self) -> None:
        super().__init__(
            "a provisioning session is already active",
            code="session-active",
        )
