"""Secure storage collaborator contract and a process-local implementation.

Onboarding hands the provisioned secret to a ``SecureStorage`` exactly once,
at activation.  ``store`` is awaited by the caller as the acknowledgment; a
failed write must raise ``StorageFailure`` rather than return silently.

``MemorySecureStorage`` keeps the slot layout of the mobile key store:
a phrase and an imported private key are mutually exclusive, so writing one
clears the other.
"""

from __future__ import annotations

import logging
from typing import Protocol

from wave_wallet.errors.provisioning_errors import StorageFailure
from wave_wallet.provisioning.models import Secret, SecretKind

logger = logging.getLogger(__name__)

SLOT_MNEMONIC = "wave_mnemonic"
SLOT_IMPORTED_PK = "wave_imported_pk"
SLOT_HARDWARE = "wave_hardware_ref"

_SLOTS: dict[SecretKind, str] = {
    SecretKind.PHRASE: SLOT_MNEMONIC,
    SecretKind.PRIVATE_KEY: SLOT_IMPORTED_PK,
    SecretKind.HARDWARE: SLOT_HARDWARE,
}


class SecureStorage(Protocol):
    """Durable home for the active wallet secret."""

    async def store(self, secret: Secret) -> None: ...


class MemorySecureStorage:
    """In-memory ``SecureStorage`` for development and tests.

    Nothing survives the process.  Set ``fail_next`` to make the next
    ``store`` raise ``StorageFailure``.
    """

    def __init__(self) -> None:
        self._slots: dict[str, str] = {}
        self.fail_next = 0
        self.store_calls = 0

    async def store(self, secret: Secret) -> None:
        self.store_calls += 1
        if self.fail_next > 0:
            self.fail_next -= 1
            msg = "secure storage unavailable"
            raise StorageFailure(msg)

        slot = _SLOTS[secret.kind]
        # only one secret is authoritative at a time
        for other in _SLOTS.values():
            if other != slot:
                self._slots.pop(other, None)
        self._slots[slot] = secret.material
        logger.info("Stored %s secret", secret.kind.value)

    async def load(self) -> Secret | None:
        """Return the stored secret, or ``None`` if the store is empty."""
        if SLOT_MNEMONIC in self._slots:
            return Secret.from_phrase(self._slots[SLOT_MNEMONIC].split(" "))
        if SLOT_IMPORTED_PK in self._slots:
            return Secret.from_private_key(self._slots[SLOT_IMPORTED_PK])
        if SLOT_HARDWARE in self._slots:
            return Secret.from_hardware(self._slots[SLOT_HARDWARE])
        return None

    @property
    def has_secret(self) -> bool:
        return bool(self._slots)

    async def reset(self) -> None:
        """Delete every stored slot."""
        self._slots.clear()
