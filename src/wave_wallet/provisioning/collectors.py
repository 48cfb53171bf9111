"""Modality-specific secret collectors used by the import selector.

Each collector validates the material for its modality and either returns a
``Secret`` or ``None`` when the user cancelled.  Malformed material raises
``InvalidSecretFormat`` so the user can correct it and retry.
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Protocol

from mnemonic import Mnemonic

from wave_wallet.errors.provisioning_errors import InvalidSecretFormat
from wave_wallet.provisioning.models import Secret

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

logger = logging.getLogger(__name__)

# Exported keypair form: 32-byte seed followed by the 32-byte public key
PRIVATE_KEY_LENGTH = 64

_B58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


class ImportMethod(enum.StrEnum):
    """Import modalities offered on the import screen."""

    PHRASE = "phrase"
    PRIVATE_KEY = "private_key"
    HARDWARE = "hardware"


class SecretCollector(Protocol):
    """Collects one secret candidate for a single import modality."""

    method: ImportMethod

    async def collect(self, entry: str | None) -> Secret | None: ...


class HardwareLink(Protocol):
    """External hardware-wallet handshake.

    Returns an opaque device reference, or ``None`` when the user rejects the
    request on the device.
    """

    async def request_reference(self) -> str | None: ...


# ---------------------------------------------------------------------------
# Base58
# ---------------------------------------------------------------------------


def base58_decode(s: str) -> bytes:
    """Decode Base58 string to raw bytes (no checksum).

    Raises:
        ValueError: On characters outside the Base58 alphabet.
    """
    n = 0
    for char in s:
        index = _B58_ALPHABET.find(char)
        if index < 0:
            msg = f"invalid base58 character {char!r}"
            raise ValueError(msg)
        n = n * 58 + index
    result = n.to_bytes((n.bit_length() + 7) // 8, "big") if n > 0 else b""
    # Leading '1' chars encode 0x00 bytes
    pad_count = len(s) - len(s.lstrip("1"))
    return b"\x00" * pad_count + result


# ---------------------------------------------------------------------------
# Collectors
# ---------------------------------------------------------------------------


def normalize_phrase(entry: str) -> tuple[str, ...]:
    """Lowercase a phrase and split it on any run of whitespace."""
    return tuple(entry.strip().lower().split())


class PhraseCollector:
    """Recovery-phrase text entry."""

    method = ImportMethod.PHRASE

    def __init__(
        self,
        vocabulary: Sequence[str],
        *,
        accepted_lengths: Iterable[int] = (12, 24),
        verify_checksum: bool = False,
        language: str = "english",
    ) -> None:
        self._vocabulary = frozenset(vocabulary)
        self._accepted_lengths = tuple(sorted(set(accepted_lengths)))
        self._verify_checksum = verify_checksum
        self._language = language

    @property
    def accepted_lengths(self) -> tuple[int, ...]:
        return self._accepted_lengths

    async def collect(self, entry: str | None) -> Secret | None:
        if entry is None:
            return None
        return Secret.from_phrase(self.validate(entry))

    def validate(self, entry: str) -> tuple[str, ...]:
        """Return the normalized words, or raise ``InvalidSecretFormat``."""
        words = normalize_phrase(entry)
        if len(words) not in self._accepted_lengths:
            lengths = " or ".join(str(n) for n in self._accepted_lengths)
            msg = f"Please enter {lengths} words."
            raise InvalidSecretFormat(msg, method=self.method)

        unknown = [i + 1 for i, word in enumerate(words) if word not in self._vocabulary]
        if unknown:
            positions = ", ".join(str(i) for i in unknown)
            msg = f"Unknown word at position {positions}. Please check your words and try again."
            raise InvalidSecretFormat(msg, method=self.method)

        if self._verify_checksum and not Mnemonic(self._language).check(" ".join(words)):
            msg = "Invalid seed phrase. Please check your words and try again."
            raise InvalidSecretFormat(msg, method=self.method)
        return words


class PrivateKeyCollector:
    """Base58 private-key text entry."""

    method = ImportMethod.PRIVATE_KEY

    async def collect(self, entry: str | None) -> Secret | None:
        if entry is None:
            return None
        return Secret.from_private_key(self.validate(entry))

    def validate(self, entry: str) -> str:
        """Return the trimmed key, or raise ``InvalidSecretFormat``."""
        key = entry.strip()
        if not key:
            msg = "Please enter your private key."
            raise InvalidSecretFormat(msg, method=self.method)
        try:
            decoded = base58_decode(key)
        except ValueError as exc:
            msg = "Invalid private key: not a base58 string."
            raise InvalidSecretFormat(msg, method=self.method) from exc
        if len(decoded) != PRIVATE_KEY_LENGTH:
            msg = f"Invalid private key: expected {PRIVATE_KEY_LENGTH} bytes, got {len(decoded)}."
            raise InvalidSecretFormat(msg, method=self.method)
        return key


class HardwareCollector:
    """Hardware-wallet handshake; may suspend on external I/O."""

    method = ImportMethod.HARDWARE

    def __init__(self, link: HardwareLink) -> None:
        self._link = link

    async def collect(self, entry: str | None = None) -> Secret | None:
        # entry is unused: the device supplies the material
        reference = await self._link.request_reference()
        if reference is None:
            logger.info("Hardware wallet request rejected on device")
            return None
        reference = reference.strip()
        if not reference:
            msg = "Hardware wallet returned an empty reference."
            raise InvalidSecretFormat(msg, method=self.method)
        return Secret.from_hardware(reference)
