"""Provisioning data models — secrets, states, navigation signals, events."""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass, field
from typing import Any, Protocol

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class SecretKind(enum.StrEnum):
    """Kind of credential material held by a ``Secret``."""

    PHRASE = "phrase"
    PRIVATE_KEY = "private_key"
    HARDWARE = "hardware"


class ProvisioningPath(enum.StrEnum):
    """How the user chose to obtain a secret."""

    CREATE = "create"
    IMPORT = "import"


class ProvisioningState(enum.StrEnum):
    """States of the secret provisioning state machine."""

    START = "start"
    GENERATING = "generating"
    IMPORTING = "importing"
    REVIEWING = "reviewing"
    CONFIRMED = "confirmed"
    ABANDONED = "abandoned"


class NavSignal(enum.StrEnum):
    """High-level transition signals sent to the navigation collaborator."""

    TO_REVIEW = "to_review"
    TO_MAIN = "to_main"
    BACK = "back"


# Every allowed state change. Anything absent here is rejected.
TRANSITIONS: dict[ProvisioningState, frozenset[ProvisioningState]] = {
    ProvisioningState.START: frozenset(
        {ProvisioningState.GENERATING, ProvisioningState.IMPORTING, ProvisioningState.ABANDONED}
    ),
    ProvisioningState.GENERATING: frozenset(
        {ProvisioningState.REVIEWING, ProvisioningState.ABANDONED}
    ),
    ProvisioningState.IMPORTING: frozenset(
        {ProvisioningState.REVIEWING, ProvisioningState.ABANDONED}
    ),
    ProvisioningState.REVIEWING: frozenset(
        {ProvisioningState.CONFIRMED, ProvisioningState.ABANDONED}
    ),
    # only while activation is pending after a storage failure
    ProvisioningState.CONFIRMED: frozenset({ProvisioningState.ABANDONED}),
    ProvisioningState.ABANDONED: frozenset(),
}


# ---------------------------------------------------------------------------
# Secret
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Secret:
    """Credential material provisioned during onboarding.

    Attributes:
        kind: Phrase, raw private key, or hardware-wallet reference.
        words: Phrase words in order (``PHRASE`` only).
        value: Key string or hardware reference (non-phrase kinds).
    """

    kind: SecretKind
    words: tuple[str, ...] = ()
    value: str = field(default="", repr=False)

    def __repr__(self) -> str:
        # never render secret material in logs or tracebacks
        return f"Secret(kind={self.kind.value!r})"

    @classmethod
    def from_phrase(cls, words: tuple[str, ...] | list[str]) -> Secret:
        return cls(kind=SecretKind.PHRASE, words=tuple(words))

    @classmethod
    def from_private_key(cls, key: str) -> Secret:
        return cls(kind=SecretKind.PRIVATE_KEY, value=key)

    @classmethod
    def from_hardware(cls, reference: str) -> Secret:
        return cls(kind=SecretKind.HARDWARE, value=reference)

    @property
    def material(self) -> str:
        """The secret as a single string (space-joined words for phrases)."""
        if self.kind is SecretKind.PHRASE:
            return " ".join(self.words)
        return self.value


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WalletActivated:
    """Published once a secret has been persisted and the wallet is ready.

    By the time listeners receive it, the session has already handed the
    secret to secure storage and dropped its own reference.  The event
    therefore carries no secret material, only its kind and path.
    """

    type: str = "activate"
    kind: str = ""
    path: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Collaborator protocols
# ---------------------------------------------------------------------------


class Navigator(Protocol):
    """Receives high-level navigation signals."""

    def signal(self, signal: NavSignal) -> None: ...


class Clipboard(Protocol):
    """One-way export sink for the reviewing screen."""

    def set_text(self, text: str) -> None: ...
