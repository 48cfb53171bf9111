"""Onboarding coordinator — owns at most one provisioning session at a time."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wave_wallet.errors.provisioning_errors import (
    InsufficientVocabulary,
    InvalidTransition,
    SessionActive,
)
from wave_wallet.provisioning.collectors import (
    HardwareCollector,
    PhraseCollector,
    PrivateKeyCollector,
)
from wave_wallet.provisioning.selector import ImportMethodSelector
from wave_wallet.provisioning.session import ProvisioningSession
from wave_wallet.words.source import MNEMONIC_LENGTHS, load_vocabulary

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from wave_wallet.config.settings import OnboardingConfig
    from wave_wallet.provisioning.collectors import HardwareLink, SecretCollector
    from wave_wallet.provisioning.models import Navigator, WalletActivated
    from wave_wallet.storage.secure import SecureStorage

logger = logging.getLogger(__name__)


class Onboarding:
    """Creates provisioning sessions and publishes wallet activation.

    Only one session may be open at a time; ``start()`` raises
    ``SessionActive`` until the current one is activated or abandoned.
    """

    def __init__(
        self,
        *,
        storage: SecureStorage,
        collectors: Sequence[SecretCollector],
        vocabulary: Sequence[str],
        phrase_length: int = 12,
        navigator: Navigator | None = None,
        copied_reset_seconds: float = 2.0,
        mnemonic_language: str | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            storage: Secure storage receiving the secret at activation.
            collectors: Import collectors offered on the import screen.
            vocabulary: Word vocabulary for generated phrases.
            phrase_length: Words per generated phrase.
            navigator: Receives ``TO_REVIEW`` / ``TO_MAIN`` / ``BACK``.
            copied_reset_seconds: Delay before the "copied" flag clears.
            mnemonic_language: Generate checksum-valid BIP-39 phrases in
                this language instead of plain samples of *vocabulary*.

        Raises:
            InsufficientVocabulary: If the vocabulary cannot supply a phrase.
            ValueError: If *phrase_length* is not a BIP-39 length while
                *mnemonic_language* is set.
        """
        distinct = len(set(vocabulary))
        if phrase_length > distinct:
            raise InsufficientVocabulary(phrase_length, distinct)
        if mnemonic_language is not None and phrase_length not in MNEMONIC_LENGTHS:
            msg = f"phrase_length {phrase_length} is not a BIP-39 phrase length"
            raise ValueError(msg)

        self._storage = storage
        self._collectors = tuple(collectors)
        self._vocabulary = tuple(vocabulary)
        self._phrase_length = phrase_length
        self._navigator = navigator
        self._copied_reset_seconds = copied_reset_seconds
        self._mnemonic_language = mnemonic_language
        self._active: ProvisioningSession | None = None
        self._listeners: list[Callable[[WalletActivated], None]] = []

    @classmethod
    def from_config(
        cls,
        config: OnboardingConfig,
        *,
        storage: SecureStorage,
        navigator: Navigator | None = None,
        hardware_link: HardwareLink | None = None,
    ) -> Onboarding:
        """Build the coordinator and its collectors from settings."""
        vocabulary = load_vocabulary(config.wordlist_language)
        collectors: list[SecretCollector] = [
            PhraseCollector(
                vocabulary,
                accepted_lengths=config.import_lengths,
                verify_checksum=config.verify_checksum,
                language=config.wordlist_language,
            ),
            PrivateKeyCollector(),
        ]
        if hardware_link is not None:
            collectors.append(HardwareCollector(hardware_link))
        return cls(
            storage=storage,
            collectors=collectors,
            vocabulary=vocabulary,
            phrase_length=config.phrase_length,
            navigator=navigator,
            copied_reset_seconds=config.copied_reset_seconds,
            mnemonic_language=config.wordlist_language,
        )

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    @property
    def active_session(self) -> ProvisioningSession | None:
        return self._active

    def start(self) -> ProvisioningSession:
        """Open a fresh provisioning session.

        Raises:
            SessionActive: If another session is still open.
        """
        if self._active is not None:
            raise SessionActive
        session = ProvisioningSession(
            selector=ImportMethodSelector(self._collectors),
            storage=self._storage,
            vocabulary=self._vocabulary,
            phrase_length=self._phrase_length,
            navigator=self._navigator,
            copied_reset_seconds=self._copied_reset_seconds,
            on_activated=self._publish,
            on_close=self._release,
            mnemonic_language=self._mnemonic_language,
        )
        self._active = session
        logger.info("Provisioning session started")
        return session

    def close(self) -> None:
        """Abandon the open session, if any (shutdown)."""
        if self._active is None:
            return
        try:
            self._active.abandon()
        except InvalidTransition:
            logger.warning("Open session could not be abandoned while storing")

    # ------------------------------------------------------------------
    # Activation events
    # ------------------------------------------------------------------

    def subscribe(self, listener: Callable[[WalletActivated], None]) -> None:
        """Register a callback for ``WalletActivated`` events."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[[WalletActivated], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _publish(self, event: WalletActivated) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Activation listener failed")

    def _release(self, session: ProvisioningSession) -> None:
        if self._active is session:
            self._active = None
