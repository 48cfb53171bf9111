"""Provisioning session — the secret provisioning state machine.

States and allowed moves are listed in ``models.TRANSITIONS``::

    START ──► GENERATING ──► REVIEWING ──affirm──► CONFIRMED (activate)
      │                        ▲    │
      └──► IMPORTING ──────────┘    └─decline─► REVIEWING
      any non-terminal state ──abandon──► ABANDONED

The only way from ``REVIEWING`` to ``CONFIRMED`` is ``affirm()``.  At
``CONFIRMED`` the secret is handed to secure storage; once that succeeds
the session is closed and its reference to the secret is dropped.  If
storage fails the session stays at ``CONFIRMED`` with the activation
pending until ``retry_activation()`` succeeds or the user abandons.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from wave_wallet.errors.provisioning_errors import (
    InsufficientVocabulary,
    InvalidSecretFormat,
    InvalidTransition,
    StorageFailure,
)
from wave_wallet.provisioning.clipboard import CopyIndicator, copy_to_clipboard
from wave_wallet.provisioning.models import (
    TRANSITIONS,
    NavSignal,
    ProvisioningPath,
    ProvisioningState,
    Secret,
    WalletActivated,
)
from wave_wallet.words.source import SamplingMode, generate_mnemonic, sample

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from wave_wallet.provisioning.collectors import ImportMethod
    from wave_wallet.provisioning.models import Clipboard, Navigator
    from wave_wallet.provisioning.selector import ImportMethodSelector
    from wave_wallet.storage.secure import SecureStorage

logger = logging.getLogger(__name__)


class ProvisioningSession:
    """One in-progress attempt to establish a wallet secret.

    Usage::

        session = onboarding.start()
        session.generate()              # or begin_import() + submit_import()
        session.copy_secret(clipboard)  # optional
        await session.affirm()          # stores the secret, emits activate
    """

    def __init__(
        self,
        *,
        selector: ImportMethodSelector,
        storage: SecureStorage,
        vocabulary: Sequence[str],
        phrase_length: int,
        navigator: Navigator | None = None,
        copied_reset_seconds: float = 2.0,
        on_activated: Callable[[WalletActivated], None] | None = None,
        on_close: Callable[[ProvisioningSession], None] | None = None,
        mnemonic_language: str | None = None,
    ) -> None:
        """Initialize the session.

        With *mnemonic_language* set, generated phrases are checksum-valid
        BIP-39 phrases drawn from that language's word list and *vocabulary*
        is not used for generation.
        """
        self._selector = selector
        self._storage = storage
        self._vocabulary = vocabulary
        self._phrase_length = phrase_length
        self._navigator = navigator
        self._on_activated = on_activated
        self._on_close = on_close
        self._mnemonic_language = mnemonic_language

        self._state = ProvisioningState.START
        self._path: ProvisioningPath | None = None
        self._secret: Secret | None = None
        self._import_task: asyncio.Future[Secret | None] | None = None
        self._activation_lock = asyncio.Lock()
        self._activation_pending = False
        self._activated = False
        self._closed = False
        self._indicator = CopyIndicator(copied_reset_seconds)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def state(self) -> ProvisioningState:
        return self._state

    @property
    def path(self) -> ProvisioningPath | None:
        return self._path

    @property
    def secret(self) -> Secret | None:
        """The secret under review, while this session still owns it."""
        return self._secret

    @property
    def import_method(self) -> ImportMethod | None:
        return self._selector.chosen

    @property
    def activation_pending(self) -> bool:
        """True after a storage failure until a retry succeeds."""
        return self._activation_pending

    @property
    def activated(self) -> bool:
        return self._activated

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def copied(self) -> bool:
        return self._indicator.copied

    @property
    def copy_indicator(self) -> CopyIndicator:
        return self._indicator

    # ------------------------------------------------------------------
    # Create path
    # ------------------------------------------------------------------

    def generate(self) -> Secret:
        """Generate a fresh phrase with the CSPRNG and move to review.

        Raises:
            InvalidTransition: Unless the session is at ``START``.
            InsufficientVocabulary: If the vocabulary is misconfigured;
                the session is abandoned.
        """
        self._move(ProvisioningState.GENERATING)
        self._path = ProvisioningPath.CREATE
        try:
            if self._mnemonic_language is not None:
                words = generate_mnemonic(self._phrase_length, self._mnemonic_language)
            else:
                words = sample(self._vocabulary, self._phrase_length, mode=SamplingMode.SECURE)
        except InsufficientVocabulary:
            logger.exception("Phrase generation failed: vocabulary too small")
            self.abandon()
            raise

        self._secret = Secret.from_phrase(words)
        self._enter_review()
        logger.info("Generated %d-word recovery phrase", len(words))
        return self._secret

    # ------------------------------------------------------------------
    # Import path
    # ------------------------------------------------------------------

    def begin_import(self, method: ImportMethod | str) -> ImportMethod:
        """Choose an import modality (from ``START``, or re-choose while importing)."""
        if self._state is ProvisioningState.IMPORTING:
            if self._import_task is not None:
                raise InvalidTransition("importing (collector busy)", ProvisioningState.IMPORTING)
            return self._selector.choose(method)

        if ProvisioningState.IMPORTING not in TRANSITIONS[self._state]:
            raise InvalidTransition(self._state, ProvisioningState.IMPORTING)
        chosen = self._selector.choose(method)
        self._move(ProvisioningState.IMPORTING)
        self._path = ProvisioningPath.IMPORT
        return chosen

    async def submit_import(self, entry: str | None) -> Secret | None:
        """Hand *entry* to the chosen collector.

        Returns:
            The collected secret (session now ``REVIEWING``), or ``None`` if
            the user cancelled (session now ``ABANDONED``).

        Raises:
            InvalidTransition: If not importing or a collection is in flight.
            InvalidSecretFormat: On malformed material; the session stays
                ``IMPORTING`` with the same modality chosen.
        """
        if self._state is not ProvisioningState.IMPORTING:
            raise InvalidTransition(self._state, ProvisioningState.REVIEWING)
        if self._import_task is not None:
            raise InvalidTransition("importing (collector busy)", ProvisioningState.REVIEWING)

        task = asyncio.ensure_future(self._selector.submit(entry))
        self._import_task = task
        try:
            secret = await task
        except asyncio.CancelledError:
            self._import_task = None
            self.abandon()
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
            return None
        except InvalidSecretFormat as exc:
            logger.info("Rejected %s entry: %s", exc.method or "import", exc.message)
            raise
        finally:
            self._import_task = None

        if secret is None:
            logger.info("Import cancelled by user")
            self.abandon()
            return None

        self._secret = secret
        self._enter_review()
        logger.info("Imported %s secret", secret.kind.value)
        return secret

    def cancel_import(self) -> None:
        """Cancel the import (including a suspended collector) and abandon."""
        if self._state is not ProvisioningState.IMPORTING:
            raise InvalidTransition(self._state, ProvisioningState.ABANDONED)
        self.abandon()

    # ------------------------------------------------------------------
    # Review
    # ------------------------------------------------------------------

    def copy_secret(self, clipboard: Clipboard) -> str:
        """Export the secret under review to *clipboard*; state is unchanged."""
        if self._state is not ProvisioningState.REVIEWING or self._secret is None:
            raise InvalidTransition(self._state, "copy")
        text = copy_to_clipboard(self._secret, clipboard)
        self._indicator.trigger()
        return text

    def decline(self) -> Secret:
        """User has not written the secret down yet; stay in review."""
        if self._state is not ProvisioningState.REVIEWING or self._secret is None:
            raise InvalidTransition(self._state, ProvisioningState.REVIEWING)
        logger.info("Confirmation declined; staying in review")
        return self._secret

    async def affirm(self) -> bool:
        """Explicit user affirmation: confirm and activate.

        Returns:
            True if this call activated the wallet, False if the wallet was
            already activated (repeat taps are no-ops).

        Raises:
            InvalidTransition: If there is nothing under review.
            StorageFailure: If secure storage rejected the secret; the
                activation stays pending and can be retried.
        """
        async with self._activation_lock:
            if self._activated:
                return False
            if self._state is ProvisioningState.REVIEWING:
                self._move(ProvisioningState.CONFIRMED)
            elif not (self._state is ProvisioningState.CONFIRMED and self._activation_pending):
                raise InvalidTransition(self._state, ProvisioningState.CONFIRMED)
            await self._activate()
            return True

    async def retry_activation(self) -> bool:
        """Retry the storage handoff after a ``StorageFailure``."""
        async with self._activation_lock:
            if self._activated:
                return False
            if not (self._state is ProvisioningState.CONFIRMED and self._activation_pending):
                raise InvalidTransition(self._state, ProvisioningState.CONFIRMED)
            await self._activate()
            return True

    # ------------------------------------------------------------------
    # Abandon
    # ------------------------------------------------------------------

    def abandon(self) -> None:
        """Back out of onboarding, discarding any secret.

        A no-op once the session is closed.
        """
        if self._closed:
            return
        if self._activation_lock.locked():
            raise InvalidTransition("confirmed (storing)", ProvisioningState.ABANDONED)

        self._move(ProvisioningState.ABANDONED)
        if self._import_task is not None:
            self._import_task.cancel()
            self._import_task = None
        self._activation_pending = False
        self._teardown()
        logger.info("Provisioning session abandoned")
        self._signal(NavSignal.BACK)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _move(self, target: ProvisioningState) -> None:
        if self._closed or target not in TRANSITIONS[self._state]:
            raise InvalidTransition(self._state, target)
        logger.debug("Provisioning %s -> %s", self._state.value, target.value)
        self._state = target

    def _enter_review(self) -> None:
        self._move(ProvisioningState.REVIEWING)
        self._signal(NavSignal.TO_REVIEW)

    async def _activate(self) -> None:
        """Hand the secret to storage; close the session on success."""
        secret = self._secret
        if secret is None:
            raise InvalidTransition(self._state, "activate")

        self._activation_pending = True
        try:
            await self._storage.store(secret)
        except StorageFailure:
            logger.warning("Secure storage failed; activation pending retry")
            raise
        except Exception as exc:
            logger.warning("Secure storage failed; activation pending retry")
            msg = f"secure storage failed to persist the secret: {exc}"
            raise StorageFailure(msg) from exc

        self._activation_pending = False
        self._activated = True
        event = WalletActivated(kind=secret.kind.value, path=self._path.value if self._path else "")
        self._teardown()
        logger.info("Wallet activated (%s, %s)", event.kind, event.path)
        if self._on_activated is not None:
            self._on_activated(event)
        self._signal(NavSignal.TO_MAIN)

    def _teardown(self) -> None:
        self._secret = None
        self._indicator.close()
        self._selector.clear()
        self._closed = True
        if self._on_close is not None:
            self._on_close(self)

    def _signal(self, signal: NavSignal) -> None:
        if self._navigator is not None:
            self._navigator.signal(signal)
