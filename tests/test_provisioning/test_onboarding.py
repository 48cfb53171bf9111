"""Tests for the onboarding coordinator."""

from __future__ import annotations

import pytest
from mnemonic import Mnemonic

from wave_wallet.config.settings import OnboardingConfig
from wave_wallet.errors.provisioning_errors import (
    InsufficientVocabulary,
    InvalidSecretFormat,
    SessionActive,
    StorageFailure,
)
from wave_wallet.provisioning.collectors import (
    ImportMethod,
    PhraseCollector,
    PrivateKeyCollector,
)
from wave_wallet.provisioning.models import NavSignal, ProvisioningState
from wave_wallet.provisioning.onboarding import Onboarding


class _StaticLink:
    async def request_reference(self) -> str | None:
        return "ledger:44'/501'/0'"


@pytest.fixture
def onboarding(storage, vocabulary, navigator) -> Onboarding:
    return Onboarding(
        storage=storage,
        collectors=[PhraseCollector(vocabulary), PrivateKeyCollector()],
        vocabulary=vocabulary,
        navigator=navigator,
        copied_reset_seconds=0.01,
    )


class TestConstruction:
    def test_vocabulary_too_small(self, storage):
        with pytest.raises(InsufficientVocabulary) as exc_info:
            Onboarding(storage=storage, collectors=[], vocabulary=("a", "b", "a"), phrase_length=3)
        assert exc_info.value.requested == 3
        assert exc_info.value.available == 2

    def test_from_config_defaults(self, storage):
        onboarding = Onboarding.from_config(OnboardingConfig(), storage=storage)
        session = onboarding.start()
        assert set(session._selector.available) == {ImportMethod.PHRASE, ImportMethod.PRIVATE_KEY}
        secret = session.generate()
        assert len(secret.words) == 12

    def test_from_config_with_hardware(self, storage):
        onboarding = Onboarding.from_config(
            OnboardingConfig(), storage=storage, hardware_link=_StaticLink()
        )
        session = onboarding.start()
        assert ImportMethod.HARDWARE in session._selector.available

    def test_from_config_generates_bip39_phrases(self, storage):
        onboarding = Onboarding.from_config(OnboardingConfig(), storage=storage)
        checker = Mnemonic("english")
        for _ in range(50):
            session = onboarding.start()
            secret = session.generate()
            assert checker.check(secret.material)
            session.abandon()

    async def test_from_config_rejects_bad_checksum(self, storage):
        session = Onboarding.from_config(OnboardingConfig(), storage=storage).start()
        session.begin_import(ImportMethod.PHRASE)
        with pytest.raises(InvalidSecretFormat, match="Invalid seed phrase"):
            await session.submit_import(" ".join(["abandon"] * 12))
        assert session.state is ProvisioningState.IMPORTING
        assert await session.submit_import(" ".join(["abandon"] * 11 + ["about"])) is not None

    def test_mnemonic_language_needs_bip39_length(self, storage, vocabulary):
        with pytest.raises(ValueError, match="BIP-39"):
            Onboarding(
                storage=storage,
                collectors=[],
                vocabulary=vocabulary,
                phrase_length=10,
                mnemonic_language="english",
            )


class TestSessions:
    def test_single_active_session(self, onboarding):
        session = onboarding.start()
        assert onboarding.active_session is session
        with pytest.raises(SessionActive):
            onboarding.start()

    def test_abandon_releases_session(self, onboarding):
        first = onboarding.start()
        first.abandon()
        assert onboarding.active_session is None
        second = onboarding.start()
        assert second is not first

    async def test_new_session_does_not_see_old_secret(self, onboarding):
        first = onboarding.start()
        old = first.generate()
        first.abandon()

        second = onboarding.start()
        assert second.secret is None
        assert second.state is ProvisioningState.START
        assert second.generate() is not old

    async def test_activation_releases_session(self, onboarding):
        session = onboarding.start()
        session.generate()
        await session.affirm()
        assert onboarding.active_session is None

    async def test_pending_activation_keeps_session(self, onboarding, storage):
        session = onboarding.start()
        session.generate()
        storage.fail_next = 1
        with pytest.raises(StorageFailure):
            await session.affirm()
        assert onboarding.active_session is session
        with pytest.raises(SessionActive):
            onboarding.start()

    def test_close_abandons_open_session(self, onboarding, navigator):
        session = onboarding.start()
        session.generate()
        onboarding.close()
        assert session.state is ProvisioningState.ABANDONED
        assert session.secret is None
        assert onboarding.active_session is None
        assert navigator.signals[-1] is NavSignal.BACK

    def test_close_without_session(self, onboarding):
        onboarding.close()
        assert onboarding.active_session is None


class TestActivationEvents:
    async def test_listener_receives_event(self, onboarding):
        received = []
        onboarding.subscribe(received.append)
        session = onboarding.start()
        session.generate()
        await session.affirm()

        assert len(received) == 1
        assert received[0].to_dict() == {"type": "activate", "kind": "phrase", "path": "create"}

    async def test_unsubscribe(self, onboarding):
        received = []
        onboarding.subscribe(received.append)
        onboarding.unsubscribe(received.append)
        onboarding.unsubscribe(received.append)
        session = onboarding.start()
        session.generate()
        await session.affirm()
        assert received == []

    async def test_failing_listener_does_not_block_others(self, onboarding, navigator, caplog):
        received = []

        def _broken(event):
            raise RuntimeError("listener boom")

        onboarding.subscribe(_broken)
        onboarding.subscribe(received.append)
        session = onboarding.start()
        session.begin_import(ImportMethod.PRIVATE_KEY)
        await session.submit_import("1" * 63 + "2")
        assert await session.affirm() is True

        assert len(received) == 1
        assert received[0].path == "import"
        assert navigator.signals[-1] is NavSignal.TO_MAIN
        assert "Activation listener failed" in caplog.text

    async def test_secret_stored_before_listeners_run(self, onboarding, storage):
        seen = []

        def _listener(event):
            seen.append((storage.has_secret, onboarding.active_session))

        onboarding.subscribe(_listener)
        session = onboarding.start()
        session.generate()
        await session.affirm()
        assert seen == [(True, None)]
        assert session.secret is None
