"""Shared test fixtures for the wave-wallet test suite."""

from __future__ import annotations

import pytest

from wave_wallet.provisioning.models import NavSignal

# 48 distinct words, large enough for a 12-word phrase
SMALL_VOCABULARY = tuple(
    """
    abandon ability able about above absent absorb abstract absurd abuse access accident
    account accuse achieve acid acoustic acquire across act action actor actress actual
    adapt add addict address adjust admit adult advance advice aerobic affair afford
    afraid again age agent agree ahead aim air airport aisle alarm album
    """.split()
)


class RecordingNavigator:
    """Navigator that records every signal it receives."""

    def __init__(self) -> None:
        self.signals: list[NavSignal] = []

    def signal(self, signal: NavSignal) -> None:
        self.signals.append(signal)


class RecordingClipboard:
    """Clipboard that keeps the last exported text."""

    def __init__(self) -> None:
        self.text: str | None = None

    def set_text(self, text: str) -> None:
        self.text = text


@pytest.fixture
def app_config():
    """Provide a test AppConfig with safe defaults."""
    from wave_wallet.config.settings import AppConfig, EndpointsConfig

    return AppConfig(
        debug=True,
        endpoints=EndpointsConfig(
            standard_url="https://rpc.test.com",
            rollup_url="https://rollup.test.com",
        ),
    )


@pytest.fixture
def vocabulary() -> tuple[str, ...]:
    return SMALL_VOCABULARY


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def clipboard() -> RecordingClipboard:
    return RecordingClipboard()


@pytest.fixture
def storage():
    from wave_wallet.storage.secure import MemorySecureStorage

    return MemorySecureStorage()
