#!/usr/bin/env python3
"""Wave Wallet console — endpoints, demo phrases, health, onboarding.

    # Show the configured endpoints
    python -m wave_wallet.main endpoints

    # Print an illustrative (non-secret) phrase
    python -m wave_wallet.main demo-phrase

    # Check both endpoints
    python -m wave_wallet.main health

    # Walk through onboarding in the terminal (in-memory storage)
    python -m wave_wallet.main onboard
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import TYPE_CHECKING

from wave_wallet.config.settings import AppConfig
from wave_wallet.context import WalletContext
from wave_wallet.errors.provisioning_errors import InvalidSecretFormat, StorageFailure
from wave_wallet.provisioning.collectors import ImportMethod
from wave_wallet.provisioning.models import NavSignal, ProvisioningState
from wave_wallet.words.source import demo_phrase, load_vocabulary

if TYPE_CHECKING:
    from collections.abc import Callable

    from wave_wallet.provisioning.session import ProvisioningSession

_USAGE = "usage: python -m wave_wallet.main {endpoints|demo-phrase|health|onboard}"


def configure_logging(config: AppConfig) -> None:
    """Configure root logging from settings."""
    level = logging.DEBUG if config.debug else getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class ConsoleNavigator:
    """Navigator that reports transition signals on the console."""

    def __init__(self, out: Callable[[str], None] = print) -> None:
        self._out = out
        self.signals: list[NavSignal] = []

    def signal(self, signal: NavSignal) -> None:
        self.signals.append(signal)
        self._out(f"[{signal.value}]")


class ConsoleClipboard:
    """Clipboard stand-in that prints the exported text."""

    def __init__(self, out: Callable[[str], None] = print) -> None:
        self._out = out

    def set_text(self, text: str) -> None:
        self._out(f"Copied: {text}")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_endpoints(config: AppConfig) -> None:
    """Print both endpoint descriptors."""
    ctx = WalletContext(config)
    for purpose, descriptor in ctx.endpoints.descriptors.items():
        print(f"{purpose.value:<10} {descriptor.name:<20} {descriptor.url}")


def _cmd_demo_phrase(config: AppConfig) -> None:
    """Print a cosmetic phrase (not suitable as a secret)."""
    vocabulary = load_vocabulary(config.onboarding.wordlist_language)
    words = demo_phrase(config.onboarding.phrase_length, vocabulary)
    print(" ".join(words))
    print("(illustration only: generated without a secure random source)")


def _cmd_health(config: AppConfig) -> None:
    """Connect both endpoint clients and print their health."""

    async def _run() -> None:
        async with WalletContext(config) as ctx:
            status = await ctx.clients.healthcheck()
            for purpose, result in status.items():
                descriptor = ctx.endpoints.resolve(purpose)
                print(f"{purpose:<10} {descriptor.url:<40} {result}")

    asyncio.run(_run())


async def run_onboarding(
    ctx: WalletContext,
    prompt: Callable[[str], str] = input,
    out: Callable[[str], None] = print,
) -> bool:
    """Drive one onboarding session from console input.

    Returns:
        True if a wallet was activated, False if the user backed out.
    """
    session = ctx.onboarding.start()
    choice = prompt("Create a new wallet or import one? [create/import/back] ").strip().lower()

    if choice == "create":
        secret = session.generate()
        for i, word in enumerate(secret.words, start=1):
            out(f"{i:2d}. {word}")
    elif choice == "import":
        if not await _collect_import(session, prompt, out):
            return False
    else:
        session.abandon()
        return False

    return await _review(session, prompt, out)


async def _collect_import(
    session: ProvisioningSession,
    prompt: Callable[[str], str],
    out: Callable[[str], None],
) -> bool:
    method = prompt("Import with [phrase/private_key]? ").strip().lower()
    try:
        session.begin_import(method)
    except ValueError:
        out(f"Unknown import method: {method}")
        session.abandon()
        return False

    while session.state is ProvisioningState.IMPORTING:
        entry = prompt("Enter secret (blank to cancel): ")
        try:
            secret = await session.submit_import(entry or None)
        except InvalidSecretFormat as exc:
            out(exc.message)
            continue
        if secret is None:
            return False
    return True


async def _review(
    session: ProvisioningSession,
    prompt: Callable[[str], str],
    out: Callable[[str], None],
) -> bool:
    clipboard = ConsoleClipboard(out)
    while not session.closed:
        if session.state is ProvisioningState.REVIEWING:
            answer = prompt("Written the recovery phrase down? [yes/no/copy/back] ").strip().lower()
            if answer == "copy":
                session.copy_secret(clipboard)
                continue
            if answer == "back":
                session.abandon()
                return False
            if answer != "yes":
                session.decline()
                continue
        else:
            answer = prompt("Saving failed. Retry? [yes/back] ").strip().lower()
            if answer == "back":
                session.abandon()
                return False
        try:
            await session.affirm()
        except StorageFailure as exc:
            out(f"Could not save wallet: {exc.message}")
    return session.activated


def _cmd_onboard(config: AppConfig) -> None:
    """Interactive onboarding against in-memory storage."""

    async def _run() -> None:
        ctx = WalletContext(config, navigator=ConsoleNavigator())
        try:
            activated = await run_onboarding(ctx)
        finally:
            await ctx.close()
        print("Wallet active." if activated else "Onboarding abandoned.")

    asyncio.run(_run())


_COMMANDS: dict[str, Callable[[AppConfig], None]] = {
    "endpoints": _cmd_endpoints,
    "demo-phrase": _cmd_demo_phrase,
    "health": _cmd_health,
    "onboard": _cmd_onboard,
}


def main(argv: list[str] | None = None) -> int:
    """Dispatch a console command."""
    args = sys.argv[1:] if argv is None else argv
    if not args or args[0] not in _COMMANDS:
        print(_USAGE, file=sys.stderr)
        return 2

    config = AppConfig()
    configure_logging(config)
    _COMMANDS[args[0]](config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
