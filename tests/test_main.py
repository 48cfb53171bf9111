"""Tests for the console entry point."""

from __future__ import annotations

import re

from wave_wallet.context import WalletContext
from wave_wallet.main import ConsoleNavigator, main, run_onboarding

VALID_BIP39 = " ".join(["abandon"] * 11 + ["about"])


def _script(*answers: str):
    replies = iter(answers)
    return lambda _prompt: next(replies)


class TestMain:
    def test_usage(self, capsys):
        assert main([]) == 2
        assert "usage" in capsys.readouterr().err

    def test_unknown_command(self, capsys):
        assert main(["launch"]) == 2

    def test_endpoints(self, capsys):
        assert main(["endpoints"]) == 0
        out = capsys.readouterr().out
        assert "standard" in out
        assert "rollup" in out

    def test_demo_phrase(self, capsys):
        assert main(["demo-phrase"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines[0].split()) == 12
        assert "illustration only" in lines[1]


class TestRunOnboarding:
    async def test_create_and_confirm(self, app_config):
        ctx = WalletContext(app_config)
        out: list[str] = []
        activated = await run_onboarding(ctx, _script("create", "no", "copy", "yes"), out.append)

        assert activated is True
        assert ctx.storage.has_secret
        assert sum(1 for line in out if re.match(r"\s*\d+\. \w+$", line)) == 12
        assert any(line.startswith("Copied: ") for line in out)

    async def test_import_with_retry(self, app_config):
        ctx = WalletContext(app_config)
        out: list[str] = []
        activated = await run_onboarding(
            ctx, _script("import", "phrase", "hello world", VALID_BIP39, "yes"), out.append
        )

        assert activated is True
        assert "Please enter 12 or 24 words." in out
        loaded = await ctx.storage.load()
        assert loaded.material == VALID_BIP39

    async def test_back_out(self, app_config):
        ctx = WalletContext(app_config)
        assert await run_onboarding(ctx, _script("back"), print) is False
        assert ctx.onboarding.active_session is None
        assert ctx.storage.has_secret is False

    async def test_unknown_import_method(self, app_config):
        ctx = WalletContext(app_config)
        out: list[str] = []
        assert await run_onboarding(ctx, _script("import", "carrier-pigeon"), out.append) is False
        assert "Unknown import method: carrier-pigeon" in out

    async def test_storage_failure_then_retry(self, app_config):
        ctx = WalletContext(app_config)
        ctx.storage.fail_next = 1
        out: list[str] = []
        activated = await run_onboarding(ctx, _script("create", "yes", "yes"), out.append)

        assert activated is True
        assert any(line.startswith("Could not save wallet") for line in out)
        assert ctx.storage.store_calls == 2

    async def test_navigator_output(self, app_config):
        out: list[str] = []
        ctx = WalletContext(app_config, navigator=ConsoleNavigator(out.append))
        await run_onboarding(ctx, _script("create", "yes"), out.append)
        assert "[to_review]" in out
        assert "[to_main]" in out
