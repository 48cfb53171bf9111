"""Clipboard export and the transient "copied" indicator."""

from __future__ import annotations

import asyncio
import contextlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wave_wallet.provisioning.models import Clipboard, Secret


def export_secret(secret: Secret) -> str:
    """Render a secret as one string: phrase words joined by a single space."""
    return secret.material


def copy_to_clipboard(secret: Secret, clipboard: Clipboard) -> str:
    """Export *secret* to *clipboard* and return the exported text."""
    text = export_secret(secret)
    clipboard.set_text(text)
    return text


class CopyIndicator:
    """A ``copied`` flag that clears itself after ``reset_after`` seconds.

    The reset is a cancellable task owned by the indicator; ``close()`` must
    be called when the owning screen goes away.
    """

    def __init__(self, reset_after: float = 2.0) -> None:
        self._reset_after = reset_after
        self._copied = False
        self._task: asyncio.Task[None] | None = None

    @property
    def copied(self) -> bool:
        return self._copied

    def trigger(self) -> None:
        """Set the flag and (re)start the reset delay.

        Outside a running event loop the flag stays set until ``close()``.
        """
        self._cancel_pending()
        self._copied = True
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._task = loop.create_task(self._reset_later())

    def close(self) -> None:
        """Cancel any pending reset and clear the flag."""
        self._cancel_pending()
        self._copied = False

    async def wait(self) -> None:
        """Wait until the pending reset (if any) has run or been cancelled."""
        if self._task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await self._task

    def _cancel_pending(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _reset_later(self) -> None:
        await asyncio.sleep(self._reset_after)
        self._copied = False
