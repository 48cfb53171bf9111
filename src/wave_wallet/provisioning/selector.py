"""Import method selector — routes a chosen modality to its collector.

The selector remembers which modality the user picked, but never holds
secret material: whatever the collector returns goes straight back to the
caller.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING

from wave_wallet.errors.provisioning_errors import InvalidTransition
from wave_wallet.provisioning.collectors import ImportMethod

if TYPE_CHECKING:
    from collections.abc import Iterable

    from wave_wallet.provisioning.collectors import SecretCollector
    from wave_wallet.provisioning.models import Secret

logger = logging.getLogger(__name__)


class ImportMethodSelector:
    """Pure router over the registered import modalities.

    Usage::

        selector = ImportMethodSelector([PhraseCollector(words), PrivateKeyCollector()])
        selector.choose(ImportMethod.PHRASE)
        secret = await selector.submit("word1 word2 ...")
    """

    def __init__(self, collectors: Iterable[SecretCollector]) -> None:
        self._collectors = MappingProxyType({c.method: c for c in collectors})
        self._chosen: ImportMethod | None = None

    @property
    def available(self) -> tuple[ImportMethod, ...]:
        """Registered modalities, in registration order."""
        return tuple(self._collectors)

    @property
    def chosen(self) -> ImportMethod | None:
        return self._chosen

    def choose(self, method: ImportMethod | str) -> ImportMethod:
        """Select a modality.

        Raises:
            ValueError: If the modality is unknown or has no collector.
        """
        resolved = ImportMethod(method)
        if resolved not in self._collectors:
            msg = f"no collector registered for import method {resolved.value!r}"
            raise ValueError(msg)
        self._chosen = resolved
        logger.info("Import method chosen: %s", resolved.value)
        return resolved

    def clear(self) -> None:
        """Forget the chosen modality (back to the method list)."""
        self._chosen = None

    async def submit(self, entry: str | None) -> Secret | None:
        """Route *entry* to the chosen collector.

        Returns:
            The collected secret, or ``None`` if the user cancelled.

        Raises:
            InvalidTransition: If no modality has been chosen yet.
            InvalidSecretFormat: If the collector rejects the material.
                The chosen modality is kept so the user can retry.
        """
        if self._chosen is None:
            raise InvalidTransition("no import method", "collect")
        return await self._collectors[self._chosen].collect(entry)
