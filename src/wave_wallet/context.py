"""WalletContext — process-wide owner of endpoints and onboarding."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Self

from wave_wallet.endpoints.clients import EndpointClients
from wave_wallet.endpoints.selector import EndpointSelector
from wave_wallet.provisioning.onboarding import Onboarding
from wave_wallet.storage.secure import MemorySecureStorage

if TYPE_CHECKING:
    from types import TracebackType

    from wave_wallet.config.settings import AppConfig
    from wave_wallet.provisioning.collectors import HardwareLink
    from wave_wallet.provisioning.models import Navigator
    from wave_wallet.storage.secure import SecureStorage

logger = logging.getLogger(__name__)


class WalletContext:
    """Created once at startup; torn down on shutdown.

    Endpoint descriptors and onboarding are available as soon as the
    context is constructed.  ``start()`` opens the RPC connections and
    ``close()`` abandons any open onboarding session and closes them.
    """

    def __init__(
        self,
        config: AppConfig,
        *,
        storage: SecureStorage | None = None,
        navigator: Navigator | None = None,
        hardware_link: HardwareLink | None = None,
    ) -> None:
        """Build the context from configuration.

        Args:
            config: Application configuration.
            storage: Secure storage collaborator; defaults to a
                process-local ``MemorySecureStorage``.
            navigator: Navigation collaborator for onboarding signals.
            hardware_link: Hardware-wallet handshake, if supported.

        Raises:
            InsufficientVocabulary: If the word list cannot supply a phrase
                of the configured length.
        """
        self._config = config
        self._started = False
        self._storage = storage if storage is not None else MemorySecureStorage()
        self._endpoints = EndpointSelector(config.endpoints)
        self._clients = EndpointClients(self._endpoints, timeout=config.endpoints.timeout)
        self._onboarding = Onboarding.from_config(
            config.onboarding,
            storage=self._storage,
            navigator=navigator,
            hardware_link=hardware_link,
        )

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def endpoints(self) -> EndpointSelector:
        return self._endpoints

    @property
    def clients(self) -> EndpointClients:
        return self._clients

    @property
    def onboarding(self) -> Onboarding:
        return self._onboarding

    @property
    def storage(self) -> SecureStorage:
        return self._storage

    @property
    def is_started(self) -> bool:
        return self._started

    async def start(self) -> None:
        """Open the endpoint client connections.

        Raises:
            RuntimeError: If already started.
        """
        if self._started:
            msg = "Context already started"
            raise RuntimeError(msg)
        await self._clients.connect()
        self._started = True
        logger.info("Wallet context started (v%s)", self._config.version)

    async def close(self) -> None:
        """Gracefully shut down. Can be called multiple times (idempotent)."""
        self._onboarding.close()
        if not self._started:
            return
        await self._clients.close()
        self._started = False
        logger.info("Wallet context shut down")

    async def __aenter__(self) -> Self:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
