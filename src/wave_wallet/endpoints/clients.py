"""Long-lived RPC client handles keyed by endpoint purpose.

Replaces module-level client singletons: the handles are created once by
the process context and closed on shutdown.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING

from wave_wallet.endpoints.rpc import RPCClient
from wave_wallet.endpoints.selector import EndpointPurpose

if TYPE_CHECKING:
    from collections.abc import Mapping

    from wave_wallet.endpoints.selector import EndpointSelector

logger = logging.getLogger(__name__)


class EndpointClients:
    """One ``RPCClient`` per endpoint purpose.

    Usage::

        clients = EndpointClients(selector)
        await clients.connect()
        try:
            slot = await clients.client("rollup").get_slot()
        finally:
            await clients.close()
    """

    def __init__(self, selector: EndpointSelector, *, timeout: float = 30.0) -> None:
        self._selector = selector
        self._clients: Mapping[EndpointPurpose, RPCClient] = MappingProxyType(
            {
                purpose: RPCClient(descriptor, timeout=timeout)
                for purpose, descriptor in selector.descriptors.items()
            }
        )

    def client(self, purpose: EndpointPurpose | str) -> RPCClient:
        """Return the handle for *purpose*.

        Raises:
            UndefinedEndpointPurpose: For an unknown purpose.
        """
        descriptor = self._selector.resolve(purpose)
        return self._clients[descriptor.purpose]

    @property
    def standard(self) -> RPCClient:
        return self._clients[EndpointPurpose.STANDARD]

    @property
    def rollup(self) -> RPCClient:
        return self._clients[EndpointPurpose.ROLLUP]

    @property
    def is_connected(self) -> bool:
        return all(c.is_connected for c in self._clients.values())

    async def connect(self) -> None:
        """Connect every client."""
        for client in self._clients.values():
            await client.connect()
        logger.info("Connected %d endpoint clients", len(self._clients))

    async def close(self) -> None:
        """Close every client. Safe to call repeatedly."""
        for client in self._clients.values():
            await client.close()

    async def healthcheck(self) -> dict[str, str]:
        """Check every endpoint.

        Returns:
            Dict of purpose → ``ok`` / ``error`` / ``not_connected``.
        """
        status: dict[str, str] = {}
        for purpose, client in self._clients.items():
            if not client.is_connected:
                status[purpose.value] = "not_connected"
            else:
                status[purpose.value] = "ok" if await client.healthcheck() else "error"
        return status
