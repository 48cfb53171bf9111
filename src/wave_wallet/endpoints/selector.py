"""Endpoint selector — immutable descriptors for the two remote endpoints.

Both descriptors are built once from configuration; ``resolve`` is a pure
lookup and never performs I/O.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from wave_wallet.errors.endpoint_errors import UndefinedEndpointPurpose

if TYPE_CHECKING:
    from collections.abc import Mapping

    from wave_wallet.config.settings import EndpointsConfig


class EndpointPurpose(enum.StrEnum):
    """What a remote endpoint is used for."""

    STANDARD = "standard"
    ROLLUP = "rollup"


@dataclass(frozen=True)
class EndpointDescriptor:
    """A remote execution target.

    Attributes:
        name: Short identifier (e.g. ``solana-devnet``).
        url: Base address of the RPC endpoint.
        purpose: ``standard`` ledger RPC or ``rollup`` (private execution).
    """

    name: str
    url: str
    purpose: EndpointPurpose


class EndpointSelector:
    """Read-only lookup of endpoint descriptors by purpose.

    Usage::

        selector = EndpointSelector(config.endpoints)
        rollup = selector.resolve(EndpointPurpose.ROLLUP)
    """

    def __init__(self, config: EndpointsConfig) -> None:
        self._descriptors: Mapping[EndpointPurpose, EndpointDescriptor] = MappingProxyType(
            {
                EndpointPurpose.STANDARD: EndpointDescriptor(
                    name=config.standard_name,
                    url=config.standard_url.rstrip("/"),
                    purpose=EndpointPurpose.STANDARD,
                ),
                EndpointPurpose.ROLLUP: EndpointDescriptor(
                    name=config.rollup_name,
                    url=config.rollup_url.rstrip("/"),
                    purpose=EndpointPurpose.ROLLUP,
                ),
            }
        )

    @property
    def descriptors(self) -> Mapping[EndpointPurpose, EndpointDescriptor]:
        return self._descriptors

    def resolve(self, purpose: EndpointPurpose | str) -> EndpointDescriptor:
        """Return the descriptor for *purpose*.

        Raises:
            UndefinedEndpointPurpose: If *purpose* is not a defined purpose.
                This is a programming error, not a runtime failure.
        """
        try:
            key = EndpointPurpose(purpose)
        except ValueError:
            raise UndefinedEndpointPurpose(purpose) from None
        return self._descriptors[key]
