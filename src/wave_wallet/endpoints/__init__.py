"""Remote endpoints — selection by purpose and RPC client handles."""

from wave_wallet.endpoints.clients import EndpointClients
from wave_wallet.endpoints.rpc import RPCClient
from wave_wallet.endpoints.selector import EndpointDescriptor, EndpointPurpose, EndpointSelector

__all__ = [
    "EndpointClients",
    "EndpointDescriptor",
    "EndpointPurpose",
    "EndpointSelector",
    "RPCClient",
]
