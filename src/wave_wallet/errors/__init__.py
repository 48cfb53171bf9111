"""Error taxonomy for the wallet core."""

from wave_wallet.errors.endpoint_errors import RPCError, UndefinedEndpointPurpose
from wave_wallet.errors.provisioning_errors import (
    InsufficientVocabulary,
    InvalidSecretFormat,
    InvalidTransition,
    ProvisioningError,
    SessionActive,
    StorageFailure,
)
from wave_wallet.errors.wallet_errors import WalletError

__all__ = [
    "InsufficientVocabulary",
    "InvalidSecretFormat",
    "InvalidTransition",
    "ProvisioningError",
    "RPCError",
    "SessionActive",
    "StorageFailure",
    "UndefinedEndpointPurpose",
    "WalletError",
]
