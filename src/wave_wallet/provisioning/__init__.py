"""Secret provisioning — onboarding state machine and import routing."""

from wave_wallet.provisioning.clipboard import CopyIndicator, export_secret
from wave_wallet.provisioning.collectors import (
    HardwareCollector,
    ImportMethod,
    PhraseCollector,
    PrivateKeyCollector,
)
from wave_wallet.provisioning.models import (
    NavSignal,
    ProvisioningPath,
    ProvisioningState,
    Secret,
    SecretKind,
    WalletActivated,
)
from wave_wallet.provisioning.onboarding import Onboarding
from wave_wallet.provisioning.selector import ImportMethodSelector
from wave_wallet.provisioning.session import ProvisioningSession

__all__ = [
    "CopyIndicator",
    "HardwareCollector",
    "ImportMethod",
    "ImportMethodSelector",
    "NavSignal",
    "Onboarding",
    "PhraseCollector",
    "PrivateKeyCollector",
    "ProvisioningPath",
    "ProvisioningSession",
    "ProvisioningState",
    "Secret",
    "SecretKind",
    "WalletActivated",
    "export_secret",
]
