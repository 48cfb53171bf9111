"""Application settings loaded from environment variables and config files.

Configuration is loaded from (highest priority first):
1. Environment variables (prefix: ``WAVEWALLET_``, nested via ``__``)
2. YAML config file (``WAVEWALLET_CONFIG_PATH`` env var or ``AppConfig.from_yaml``)
3. Defaults defined here
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Self

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wave_wallet.words.source import MNEMONIC_LENGTHS

# ---------------------------------------------------------------------------
# Sub-config models
# ---------------------------------------------------------------------------


class EndpointsConfig(BaseSettings):
    """Remote execution endpoints (standard ledger RPC + rollup RPC)."""

    model_config = SettingsConfigDict(
        env_prefix="WAVEWALLET_ENDPOINTS__",
        case_sensitive=False,
    )

    standard_name: str = "solana-devnet"
    standard_url: str = "https://api.devnet.solana.com"
    rollup_name: str = "magicblock-per"
    rollup_url: str = "https://devnet-as.magicblock.app"
    timeout: float = 30.0


class OnboardingConfig(BaseSettings):
    """Secret provisioning settings."""

    model_config = SettingsConfigDict(
        env_prefix="WAVEWALLET_ONBOARDING__",
        case_sensitive=False,
    )

    phrase_length: int = Field(
        default=12,
        description="Number of words in a generated recovery phrase",
    )
    import_lengths: list[int] = Field(
        default_factory=lambda: [12, 24],
        description="Word counts accepted when importing a phrase",
    )
    wordlist_language: str = "english"
    verify_checksum: bool = Field(
        default=True,
        description="Reject imported phrases whose BIP-39 checksum fails",
    )
    copied_reset_seconds: float = 2.0

    @field_validator("phrase_length")
    @classmethod
    def _mnemonic_length(cls, value: int) -> int:
        if value not in MNEMONIC_LENGTHS:
            lengths = ", ".join(str(n) for n in MNEMONIC_LENGTHS)
            msg = f"phrase_length must be one of {lengths}"
            raise ValueError(msg)
        return value


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------


def _load_yaml(path: str | Path) -> dict[str, Any]:
    """Read a YAML mapping from *path*; missing, empty or non-mapping files give ``{}``."""
    source = Path(path)
    if not source.is_file():
        return {}
    data = yaml.safe_load(source.read_text(encoding="utf-8"))
    return data if isinstance(data, dict) else {}


class AppConfig(BaseSettings):
    """Top-level application configuration.

    Loads settings from environment variables (``WAVEWALLET_`` prefix),
    an optional YAML file, and built-in defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="WAVEWALLET_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    debug: bool = False
    log_level: str = "INFO"
    version: str = "0.1.0"
    config_path: str = ""

    endpoints: EndpointsConfig = Field(default_factory=EndpointsConfig)
    onboarding: OnboardingConfig = Field(default_factory=OnboardingConfig)

    @model_validator(mode="before")
    @classmethod
    def _merge_yaml(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Merge YAML config file contents under the env var overrides.

        Top-level keys and the keys of each section (``endpoints``,
        ``onboarding``) are merged; anything nested deeper is replaced
        wholesale by the env value.
        """
        config_path = values.get("config_path", "")
        if not config_path:
            return values
        # YAML values serve as defaults; env vars (already in *values*) win.
        for key, file_value in _load_yaml(config_path).items():
            current = values.get(key)
            if current is None:
                values[key] = file_value
            elif isinstance(file_value, dict) and isinstance(current, dict):
                values[key] = {**file_value, **current}
        return values

    @classmethod
    def from_yaml(cls, path: str | Path) -> Self:
        """Construct ``AppConfig`` loading defaults from a YAML file.

        Environment variables still override YAML values.
        """
        return cls(config_path=str(path))
