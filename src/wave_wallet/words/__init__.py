"""Word source — vocabulary and phrase sampling."""

from wave_wallet.words.source import (
    DEFAULT_PHRASE_LENGTH,
    MNEMONIC_LENGTHS,
    SamplingMode,
    demo_phrase,
    generate_mnemonic,
    generate_phrase,
    load_vocabulary,
    sample,
)

__all__ = [
    "DEFAULT_PHRASE_LENGTH",
    "MNEMONIC_LENGTHS",
    "SamplingMode",
    "demo_phrase",
    "generate_mnemonic",
    "generate_phrase",
    "load_vocabulary",
    "sample",
]
