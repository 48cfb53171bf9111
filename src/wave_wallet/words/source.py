"""Word source — vocabulary loading and duplicate-free phrase sampling.

Two sampling modes are exposed and callers must name one:

- ``SamplingMode.SECURE`` draws from the OS CSPRNG (``secrets.SystemRandom``)
  and is the only mode allowed for a phrase that becomes a wallet secret.
- ``SamplingMode.COSMETIC`` uses the non-cryptographic ``random`` module and
  is meant for demo / illustration phrases only.

``generate_mnemonic`` builds on ``SECURE`` sampling to produce phrases that
also carry a valid BIP-39 checksum, so any BIP-39 wallet can restore them.
"""

from __future__ import annotations

import enum
import random
import secrets
from functools import lru_cache
from typing import TYPE_CHECKING

from mnemonic import Mnemonic

from wave_wallet.errors.provisioning_errors import InsufficientVocabulary

if TYPE_CHECKING:
    from collections.abc import Sequence

DEFAULT_PHRASE_LENGTH = 12
MNEMONIC_LENGTHS = (12, 15, 18, 21, 24)

_secure_random = secrets.SystemRandom()
_cosmetic_random = random.Random()  # noqa: S311


class SamplingMode(enum.StrEnum):
    """Randomness source used for sampling."""

    SECURE = "secure"
    COSMETIC = "cosmetic"


@lru_cache(maxsize=8)
def _mnemonic(language: str) -> Mnemonic:
    try:
        return Mnemonic(language)
    except Exception as exc:
        msg = f"no word list available for language {language!r}"
        raise ValueError(msg) from exc


@lru_cache(maxsize=8)
def load_vocabulary(language: str = "english") -> tuple[str, ...]:
    """Return the BIP-39 word list for *language*.

    Loaded once per language and shared for the process lifetime.

    Raises:
        ValueError: If the language has no bundled word list.
    """
    return tuple(_mnemonic(language).wordlist)


def sample(vocabulary: Sequence[str], count: int, *, mode: SamplingMode) -> tuple[str, ...]:
    """Draw *count* pairwise-distinct words from *vocabulary*.

    Args:
        vocabulary: Candidate words. Duplicate entries are counted once.
        count: Number of words to draw.
        mode: ``SECURE`` for real secrets, ``COSMETIC`` for demo phrases.

    Returns:
        Tuple of ``count`` distinct words, all taken from ``vocabulary``.

    Raises:
        InsufficientVocabulary: If ``count`` exceeds the distinct word count.
        ValueError: If ``count`` is negative.
    """
    if count < 0:
        msg = f"count must be non-negative, got {count}"
        raise ValueError(msg)

    # first-seen order, duplicates dropped
    distinct = list(dict.fromkeys(vocabulary))
    if count > len(distinct):
        raise InsufficientVocabulary(count, len(distinct))

    rng = _secure_random if SamplingMode(mode) is SamplingMode.SECURE else _cosmetic_random
    return tuple(rng.sample(distinct, count))


def generate_mnemonic(
    length: int = DEFAULT_PHRASE_LENGTH,
    language: str = "english",
) -> tuple[str, ...]:
    """Generate a checksum-valid BIP-39 phrase of distinct words.

    Draws ``SECURE`` samples from the word list of *language* and keeps the
    first one whose checksum verifies.  A phrase of ``n`` words carries
    ``n // 3`` checksum bits, so a 12-word phrase takes about 16 draws on
    average and a 24-word phrase about 256.

    Raises:
        ValueError: If *length* is not a BIP-39 phrase length, or the
            language has no bundled word list.
    """
    if length not in MNEMONIC_LENGTHS:
        lengths = ", ".join(str(n) for n in MNEMONIC_LENGTHS)
        msg = f"BIP-39 phrases have {lengths} words, got {length}"
        raise ValueError(msg)

    checker = _mnemonic(language)
    vocabulary = load_vocabulary(language)
    while True:
        words = sample(vocabulary, length, mode=SamplingMode.SECURE)
        if checker.check(" ".join(words)):
            return words


def generate_phrase(
    length: int = DEFAULT_PHRASE_LENGTH,
    vocabulary: Sequence[str] | None = None,
) -> tuple[str, ...]:
    """Generate a phrase suitable for a real wallet secret (CSPRNG only).

    Without *vocabulary* the result is an English BIP-39 phrase
    (see ``generate_mnemonic``).  A custom vocabulary gets plain distinct
    sampling, as no checksum is defined for it.
    """
    if vocabulary is None:
        return generate_mnemonic(length)
    return sample(vocabulary, length, mode=SamplingMode.SECURE)


def demo_phrase(
    length: int = DEFAULT_PHRASE_LENGTH,
    vocabulary: Sequence[str] | None = None,
) -> tuple[str, ...]:
    """Generate an illustrative phrase. Never use it as a secret."""
    words = vocabulary if vocabulary is not None else load_vocabulary()
    return sample(words, length, mode=SamplingMode.COSMETIC)
