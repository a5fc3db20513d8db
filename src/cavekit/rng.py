"""
Deterministic random sources.

Seeds are strings (level seeds) or ints. Strings are folded to a 64-bit
integer with SHA-256 so the same seed gives the same cave in every process;
the built-in hash() is salted per interpreter and is never used.
"""

import hashlib
from typing import Union

import numpy as np

Seed = Union[str, int]

_MASK_64 = (1 << 64) - 1


def seed_to_int(seed: Seed) -> int:
    """Stable 64-bit integer for a seed string (ints pass through, masked)."""
    if isinstance(seed, bool):
        raise TypeError(f"seed must be a str or int, got {seed!r}")
    if isinstance(seed, int):
        return seed & _MASK_64
    if isinstance(seed, str):
        digest = hashlib.sha256(seed.encode("utf-8")).digest()
        return int.from_bytes(digest[:8], "little")
    raise TypeError(f"seed must be a str or int, got {type(seed).__name__}")


def make_rng(seed: Seed) -> np.random.Generator:
    """
    Create a numpy Generator without touching global RNG state.

    Each call returns a fresh generator, so generation runs stay reentrant.
    """
    return np.random.default_rng(seed_to_int(seed))
