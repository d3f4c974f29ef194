"""Seed-derived random streams.

A seed (any string or number) is hashed with 32-bit FNV-1a over the code
points of its textual form, and the hash seeds a Mulberry32 generator. Both
are pure integer arithmetic masked to 32 bits, so a seed maps to the same
stream on every platform and interpreter run.

Unseeded generation uses an OS-entropy seeded ``random.Random`` instead and
carries no reproducibility guarantee.
"""
from __future__ import annotations

import random
from typing import Protocol, Union

Seed = Union[str, int]

_MASK32 = 0xFFFFFFFF
_FNV_OFFSET_BASIS = 0x811C9DC5
_FNV_PRIME = 0x01000193
_MULBERRY_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


class RandomStream(Protocol):
    def next(self) -> float:
        """Return the next value in [0, 1)."""


def hash_seed(seed: Seed) -> int:
    """Fold the seed's text into an unsigned 32-bit integer (FNV-1a)."""
    h = _FNV_OFFSET_BASIS
    for ch in str(seed):
        h ^= ord(ch)
        h = (h * _FNV_PRIME) & _MASK32
    return h


class SeededStream:
    """Mulberry32 stream; one instance per unit of work, never shared."""

    def __init__(self, seed: Seed) -> None:
        self.seed = seed
        self._state = hash_seed(seed)

    def next(self) -> float:
        self._state = (self._state + _MULBERRY_INCREMENT) & _MASK32
        t = self._state
        t = ((t ^ (t >> 15)) * (t | 1)) & _MASK32
        t ^= (t + (((t ^ (t >> 7)) * (t | 61)) & _MASK32)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / _TWO_POW_32


class EntropyStream:
    """Non-deterministic stream for unseeded generation."""

    def __init__(self) -> None:
        self._rng = random.Random()

    def next(self) -> float:
        return self._rng.random()


def make_stream(seed: Seed | None) -> RandomStream:
    """Return a deterministic stream for ``seed``, or an entropy stream for None.

    Empty strings and zero are real seeds; only ``None`` means "unseeded".
    """
    if seed is None:
        return EntropyStream()
    return SeededStream(seed)
