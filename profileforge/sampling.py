"""Sampling primitives over a random stream.

Every primitive is total: empty pools give ``None`` or ``[]`` and consume no
draws, so the number of draws taken for a given input is always the same.
"""
from __future__ import annotations

import math
from typing import List, Optional, Sequence, TypeVar

from .rng import RandomStream

T = TypeVar("T")


class Sampler:
    def __init__(self, stream: RandomStream) -> None:
        self.stream = stream

    def choice(self, pool: Sequence[T]) -> Optional[T]:
        if not pool:
            return None
        return pool[math.floor(self.stream.next() * len(pool))]

    def int_range(self, lo: int, hi: int) -> int:
        """Integer in [lo, hi] inclusive. Caller guarantees lo <= hi."""
        return math.floor(self.stream.next() * (hi - lo + 1)) + lo

    def distinct_sample(self, pool: Sequence[T], count: int) -> List[T]:
        """Up to ``count`` distinct pool elements.

        Each element gets one key from the stream, in pool order; elements are
        stably sorted by key and the first ``min(count, len(pool))`` are kept.
        """
        if not pool or count <= 0:
            return []
        keyed = [(self.stream.next(), item) for item in pool]
        keyed.sort(key=lambda pair: pair[0])
        return [item for _, item in keyed[: min(count, len(pool))]]
