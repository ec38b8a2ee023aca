from __future__ import annotations

import math
import random
import time
from typing import Sequence, TypeVar

T = TypeVar("T")


def new_seed() -> int:
    return time.time_ns() // 1_000_000


def rng_for(seed: int | str) -> random.Random:
    return random.Random(seed)


def rand_int(rng: random.Random, low: float, high: float) -> int:
    """Inclusive integer in ``[ceil(low), floor(high)]``; collapses to the low bound when empty."""
    lo = math.ceil(low)
    hi = math.floor(high)
    if hi <= lo:
        return lo
    return rng.randint(lo, hi)


def rand_range(rng: random.Random, low: float, high: float) -> float:
    return rng.uniform(low, high)


def pick(rng: random.Random, options: Sequence[T]) -> T:
    return options[rng.randrange(len(options))]


def chance(rng: random.Random, probability: float) -> bool:
    return rng.random() < probability
