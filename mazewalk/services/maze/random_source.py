"""Injectable randomness for maze generation.

Usage:
    rng = RandomSource(seed=123)  # deterministic, for tests and replays
    rng = RandomSource()          # backed by the OS CSPRNG

The generator only ever asks for a uniform double in [0, 1) and a uniform
integer in an inclusive range, so that is all this exposes.
"""

import random
from typing import Optional


class RandomSource:
    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed) if seed is not None else random.SystemRandom()

    def random(self) -> float:
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)
