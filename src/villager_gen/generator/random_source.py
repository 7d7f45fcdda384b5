"""Injectable randomness for the configuration generator.

All randomness flows through a RandomSource so a run can be reproduced
from its seed and tests can script exact draws.
"""

from random import Random
from typing import Protocol


class RandomSource(Protocol):
    """Capability the generator draws from."""

    def next_float(self) -> float:
        """Uniform float in [0, 1)."""
        ...

    def next_int(self, bound: int) -> int:
        """Uniform int in [0, bound)."""
        ...


class SeededRandomSource:
    """RandomSource backed by ``random.Random``."""

    def __init__(self, seed: int | None = None):
        # Store the seed that was actually used so unseeded runs can be replayed
        self._seed_used = seed if seed is not None else Random().getrandbits(32)
        self.rng = Random(self._seed_used)

    @property
    def seed_used(self) -> int:
        """Return the seed that was used for this source."""
        return self._seed_used

    def next_float(self) -> float:
        return self.rng.random()

    def next_int(self, bound: int) -> int:
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        return self.rng.randrange(bound)
