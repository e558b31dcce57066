"""Seeded random number generator for reproducible grids."""

from typing import Optional

import numpy as np


class SeededRNG:
    """Seeded random number generator for reproducible results."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = np.random.default_rng(seed)
        self._seed = seed

    @property
    def seed(self) -> Optional[int]:
        """Get the current seed."""
        return self._seed

    def set_seed(self, seed: Optional[int]):
        """Set a new seed."""
        self._seed = seed
        self._rng = np.random.default_rng(seed)

    def integers(self, low: int, high: int, shape) -> np.ndarray:
        """Generate an array of random integers N such that low <= N <= high."""
        return self._rng.integers(low, high, size=shape, endpoint=True)


# Global instance for convenience
default_rng = SeededRNG()
