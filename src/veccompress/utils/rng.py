"""
Seeded pseudo-random generator for reproducible vector data.
"""

import numpy as np

_MASK32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    """32-bit integer multiply, keeping the low 32 bits."""
    return (a * b) & _MASK32


class SeededRNG:
    """
    Mulberry32 generator.

    Produces the same stream for the same seed on every platform, which
    numpy's global random state does not guarantee across versions.
    """

    def __init__(self, seed: int = 42):
        self.seed = seed
        self._state = int(seed) & _MASK32

    def next(self) -> float:
        """Generate the next number in [0, 1)."""
        self._state = (self._state + 0x6D2B79F5) & _MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / 4294967296.0

    def range(self, low: float, high: float) -> float:
        """Generate a number in [low, high)."""
        return low + self.next() * (high - low)

    def random_vectors(self, count: int, dim: int, low: float = -1.0, high: float = 1.0) -> np.ndarray:
        """
        Generate a reproducible vector set with uniform coordinates.

        Args:
            count: Number of vectors
            dim: Vector dimension
            low: Lower bound of each coordinate
            high: Upper bound of each coordinate

        Returns:
            Array of shape (count, dim)
        """
        values = [self.range(low, high) for _ in range(count * dim)]
        return np.asarray(values, dtype=np.float64).reshape(count, dim)
