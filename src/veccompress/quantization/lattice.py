"""
Lattice (uniform scalar) quantization.
"""

from typing import Any, Dict

import numpy as np

from ..utils.logging import get_logger
from .base import Quantizer, snap_to_grid

logger = get_logger(__name__)


class LatticeQuantizer(Quantizer):
    """
    Uniform lattice quantization.

    Each coordinate ``v`` becomes ``floor(v / grid_step + 0.5) * grid_step``. The
    transform is idempotent: quantizing a quantized set with the same step
    returns it unchanged. A ``grid_step`` of zero or less turns the quantizer
    into a pass-through.
    """

    method_name = "lattice"

    def __init__(self, config: Dict[str, Any]):
        """Initialize lattice quantizer."""
        super().__init__(config)
        self.grid_step = float(config.get("grid_step", 0.1))

    def quantize(self, vectors: np.ndarray) -> np.ndarray:
        """Quantize vectors onto the lattice."""
        vectors = self._check_vectors(vectors)
        logger.debug(f"Lattice quantization of {vectors.shape[0]} vectors with step {self.grid_step}")
        return snap_to_grid(vectors, self.grid_step)
