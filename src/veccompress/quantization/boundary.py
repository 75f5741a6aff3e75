"""
Boundary-aware adaptive lattice quantization.
"""

from typing import Any, Dict

import numpy as np

from ..utils.logging import get_logger
from .base import Quantizer, snap_to_grid

logger = get_logger(__name__)


class BoundaryAwareQuantizer(Quantizer):
    """
    Lattice quantization with per-vector refinement.

    Every vector is first snapped to the coarse grid (``grid_step``). Vectors
    whose Euclidean distortion against the coarse result exceeds
    ``boundary_margin`` are snapped to a grid twice as fine instead. Those are
    the points sitting near cell boundaries or in sparse regions, so only they
    pay for the extra resolution while the rest keep the coarse grid.
    """

    method_name = "boundary_aware"

    def __init__(self, config: Dict[str, Any]):
        """Initialize boundary-aware quantizer."""
        super().__init__(config)
        self.grid_step = float(config.get("grid_step", 0.1))
        self.boundary_margin = float(config.get("boundary_margin", 0.1))

    def quantize(self, vectors: np.ndarray) -> np.ndarray:
        """Quantize vectors, refining the grid where distortion is high."""
        vectors = self._check_vectors(vectors)
        if self.grid_step <= 0:
            return vectors.copy()

        coarse = snap_to_grid(vectors, self.grid_step)
        distortion = np.sqrt(np.sum((vectors - coarse) ** 2, axis=1))
        refine = distortion > self.boundary_margin
        refined = int(np.count_nonzero(refine))

        if not refined:
            return coarse

        fine = snap_to_grid(vectors[refine], self.grid_step / 2)
        result = coarse.copy()
        result[refine] = fine

        logger.debug(
            f"Boundary-aware quantization refined {refined}/{vectors.shape[0]} vectors "
            f"(step {self.grid_step}, margin {self.boundary_margin})"
        )
        return result
