"""
Base quantization interface for the veccompress package.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

import numpy as np

from ..exceptions import QuantizationError


class Quantizer(ABC):
    """
    Abstract base class for grid quantizers.

    Quantizers are stateless transforms: ``quantize`` maps a vector set to a
    new vector set of identical shape and never modifies its input. The
    configuration is read once at construction.
    """

    method_name = "base"

    def __init__(self, config: Dict[str, Any]):
        """Initialize the quantizer with configuration."""
        self.config = config

    @abstractmethod
    def quantize(self, vectors: np.ndarray) -> np.ndarray:
        """
        Quantize vectors.

        Args:
            vectors: Array of shape (n_vectors, dim)

        Returns:
            Quantized vectors of the same shape
        """
        pass

    def get_stats(self) -> Dict[str, Any]:
        """Get quantizer statistics."""
        return {"quantizer_type": self.method_name, **self.config}

    def _check_vectors(self, vectors: np.ndarray) -> np.ndarray:
        vectors = np.asarray(vectors, dtype=np.float64)
        if vectors.ndim != 2:
            raise QuantizationError("Vectors must be 2D array")
        return vectors


def snap_to_grid(vectors: np.ndarray, step: float) -> np.ndarray:
    """
    Snap every coordinate to the nearest multiple of ``step``.

    Halfway values round up, towards positive infinity. A non-positive step
    disables quantization and returns a copy.
    """
    if step <= 0:
        return vectors.copy()
    # adding 0.0 folds -0.0 into 0.0
    return np.floor(vectors / step + 0.5) * step + 0.0
