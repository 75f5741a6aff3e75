"""
Pass-through quantizer for methods that are declared but not implemented.
"""

from typing import Any, Dict

import numpy as np

from ..utils.logging import get_logger
from .base import Quantizer

logger = get_logger(__name__)


class PassThroughQuantizer(Quantizer):
    """
    Returns an unchanged copy of its input.

    ``K_MEANS`` and ``RANDOM_PROJECTION`` are accepted method tags without a
    quantizer behind them; they dispatch here explicitly so the metrics of
    such a run report an uncompressed set.
    """

    method_name = "pass_through"

    def __init__(self, config: Dict[str, Any]):
        """Initialize pass-through quantizer."""
        super().__init__(config)
        self.requested_method = config.get("method", "unknown")

    def quantize(self, vectors: np.ndarray) -> np.ndarray:
        """Return a copy of the vectors."""
        vectors = self._check_vectors(vectors)
        logger.warning(f"Method {self.requested_method} is not implemented; vectors are left unquantized")
        return vectors.copy()
