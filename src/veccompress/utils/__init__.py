"""
Utility modules for the veccompress package.

This module provides vector math, seeded random data, validation, logging,
and the convenience helpers built on top of the compression pipeline.
"""

from .helpers import (
    batch_compress,
    compare_methods,
    estimate_grid_step,
    quick_compress,
    safe_compress,
)
from .logging import get_logger, setup_logging
from .rng import SeededRNG
from .validation import as_vector_set, validate_aligned, validate_config, validate_k
from .vector_math import (
    count_distinct,
    euclidean_distance,
    k_nearest_neighbors,
    normalize_vectors,
    pairwise_distances,
    rank_correlation,
)

__all__ = [
    # Vector math
    "normalize_vectors",
    "euclidean_distance",
    "k_nearest_neighbors",
    "pairwise_distances",
    "rank_correlation",
    "count_distinct",
    "SeededRNG",
    # Validation
    "as_vector_set",
    "validate_aligned",
    "validate_config",
    "validate_k",
    # Logging
    "get_logger",
    "setup_logging",
    # Helper functions
    "quick_compress",
    "safe_compress",
    "estimate_grid_step",
    "batch_compress",
    "compare_methods",
]
