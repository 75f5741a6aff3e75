"""
Veccompress - Grid quantization of embedding vectors with collapse detection.

This package compresses vector sets by snapping them to a lattice, measures how
much of the original neighborhood structure survives, and classifies the
outcome into a quality regime from STABLE to POST_COLLAPSE.
"""

__version__ = "0.1.0"
__author__ = "veccompress contributors"

from .configs import COMPRESSION_CONFIGS, DEFAULT_OPTIONS, CompressionConfig, get_config, list_configs
from .exceptions import (
    VecCompressError, ValidationError, DimensionMismatchError,
    ConfigurationError, QuantizationError
)
from .metrics import compute_metrics
from .pipeline import CompressionPipeline, run_pipeline
from .quantization import quantize
from .regime import classify_regime
from .types import (
    CompressionAnalysisResult,
    CompressionMethod,
    CompressionResult,
    MetricsBundle,
    Regime,
)

# Convenience helpers
from .utils.helpers import (
    batch_compress,
    compare_methods,
    estimate_grid_step,
    quick_compress,
    safe_compress,
)

__all__ = [
    "CompressionPipeline",
    "run_pipeline",
    "compute_metrics",
    "classify_regime",
    "quantize",
    # Types
    "CompressionMethod",
    "Regime",
    "MetricsBundle",
    "CompressionResult",
    "CompressionAnalysisResult",
    # Configuration
    "CompressionConfig",
    "DEFAULT_OPTIONS",
    "COMPRESSION_CONFIGS",
    "get_config",
    "list_configs",
    # Exceptions
    "VecCompressError",
    "ValidationError",
    "DimensionMismatchError",
    "ConfigurationError",
    "QuantizationError",
    # Helper functions
    "quick_compress",
    "safe_compress",
    "estimate_grid_step",
    "batch_compress",
    "compare_methods",
]
