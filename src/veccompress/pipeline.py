"""
Compression pipeline for the veccompress package.

The pipeline normalizes (optionally), quantizes, measures the damage done to
neighborhood structure and classifies it into a regime.
"""

import time
from typing import List, Optional

import numpy as np

from .configs import CompressionConfig, ConfigLike, resolve_config
from .metrics import compute_metrics
from .quantization.registry import create_quantizer
from .regime import classify_regime
from .types import CompressionAnalysisResult, CompressionResult, MetricsBundle, Regime
from .utils.logging import get_logger, log_performance, log_vector_operation
from .utils.validation import VectorSetLike, as_vector_set
from .utils.vector_math import count_distinct, normalize_vectors

logger = get_logger(__name__)

K_VARIANCE_WARNING_THRESHOLD = 0.02
DIMENSION_COLLAPSE_WARNING_THRESHOLD = 2.0

EMPTY_INPUT_WARNING = "Empty input vectors"


def _read_only(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


def build_warnings(metrics: MetricsBundle, regime: Regime) -> Optional[List[str]]:
    """
    Turn crossed quality thresholds into messages.

    Returns:
        List of warnings, or ``None`` when no threshold was crossed
    """
    warnings = []
    if regime in (Regime.COLLAPSE, Regime.POST_COLLAPSE):
        warnings.append(
            f"Quality degradation detected ({regime.value}). "
            "Consider reducing grid_step or using the boundary-aware method."
        )
    if metrics.k_variance > K_VARIANCE_WARNING_THRESHOLD:
        warnings.append("High k-variance detected - topology may be unstable.")
    if metrics.dimension_collapse_ratio > DIMENSION_COLLAPSE_WARNING_THRESHOLD:
        warnings.append(
            "Dimension-specific collapse detected - some features affected more than others."
        )
    return warnings or None


class CompressionPipeline:
    """
    Runs compression with quality analysis under one configuration.

    The configuration is immutable; ``set_config`` and ``update_options``
    replace it wholesale between runs. Nothing else is kept across runs.

    Example::

        pipeline = CompressionPipeline(method="LATTICE", grid_step=0.05)
        result = pipeline.run(vectors)
        if result.regime is Regime.STABLE:
            store(result.compressed)
    """

    def __init__(self, config: ConfigLike = None, **options):
        """Initialize the pipeline with a config, an options dict, or keyword options."""
        self._config = resolve_config(config, **options)

    @property
    def config(self) -> CompressionConfig:
        return self._config

    def set_config(self, config: ConfigLike) -> None:
        """Replace the configuration."""
        self._config = resolve_config(config)

    def update_options(self, **options) -> None:
        """Replace the configuration with a copy that has some options changed."""
        self._config = self._config.with_options(**options)

    def _prepare(self, vectors: np.ndarray) -> np.ndarray:
        if self._config.normalize:
            return normalize_vectors(vectors)
        return vectors.copy()

    def _quantize(self, vectors: np.ndarray) -> np.ndarray:
        quantizer = create_quantizer(self._config.method, self._config.quantizer_params())
        return quantizer.quantize(vectors)

    def compress(self, vectors: Optional[VectorSetLike]) -> CompressionResult:
        """
        Compress vectors without quality analysis.

        Args:
            vectors: Input vectors of shape (n_vectors, dim)

        Returns:
            Compressed vectors and the realized compression ratio
        """
        array = as_vector_set(vectors)
        if array.shape[0] == 0:
            return CompressionResult(compressed=_read_only(array), compression_ratio=1.0)

        compressed = self._quantize(self._prepare(array))
        ratio = array.shape[0] / count_distinct(compressed)
        return CompressionResult(
            compressed=_read_only(compressed),
            compression_ratio=ratio,
            metadata={"method": self._config.method.value, "grid_step": self._config.grid_step},
        )

    def run(self, vectors: Optional[VectorSetLike]) -> CompressionAnalysisResult:
        """
        Compress vectors and analyze the result.

        Args:
            vectors: Input vectors of shape (n_vectors, dim)

        Returns:
            Compressed vectors with metrics, regime and warnings

        Raises:
            DimensionMismatchError: If the vectors do not share one length
            ValidationError: If the input is not a finite numeric vector set
        """
        array = as_vector_set(vectors)
        if array.shape[0] == 0:
            return self._trivial_result(array)

        config = self._config
        start_time = time.time()

        reference = self._prepare(array)
        compressed = self._quantize(reference)
        ratio = array.shape[0] / count_distinct(compressed)
        quantize_time = time.time() - start_time

        metrics = compute_metrics(reference, compressed, k=config.k, max_workers=config.max_workers)
        regime = classify_regime(metrics)
        warnings = build_warnings(metrics, regime)

        total_time = time.time() - start_time
        log_performance(
            "compression_pipeline.run",
            total_time,
            quantize_time=quantize_time,
            metrics_time=total_time - quantize_time,
        )
        log_vector_operation(
            "compress_with_analysis",
            array.shape[0],
            array.shape[1],
            method=config.method.value,
            grid_step=config.grid_step,
            compression_ratio=round(ratio, 4),
            regime=regime.value,
        )
        for message in warnings or []:
            logger.warning(message)

        return CompressionAnalysisResult(
            compressed=_read_only(compressed),
            original=_read_only(array) if config.keep_original else None,
            metrics=metrics,
            regime=regime,
            compression_ratio=ratio,
            grid_step=config.grid_step,
            warnings=warnings,
        )

    def _trivial_result(self, array: np.ndarray) -> CompressionAnalysisResult:
        logger.warning("Compression requested for an empty vector set")
        metrics = MetricsBundle(
            compression_ratio=1.0,
            centroid_survival_ratio=1.0,
        )
        return CompressionAnalysisResult(
            compressed=_read_only(array),
            original=_read_only(array.copy()) if self._config.keep_original else None,
            metrics=metrics,
            regime=Regime.STABLE,
            compression_ratio=1.0,
            grid_step=self._config.grid_step,
            warnings=[EMPTY_INPUT_WARNING],
        )


def run_pipeline(vectors: Optional[VectorSetLike], config: ConfigLike = None) -> CompressionAnalysisResult:
    """
    Run one compression with analysis.

    Args:
        vectors: Input vectors of shape (n_vectors, dim)
        config: ``CompressionConfig``, options dictionary, or ``None`` for defaults

    Returns:
        Compression analysis result
    """
    return CompressionPipeline(config).run(vectors)
