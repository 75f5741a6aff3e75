"""
Helper functions for common compression workflows.

These wrap ``CompressionPipeline`` with fixed parameter schedules, making the
package easier to use when the caller only cares about a quality target.
"""

import math
from dataclasses import replace
from typing import Any, Dict, List

import numpy as np

from ..exceptions import ConfigurationError
from ..types import CompressionAnalysisResult, CompressionMethod, Regime
from .validation import VectorSetLike, as_vector_set


def quick_compress(vectors: VectorSetLike, target_quality: float = 0.9) -> CompressionAnalysisResult:
    """
    Compress with a grid step derived from a quality target.

    Higher quality means a finer grid: 0.9 maps to a step of 0.14 and 0.0 to
    a step of 0.5. The boundary margin equals the step.

    Args:
        vectors: Input vectors
        target_quality: Target recall in [0, 1]

    Returns:
        Compression analysis result
    """
    from ..pipeline import CompressionPipeline

    if not 0.0 <= target_quality <= 1.0:
        raise ConfigurationError(f"target_quality must be in [0, 1], got {target_quality}")

    grid_step = 0.5 - target_quality * 0.4
    pipeline = CompressionPipeline(
        method=CompressionMethod.BOUNDARY_AWARE,
        grid_step=grid_step,
        boundary_margin=grid_step,
    )
    return pipeline.run(vectors)


def safe_compress(vectors: VectorSetLike, max_attempts: int = 3) -> CompressionAnalysisResult:
    """
    Compress, refining the grid until no collapse is detected.

    Starts at a grid step of 0.2 and halves it after every attempt that ends
    in COLLAPSE or POST_COLLAPSE. If every attempt fails, the last step is
    run once more and a warning is appended to the result.

    Args:
        vectors: Input vectors
        max_attempts: Maximum number of grid refinements

    Returns:
        First result in the STABLE or PRE_COLLAPSE regime, or the fallback
    """
    from ..pipeline import CompressionPipeline

    if max_attempts < 1:
        raise ConfigurationError("max_attempts must be at least 1")

    grid_step = 0.2
    for _ in range(max_attempts):
        pipeline = CompressionPipeline(
            method=CompressionMethod.BOUNDARY_AWARE,
            grid_step=grid_step,
            boundary_margin=grid_step / 2,
        )
        result = pipeline.run(vectors)
        if result.regime <= Regime.PRE_COLLAPSE:
            return result
        grid_step = grid_step / 2

    pipeline = CompressionPipeline(method=CompressionMethod.BOUNDARY_AWARE, grid_step=grid_step)
    result = pipeline.run(vectors)
    warnings = list(result.warnings or [])
    warnings.append(f"Could not achieve stable compression after {max_attempts} attempts")
    return replace(result, warnings=warnings)


def estimate_grid_step(vectors: VectorSetLike, target_ratio: float) -> float:
    """
    Estimate a grid step for a target compression ratio.

    Uses the average per-dimension standard deviation of the first 100
    vectors: coarser grids for higher ratios.

    Args:
        vectors: Sample vectors
        target_ratio: Desired compression ratio (e.g. 10 for 10x)

    Returns:
        Grid step clipped to [0.01, 1.0]
    """
    if target_ratio <= 0:
        raise ConfigurationError(f"target_ratio must be positive, got {target_ratio}")

    array = as_vector_set(vectors)
    if array.shape[0] == 0:
        return 0.1

    sample = array[:100]
    avg_std = math.sqrt(float(np.mean(np.var(sample, axis=0))))
    grid_step = (avg_std * 0.5) / math.sqrt(target_ratio)
    return max(0.01, min(1.0, grid_step))


def batch_compress(datasets: List[VectorSetLike], grid_step: float = 0.1) -> List[CompressionAnalysisResult]:
    """
    Compress several datasets with the same settings.

    Args:
        datasets: List of vector sets
        grid_step: Grid step to use

    Returns:
        One result per dataset, in order
    """
    from ..pipeline import CompressionPipeline

    pipeline = CompressionPipeline(method=CompressionMethod.BOUNDARY_AWARE, grid_step=grid_step)
    return [pipeline.run(vectors) for vectors in datasets]


def compare_methods(vectors: VectorSetLike, grid_step: float = 0.2) -> Dict[str, Any]:
    """
    Compare lattice and boundary-aware quantization on the same data.

    Args:
        vectors: Input vectors
        grid_step: Grid step for both methods

    Returns:
        Dictionary with both results and the boundary-aware improvement
        (positive collapse index delta means boundary-aware collapsed less)
    """
    from ..pipeline import CompressionPipeline

    lattice = CompressionPipeline(method=CompressionMethod.LATTICE, grid_step=grid_step).run(vectors)
    boundary_aware = CompressionPipeline(
        method=CompressionMethod.BOUNDARY_AWARE,
        grid_step=grid_step,
        boundary_margin=grid_step / 2,
    ).run(vectors)

    return {
        "lattice": lattice,
        "boundary_aware": boundary_aware,
        "improvement": {
            "recall_at_10": boundary_aware.metrics.recall_at_10 - lattice.metrics.recall_at_10,
            "compression_ratio": boundary_aware.compression_ratio - lattice.compression_ratio,
            "collapse_index": lattice.metrics.collapse_index - boundary_aware.metrics.collapse_index,
        },
    }
