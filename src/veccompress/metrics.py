"""
Fidelity metrics for compressed vector sets.

``compute_metrics`` compares an original vector set with its index-aligned
compressed counterpart and returns a ``MetricsBundle``. Neighbor-based
statistics are estimated from at most ``SAMPLE_LIMIT`` evenly strided query
points, each searched by brute force in both spaces.
"""

import math
import numbers
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .exceptions import ConfigurationError
from .types import MetricsBundle
from .utils.logging import get_logger
from .utils.validation import VectorSetLike, as_vector_set, validate_aligned, validate_k
from .utils.vector_math import count_distinct, euclidean_distance, k_nearest_neighbors, rank_correlation

logger = get_logger(__name__)

SAMPLE_LIMIT = 200
NEIGHBOR_DEPTH = 30
PROBE_DEPTHS = (3, 7, 15, 30)
RANK_SAMPLE_SIZE = 40

# Collapse index weights: recall@5, precision@10, k-variance, centroid loss
RECALL_WEIGHT = 0.35
PRECISION_WEIGHT = 0.25
K_VARIANCE_WEIGHT = 0.20
SURVIVAL_WEIGHT = 0.20
# k-variance sits about two orders of magnitude below the other terms
K_VARIANCE_SCALE = 20.0


@dataclass(frozen=True, eq=False)
class QueryStats:
    """Per-query statistics gathered for one sampled index."""

    index: int
    recall_at_5: float
    recall_at_10: float
    reciprocal_rank: float
    squared_error: float
    per_dimension_squared_error: np.ndarray
    local_distortion: float
    probe_recalls: Tuple[float, ...]


def safe_div(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 for a zero denominator or a NaN numerator."""
    if denominator == 0 or math.isnan(numerator):
        return 0.0
    return numerator / denominator


def neighbor_overlap(true_neighbors: Sequence[int], found_neighbors: Sequence[int], depth: int) -> float:
    """Fraction of the true top-``depth`` neighbors present in the found top-``depth``."""
    true_set = set(int(i) for i in true_neighbors[:depth])
    found_set = set(int(i) for i in found_neighbors[:depth])
    return len(true_set & found_set) / depth


def sample_indices(n_vectors: int, limit: int = SAMPLE_LIMIT) -> range:
    """Evenly strided query indices covering the whole set."""
    stride = max(1, n_vectors // limit)
    return range(0, n_vectors, stride)


def query_stats(index: int, original: np.ndarray, compressed: np.ndarray) -> QueryStats:
    """
    Compute neighbor and distortion statistics for one query.

    The query is the original vector; it is searched against the original set
    for ground truth and against the compressed set for the experiment. Both
    neighbor lists include the query's own index.
    """
    query = original[index]
    compressed_vector = compressed[index]

    true_nn = k_nearest_neighbors(query, original, NEIGHBOR_DEPTH)
    comp_nn = k_nearest_neighbors(query, compressed, NEIGHBOR_DEPTH)

    # Position 0 is the query itself, so the first real neighbor is at 1
    if len(true_nn) > 1:
        hits = np.flatnonzero(comp_nn == true_nn[1])
        reciprocal_rank = 1.0 / (hits[0] + 1) if hits.size else 0.0
    else:
        reciprocal_rank = 1.0

    diff = query - compressed_vector
    per_dim = diff * diff

    return QueryStats(
        index=index,
        recall_at_5=neighbor_overlap(true_nn, comp_nn, 5),
        recall_at_10=neighbor_overlap(true_nn, comp_nn, 10),
        reciprocal_rank=float(reciprocal_rank),
        squared_error=euclidean_distance(query, compressed_vector) ** 2,
        per_dimension_squared_error=per_dim,
        local_distortion=euclidean_distance(query, compressed[comp_nn[0]]),
        probe_recalls=tuple(neighbor_overlap(true_nn, comp_nn, depth) for depth in PROBE_DEPTHS),
    )


def _collect_query_stats(indices: range,
                         original: np.ndarray,
                         compressed: np.ndarray,
                         max_workers: Optional[int]) -> List[QueryStats]:
    if not max_workers or max_workers <= 1 or len(indices) < 2:
        return [query_stats(i, original, compressed) for i in indices]

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(query_stats, i, original, compressed) for i in indices]
        stats = [future.result() for future in as_completed(futures)]

    # Completion order varies; sums must not
    stats.sort(key=lambda s: s.index)
    return stats


def collapse_index(recall_at_5: float,
                   precision_at_10: float,
                   k_variance: float,
                   centroid_survival_ratio: float) -> float:
    """Weighted collapse score in [0, 1]."""
    score = (
        RECALL_WEIGHT * (1 - recall_at_5)
        + PRECISION_WEIGHT * (1 - precision_at_10)
        + K_VARIANCE_WEIGHT * min(1.0, k_variance * K_VARIANCE_SCALE)
        + SURVIVAL_WEIGHT * (1 - centroid_survival_ratio)
    )
    return float(np.clip(score, 0.0, 1.0))


def aggregate_query_stats(stats: List[QueryStats],
                          original: np.ndarray,
                          compressed: np.ndarray,
                          kendall_tau: float) -> MetricsBundle:
    """Reduce per-query statistics into a ``MetricsBundle``."""
    count = len(stats)
    n_vectors, dim = original.shape

    recall_at_5 = safe_div(sum(s.recall_at_5 for s in stats), count)
    recall_at_10 = safe_div(sum(s.recall_at_10 for s in stats), count)
    # Simplification: precision@10 and trustworthiness@10 are the recall@10 overlap under other names
    precision_at_10 = recall_at_10
    trustworthiness = recall_at_10

    per_dim_total = np.zeros(dim, dtype=np.float64)
    for s in stats:
        per_dim_total += s.per_dimension_squared_error
    per_dimension_mse = per_dim_total / count if count else per_dim_total

    if count:
        probe_matrix = np.asarray([s.probe_recalls for s in stats], dtype=np.float64)
        k_variance = float(np.mean(np.var(probe_matrix, axis=0)))
    else:
        k_variance = 0.0

    mean_dim_mse = float(np.mean(per_dimension_mse)) if dim else 0.0
    if mean_dim_mse > 0:
        dimension_collapse_ratio = float(np.max(per_dimension_mse)) / mean_dim_mse
    else:
        dimension_collapse_ratio = 1.0

    distinct = count_distinct(compressed)
    centroid_survival_ratio = distinct / n_vectors

    return MetricsBundle(
        recall_at_5=recall_at_5,
        recall_at_10=recall_at_10,
        precision_at_10=precision_at_10,
        mrr=safe_div(sum(s.reciprocal_rank for s in stats), count),
        mse=safe_div(sum(s.squared_error for s in stats), count),
        local_distortion=safe_div(sum(s.local_distortion for s in stats), count),
        trustworthiness=trustworthiness,
        kendall_tau=kendall_tau,
        compression_ratio=n_vectors / distinct,
        k_variance=k_variance,
        per_dimension_mse=tuple(float(v) for v in per_dimension_mse),
        dimension_collapse_ratio=dimension_collapse_ratio,
        centroid_survival_ratio=centroid_survival_ratio,
        collapse_index=collapse_index(recall_at_5, precision_at_10, k_variance, centroid_survival_ratio),
    )


def compute_metrics(original: Optional[VectorSetLike],
                    compressed: Optional[VectorSetLike],
                    k: int = 10,
                    max_workers: Optional[int] = None) -> MetricsBundle:
    """
    Compute fidelity metrics for a compressed vector set.

    Args:
        original: Reference vector set
        compressed: Compressed vector set, index-aligned with ``original``
        k: Neighbor count requested by the caller. Recall is always reported
            at 5 and 10 with probes at 3, 7, 15 and 30; ``k`` is validated and
            logged with the run.
        max_workers: Thread count for the per-query searches. ``None`` or 1
            runs sequentially; results are identical either way.

    Returns:
        Metrics bundle. Empty or missing input yields all-zero metrics with a
        neutral dimension collapse ratio of 1.

    Raises:
        ConfigurationError: If ``k`` or ``max_workers`` is invalid
        DimensionMismatchError: If the sets are not index-aligned
    """
    validate_k(k)
    if max_workers is not None and (isinstance(max_workers, bool)
                                    or not isinstance(max_workers, numbers.Integral)
                                    or max_workers < 1):
        raise ConfigurationError("max_workers must be a positive integer")

    if original is None or compressed is None:
        return MetricsBundle.zeros()

    original = as_vector_set(original)
    compressed = as_vector_set(compressed)
    if original.shape[0] == 0:
        return MetricsBundle.zeros()
    validate_aligned(original, compressed)

    indices = sample_indices(original.shape[0])
    stats = _collect_query_stats(indices, original, compressed, max_workers)
    kendall_tau = rank_correlation(original, compressed, RANK_SAMPLE_SIZE)

    logger.debug(
        f"Computed metrics over {len(stats)} sampled queries of {original.shape[0]} vectors "
        f"(k={k}, workers={max_workers or 1})"
    )
    return aggregate_query_stats(stats, original, compressed, kendall_tau)
