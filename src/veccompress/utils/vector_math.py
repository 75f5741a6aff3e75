"""
Vector math primitives for the veccompress package.

Distances are plain Euclidean. Functions accept numpy arrays or nested
sequences and never mutate their input.
"""

import math
from typing import Sequence, Union

import numpy as np
from sklearn.preprocessing import normalize

from ..exceptions import ConfigurationError

ArrayLike = Union[np.ndarray, Sequence[float], Sequence[Sequence[float]]]


def normalize_vectors(vectors: ArrayLike) -> np.ndarray:
    """
    Scale every vector to unit Euclidean length.

    Zero vectors stay all-zero instead of turning into NaN.

    Args:
        vectors: Array of shape (n_vectors, dim)

    Returns:
        Normalized copy of the vectors
    """
    array = np.asarray(vectors, dtype=np.float64)
    if array.size == 0:
        return array.copy()
    return normalize(array, norm="l2", axis=1, copy=True)


def euclidean_distance(a: ArrayLike, b: ArrayLike) -> float:
    """
    Compute Euclidean distance between two vectors.

    Only the first ``min(len(a), len(b))`` coordinates are compared. Passing
    vectors of equal length is the caller's responsibility; set-level entry
    points reject ragged input before it gets here.

    Args:
        a: First vector
        b: Second vector

    Returns:
        Euclidean distance value
    """
    if a is None or b is None:
        return 0.0
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    n = min(a.shape[0], b.shape[0])
    diff = a[:n] - b[:n]
    return float(np.sqrt(np.sum(diff * diff)))


def distances_to(query: ArrayLike, haystack: ArrayLike) -> np.ndarray:
    """Euclidean distance from ``query`` to every row of ``haystack``."""
    query = np.asarray(query, dtype=np.float64)
    haystack = np.asarray(haystack, dtype=np.float64)
    if haystack.shape[0] == 0:
        return np.zeros(0, dtype=np.float64)
    n = min(query.shape[0], haystack.shape[1])
    diff = haystack[:, :n] - query[:n]
    return np.sqrt(np.sum(diff * diff, axis=1))


def k_nearest_neighbors(query: ArrayLike, haystack: ArrayLike, k: int) -> np.ndarray:
    """
    Find the k nearest neighbors of a query by brute force.

    The query is not excluded from its own results: when it is drawn from
    ``haystack`` its own index usually comes first. Ties keep index order.

    Args:
        query: Query vector
        haystack: Array of vectors to search
        k: Number of neighbors to return

    Returns:
        Indices of the nearest vectors, closest first
    """
    if query is None or haystack is None or k <= 0:
        return np.zeros(0, dtype=np.intp)
    distances = distances_to(query, haystack)
    return np.argsort(distances, kind="stable")[:k]


def pairwise_distances(vectors: ArrayLike) -> np.ndarray:
    """
    Compute the full Euclidean distance matrix of a vector set.

    Args:
        vectors: Array of shape (n_vectors, dim)

    Returns:
        Symmetric matrix of shape (n_vectors, n_vectors)
    """
    vectors = np.asarray(vectors, dtype=np.float64)
    return np.linalg.norm(vectors[:, np.newaxis] - vectors[np.newaxis, :], axis=2)


def rank_correlation(set_a: ArrayLike, set_b: ArrayLike, sample_size: int = 50) -> float:
    """
    Kendall-style concordance of pairwise distances between two aligned sets.

    Takes the first ``min(len, sample_size)`` vectors of each set, computes
    every pairwise distance inside each sample, then compares every pair of
    those distances across the two sets. Ties in either set count as neither
    concordant nor discordant.

    Args:
        set_a: Reference vector set
        set_b: Vector set index-aligned with ``set_a``
        sample_size: Maximum number of leading vectors to use

    Returns:
        (concordant - discordant) / (concordant + discordant), or 0.0 when no
        pair is comparable
    """
    set_a = np.asarray(set_a, dtype=np.float64)
    set_b = np.asarray(set_b, dtype=np.float64)
    n = min(len(set_a), len(set_b), sample_size)
    if n < 3:
        return 0.0

    rows, cols = np.triu_indices(n, k=1)
    dist_a = pairwise_distances(set_a[:n])[rows, cols]
    dist_b = pairwise_distances(set_b[:n])[rows, cols]

    pair_rows, pair_cols = np.triu_indices(len(dist_a), k=1)
    sign_a = np.sign(dist_a[pair_rows] - dist_a[pair_cols])
    sign_b = np.sign(dist_b[pair_rows] - dist_b[pair_cols])
    agreement = sign_a * sign_b

    concordant = int(np.count_nonzero(agreement > 0))
    discordant = int(np.count_nonzero(agreement < 0))

    if concordant + discordant == 0:
        return 0.0
    return (concordant - discordant) / (concordant + discordant)


def count_distinct(vectors: ArrayLike, precision: float = 1e-6) -> int:
    """
    Count distinct vectors after rounding coordinates.

    Args:
        vectors: Array of shape (n_vectors, dim)
        precision: Rounding precision. Coordinates are rounded to the nearest
            decimal place, so 1e-6 and 5e-7 both round to 6 decimals.

    Returns:
        Number of distinct rounded vectors, at least 1

    Raises:
        ConfigurationError: If precision is not a positive finite number
    """
    if not math.isfinite(precision) or precision <= 0:
        raise ConfigurationError(f"precision must be a positive finite number, got {precision}")

    array = np.asarray(vectors, dtype=np.float64)
    if array.ndim != 2 or array.shape[0] == 0 or array.shape[1] == 0:
        return 1
    decimals = int(round(-np.log10(precision)))
    # adding 0.0 folds -0.0 into 0.0
    rounded = np.round(array, decimals) + 0.0
    return max(1, int(np.unique(rounded, axis=0).shape[0]))
