"""
Tests for fidelity metrics.
"""

import numpy as np
import pytest

from veccompress.exceptions import ConfigurationError, DimensionMismatchError
from veccompress.metrics import (
    collapse_index,
    compute_metrics,
    neighbor_overlap,
    safe_div,
    sample_indices,
)
from veccompress.quantization import quantize
from veccompress.types import MetricsBundle
from veccompress.utils.vector_math import count_distinct


class TestMetricHelpers:
    """Test the building blocks of the metrics engine."""

    def test_safe_div(self):
        assert safe_div(1.0, 4) == 0.25
        assert safe_div(1.0, 0) == 0.0
        assert safe_div(float("nan"), 3) == 0.0

    def test_neighbor_overlap(self):
        assert neighbor_overlap([0, 1, 2, 3, 4], [0, 1, 9, 8, 7], 5) == pytest.approx(0.4)

    def test_sample_indices(self):
        assert list(sample_indices(10)) == list(range(10))
        indices = sample_indices(1000)
        assert indices.step == 5
        assert len(indices) == 200

    def test_collapse_index_bounds(self):
        assert collapse_index(1.0, 1.0, 0.0, 1.0) == 0.0
        assert collapse_index(0.0, 0.0, 1.0, 0.0) == 1.0
        assert collapse_index(0.5, 0.5, 0.0, 1.0) == pytest.approx(0.3)


class TestComputeMetrics:
    """Test metrics over whole vector sets."""

    def test_identical_sets(self, sample_vectors):
        """Test that an uncompressed set shows no damage."""
        metrics = compute_metrics(sample_vectors, sample_vectors.copy())
        assert metrics.recall_at_5 == 1.0
        assert metrics.recall_at_10 == 1.0
        assert metrics.mse == 0.0
        assert metrics.local_distortion == 0.0
        assert metrics.k_variance == 0.0
        assert metrics.kendall_tau == pytest.approx(1.0)
        assert metrics.compression_ratio == 1.0
        assert metrics.centroid_survival_ratio == 1.0
        assert metrics.dimension_collapse_ratio == 1.0
        assert metrics.collapse_index == 0.0
        # Rank 0 is the query itself, so the nearest real neighbor sits at rank 1
        assert metrics.mrr == pytest.approx(0.5)

    def test_precision_and_trustworthiness_track_recall(self, unit_vectors):
        compressed = quantize(unit_vectors, "LATTICE", {"grid_step": 0.2})
        metrics = compute_metrics(unit_vectors, compressed)
        assert metrics.precision_at_10 == metrics.recall_at_10
        assert metrics.trustworthiness == metrics.recall_at_10

    def test_bounds(self, unit_vectors):
        compressed = quantize(unit_vectors, "LATTICE", {"grid_step": 0.3})
        metrics = compute_metrics(unit_vectors, compressed)
        for value in (metrics.recall_at_5, metrics.recall_at_10, metrics.precision_at_10,
                      metrics.mrr, metrics.trustworthiness, metrics.collapse_index,
                      metrics.centroid_survival_ratio):
            assert 0.0 <= value <= 1.0
        assert -1.0 <= metrics.kendall_tau <= 1.0
        assert metrics.mse >= 0.0
        assert metrics.k_variance >= 0.0
        assert metrics.compression_ratio >= 1.0
        assert len(metrics.per_dimension_mse) == unit_vectors.shape[1]
        assert metrics.dimension_collapse_ratio >= 1.0

    def test_compression_ratio(self, unit_vectors):
        compressed = quantize(unit_vectors, "LATTICE", {"grid_step": 0.5})
        metrics = compute_metrics(unit_vectors, compressed)
        assert metrics.compression_ratio == len(unit_vectors) / count_distinct(compressed)

    def test_recall_degrades_with_coarser_grid(self, unit_vectors):
        fine = compute_metrics(unit_vectors, quantize(unit_vectors, "LATTICE", {"grid_step": 0.01}))
        coarse = compute_metrics(unit_vectors, quantize(unit_vectors, "LATTICE", {"grid_step": 0.5}))
        assert fine.recall_at_10 >= coarse.recall_at_10
        assert fine.collapse_index <= coarse.collapse_index

    def test_total_collapse(self, sample_vectors):
        """Test that mapping every vector to one point is scored as severe damage."""
        collapsed = np.zeros_like(sample_vectors)
        metrics = compute_metrics(sample_vectors, collapsed)
        assert metrics.compression_ratio == len(sample_vectors)
        assert metrics.centroid_survival_ratio == pytest.approx(1 / len(sample_vectors))
        assert metrics.kendall_tau == 0.0
        assert metrics.collapse_index >= 0.6

    def test_deterministic(self, unit_vectors):
        compressed = quantize(unit_vectors, "BOUNDARY_AWARE", {"grid_step": 0.2, "boundary_margin": 0.1})
        first = compute_metrics(unit_vectors, compressed)
        second = compute_metrics(unit_vectors, compressed)
        assert first.to_dict() == second.to_dict()

    def test_threaded_matches_sequential(self, unit_vectors):
        compressed = quantize(unit_vectors, "LATTICE", {"grid_step": 0.25})
        sequential = compute_metrics(unit_vectors, compressed)
        threaded = compute_metrics(unit_vectors, compressed, max_workers=4)
        assert threaded.to_dict() == sequential.to_dict()

    def test_single_vector(self):
        metrics = compute_metrics([[1.0, 2.0]], [[1.0, 2.0]])
        assert metrics.mrr == 1.0
        assert metrics.compression_ratio == 1.0

    @pytest.mark.parametrize("original,compressed", [
        (None, [[1.0]]),
        ([[1.0]], None),
        ([], []),
    ])
    def test_missing_input_yields_zeros(self, original, compressed):
        metrics = compute_metrics(original, compressed)
        assert metrics == MetricsBundle.zeros()
        assert metrics.dimension_collapse_ratio == 1.0

    def test_shape_mismatch(self, sample_vectors):
        with pytest.raises(DimensionMismatchError):
            compute_metrics(sample_vectors, sample_vectors[:50])
        with pytest.raises(DimensionMismatchError):
            compute_metrics(sample_vectors, sample_vectors[:, :8])

    @pytest.mark.parametrize("k", [0, -3, 1.5])
    def test_invalid_k(self, small_vectors, k):
        with pytest.raises(ConfigurationError):
            compute_metrics(small_vectors, small_vectors, k=k)

    def test_invalid_workers(self, small_vectors):
        with pytest.raises(ConfigurationError):
            compute_metrics(small_vectors, small_vectors, max_workers=0)
