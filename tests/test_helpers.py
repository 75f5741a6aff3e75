"""
Tests for helper functions and logging utilities.
"""

import logging

import numpy as np
import pytest

from veccompress.exceptions import ConfigurationError
from veccompress.types import CompressionAnalysisResult, Regime
from veccompress.utils.helpers import (
    batch_compress,
    compare_methods,
    estimate_grid_step,
    quick_compress,
    safe_compress,
)
import veccompress
from veccompress.utils.logging import get_logger, log_performance, setup_logging


class TestQuickCompress:
    """Test quality-targeted compression."""

    def test_grid_step_from_quality(self, sample_vectors):
        result = quick_compress(sample_vectors, target_quality=0.9)
        assert result.grid_step == pytest.approx(0.14)

    def test_lowest_quality(self, sample_vectors):
        assert quick_compress(sample_vectors, target_quality=0.0).grid_step == pytest.approx(0.5)

    def test_invalid_quality(self, sample_vectors):
        with pytest.raises(ConfigurationError):
            quick_compress(sample_vectors, target_quality=1.5)


class TestSafeCompress:
    """Test compression with collapse fallback."""

    def test_returns_safe_result(self, unit_vectors):
        result = safe_compress(unit_vectors)
        assert result.regime <= Regime.PRE_COLLAPSE or "Could not achieve" in result.warnings[-1]

    def test_fallback_after_attempts(self, unit_vectors, monkeypatch):
        """Test that persistent collapse ends in a warned fallback run."""
        monkeypatch.setattr("veccompress.pipeline.classify_regime", lambda metrics: Regime.COLLAPSE)
        result = safe_compress(unit_vectors, max_attempts=3)
        assert result.grid_step == pytest.approx(0.025)
        assert result.warnings[-1] == "Could not achieve stable compression after 3 attempts"
        assert result.regime is Regime.COLLAPSE

    def test_first_attempt_accepted(self, unit_vectors, monkeypatch):
        monkeypatch.setattr("veccompress.pipeline.classify_regime", lambda metrics: Regime.PRE_COLLAPSE)
        result = safe_compress(unit_vectors)
        assert result.grid_step == pytest.approx(0.2)

    def test_invalid_attempts(self, unit_vectors):
        with pytest.raises(ConfigurationError):
            safe_compress(unit_vectors, max_attempts=0)


class TestEstimateGridStep:
    """Test grid step estimation."""

    def test_formula(self, sample_vectors):
        avg_std = np.sqrt(np.mean(np.var(sample_vectors, axis=0)))
        expected = float(np.clip(avg_std * 0.5 / 2.0, 0.01, 1.0))
        assert estimate_grid_step(sample_vectors, 4.0) == pytest.approx(expected)

    def test_clipped(self):
        assert estimate_grid_step(np.ones((10, 4)), 2.0) == 0.01
        wide = np.array([[-100.0, 100.0], [100.0, -100.0]])
        assert estimate_grid_step(wide, 1.0) == 1.0

    def test_empty(self):
        assert estimate_grid_step([], 10.0) == 0.1

    def test_invalid_ratio(self, sample_vectors):
        with pytest.raises(ConfigurationError):
            estimate_grid_step(sample_vectors, 0)


class TestBatchAndCompare:
    """Test batch compression and method comparison."""

    def test_batch_compress(self, sample_vectors, small_vectors):
        results = batch_compress([sample_vectors, small_vectors, []], grid_step=0.2)
        assert len(results) == 3
        assert all(isinstance(r, CompressionAnalysisResult) for r in results)
        assert results[1].compressed.shape == small_vectors.shape
        assert results[2].regime is Regime.STABLE

    def test_compare_methods(self, unit_vectors):
        comparison = compare_methods(unit_vectors, grid_step=0.3)
        lattice = comparison["lattice"]
        adaptive = comparison["boundary_aware"]
        improvement = comparison["improvement"]
        assert improvement["recall_at_10"] == pytest.approx(
            adaptive.metrics.recall_at_10 - lattice.metrics.recall_at_10
        )
        assert improvement["collapse_index"] == pytest.approx(
            lattice.metrics.collapse_index - adaptive.metrics.collapse_index
        )
        assert improvement["compression_ratio"] == pytest.approx(
            adaptive.compression_ratio - lattice.compression_ratio
        )


class TestLogging:
    """Test logging utilities."""

    def test_get_logger_adds_one_handler(self):
        logger = get_logger("veccompress.tests.handlers")
        again = get_logger("veccompress.tests.handlers")
        assert logger is again
        assert len(logger.handlers) == 1

    def test_log_performance_at_info(self, caplog):
        with caplog.at_level(logging.INFO, logger="veccompress.performance"):
            log_performance("compression_pipeline.run", 0.5, quantize_time=0.1)
        records = [r for r in caplog.records if r.name == "veccompress.performance"]
        assert len(records) == 1
        assert records[0].levelno == logging.INFO
        assert "compression_pipeline.run" in records[0].getMessage()

    def test_get_logger_level(self):
        logger = get_logger("veccompress.tests.level", level="DEBUG")
        assert logger.level == logging.DEBUG

    def test_setup_logging_to_file(self, tmp_path, restore_root_logger):
        log_file = tmp_path / "logs" / "run.log"
        setup_logging({"level": "WARNING", "log_to_file": True, "log_file": str(log_file)})
        assert restore_root_logger.level == logging.WARNING
        logging.getLogger("veccompress.tests.file").warning("written")
        for handler in restore_root_logger.handlers:
            handler.flush()
        assert "written" in log_file.read_text()


class TestPackageMetadata:
    """Test package-level metadata."""

    def test_version_and_author(self):
        assert veccompress.__version__ == "0.1.0"
        assert veccompress.__author__ == "veccompress contributors"
        assert not hasattr(veccompress, "__email__")
