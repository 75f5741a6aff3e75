"""
Pytest configuration and fixtures for veccompress tests.
"""

import logging

import numpy as np
import pytest

from veccompress.configs import CompressionConfig
from veccompress.pipeline import CompressionPipeline
from veccompress.quantization import BoundaryAwareQuantizer, LatticeQuantizer


@pytest.fixture
def sample_vectors():
    """Generate sample vectors for testing."""
    np.random.seed(42)
    return np.random.randn(100, 16)


@pytest.fixture
def small_vectors():
    """Generate small sample vectors for testing."""
    np.random.seed(456)
    return np.random.randn(10, 8)


@pytest.fixture
def unit_vectors():
    """Generate unit-length vectors, the usual pipeline input after normalization."""
    np.random.seed(789)
    vectors = np.random.randn(200, 16)
    return vectors / np.linalg.norm(vectors, axis=1, keepdims=True)


@pytest.fixture
def lattice_quantizer():
    """Create a lattice quantizer."""
    return LatticeQuantizer({"grid_step": 0.1})


@pytest.fixture
def boundary_quantizer():
    """Create a boundary-aware quantizer."""
    return BoundaryAwareQuantizer({"grid_step": 1.0, "boundary_margin": 0.1})


@pytest.fixture
def default_config():
    """Create the default compression config."""
    return CompressionConfig()


@pytest.fixture
def pipeline():
    """Create a pipeline with default settings."""
    return CompressionPipeline()


@pytest.fixture
def lossless_pipeline():
    """Create a pipeline that normalizes but does not quantize."""
    return CompressionPipeline(method="LATTICE", grid_step=0.0)


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after a test reconfigures logging."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
