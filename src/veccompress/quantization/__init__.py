"""
Quantization implementations for the veccompress package.

This module provides grid-based quantizers and the method dispatch used by
the compression pipeline.
"""

from .base import Quantizer, snap_to_grid
from .boundary import BoundaryAwareQuantizer
from .lattice import LatticeQuantizer
from .passthrough import PassThroughQuantizer
from .registry import QUANTIZER_CLASSES, create_quantizer, quantize, resolve_method

__all__ = [
    "Quantizer",
    "LatticeQuantizer",
    "BoundaryAwareQuantizer",
    "PassThroughQuantizer",
    "QUANTIZER_CLASSES",
    "create_quantizer",
    "quantize",
    "resolve_method",
    "snap_to_grid",
]
