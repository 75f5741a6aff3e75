"""
Quantizer registry and method dispatch.
"""

import numbers
from typing import Any, Dict, Optional, Type, Union

import numpy as np

from ..exceptions import ConfigurationError
from ..types import CompressionMethod
from ..utils.validation import VectorSetLike, as_vector_set, validate_config
from .base import Quantizer
from .boundary import BoundaryAwareQuantizer
from .lattice import LatticeQuantizer
from .passthrough import PassThroughQuantizer

QUANTIZER_CLASSES: Dict[CompressionMethod, Type[Quantizer]] = {
    CompressionMethod.LATTICE: LatticeQuantizer,
    CompressionMethod.BOUNDARY_AWARE: BoundaryAwareQuantizer,
    # Declared methods without an implementation
    CompressionMethod.K_MEANS: PassThroughQuantizer,
    CompressionMethod.RANDOM_PROJECTION: PassThroughQuantizer,
}


def resolve_method(method: Union[CompressionMethod, str]) -> CompressionMethod:
    """
    Turn a method tag or its name into a ``CompressionMethod``.

    Names are matched case-insensitively and may use dashes, so
    ``"boundary-aware"`` resolves to ``CompressionMethod.BOUNDARY_AWARE``.

    Raises:
        ConfigurationError: If the method is unknown
    """
    if isinstance(method, CompressionMethod):
        return method
    if isinstance(method, str):
        key = method.strip().upper().replace("-", "_")
        try:
            return CompressionMethod(key)
        except ValueError:
            pass
    valid = [m.value for m in CompressionMethod]
    raise ConfigurationError(f"Unknown compression method '{method}'. Valid methods: {valid}")


def create_quantizer(method: Union[CompressionMethod, str],
                     params: Optional[Dict[str, Any]] = None) -> Quantizer:
    """
    Build the quantizer for a method.

    Args:
        method: Method tag or name
        params: Quantizer parameters (``grid_step``, ``boundary_margin``)

    Returns:
        Quantizer instance
    """
    method = resolve_method(method)
    params = dict(params or {})
    validate_config(
        params,
        value_types={"grid_step": numbers.Real, "boundary_margin": numbers.Real},
        value_ranges={
            "grid_step": (float("-inf"), float("inf")),
            "boundary_margin": (0.0, float("inf")),
        },
    )
    config = {"method": method.value, **params}
    return QUANTIZER_CLASSES[method](config)


def quantize(vectors: VectorSetLike,
             method: Union[CompressionMethod, str] = CompressionMethod.BOUNDARY_AWARE,
             params: Optional[Dict[str, Any]] = None) -> np.ndarray:
    """
    Quantize a vector set with the given method.

    Args:
        vectors: Vector set of shape (n_vectors, dim)
        method: Method tag or name
        params: Quantizer parameters (``grid_step``, ``boundary_margin``)

    Returns:
        Quantized vector set of the same shape
    """
    quantizer = create_quantizer(method, params)
    array = as_vector_set(vectors)
    if array.shape[0] == 0:
        return array
    return quantizer.quantize(array)
