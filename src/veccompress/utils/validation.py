"""
Validation utilities for the veccompress package.
"""

import math
import numbers
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

from ..exceptions import ConfigurationError, DimensionMismatchError, ValidationError

VectorSetLike = Union[np.ndarray, Sequence[Sequence[float]]]


def as_vector_set(vectors: Optional[VectorSetLike]) -> np.ndarray:
    """
    Convert input vectors to a 2-D ``float64`` array.

    ``None`` and empty input become an array of shape ``(0, 0)``. A ragged
    list of vectors is rejected rather than truncated.

    Args:
        vectors: Array or sequence of equal-length vectors

    Returns:
        Array of shape (n_vectors, dim)

    Raises:
        DimensionMismatchError: If the vectors do not share one length
        ValidationError: If the input is not a set of finite numeric vectors
    """
    if vectors is None:
        return np.zeros((0, 0), dtype=np.float64)

    if isinstance(vectors, np.ndarray):
        if vectors.ndim == 1 and vectors.size == 0:
            return np.zeros((0, 0), dtype=np.float64)
        if vectors.ndim != 2:
            raise ValidationError("Vectors must be 2D array")
        if vectors.shape[0] == 0:
            return np.zeros((0, vectors.shape[1]), dtype=np.float64)
        try:
            array = vectors.astype(np.float64)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Vectors must contain numeric values: {e}")
    else:
        rows = list(vectors)
        if not rows:
            return np.zeros((0, 0), dtype=np.float64)
        try:
            lengths = {len(row) for row in rows}
        except TypeError:
            raise ValidationError("Vectors must be a sequence of vectors")
        if len(lengths) > 1:
            raise DimensionMismatchError(
                f"All vectors must have the same dimension, got {sorted(lengths)}"
            )
        try:
            array = np.asarray(rows, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Vectors must contain numeric values: {e}")
        if array.ndim != 2:
            raise ValidationError("Vectors must be 2D array")

    if array.shape[0] > 0 and array.shape[1] == 0:
        raise ValidationError("Vector dimension cannot be zero")

    if not np.all(np.isfinite(array)):
        raise ValidationError("Vectors contain NaN or infinite values")

    return array


def validate_aligned(original: np.ndarray, compressed: np.ndarray) -> bool:
    """
    Check that two vector sets are index-aligned.

    Raises:
        DimensionMismatchError: If the shapes differ
    """
    if original.shape != compressed.shape:
        raise DimensionMismatchError(
            f"Original shape {original.shape} does not match compressed shape {compressed.shape}"
        )
    return True


def validate_config(config: Dict[str, Any],
                    required_keys: Optional[List[str]] = None,
                    allowed_keys: Optional[List[str]] = None,
                    value_types: Optional[Dict[str, Any]] = None,
                    value_ranges: Optional[Dict[str, tuple]] = None) -> bool:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration dictionary to validate
        required_keys: List of required keys
        allowed_keys: List of allowed keys (if None, all keys allowed)
        value_types: Dictionary mapping keys to expected types
        value_ranges: Dictionary mapping keys to (min, max) ranges; values
            with a range must also be finite

    Returns:
        True if valid

    Raises:
        ConfigurationError: If config is invalid
    """
    if not isinstance(config, dict):
        raise ConfigurationError("Config must be a dictionary")

    if required_keys:
        missing_keys = [key for key in required_keys if key not in config]
        if missing_keys:
            raise ConfigurationError(f"Missing required keys: {missing_keys}")

    if allowed_keys is not None:
        invalid_keys = [key for key in config.keys() if key not in allowed_keys]
        if invalid_keys:
            raise ConfigurationError(f"Invalid keys: {invalid_keys}")

    if value_types:
        for key, expected_type in value_types.items():
            if key in config:
                value = config[key]
                # bool is an int subclass; reject it where a number is expected
                if isinstance(value, bool) and expected_type is not bool:
                    raise ConfigurationError(f"Key '{key}' must be of type {expected_type}, got {type(value)}")
                if not isinstance(value, expected_type):
                    raise ConfigurationError(f"Key '{key}' must be of type {expected_type}, got {type(value)}")

    if value_ranges:
        for key, (min_val, max_val) in value_ranges.items():
            if key in config:
                value = config[key]
                if isinstance(value, numbers.Real) and not isinstance(value, bool):
                    if not math.isfinite(value):
                        raise ConfigurationError(f"Key '{key}' must be finite, got {value}")
                    if value < min_val or value > max_val:
                        raise ConfigurationError(f"Key '{key}' value {value} is outside range [{min_val}, {max_val}]")

    return True


def validate_k(k: int, max_k: Optional[int] = None) -> bool:
    """
    Validate a neighbor count.

    Args:
        k: k value to validate
        max_k: Maximum allowed k value

    Returns:
        True if valid

    Raises:
        ConfigurationError: If k is invalid
    """
    if isinstance(k, bool) or not isinstance(k, numbers.Integral):
        raise ConfigurationError("k must be an integer")

    if k <= 0:
        raise ConfigurationError("k must be positive")

    if max_k is not None and k > max_k:
        raise ConfigurationError(f"k ({k}) cannot be greater than max_k ({max_k})")

    return True
