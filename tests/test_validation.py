"""
Tests for input and configuration validation.
"""

import numpy as np
import pytest

from veccompress.exceptions import ConfigurationError, DimensionMismatchError, ValidationError
from veccompress.utils.validation import as_vector_set, validate_aligned, validate_config, validate_k


class TestAsVectorSet:
    """Test conversion of input to a vector set."""

    def test_list_input(self):
        array = as_vector_set([[1, 2], [3, 4]])
        assert array.shape == (2, 2)
        assert array.dtype == np.float64

    def test_array_is_copied(self, small_vectors):
        array = as_vector_set(small_vectors)
        assert array is not small_vectors
        assert np.array_equal(array, small_vectors)

    def test_empty_input(self):
        assert as_vector_set(None).shape == (0, 0)
        assert as_vector_set([]).shape == (0, 0)
        assert as_vector_set(np.zeros((0, 5))).shape == (0, 5)

    def test_ragged_input(self):
        with pytest.raises(DimensionMismatchError):
            as_vector_set([[1.0, 2.0], [1.0]])

    def test_ragged_is_validation_error(self):
        with pytest.raises(ValidationError):
            as_vector_set([[1.0, 2.0, 3.0], [1.0]])

    def test_non_finite_values(self):
        with pytest.raises(ValidationError):
            as_vector_set([[1.0, float("nan")]])
        with pytest.raises(ValidationError):
            as_vector_set(np.array([[np.inf, 0.0]]))

    def test_wrong_rank(self):
        with pytest.raises(ValidationError):
            as_vector_set(np.zeros((2, 2, 2)))
        with pytest.raises(ValidationError):
            as_vector_set([1.0, 2.0, 3.0])

    def test_zero_dimension(self):
        with pytest.raises(ValidationError):
            as_vector_set(np.zeros((3, 0)))
        with pytest.raises(ValidationError):
            as_vector_set([[], []])

    def test_non_numeric(self):
        with pytest.raises(ValidationError):
            as_vector_set([["a", "b"]])


class TestValidateAligned:
    """Test alignment of original and compressed sets."""

    def test_same_shape(self, small_vectors):
        assert validate_aligned(small_vectors, small_vectors.copy())

    def test_shape_mismatch(self, small_vectors):
        with pytest.raises(DimensionMismatchError):
            validate_aligned(small_vectors, small_vectors[:5])
        with pytest.raises(DimensionMismatchError):
            validate_aligned(small_vectors, small_vectors[:, :4])


class TestValidateConfig:
    """Test configuration dictionary validation."""

    def test_required_keys(self):
        with pytest.raises(ConfigurationError):
            validate_config({}, required_keys=["grid_step"])

    def test_allowed_keys(self):
        with pytest.raises(ConfigurationError):
            validate_config({"grid_stp": 0.1}, allowed_keys=["grid_step"])

    def test_value_types(self):
        assert validate_config({"grid_step": 1}, value_types={"grid_step": (int, float)})
        with pytest.raises(ConfigurationError):
            validate_config({"grid_step": "0.1"}, value_types={"grid_step": (int, float)})

    def test_bool_is_not_a_number(self):
        with pytest.raises(ConfigurationError):
            validate_config({"k": True}, value_types={"k": int})

    def test_value_ranges(self):
        with pytest.raises(ConfigurationError):
            validate_config({"boundary_margin": -0.5}, value_ranges={"boundary_margin": (0.0, 1.0)})

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_ranged_value(self, value):
        with pytest.raises(ConfigurationError):
            validate_config({"grid_step": value}, value_ranges={"grid_step": (float("-inf"), float("inf"))})

    def test_not_a_dict(self):
        with pytest.raises(ConfigurationError):
            validate_config([("grid_step", 0.1)])


class TestValidateK:
    """Test neighbor count validation."""

    def test_valid(self):
        assert validate_k(10)
        assert validate_k(np.int64(3))

    @pytest.mark.parametrize("k", [0, -1, 2.5, True, "10"])
    def test_invalid(self, k):
        with pytest.raises(ConfigurationError):
            validate_k(k)

    def test_max_k(self):
        with pytest.raises(ConfigurationError):
            validate_k(20, max_k=10)
