"""
Custom exceptions for the veccompress package.
"""


class VecCompressError(Exception):
    """Base exception class for all veccompress errors."""
    pass


class ValidationError(VecCompressError):
    """Exception raised for malformed vector input."""
    pass


class DimensionMismatchError(ValidationError):
    """Exception raised when vectors in a set, or two aligned sets, disagree in shape."""
    pass


class ConfigurationError(VecCompressError):
    """Exception raised for configuration errors."""
    pass


class QuantizationError(VecCompressError):
    """Exception raised for quantization-related errors."""
    pass
