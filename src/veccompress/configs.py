"""
Configuration defaults and presets for the veccompress package.

``CompressionConfig`` is the resolved, immutable parameter set of one
pipeline run. Build it directly, from a dictionary of options merged over
``DEFAULT_OPTIONS``, or from one of the named presets in
``COMPRESSION_CONFIGS``.
"""

import numbers
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Union

from .exceptions import ConfigurationError
from .quantization.registry import resolve_method
from .types import CompressionMethod
from .utils.validation import validate_config, validate_k


DEFAULT_OPTIONS: Dict[str, Any] = {
    "method": CompressionMethod.BOUNDARY_AWARE.value,
    "grid_step": 0.1,
    "boundary_margin": 0.1,
    "k": 10,
    "normalize": True,
    "seed": 42,
    "keep_original": True,
    "max_workers": None,
}

# Ready-to-use configurations for common quality/size trade-offs
COMPRESSION_CONFIGS: Dict[str, Dict[str, Any]] = {
    "high_quality": {
        "method": "BOUNDARY_AWARE",
        "grid_step": 0.05,
        "boundary_margin": 0.025,
        "description": "Fine grid, keeps neighbor structure of unit-norm embeddings"
    },
    "balanced": {
        "method": "BOUNDARY_AWARE",
        "grid_step": 0.1,
        "boundary_margin": 0.1,
        "description": "Default trade-off between compression and recall"
    },
    "aggressive": {
        "method": "LATTICE",
        "grid_step": 0.25,
        "boundary_margin": 0.1,
        "description": "Coarse uniform grid, expect pre-collapse or worse"
    },
    "lossless": {
        "method": "LATTICE",
        "grid_step": 0.0,
        "boundary_margin": 0.0,
        "description": "Quantization disabled, metrics only"
    },
}

_OPTION_TYPES = {
    "method": (str, CompressionMethod),
    "grid_step": numbers.Real,
    "boundary_margin": numbers.Real,
    "k": numbers.Integral,
    "normalize": bool,
    "seed": numbers.Integral,
    "keep_original": bool,
    "max_workers": (numbers.Integral, type(None)),
}

_OPTION_RANGES = {
    "grid_step": (float("-inf"), float("inf")),
    "boundary_margin": (0.0, float("inf")),
    "max_workers": (1, float("inf")),
}


def get_config(name: str) -> Dict[str, Any]:
    """
    Get a preset configuration.

    Args:
        name: Preset name (see ``COMPRESSION_CONFIGS``)

    Returns:
        Copy of the preset options, including its description
    """
    if name not in COMPRESSION_CONFIGS:
        raise ConfigurationError(
            f"Unknown preset '{name}'. Available presets: {list(COMPRESSION_CONFIGS)}"
        )
    return dict(COMPRESSION_CONFIGS[name])


def list_configs() -> Dict[str, str]:
    """Map every preset name to its description."""
    return {name: preset.get("description", "") for name, preset in COMPRESSION_CONFIGS.items()}


@dataclass(frozen=True)
class CompressionConfig:
    """
    Resolved parameters for one compression run.

    A ``grid_step`` of zero or less disables quantization. ``seed`` is carried
    for stochastic extensions; the grid methods themselves are deterministic.
    """

    method: CompressionMethod = CompressionMethod.BOUNDARY_AWARE
    grid_step: float = 0.1
    boundary_margin: float = 0.1
    k: int = 10
    normalize: bool = True
    seed: int = 42
    keep_original: bool = True
    max_workers: Optional[int] = None

    def __post_init__(self):
        values = {name: getattr(self, name) for name in DEFAULT_OPTIONS}
        validate_config(values, value_types=_OPTION_TYPES, value_ranges=_OPTION_RANGES)
        validate_k(self.k)
        object.__setattr__(self, "method", resolve_method(self.method))

    @classmethod
    def from_dict(cls, options: Optional[Dict[str, Any]] = None) -> "CompressionConfig":
        """
        Merge options over ``DEFAULT_OPTIONS`` and build a config.

        Raises:
            ConfigurationError: If an option is unknown or invalid
        """
        options = dict(options or {})
        validate_config(options, allowed_keys=list(DEFAULT_OPTIONS))
        return cls(**{**DEFAULT_OPTIONS, **options})

    @classmethod
    def from_preset(cls, name: str, **overrides) -> "CompressionConfig":
        """Build a config from a named preset, with optional overrides."""
        preset = get_config(name)
        preset.pop("description", None)
        return cls.from_dict({**preset, **overrides})

    def with_options(self, **changes) -> "CompressionConfig":
        """Return a new config with some options replaced."""
        validate_config(changes, allowed_keys=list(DEFAULT_OPTIONS))
        return replace(self, **changes)

    def quantizer_params(self) -> Dict[str, Any]:
        """Parameters handed to the quantizer."""
        return {"grid_step": self.grid_step, "boundary_margin": self.boundary_margin}

    def to_dict(self) -> Dict[str, Any]:
        """Get the options as plain Python values."""
        data = {name: getattr(self, name) for name in DEFAULT_OPTIONS}
        data["method"] = self.method.value
        return data


ConfigLike = Union[CompressionConfig, Dict[str, Any], None]


def resolve_config(config: ConfigLike = None, **options) -> CompressionConfig:
    """
    Turn a config, an options dictionary, or nothing into a ``CompressionConfig``.

    Keyword options are applied on top.
    """
    if config is None:
        return CompressionConfig.from_dict(options)
    if isinstance(config, CompressionConfig):
        return config.with_options(**options) if options else config
    if isinstance(config, dict):
        return CompressionConfig.from_dict({**config, **options})
    raise ConfigurationError(f"Unsupported config type: {type(config).__name__}")
