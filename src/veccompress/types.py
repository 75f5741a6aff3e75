"""
Core data types for the veccompress package.

Vector sets are carried as 2-D ``float64`` numpy arrays of shape
``(n_vectors, dim)``; row ``i`` of a compressed set is the quantized form of
row ``i`` of the original set.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from functools import total_ordering
from typing import Any, Dict, List, Optional, Tuple

import numpy as np


class CompressionMethod(Enum):
    """Discretization methods understood by the quantizer dispatch."""

    #: Uniform scalar quantization on a fixed grid
    LATTICE = "LATTICE"

    #: Lattice with local refinement where coarse quantization distorts most
    BOUNDARY_AWARE = "BOUNDARY_AWARE"

    #: Declared only, quantizes as pass-through
    K_MEANS = "K_MEANS"

    #: Declared only, quantizes as pass-through
    RANDOM_PROJECTION = "RANDOM_PROJECTION"


@total_ordering
class Regime(Enum):
    """
    Quality regime of a compressed set, ordered by severity.

    ``Regime.STABLE < Regime.PRE_COLLAPSE < Regime.COLLAPSE < Regime.POST_COLLAPSE``
    """

    STABLE = "STABLE"
    PRE_COLLAPSE = "PRE_COLLAPSE"
    COLLAPSE = "COLLAPSE"
    POST_COLLAPSE = "POST_COLLAPSE"

    @property
    def severity(self) -> int:
        return _REGIME_ORDER.index(self)

    def __lt__(self, other):
        if not isinstance(other, Regime):
            return NotImplemented
        return self.severity < other.severity


_REGIME_ORDER = [Regime.STABLE, Regime.PRE_COLLAPSE, Regime.COLLAPSE, Regime.POST_COLLAPSE]


@dataclass(frozen=True)
class MetricsBundle:
    """
    Fidelity metrics comparing an original vector set with its compressed form.

    All fields are derived from a single metrics pass. ``precision_at_10`` and
    ``trustworthiness`` are computed exactly like ``recall_at_10`` and are kept
    as separate fields for consumers that read them by name.
    """

    recall_at_5: float = 0.0
    recall_at_10: float = 0.0
    precision_at_10: float = 0.0
    mrr: float = 0.0
    mse: float = 0.0
    local_distortion: float = 0.0
    trustworthiness: float = 0.0
    kendall_tau: float = 0.0
    compression_ratio: float = 0.0
    k_variance: float = 0.0
    per_dimension_mse: Tuple[float, ...] = ()
    dimension_collapse_ratio: float = 1.0
    centroid_survival_ratio: float = 0.0
    collapse_index: float = 0.0

    @classmethod
    def zeros(cls) -> "MetricsBundle":
        """Bundle returned for empty or missing input."""
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["per_dimension_mse"] = list(self.per_dimension_mse)
        return data


@dataclass(frozen=True, eq=False)
class CompressionResult:
    """Compressed vectors without quality analysis."""

    compressed: np.ndarray
    compression_ratio: float
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, eq=False)
class CompressionAnalysisResult:
    """
    Outcome of one pipeline run.

    ``warnings`` is ``None`` when no threshold was crossed, which callers can
    tell apart from an empty list.
    """

    compressed: np.ndarray
    metrics: MetricsBundle
    regime: Regime
    compression_ratio: float
    original: Optional[np.ndarray] = None
    grid_step: Optional[float] = None
    warnings: Optional[List[str]] = None

    @property
    def is_safe(self) -> bool:
        """True when the regime is STABLE or PRE_COLLAPSE."""
        return self.regime < Regime.COLLAPSE

    def to_dict(self, include_vectors: bool = False) -> Dict[str, Any]:
        """Render the result as plain Python types (JSON friendly)."""
        data: Dict[str, Any] = {
            "regime": self.regime.value,
            "compression_ratio": self.compression_ratio,
            "grid_step": self.grid_step,
            "metrics": self.metrics.to_dict(),
            "warnings": list(self.warnings) if self.warnings is not None else None,
            "n_vectors": int(self.compressed.shape[0]),
        }
        if include_vectors:
            data["compressed"] = self.compressed.tolist()
            if self.original is not None:
                data["original"] = self.original.tolist()
        return data
