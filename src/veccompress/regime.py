"""
Regime classification for compressed vector sets.
"""

import math
import numbers
from collections.abc import Mapping
from typing import Any, Optional

from .types import MetricsBundle, Regime

# Upper bounds (exclusive) of the collapse index for each regime
STABLE_THRESHOLD = 0.15
PRE_COLLAPSE_THRESHOLD = 0.35
COLLAPSE_THRESHOLD = 0.60


def regime_for_index(collapse_index: Optional[float]) -> Regime:
    """
    Map a collapse index to a regime.

    ``None`` and NaN are read as 0, so classification never fails.
    """
    if collapse_index is None:
        collapse_index = 0.0
    try:
        value = float(collapse_index)
    except (TypeError, ValueError):
        value = 0.0
    if math.isnan(value):
        value = 0.0

    if value < STABLE_THRESHOLD:
        return Regime.STABLE
    if value < PRE_COLLAPSE_THRESHOLD:
        return Regime.PRE_COLLAPSE
    if value < COLLAPSE_THRESHOLD:
        return Regime.COLLAPSE
    return Regime.POST_COLLAPSE


def classify_regime(metrics: Any) -> Regime:
    """
    Classify compression quality from its metrics.

    Args:
        metrics: A ``MetricsBundle``, a mapping with a ``collapse_index`` key,
            a bare collapse index, or ``None``

    Returns:
        Regime for the collapse index
    """
    if isinstance(metrics, MetricsBundle):
        return regime_for_index(metrics.collapse_index)
    if isinstance(metrics, Mapping):
        return regime_for_index(metrics.get("collapse_index"))
    if metrics is None or isinstance(metrics, numbers.Real):
        return regime_for_index(metrics)
    return regime_for_index(getattr(metrics, "collapse_index", None))
