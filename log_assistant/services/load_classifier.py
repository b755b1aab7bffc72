"""
High-load (wide-open-throttle) classification.
"""

import math
from typing import Optional, Sequence, Tuple

from ..config.settings import AnalysisSettings


def is_high_load(value: Optional[float], settings: Optional[AnalysisSettings] = None) -> bool:
    """
    Scale-aware WOT test for a single pedal or throttle reading.

    Values up to 1.2 are read as a 0-1 fraction (high at >= 0.9), larger
    values as a 0-100 percentage (high at >= 90). Missing or non-finite
    readings are never high load.
    """
    if value is None or not math.isfinite(value):
        return False
    settings = settings or AnalysisSettings()
    if value <= settings.fraction_scale_cutoff:
        return value >= settings.fraction_high_load
    return value >= settings.percent_high_load


def build_load_mask(
    pedal: Sequence[Optional[float]],
    throttle: Sequence[Optional[float]],
    settings: Optional[AnalysisSettings] = None
) -> Tuple[bool, ...]:
    """Per-row high-load flag: pedal OR throttle."""
    if len(pedal) != len(throttle):
        raise ValueError("Pedal and throttle series must be the same length")
    settings = settings or AnalysisSettings()
    return tuple(
        is_high_load(p, settings) or is_high_load(t, settings)
        for p, t in zip(pedal, throttle)
    )
