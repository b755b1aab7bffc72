"""
Boost pressure interpretation.

Works out the unit of the boost column (from its name, else from the value
range), converts it to psi and decides once, from the whole series, whether
the log records absolute or gauge pressure. Every consumer receives the same
PressureInterpretation; nothing re-derives it per record.
"""

from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..config.logging_config import get_logger
from ..config.settings import AnalysisSettings
from ..models.analysis import PressureInterpretation, PressureUnit
from .channel_resolver import normalize_key

logger = get_logger(__name__)

PSI_PER_UNIT: Dict[PressureUnit, float] = {
    PressureUnit.PSI: 1.0,
    PressureUnit.KPA: 0.1450377,
    PressureUnit.BAR: 14.50377,
}

# Checked in order against the normalized column name
_NAME_UNITS: Tuple[Tuple[str, PressureUnit], ...] = (
    ("kpa", PressureUnit.KPA),
    ("bar", PressureUnit.BAR),
    ("psi", PressureUnit.PSI),
)


def _finite(values: Sequence[Optional[float]]) -> np.ndarray:
    array = np.array([np.nan if v is None else v for v in values], dtype=float)
    return array[np.isfinite(array)]


def unit_from_name(column_name: Optional[str]) -> Optional[PressureUnit]:
    """Unit named in the column header, if any."""
    if not column_name:
        return None
    key = normalize_key(column_name)
    for token, unit in _NAME_UNITS:
        if token in key:
            return unit
    return None


def unit_from_range(
    values: Sequence[Optional[float]],
    settings: Optional[AnalysisSettings] = None
) -> PressureUnit:
    """
    Guess the unit from the raw value range.

    max <= 5 with no negatives reads as bar, 50 < max <= 400 as kPa,
    5 < max <= 120 as psi. Anything else is unknown.
    """
    settings = settings or AnalysisSettings()
    finite = _finite(values)
    if finite.size == 0:
        return PressureUnit.UNKNOWN

    low, high = float(finite.min()), float(finite.max())
    kpa_low, kpa_high = settings.kpa_range
    psi_low, psi_high = settings.psi_range

    if high <= settings.bar_max and low >= 0:
        return PressureUnit.BAR
    if kpa_low < high <= kpa_high:
        return PressureUnit.KPA
    if psi_low < high <= psi_high:
        return PressureUnit.PSI
    return PressureUnit.UNKNOWN


def to_psi(values: Sequence[Optional[float]], unit: PressureUnit) -> List[Optional[float]]:
    """Convert a series to psi; an unknown unit yields an all-None series."""
    factor = PSI_PER_UNIT.get(unit)
    if factor is None:
        return [None] * len(values)
    return [None if v is None else v * factor for v in values]


def interpret_boost(
    column_name: Optional[str],
    values: Sequence[Optional[float]],
    settings: Optional[AnalysisSettings] = None
) -> PressureInterpretation:
    """
    Derive the boost interpretation for a whole log.

    Args:
        column_name: Resolved boost field name, or None when unresolved
        values: Coerced raw boost series
        settings: Heuristic constants

    Returns:
        PressureInterpretation (unit UNKNOWN when undeterminable)
    """
    settings = settings or AnalysisSettings()
    if column_name is None:
        return PressureInterpretation()

    unit = unit_from_name(column_name)
    source = "name"
    if unit is None:
        unit = unit_from_range(values, settings)
        source = "range"

    if unit is PressureUnit.UNKNOWN:
        logger.info(f"Boost unit undeterminable for column {column_name!r}")
        return PressureInterpretation(unit=PressureUnit.UNKNOWN, is_absolute=None, unit_source=None)

    psi = _finite(to_psi(values, unit))
    is_absolute: Optional[bool] = None
    if psi.size:
        lowest = float(psi.min())
        is_absolute = settings.absolute_min_psi < lowest < settings.absolute_max_psi

    logger.debug(f"Boost {column_name!r}: unit={unit.value} ({source}), absolute={is_absolute}")
    return PressureInterpretation(unit=unit, is_absolute=is_absolute, unit_source=source)


def gauge_series(
    values: Sequence[Optional[float]],
    interpretation: PressureInterpretation,
    settings: Optional[AnalysisSettings] = None
) -> Tuple[List[Optional[float]], List[Optional[float]]]:
    """
    Build the psi and gauge-psi series from one interpretation.

    Returns:
        Tuple of (psi series, gauge psi series), both all-None for an unknown unit
    """
    settings = settings or AnalysisSettings()
    psi = to_psi(values, interpretation.unit)
    if interpretation.is_absolute:
        offset = settings.atmospheric_psi
        return psi, [None if v is None else v - offset for v in psi]
    return psi, list(psi)
