"""
Summary statistics over numeric series.
"""

from typing import Optional, Sequence

import numpy as np

from ..models.analysis import StatSummary


def summarize(
    series: Sequence[Optional[float]],
    mask: Optional[Sequence[bool]] = None
) -> Optional[StatSummary]:
    """
    Min, max, mean and count over the valid entries of a series.

    Args:
        series: Values aligned with the log rows (None for missing)
        mask: Optional row filter of the same length (e.g. high-load rows)

    Returns:
        StatSummary, or None when no valid entry remains
    """
    if mask is not None and len(mask) != len(series):
        raise ValueError(f"Mask length {len(mask)} does not match series length {len(series)}")

    values = np.array([np.nan if v is None else v for v in series], dtype=float)
    keep = np.isfinite(values)
    if mask is not None:
        keep &= np.asarray(mask, dtype=bool)

    valid = values[keep]
    if valid.size == 0:
        return None

    return StatSummary(
        min=float(valid.min()),
        max=float(valid.max()),
        avg=float(valid.mean()),
        count=int(valid.size),
    )
