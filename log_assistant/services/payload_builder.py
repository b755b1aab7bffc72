"""
Payload assembly for the reporting layer.
"""

import math
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..models.analysis import (
    AnalysisResult,
    ChannelMap,
    ParsedLog,
    PressureInterpretation,
)
from .aggregator import summarize

# Statistic keys, in payload order
STAT_CHANNELS: Tuple[str, ...] = (
    "rpm", "pedal", "throttle", "boostPsi", "boostGaugePsi", "iat", "lambda", "ignition",
)

# Sample keys, in entry order (boost is sampled as gauge psi)
SAMPLE_CHANNELS: Tuple[str, ...] = (
    "time", "rpm", "pedal", "throttle", "boostGaugePsi", "iat", "lambda", "ignition",
)


def sample_indices(row_count: int, cap: int) -> List[int]:
    """Evenly strided row indices: stride = ceil(rows / cap), starting at row 0."""
    if row_count <= 0:
        return []
    if cap < 1:
        raise ValueError("Sample cap must be at least 1")
    stride = max(1, math.ceil(row_count / cap))
    return list(range(0, row_count, stride))


def build_sample(
    series: Mapping[str, Sequence[Optional[float]]],
    mask: Sequence[bool],
    cap: int
) -> Tuple[Dict[str, Any], ...]:
    """
    Downsample the channel series without reordering or duplicating rows.

    Args:
        series: Sample key -> values aligned with the rows (resolved channels only)
        mask: High-load flags aligned with the rows
        cap: Upper bound on the sample size
    """
    keys = [key for key in SAMPLE_CHANNELS if key in series]
    return tuple(
        {**{key: series[key][i] for key in keys}, "highLoad": 1 if mask[i] else 0}
        for i in sample_indices(len(mask), cap)
    )


def build_result(
    parsed: ParsedLog,
    channels: ChannelMap,
    boost: PressureInterpretation,
    series: Mapping[str, Sequence[Optional[float]]],
    mask: Sequence[bool],
    sample_cap: Optional[int] = None,
    precision: int = 3
) -> AnalysisResult:
    """
    Assemble the AnalysisResult.

    Args:
        parsed: Parsed datalog (row count, header position, delimiter)
        channels: Resolved channel map
        boost: The single boost interpretation for this log
        series: Stat/sample key -> numeric series; missing keys count as absent
        mask: High-load flags
        sample_cap: Include a row sample of at most this size when set
        precision: Decimal places used when serializing
    """
    empty: List[Optional[float]] = [None] * parsed.row_count

    full = {}
    high_load = {}
    for key in STAT_CHANNELS:
        values = series.get(key, empty)
        full[key] = summarize(values)
        high_load[key] = summarize(values, mask)

    sample = None
    if sample_cap is not None:
        sample = build_sample(series, mask, sample_cap)

    return AnalysisResult(
        detected_columns=channels,
        boost=boost,
        full=full,
        high_load=high_load,
        row_count=parsed.row_count,
        high_load_count=sum(1 for flag in mask if flag),
        header_line=parsed.header.line_index,
        delimiter=parsed.delimiter,
        sample=sample,
        precision=precision,
    )
