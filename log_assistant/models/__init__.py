"""Value types for the Log Assistant."""

from .analysis import (
    AnalysisResult,
    ChannelKind,
    ChannelMap,
    HeaderLocation,
    ParsedLog,
    PressureInterpretation,
    PressureUnit,
    StatSummary,
)

__all__ = [
    "AnalysisResult",
    "ChannelKind",
    "ChannelMap",
    "HeaderLocation",
    "ParsedLog",
    "PressureInterpretation",
    "PressureUnit",
    "StatSummary",
]
