"""Services module for the Log Assistant."""

from .analysis_service import AnalysisService, AnalysisResponse, AdvisoryMessages
from .channel_resolver import ChannelResolver, CHANNEL_SYNONYMS
from .log_analyzer import LogAnalyzer
from .log_reader import LogParseError, HeaderNotFoundError, NoUsableRowsError, read_log

__all__ = [
    "AnalysisService",
    "AnalysisResponse",
    "AdvisoryMessages",
    "ChannelResolver",
    "CHANNEL_SYNONYMS",
    "LogAnalyzer",
    "LogParseError",
    "HeaderNotFoundError",
    "NoUsableRowsError",
    "read_log",
]
