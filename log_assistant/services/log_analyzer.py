"""
Datalog analysis pipeline.

Runs one raw datalog through reading, channel resolution, coercion,
boost interpretation, load classification and aggregation. Each call owns
its data end to end; nothing is cached between calls.
"""

from typing import Dict, List, Optional

from ..config.logging_config import get_logger, log_performance
from ..config.settings import AnalysisSettings, get_settings
from ..models.analysis import AnalysisResult, ChannelKind
from .channel_resolver import ChannelResolver
from .load_classifier import build_load_mask
from .log_reader import read_log
from .numeric import to_series
from .payload_builder import build_result
from .pressure import gauge_series, interpret_boost

logger = get_logger(__name__)

# Channels reported under their own name
_PLAIN_CHANNELS = (
    ChannelKind.TIME,
    ChannelKind.RPM,
    ChannelKind.PEDAL,
    ChannelKind.THROTTLE,
    ChannelKind.IAT,
    ChannelKind.LAMBDA,
    ChannelKind.IGNITION,
)


class LogAnalyzer:
    """
    Analyzer for vehicle datalogs of unknown layout.

    Usage:
        result = LogAnalyzer().analyze(raw_bytes)
        payload = result.to_dict()
    """

    def __init__(
        self,
        settings: Optional[AnalysisSettings] = None,
        resolver: Optional[ChannelResolver] = None
    ):
        self.settings = settings or get_settings().analysis
        self.resolver = resolver or ChannelResolver(min_score=self.settings.min_channel_score)

    def analyze(self, data: bytes, include_sample: Optional[bool] = None) -> AnalysisResult:
        """
        Analyze one raw datalog.

        Args:
            data: File content
            include_sample: Override the configured sample setting

        Returns:
            AnalysisResult

        Raises:
            HeaderNotFoundError: If no header row is found
            NoUsableRowsError: If no data rows survive parsing
        """
        settings = self.settings
        if include_sample is None:
            include_sample = settings.include_sample

        with log_performance(logger, "analyze_datalog", size=len(data)) as ctx:
            parsed = read_log(data, settings)
            channels = self.resolver.resolve(parsed.fields)

            series: Dict[str, List[Optional[float]]] = {}
            for kind in _PLAIN_CHANNELS:
                name = channels[kind]
                if name is not None:
                    series[kind.value] = to_series(parsed.column(name))

            boost_name = channels[ChannelKind.BOOST]
            boost_raw = to_series(parsed.column(boost_name))
            boost = interpret_boost(boost_name, boost_raw, settings)
            if boost_name is not None:
                psi, gauge = gauge_series(boost_raw, boost, settings)
                series["boostPsi"] = psi
                series["boostGaugePsi"] = gauge

            empty = [None] * parsed.row_count
            mask = build_load_mask(
                series.get("pedal", empty), series.get("throttle", empty), settings
            )

            result = build_result(
                parsed,
                channels,
                boost,
                series,
                mask,
                sample_cap=settings.sample_cap if include_sample else None,
                precision=settings.precision,
            )
            ctx.info(
                f"Analyzed {result.row_count} rows ({result.high_load_count} high load), "
                f"boost unit {boost.unit.value}"
            )

        return result
