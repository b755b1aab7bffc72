"""
Value types for the datalog analysis pipeline.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Optional, List, Dict, Any, Tuple, Mapping


class ChannelKind(str, Enum):
    """Semantic measurement channels a datalog column can map to."""
    TIME = "time"
    RPM = "rpm"
    PEDAL = "pedal"
    THROTTLE = "throttle"
    BOOST = "boost"
    IAT = "iat"
    LAMBDA = "lambda"
    IGNITION = "ignition"


class PressureUnit(str, Enum):
    """Physical unit of the boost column."""
    PSI = "psi"
    KPA = "kpa"
    BAR = "bar"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class HeaderLocation:
    """Line index of the table header and the delimiter it uses."""
    line_index: int
    delimiter: str


@dataclass(frozen=True)
class ParsedLog:
    """Header location, ordered field names and raw string rows."""
    header: HeaderLocation
    fields: Tuple[str, ...]
    rows: Tuple[Mapping[str, str], ...]
    delimiter: str

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def column(self, name: Optional[str]) -> List[Optional[str]]:
        """Raw cells of one field, or all None if the field is absent."""
        if name is None or name not in self.fields:
            return [None] * len(self.rows)
        return [row.get(name) for row in self.rows]


class ChannelMap:
    """
    Immutable mapping from every ChannelKind to a field name (or None).
    """

    __slots__ = ("_columns",)

    def __init__(self, columns: Optional[Dict[ChannelKind, Optional[str]]] = None):
        columns = columns or {}
        self._columns = MappingProxyType({kind: columns.get(kind) for kind in ChannelKind})

    def get(self, kind: ChannelKind) -> Optional[str]:
        return self._columns[kind]

    def __getitem__(self, kind: ChannelKind) -> Optional[str]:
        return self._columns[kind]

    def __eq__(self, other) -> bool:
        if not isinstance(other, ChannelMap):
            return NotImplemented
        return dict(self._columns) == dict(other._columns)

    def __repr__(self) -> str:
        resolved = {k.value: v for k, v in self._columns.items() if v is not None}
        return f"ChannelMap({resolved})"

    @property
    def resolved(self) -> Dict[ChannelKind, str]:
        return {k: v for k, v in self._columns.items() if v is not None}

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {kind.value: name for kind, name in self._columns.items()}


@dataclass(frozen=True)
class PressureInterpretation:
    """Boost unit and absolute/gauge decision, derived once per log."""
    unit: PressureUnit = PressureUnit.UNKNOWN
    is_absolute: Optional[bool] = None
    unit_source: Optional[str] = None  # 'name' or 'range'

    @property
    def is_known(self) -> bool:
        return self.unit is not PressureUnit.UNKNOWN

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unit": self.unit.value if self.is_known else None,
            "isAbsoluteLikely": self.is_absolute,
            "unitSource": self.unit_source,
        }


@dataclass(frozen=True)
class StatSummary:
    """Min / max / mean / count over the valid values of a series."""
    min: float
    max: float
    avg: float
    count: int

    def to_dict(self, precision: int = 3) -> Dict[str, Any]:
        return {
            "min": round(self.min, precision),
            "max": round(self.max, precision),
            "avg": round(self.avg, precision),
            "count": self.count,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Terminal payload of one datalog analysis."""
    detected_columns: ChannelMap
    boost: PressureInterpretation
    full: Mapping[str, Optional[StatSummary]]
    high_load: Mapping[str, Optional[StatSummary]]
    row_count: int
    high_load_count: int
    header_line: int
    delimiter: str
    sample: Optional[Tuple[Mapping[str, Any], ...]] = None
    precision: int = field(default=3, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "full", MappingProxyType(dict(self.full)))
        object.__setattr__(self, "high_load", MappingProxyType(dict(self.high_load)))
        if self.sample is not None:
            object.__setattr__(
                self, "sample", tuple(MappingProxyType(dict(entry)) for entry in self.sample)
            )

    def _stats_dict(self, stats: Mapping[str, Optional[StatSummary]]) -> Dict[str, Any]:
        return {
            name: summary.to_dict(self.precision) if summary is not None else None
            for name, summary in stats.items()
        }

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form handed to the reporting layer."""
        payload: Dict[str, Any] = {
            "detectedColumns": self.detected_columns.to_dict(),
            "boostInterpretation": self.boost.to_dict(),
            "full": self._stats_dict(self.full),
            "highLoad": self._stats_dict(self.high_load),
            "meta": {
                "rowCount": self.row_count,
                "highLoadCount": self.high_load_count,
                "headerLine": self.header_line,
                "delimiter": self.delimiter,
            },
        }
        if self.sample is not None:
            payload["sample"] = [
                {
                    key: round(value, self.precision) if isinstance(value, float) else value
                    for key, value in entry.items()
                }
                for entry in self.sample
            ]
        return payload
