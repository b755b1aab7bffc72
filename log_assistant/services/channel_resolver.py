"""
Channel resolution.

Maps noisy datalog column names (English and German tuner exports) onto
the fixed set of semantic channels by scoring normalized names against
per-channel synonym lists.
"""

import re
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..config.logging_config import get_logger
from ..models.analysis import ChannelKind, ChannelMap

logger = get_logger(__name__)

_STRIP_RE = re.compile(r"[\s\-_()/\\\[\]:%]")

SCORE_EXACT = 100
SCORE_CONTAINS = 60
SCORE_PREFIX = 50

# Ordered synonym lists per channel (compared after normalization)
CHANNEL_SYNONYMS: Dict[ChannelKind, Tuple[str, ...]] = {
    ChannelKind.TIME: (
        "time", "timestamp", "zeit", "seconds", "sec", "elapsed", "offset",
    ),
    ChannelKind.RPM: (
        "rpm", "engine speed", "enginespeed", "engine_rpm", "drehzahl",
        "motordrehzahl", "nmot", "revs",
    ),
    ChannelKind.PEDAL: (
        "pedal", "accelerator", "accel pedal", "app", "fahrpedal", "gaspedal",
        "pedal position", "pvs",
    ),
    ChannelKind.THROTTLE: (
        "throttle", "tps", "throttle position", "throttle angle",
        "drosselklappe", "dk", "wdkba",
    ),
    ChannelKind.BOOST: (
        "boost", "map", "manifold", "charge", "ld", "saugrohr", "pressure",
        "tmap", "ladedruck", "manifold absolute pressure", "pvdks",
    ),
    ChannelKind.IAT: (
        "iat", "intake air temp", "intake temp", "intakeairtemperature",
        "air temp", "ansauglufttemperatur", "ansaugluft", "charge air temp",
        "tans",
    ),
    ChannelKind.LAMBDA: (
        "lambda", "afr", "air fuel ratio", "airfuel", "wideband", "o2",
        "lamda", "lambda actual",
    ),
    ChannelKind.IGNITION: (
        "ignition", "timing", "ignition timing", "spark", "advance",
        "zuendwinkel", "zündwinkel", "zwout", "ign",
    ),
}

# Fields containing one of these tokens are never a match for the channel
CHANNEL_EXCLUSIONS: Dict[ChannelKind, Tuple[str, ...]] = {
    ChannelKind.TIME: ("timing",),
    ChannelKind.RPM: ("target", "limit", "soll"),
    ChannelKind.PEDAL: ("map",),
    ChannelKind.THROTTLE: ("target", "soll"),
    ChannelKind.BOOST: (
        "temp", "fuel", "oil", "baro", "atm", "target", "soll", "setpoint", "wastegate",
    ),
    ChannelKind.IAT: ("coolant",),
    ChannelKind.LAMBDA: ("target", "soll"),
    ChannelKind.IGNITION: ("retard", "knock"),
}


def normalize_key(name: str) -> str:
    """Lowercase and strip whitespace, separators, brackets and percent signs."""
    return _STRIP_RE.sub("", str(name).lower())


def score_match(field_key: str, synonym_key: str) -> int:
    """Score two normalized keys: exact, containment, prefix or no match."""
    if not field_key or not synonym_key:
        return 0
    if field_key == synonym_key:
        return SCORE_EXACT
    if synonym_key in field_key or field_key in synonym_key:
        return SCORE_CONTAINS
    if field_key.startswith(synonym_key) or synonym_key.startswith(field_key):
        return SCORE_PREFIX
    return 0


class ChannelResolver:
    """
    Resolve each semantic channel to at most one datalog field.

    Synonym and exclusion tables are data; pass custom tables to extend
    matching without touching the scoring.
    """

    def __init__(
        self,
        synonyms: Optional[Mapping[ChannelKind, Sequence[str]]] = None,
        exclusions: Optional[Mapping[ChannelKind, Sequence[str]]] = None,
        min_score: int = 40
    ):
        self.synonyms = synonyms if synonyms is not None else CHANNEL_SYNONYMS
        self.exclusions = exclusions if exclusions is not None else CHANNEL_EXCLUSIONS
        self.min_score = min_score

    def best_field(self, kind: ChannelKind, fields: Sequence[str]) -> Tuple[Optional[str], int]:
        """
        Highest-scoring field for one channel.

        Returns:
            Tuple of (field name or None, best score)
        """
        synonym_keys = [normalize_key(s) for s in self.synonyms.get(kind, ())]
        excluded = [normalize_key(e) for e in self.exclusions.get(kind, ())]

        best_name: Optional[str] = None
        best_score = 0
        for name in fields:
            key = normalize_key(name)
            if not key or any(token and token in key for token in excluded):
                continue
            score = max((score_match(key, s) for s in synonym_keys), default=0)
            # Strictly greater keeps the first field on ties
            if score > best_score:
                best_name, best_score = name, score

        if best_score < self.min_score:
            return None, best_score
        return best_name, best_score

    def resolve(self, fields: Sequence[str]) -> ChannelMap:
        """Resolve every channel against the ordered field list."""
        columns: Dict[ChannelKind, Optional[str]] = {}
        unresolved: List[str] = []

        for kind in ChannelKind:
            name, score = self.best_field(kind, fields)
            columns[kind] = name
            if name is None:
                unresolved.append(kind.value)
            else:
                logger.debug(f"Channel {kind.value} -> {name!r} (score {score})")

        if unresolved:
            logger.info(f"Unresolved channels: {', '.join(unresolved)}")
        return ChannelMap(columns)
