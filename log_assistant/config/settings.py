"""
Application settings and configuration management.
Loads configuration from environment variables and .env file.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Tuple, List
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class AnalysisSettings:
    """Heuristic constants used by the datalog analysis pipeline."""

    # Header search
    header_scan_lines: int = field(
        default_factory=lambda: int(os.getenv("ANALYSIS_HEADER_SCAN_LINES", "50"))
    )
    header_min_tokens: int = 3
    header_text_ratio: float = 0.4
    header_min_text_tokens: int = 2

    # Channel resolution
    min_channel_score: int = field(
        default_factory=lambda: int(os.getenv("ANALYSIS_MIN_CHANNEL_SCORE", "40"))
    )

    # Boost unit value ranges (raw units, before conversion)
    bar_max: float = 5.0
    kpa_range: Tuple[float, float] = (50.0, 400.0)
    psi_range: Tuple[float, float] = (5.0, 120.0)

    # Absolute pressure detection (psi)
    atmospheric_psi: float = field(
        default_factory=lambda: float(os.getenv("ANALYSIS_ATMOSPHERIC_PSI", "14.7"))
    )
    absolute_min_psi: float = 10.0
    absolute_max_psi: float = 18.0

    # Wide-open-throttle detection
    fraction_scale_cutoff: float = 1.2
    fraction_high_load: float = 0.9
    percent_high_load: float = 90.0

    # Payload
    include_sample: bool = field(
        default_factory=lambda: _env_bool("ANALYSIS_INCLUDE_SAMPLE")
    )
    sample_cap: int = field(
        default_factory=lambda: int(os.getenv("ANALYSIS_SAMPLE_CAP", "400"))
    )
    precision: int = 3


@dataclass
class Settings:
    """Application configuration settings."""

    # Analysis heuristics
    analysis: AnalysisSettings = field(default_factory=AnalysisSettings)

    # Upload limits (20 MB, same bound as the upload endpoint)
    max_upload_bytes: int = field(
        default_factory=lambda: int(os.getenv("MAX_UPLOAD_BYTES", str(20 * 1024 * 1024)))
    )
    note_max_length: int = field(
        default_factory=lambda: int(os.getenv("NOTE_MAX_LENGTH", "2000"))
    )

    # Logging
    log_level: str = field(
        default_factory=lambda: os.getenv("APP_LOG_LEVEL", "INFO")
    )
    log_to_file: bool = field(
        default_factory=lambda: _env_bool("APP_LOG_TO_FILE")
    )
    log_structured: bool = field(
        default_factory=lambda: _env_bool("APP_LOG_STRUCTURED")
    )

    # Paths
    log_dir: Path = field(
        default_factory=lambda: Path(
            os.getenv("APP_LOG_DIR", str(Path(__file__).parent.parent.parent / "logs"))
        )
    )

    def validate(self) -> Tuple[bool, List[str]]:
        """Validate settings are internally consistent."""
        errors = []
        analysis = self.analysis

        if analysis.header_scan_lines < 1:
            errors.append("ANALYSIS_HEADER_SCAN_LINES must be at least 1")
        if analysis.sample_cap < 1:
            errors.append("ANALYSIS_SAMPLE_CAP must be at least 1")
        if not 0 <= analysis.min_channel_score <= 100:
            errors.append("ANALYSIS_MIN_CHANNEL_SCORE must be between 0 and 100")
        if analysis.absolute_min_psi >= analysis.absolute_max_psi:
            errors.append("Absolute pressure bounds are inverted")
        if self.max_upload_bytes <= 0:
            errors.append("MAX_UPLOAD_BYTES must be positive")

        return len(errors) == 0, errors


# Singleton instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the application settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
