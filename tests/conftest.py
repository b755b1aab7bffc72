"""
Pytest fixtures and configuration.
"""

import pytest

# Add project root to path
import sys
from pathlib import Path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def reset_settings():
    """Reset the settings singleton so each test re-reads the environment."""
    import log_assistant.config.settings as settings_module

    settings_module._settings = None
    yield
    settings_module._settings = None


@pytest.fixture
def wot_log():
    """Minimal comma log with one high-load row and absolute kPa boost."""
    return (
        b"Time,RPM,Pedal,Boost(kPa)\n"
        b"0,800,10,101.3\n"
        b"1,6000,95,210.0\n"
    )


@pytest.fixture
def german_log():
    """Semicolon log with decimal commas and German column names."""
    return (
        "Zeit;Drehzahl;Fahrpedal;Ladedruck\n"
        "0,0;850;12,5;0,98\n"
        "0,1;6200;99,0;2,10\n"
    ).encode("latin-1")


@pytest.fixture
def preamble_tab_log():
    """Tab-separated export with a metadata preamble before the header."""
    lines = [
        "Logger: DataTool 3.1",
        "Date: 2024-05-01",
        "",
        "Time\tEngine Speed\tThrottle Position (%)\tMAP (psi)\tIAT (C)\tAFR\tTiming",
        "0\t900\t5\t-10.2\t30\t14.7\t12",
        "0.5\t3500\t60\t3.5\t34\t13.1\t18",
        "1.0\t6400\t98\t18.0\t41\t11.8\t14",
    ]
    return "\r\n".join(lines).encode("utf-8")


@pytest.fixture
def single_column_log():
    """One-column export: no line can qualify as a header."""
    return ("RPM\n" + "\n".join(str(800 + i) for i in range(60))).encode("utf-8")


@pytest.fixture
def long_log():
    """1000-row log for sampling tests."""
    rows = ["Time,RPM,Throttle,Boost (psi)"]
    for i in range(1000):
        throttle = 100 if i % 10 == 0 else 20
        rows.append(f"{i / 10:.1f},{1000 + i},{throttle},{i % 25}")
    return "\n".join(rows).encode("utf-8")


@pytest.fixture
def analyzer():
    """Get LogAnalyzer instance with default heuristics."""
    from log_assistant.config.settings import AnalysisSettings
    from log_assistant.services.log_analyzer import LogAnalyzer
    return LogAnalyzer(AnalysisSettings(include_sample=False, sample_cap=400))


@pytest.fixture
def analysis_service():
    """Get AnalysisService with default settings."""
    from log_assistant.config.settings import AnalysisSettings, Settings
    from log_assistant.services.analysis_service import AnalysisService
    settings = Settings(analysis=AnalysisSettings(include_sample=False, sample_cap=400))
    return AnalysisService(settings)
