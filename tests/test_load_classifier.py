"""
Tests for high-load (WOT) classification.
"""

import pytest

from log_assistant.config.settings import AnalysisSettings
from log_assistant.services.load_classifier import build_load_mask, is_high_load


class TestIsHighLoad:
    """Scale-aware threshold on one reading."""

    @pytest.mark.parametrize("value,expected", [
        (0.95, True),
        (0.9, True),
        (0.85, False),
        (1.2, True),
        (95.0, True),
        (90.0, True),
        (89.9, False),
        (10.0, False),
        (-1.0, False),
    ])
    def test_thresholds(self, value, expected):
        assert is_high_load(value) is expected

    @pytest.mark.parametrize("value", [None, float("nan"), float("inf")])
    def test_missing_is_never_high_load(self, value):
        assert is_high_load(value) is False

    def test_custom_threshold(self):
        settings = AnalysisSettings(percent_high_load=80.0)
        assert is_high_load(85.0, settings) is True


class TestBuildLoadMask:
    """Pedal OR throttle mask."""

    def test_either_signal_asserts(self):
        mask = build_load_mask([10.0, None, 0.95], [None, 92.0, 0.1])
        assert mask == (False, True, True)

    def test_no_signals(self):
        assert build_load_mask([None, None], [None, None]) == (False, False)

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            build_load_mask([1.0], [1.0, 2.0])
