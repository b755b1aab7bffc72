"""
Tests for the shared summary-statistics implementation.
"""

import pytest

from log_assistant.models.analysis import StatSummary
from log_assistant.services.aggregator import summarize


class TestSummarize:
    """Full and masked statistics."""

    def test_empty_series_is_none(self):
        assert summarize([]) is None

    def test_all_missing_is_none(self):
        assert summarize([None, float("nan"), None]) is None

    def test_basic_stats(self):
        summary = summarize([800.0, 850.0, 6200.0])

        assert summary.min == 800.0
        assert summary.max == 6200.0
        assert summary.count == 3
        assert summary.avg == pytest.approx(2616.6667, abs=1e-3)

    def test_count_is_number_of_finite_values(self):
        series = [1.0, None, float("inf"), 3.0, float("nan"), -2.0]
        assert summarize(series).count == 3

    def test_mask_restricts_rows(self):
        summary = summarize([1.0, 2.0, 3.0], [False, True, True])
        assert summary == StatSummary(min=2.0, max=3.0, avg=2.5, count=2)

    def test_mask_and_missing_combine(self):
        summary = summarize([1.0, None, 3.0], [True, True, False])
        assert summary.count == 1
        assert summary.min == summary.max == 1.0

    def test_nothing_selected_is_none(self):
        assert summarize([1.0, 2.0], [False, False]) is None

    def test_mask_length_mismatch(self):
        with pytest.raises(ValueError):
            summarize([1.0, 2.0], [True])

    def test_serialized_rounding(self):
        summary = summarize([1.0, 2.0, 2.0])
        assert summary.to_dict(precision=2) == {"min": 1.0, "max": 2.0, "avg": 1.67, "count": 3}
