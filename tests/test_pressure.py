"""
Tests for boost unit detection and absolute/gauge interpretation.
"""

import pytest

from log_assistant.config.settings import AnalysisSettings
from log_assistant.models.analysis import PressureInterpretation, PressureUnit
from log_assistant.services.pressure import (
    gauge_series,
    interpret_boost,
    to_psi,
    unit_from_name,
    unit_from_range,
)


class TestUnitDetection:
    """Unit from column name and from value range."""

    @pytest.mark.parametrize("name,expected", [
        ("Boost(kPa)", PressureUnit.KPA),
        ("MAP bar", PressureUnit.BAR),
        ("Boost [psi]", PressureUnit.PSI),
        ("Boost", None),
        (None, None),
    ])
    def test_from_name(self, name, expected):
        assert unit_from_name(name) is expected

    @pytest.mark.parametrize("values,expected", [
        ([0.2, 1.8], PressureUnit.BAR),
        ([30.0, 210.0], PressureUnit.KPA),
        ([30.0, 100.0], PressureUnit.KPA),
        ([-5.0, 22.0], PressureUnit.PSI),
        ([-0.5, 1.2], PressureUnit.UNKNOWN),
        ([500.0, 900.0], PressureUnit.UNKNOWN),
        ([None, None], PressureUnit.UNKNOWN),
        ([], PressureUnit.UNKNOWN),
    ])
    def test_from_range(self, values, expected):
        assert unit_from_range(values) is expected


class TestConversion:
    """Conversion to psi."""

    def test_kpa(self):
        assert to_psi([100.0], PressureUnit.KPA)[0] == pytest.approx(14.50377)

    def test_bar(self):
        assert to_psi([1.0], PressureUnit.BAR)[0] == pytest.approx(14.50377)

    def test_psi_unchanged_and_none_kept(self):
        assert to_psi([12.0, None], PressureUnit.PSI) == [12.0, None]

    def test_unknown_is_all_none(self):
        assert to_psi([1.0, 2.0], PressureUnit.UNKNOWN) == [None, None]


class TestInterpretBoost:
    """Single derivation of the boost interpretation."""

    def test_absolute_kpa(self):
        interp = interpret_boost("Boost(kPa)", [101.3, 210.0])

        assert interp.unit is PressureUnit.KPA
        assert interp.is_absolute is True
        assert interp.unit_source == "name"

    def test_absolute_kpa_gauge_starts_near_zero(self):
        values = [101.3, 150.0, 210.0]
        interp = interpret_boost("Boost(kPa)", values)
        psi, gauge = gauge_series(values, interp)

        assert min(psi) == pytest.approx(14.6924, abs=1e-3)
        assert min(gauge) == pytest.approx(0.0, abs=0.05)

    def test_gauge_psi_used_as_is(self):
        values = [-10.0, 3.0, 15.0]
        interp = interpret_boost("Boost psi", values)
        psi, gauge = gauge_series(values, interp)

        assert interp.is_absolute is False
        assert gauge == psi == values

    def test_bar_from_range(self):
        values = [1.0, 2.2]
        interp = interpret_boost("Ladedruck", values)
        _, gauge = gauge_series(values, interp)

        assert interp.unit is PressureUnit.BAR
        assert interp.unit_source == "range"
        assert interp.is_absolute is True
        assert gauge[0] == pytest.approx(-0.19623, abs=1e-4)
        assert gauge[1] == pytest.approx(17.20829, abs=1e-4)

    def test_unknown_unit_yields_null_series(self):
        values = [500.0, 900.0]
        interp = interpret_boost("Boost", values)
        psi, gauge = gauge_series(values, interp)

        assert interp.unit is PressureUnit.UNKNOWN
        assert interp.is_absolute is None
        assert psi == [None, None]
        assert gauge == [None, None]

    def test_unresolved_column(self):
        assert interpret_boost(None, [None, None]) == PressureInterpretation()

    def test_known_unit_without_values(self):
        interp = interpret_boost("Boost(kPa)", [None, None])

        assert interp.unit is PressureUnit.KPA
        assert interp.is_absolute is None

    def test_atmospheric_constant_is_configurable(self):
        settings = AnalysisSettings(atmospheric_psi=14.6959)
        values = [14.6959, 20.0]
        interp = interpret_boost("Boost psi", values, settings)
        _, gauge = gauge_series(values, interp, settings)

        assert gauge[0] == pytest.approx(0.0)

    def test_interpretation_serializes_unknown_as_null(self):
        assert PressureInterpretation().to_dict() == {
            "unit": None,
            "isAbsoluteLikely": None,
            "unitSource": None,
        }
