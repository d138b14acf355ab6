"""Tests for unit conversions."""

from __future__ import annotations

import pytest

from flightplan.services import units


class TestDistanceAndSpeed:
    def test_nm_to_km(self):
        assert units.convert_distance(1, "nm", "km") == pytest.approx(1.852)

    def test_sm_to_nm(self):
        assert units.convert_distance(1.150779, "sm", "nm") == pytest.approx(1.0)

    def test_knots_to_mph(self):
        assert units.convert_speed(100, "kts", "mph") == pytest.approx(115.0779)

    def test_unknown_unit(self):
        with pytest.raises(ValueError, match="furlong"):
            units.convert_distance(1, "furlong", "nm")


class TestAltitudeWeightArm:
    def test_feet_meters_roundtrip(self):
        assert units.meters_to_feet(units.feet_to_meters(4500)) == pytest.approx(4500)

    def test_convert_altitude(self):
        assert units.convert_altitude(1000, "m", "ft") == pytest.approx(3280.84)
        assert units.convert_altitude(1000, "ft", "ft") == 1000

    def test_convert_weight(self):
        assert units.convert_weight(100, "kg", "lbs") == pytest.approx(220.46226)

    def test_convert_arm(self):
        assert units.convert_arm(10, "inches", "mm") == pytest.approx(254.0)

    def test_bad_pair(self):
        with pytest.raises(ValueError):
            units.convert_weight(1, "lbs", "stone")


class TestFuel:
    def test_avgas_gallons_to_pounds(self):
        assert units.fuel_to_weight(40, "gal", "lbs") == pytest.approx(240.0)

    def test_liters_to_kg(self):
        assert units.fuel_to_weight(100, "l", "kg") == pytest.approx(100 * units.AVGAS_KG_PER_LITER)
        assert units.AVGAS_KG_PER_LITER == pytest.approx(0.719, abs=1e-3)

    @pytest.mark.parametrize("fuel_unit,weight_unit", [("l", "kg"), ("gal", "kg"), ("l", "lbs"), ("kg", "lbs")])
    def test_weight_matches_conversion(self, fuel_unit, weight_unit):
        assert units.fuel_to_weight(12.5, fuel_unit, weight_unit) == pytest.approx(
            units.convert_fuel(12.5, fuel_unit, weight_unit)
        )

    def test_weight_unit_must_be_a_weight(self):
        with pytest.raises(ValueError):
            units.fuel_to_weight(10, "gal", "l")

    def test_weight_units_pass_through(self):
        assert units.fuel_to_weight(50, "lbs", "lbs") == 50

    def test_gallons_to_liters(self):
        assert units.convert_fuel(10, "gal", "l") == pytest.approx(37.85411784)

    def test_pounds_to_gallons(self):
        assert units.convert_fuel(60, "lbs", "gal") == pytest.approx(10.0)


class TestNormalizeDegrees:
    @pytest.mark.parametrize(
        "angle, expected",
        [(0, 0), (360, 0), (370, 10), (-10, 350), (-1e-17, 0.0)],
    )
    def test_range(self, angle, expected):
        result = units.normalize_degrees(angle)
        assert 0 <= result < 360
        assert result == pytest.approx(expected)
