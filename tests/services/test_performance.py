"""Tests for performance table interpolation and fuel planning."""

from __future__ import annotations

import pytest

from flightplan.contracts.performance import CruiseEntry, TakeoffLandingEntry
from flightplan.errors import PerformanceDataOutOfRangeError, PlanValidationError
from flightplan.services import performance
from flightplan.services.default_aircraft import default_aircraft


@pytest.fixture
def perf():
    return default_aircraft().performance


class TestInterpolate:
    def test_exact_table_point(self, perf):
        result = performance.takeoff_performance(perf, 2550, 0, 0)
        assert result.distance_ft == 1465
        assert result.ground_roll_ft == 860

    def test_between_weights(self, perf):
        result = performance.takeoff_performance(perf, 2375, 0, 0)
        assert result.distance_ft == pytest.approx(1260)
        assert result.ground_roll_ft == pytest.approx(735)

    def test_between_altitude_and_temperature(self, perf):
        result = performance.takeoff_performance(perf, 2550, 1000, 10)
        assert result.distance_ft == pytest.approx((1532.5 + 1822.5) / 2)

    def test_order_independent(self, perf):
        point = {"weight": 2400, "altitude_ft": 3000, "temperature_c": 25}
        keys = ("weight", "altitude_ft", "temperature_c")
        outputs = ("distance_ft", "ground_roll_ft")
        forward = performance.interpolate(perf.takeoff, point, keys, outputs)
        backward = performance.interpolate(list(reversed(perf.takeoff)), point, keys, outputs)
        assert forward == pytest.approx(backward)

    def test_out_of_range_weight(self, perf):
        with pytest.raises(PerformanceDataOutOfRangeError) as exc_info:
            performance.takeoff_performance(perf, 2600, 0, 0)
        err = exc_info.value
        assert err.dimension == "weight"
        assert (err.low, err.high) == (2200, 2550)

    def test_out_of_range_temperature(self, perf):
        with pytest.raises(PerformanceDataOutOfRangeError) as exc_info:
            performance.landing_performance(perf, 2550, 0, -10)
        assert exc_info.value.dimension == "temperature_c"

    def test_empty_table(self):
        with pytest.raises(PerformanceDataOutOfRangeError) as exc_info:
            performance.interpolate([], {"altitude_ft": 1000}, ("altitude_ft",), ("speed_kt",))
        assert exc_info.value.low is None

    def test_duplicate_entries_rejected(self):
        table = [
            CruiseEntry(altitude_ft=4000, speed_kt=120, fuel_burn=8.8),
            CruiseEntry(altitude_ft=4000, speed_kt=118, fuel_burn=8.6),
        ]
        with pytest.raises(PlanValidationError) as exc_info:
            performance.interpolate(table, {"altitude_ft": 4000}, ("altitude_ft",), ("speed_kt",))
        assert exc_info.value.field == "table"

    def test_missing_query_key(self, perf):
        with pytest.raises(PlanValidationError):
            performance.interpolate(
                perf.takeoff, {"weight": 2550}, ("weight", "altitude_ft"), ("distance_ft",)
            )

    def test_sparse_table(self):
        # 2200 lbs only recorded at sea level; querying 2200 at altitude is out of range
        table = [
            TakeoffLandingEntry(weight=2200, altitude_ft=0, temperature_c=15,
                                distance_ft=1000, ground_roll_ft=600),
            TakeoffLandingEntry(weight=2550, altitude_ft=0, temperature_c=15,
                                distance_ft=1400, ground_roll_ft=850),
            TakeoffLandingEntry(weight=2550, altitude_ft=4000, temperature_c=15,
                                distance_ft=2000, ground_roll_ft=1200),
        ]
        keys = ("weight", "altitude_ft", "temperature_c")
        point = {"weight": 2200, "altitude_ft": 2000, "temperature_c": 15}
        with pytest.raises(PerformanceDataOutOfRangeError):
            performance.interpolate(table, point, keys, ("distance_ft",))


class TestTypedLookups:
    def test_climb_rate(self, perf):
        assert performance.climb_rate(perf, 2550, 0, 20) == pytest.approx(695)
        assert performance.climb_rate(perf, 2200, 0, 20) == pytest.approx(845)

    def test_climb_above_ceiling(self, perf):
        with pytest.raises(PerformanceDataOutOfRangeError) as exc_info:
            performance.climb_rate(perf, 2550, 15000, 0)
        assert exc_info.value.dimension == "altitude_ft"
        assert exc_info.value.high == 14000

    def test_climb_above_table(self, perf):
        with pytest.raises(PerformanceDataOutOfRangeError) as exc_info:
            performance.climb_rate(perf, 2550, 13000, 0)
        assert exc_info.value.high == 12000

    def test_cruise(self, perf):
        result = performance.cruise_performance(perf, 5000)
        assert result.speed_kt == pytest.approx(121)
        assert result.fuel_burn == pytest.approx(8.65)

    def test_range(self, perf):
        assert performance.range_nm(perf, 4000, 110, 7.0) == pytest.approx(750)
        assert performance.range_nm(perf, 6000, 110, 7.0) == pytest.approx((750 + 773) / 2)


class TestPlanFuel:
    def test_breakdown(self):
        plan = performance.plan_fuel(90, 8.0, usable_capacity=53, unusable=3)
        assert plan.trip_fuel == pytest.approx(12.0)
        assert plan.reserve_fuel == pytest.approx(4.0)
        assert plan.total_required == pytest.approx(19.0)
        assert plan.recommended_load == 19.0
        assert plan.endurance_min == pytest.approx(120.0)
        assert plan.sufficient is None

    def test_recommended_load_rounds_up(self):
        plan = performance.plan_fuel(100, 8.0, usable_capacity=53, unusable=3)
        assert plan.total_required == pytest.approx(20.333, abs=0.01)
        assert plan.recommended_load == 21.0

    def test_night_reserve(self):
        plan = performance.plan_fuel(
            90, 8.0, usable_capacity=53, reserve_min=performance.VFR_NIGHT_RESERVE_MIN
        )
        assert plan.reserve_fuel == pytest.approx(6.0)

    def test_fuel_on_board(self):
        enough = performance.plan_fuel(90, 8.0, usable_capacity=53, unusable=3, fuel_on_board=40)
        assert enough.sufficient is True
        assert enough.endurance_min == pytest.approx(37 / 8 * 60)
        short = performance.plan_fuel(90, 8.0, usable_capacity=53, unusable=3, fuel_on_board=15)
        assert short.sufficient is False

    def test_trip_exceeds_capacity(self):
        with pytest.raises(PlanValidationError) as exc_info:
            performance.plan_fuel(400, 8.0, usable_capacity=53)
        assert exc_info.value.field == "fuel"

    def test_fuel_on_board_over_capacity(self):
        with pytest.raises(PlanValidationError) as exc_info:
            performance.plan_fuel(60, 8.0, usable_capacity=53, unusable=3, fuel_on_board=60)
        assert exc_info.value.field == "fuel_on_board"

    def test_invalid_inputs(self):
        with pytest.raises(PlanValidationError):
            performance.plan_fuel(-1, 8.0, usable_capacity=53)
        with pytest.raises(PlanValidationError):
            performance.plan_fuel(60, 0, usable_capacity=53)
