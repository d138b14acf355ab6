"""Performance table interpolation and fuel planning.

Tables are sparse lists of measured points. ``interpolate`` walks the key
dimensions in order: an exact key match narrows the table to that value,
otherwise the two bracketing values are each resolved recursively and
blended linearly. Nothing is extrapolated: a query outside the recorded
range of a dimension raises ``PerformanceDataOutOfRangeError``.
"""

from __future__ import annotations

import bisect
import math
from collections.abc import Sequence
from typing import Any

from flightplan.contracts.performance import (
    CruiseResult,
    DistanceResult,
    FuelPlan,
    PerformanceData,
)
from flightplan.errors import PerformanceDataOutOfRangeError, PlanValidationError

# Reserve presets (minutes at cruise burn)
VFR_DAY_RESERVE_MIN = 30
VFR_NIGHT_RESERVE_MIN = 45
IFR_RESERVE_MIN = 45

_Row = tuple[tuple[float, ...], tuple[float, ...]]


def interpolate(
    table: Sequence[Any],
    point: dict[str, float],
    keys: Sequence[str],
    outputs: Sequence[str],
) -> dict[str, float]:
    """Interpolate *outputs* of *table* at *point* over the *keys* dimensions.

    Entries are read by attribute name. The result does not depend on the
    order of the entries; duplicate key tuples are rejected.
    """
    if not keys:
        raise ValueError("At least one key dimension is required")
    missing = [k for k in keys if k not in point]
    if missing:
        raise PlanValidationError(f"Query point lacks {missing}", field=missing[0])
    if not table:
        raise PerformanceDataOutOfRangeError(keys[0], point[keys[0]], None, None)

    rows: list[_Row] = sorted(
        (
            (
                tuple(float(getattr(entry, k)) for k in keys),
                tuple(float(getattr(entry, o)) for o in outputs),
            )
            for entry in table
        ),
        key=lambda row: row[0],
    )
    for previous, current in zip(rows, rows[1:]):
        if previous[0] == current[0]:
            raise PlanValidationError(
                f"Duplicate performance entry at {dict(zip(keys, current[0]))}",
                field="table",
            )

    coords = [float(point[k]) for k in keys]
    values = _resolve(rows, coords, keys, 0)
    return dict(zip(outputs, values))


def _resolve(
    rows: list[_Row], coords: list[float], keys: Sequence[str], depth: int
) -> tuple[float, ...]:
    if depth == len(keys):
        # Key tuples are unique, so exactly one row is left
        return rows[0][1]

    target = coords[depth]
    candidates = sorted({row[0][depth] for row in rows})
    low, high = candidates[0], candidates[-1]
    if target < low or target > high:
        raise PerformanceDataOutOfRangeError(keys[depth], target, low, high)

    index = bisect.bisect_left(candidates, target)
    if candidates[index] == target:
        subset = [row for row in rows if row[0][depth] == target]
        return _resolve(subset, coords, keys, depth + 1)

    lower, upper = candidates[index - 1], candidates[index]
    lower_values = _resolve(
        [row for row in rows if row[0][depth] == lower], coords, keys, depth + 1
    )
    upper_values = _resolve(
        [row for row in rows if row[0][depth] == upper], coords, keys, depth + 1
    )
    t = (target - lower) / (upper - lower)
    return tuple(a + t * (b - a) for a, b in zip(lower_values, upper_values))


# ---------------------------------------------------------------------------
# Typed lookups
# ---------------------------------------------------------------------------

_WAT_KEYS = ("weight", "altitude_ft", "temperature_c")


def _check_ceiling(perf: PerformanceData, altitude_ft: float) -> None:
    ceiling = perf.service_ceiling_ft
    if ceiling is not None and altitude_ft > ceiling:
        raise PerformanceDataOutOfRangeError("altitude_ft", altitude_ft, 0.0, ceiling)


def takeoff_performance(
    perf: PerformanceData, weight: float, altitude_ft: float, temperature_c: float
) -> DistanceResult:
    result = interpolate(
        perf.takeoff,
        {"weight": weight, "altitude_ft": altitude_ft, "temperature_c": temperature_c},
        _WAT_KEYS,
        ("distance_ft", "ground_roll_ft"),
    )
    return DistanceResult(**result)


def landing_performance(
    perf: PerformanceData, weight: float, altitude_ft: float, temperature_c: float
) -> DistanceResult:
    result = interpolate(
        perf.landing,
        {"weight": weight, "altitude_ft": altitude_ft, "temperature_c": temperature_c},
        _WAT_KEYS,
        ("distance_ft", "ground_roll_ft"),
    )
    return DistanceResult(**result)


def climb_rate(
    perf: PerformanceData, weight: float, altitude_ft: float, temperature_c: float
) -> float:
    _check_ceiling(perf, altitude_ft)
    result = interpolate(
        perf.climb,
        {"weight": weight, "altitude_ft": altitude_ft, "temperature_c": temperature_c},
        _WAT_KEYS,
        ("rate_fpm",),
    )
    return result["rate_fpm"]


def range_nm(
    perf: PerformanceData, altitude_ft: float, speed_kt: float, fuel_burn: float
) -> float:
    _check_ceiling(perf, altitude_ft)
    result = interpolate(
        perf.range,
        {"altitude_ft": altitude_ft, "speed_kt": speed_kt, "fuel_burn": fuel_burn},
        ("altitude_ft", "speed_kt", "fuel_burn"),
        ("range_nm",),
    )
    return result["range_nm"]


def cruise_performance(perf: PerformanceData, altitude_ft: float) -> CruiseResult:
    _check_ceiling(perf, altitude_ft)
    result = interpolate(
        perf.cruise,
        {"altitude_ft": altitude_ft},
        ("altitude_ft",),
        ("speed_kt", "fuel_burn"),
    )
    return CruiseResult(**result)


# ---------------------------------------------------------------------------
# Fuel planning
# ---------------------------------------------------------------------------


def plan_fuel(
    trip_time_min: float,
    fuel_burn_rate: float,
    *,
    usable_capacity: float,
    unusable: float = 0.0,
    reserve_min: float = VFR_DAY_RESERVE_MIN,
    fuel_on_board: float | None = None,
) -> FuelPlan:
    """Trip + reserve fuel against tank capacity.

    Quantities are tank contents in the aircraft's fuel unit: the unusable
    fuel is always carried on top of trip and reserve. Raises
    ``PlanValidationError`` when trip plus reserve exceed usable capacity.
    """
    if trip_time_min < 0:
        raise PlanValidationError("Trip time cannot be negative", field="trip_time_min")
    if fuel_burn_rate <= 0:
        raise PlanValidationError("Fuel burn rate must be positive", field="fuel_burn_rate")
    if reserve_min < 0:
        raise PlanValidationError("Reserve cannot be negative", field="reserve_min")

    trip_fuel = trip_time_min / 60.0 * fuel_burn_rate
    reserve_fuel = reserve_min / 60.0 * fuel_burn_rate
    if trip_fuel + reserve_fuel > usable_capacity:
        raise PlanValidationError(
            f"Trip and reserve fuel {trip_fuel + reserve_fuel:.1f} exceed usable "
            f"capacity {usable_capacity:.1f}",
            field="fuel",
        )
    total_required = trip_fuel + reserve_fuel + unusable
    recommended_load = min(float(math.ceil(total_required)), usable_capacity + unusable)

    if fuel_on_board is not None and fuel_on_board > usable_capacity + unusable:
        raise PlanValidationError(
            f"Fuel on board {fuel_on_board} exceeds tank capacity {usable_capacity + unusable}",
            field="fuel_on_board",
        )
    loaded = fuel_on_board if fuel_on_board is not None else recommended_load
    endurance = max(loaded - unusable, 0.0) / fuel_burn_rate * 60.0

    return FuelPlan(
        trip_time_min=trip_time_min,
        fuel_burn_rate=fuel_burn_rate,
        trip_fuel=trip_fuel,
        reserve_min=reserve_min,
        reserve_fuel=reserve_fuel,
        unusable_fuel=unusable,
        total_required=total_required,
        recommended_load=recommended_load,
        fuel_on_board=fuel_on_board,
        sufficient=None if fuel_on_board is None else fuel_on_board >= total_required,
        endurance_min=endurance,
    )
