"""Unit conversions for distance, speed, altitude, weight, arm and fuel.

Pure functions, no state. Unknown unit names raise ``ValueError``.
"""

from __future__ import annotations

# Distance, relative to nautical miles
_DISTANCE_PER_NM = {
    "nm": 1.0,
    "sm": 1.150779,
    "km": 1.852,
}

# Speed, relative to knots
_SPEED_PER_KT = {
    "kts": 1.0,
    "kt": 1.0,
    "mph": 1.150779,
    "kmh": 1.852,
}

FEET_PER_METER = 3.28084
LBS_PER_KG = 2.2046226
MM_PER_INCH = 25.4
LITERS_PER_GAL = 3.785411784

# Avgas 100LL, metric density derived from the US figure
AVGAS_LBS_PER_GAL = 6.0
AVGAS_KG_PER_LITER = AVGAS_LBS_PER_GAL / LBS_PER_KG / LITERS_PER_GAL


def _factor(table: dict[str, float], unit: str, kind: str) -> float:
    try:
        return table[unit]
    except KeyError:
        raise ValueError(f"Unknown {kind} unit: {unit!r}") from None


def convert_distance(value: float, from_unit: str, to_unit: str) -> float:
    nm = value / _factor(_DISTANCE_PER_NM, from_unit, "distance")
    return nm * _factor(_DISTANCE_PER_NM, to_unit, "distance")


def convert_speed(value: float, from_unit: str, to_unit: str) -> float:
    kt = value / _factor(_SPEED_PER_KT, from_unit, "speed")
    return kt * _factor(_SPEED_PER_KT, to_unit, "speed")


def feet_to_meters(ft: float) -> float:
    return ft / FEET_PER_METER


def meters_to_feet(m: float) -> float:
    return m * FEET_PER_METER


def convert_altitude(value: float, from_unit: str, to_unit: str) -> float:
    if from_unit == to_unit:
        return value
    if (from_unit, to_unit) == ("ft", "m"):
        return feet_to_meters(value)
    if (from_unit, to_unit) == ("m", "ft"):
        return meters_to_feet(value)
    raise ValueError(f"Unknown altitude conversion: {from_unit!r} -> {to_unit!r}")


def convert_weight(value: float, from_unit: str, to_unit: str) -> float:
    if from_unit == to_unit:
        return value
    if (from_unit, to_unit) == ("kg", "lbs"):
        return value * LBS_PER_KG
    if (from_unit, to_unit) == ("lbs", "kg"):
        return value / LBS_PER_KG
    raise ValueError(f"Unknown weight conversion: {from_unit!r} -> {to_unit!r}")


def convert_arm(value: float, from_unit: str, to_unit: str) -> float:
    if from_unit == to_unit:
        return value
    if (from_unit, to_unit) == ("inches", "mm"):
        return value * MM_PER_INCH
    if (from_unit, to_unit) == ("mm", "inches"):
        return value / MM_PER_INCH
    raise ValueError(f"Unknown arm conversion: {from_unit!r} -> {to_unit!r}")


def fuel_to_weight(quantity: float, fuel_unit: str, weight_unit: str) -> float:
    """Weight of a fuel quantity, in *weight_unit* (lbs or kg)."""
    if weight_unit not in ("lbs", "kg"):
        raise ValueError(f"Unknown weight unit: {weight_unit!r}")
    return convert_fuel(quantity, fuel_unit, weight_unit)


def convert_fuel(value: float, from_unit: str, to_unit: str) -> float:
    """Convert a fuel quantity between volume and weight units (avgas)."""
    if from_unit == to_unit:
        return value
    # Normalize to US gallons
    if from_unit == "gal":
        gal = value
    elif from_unit == "l":
        gal = value / LITERS_PER_GAL
    elif from_unit == "lbs":
        gal = value / AVGAS_LBS_PER_GAL
    elif from_unit == "kg":
        gal = value * LBS_PER_KG / AVGAS_LBS_PER_GAL
    else:
        raise ValueError(f"Unknown fuel unit: {from_unit!r}")

    if to_unit == "gal":
        return gal
    if to_unit == "l":
        return gal * LITERS_PER_GAL
    if to_unit == "lbs":
        return gal * AVGAS_LBS_PER_GAL
    if to_unit == "kg":
        return gal * AVGAS_LBS_PER_GAL / LBS_PER_KG
    raise ValueError(f"Unknown fuel unit: {to_unit!r}")


def normalize_degrees(angle: float) -> float:
    """Map any angle into [0, 360)."""
    result = angle % 360.0
    # -1e-17 % 360 rounds to 360.0
    if result >= 360.0:
        result = 0.0
    return result
