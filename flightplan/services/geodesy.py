"""Spherical earth geometry: great-circle distance, bearing, midpoint, wind triangle."""

from __future__ import annotations

import math

from flightplan.contracts.common import LatLng
from flightplan.services.units import normalize_degrees

EARTH_RADIUS_NM = 3440.065


def haversine_nm(a: LatLng, b: LatLng) -> float:
    """Haversine distance in nautical miles."""
    la1, lo1 = math.radians(a.lat), math.radians(a.lng)
    la2, lo2 = math.radians(b.lat), math.radians(b.lng)
    dlat = la2 - la1
    dlon = lo2 - lo1
    h = math.sin(dlat / 2) ** 2 + math.cos(la1) * math.cos(la2) * math.sin(dlon / 2) ** 2
    # Rounding can push h a hair above 1 for antipodal points
    return 2 * math.asin(math.sqrt(min(1.0, h))) * EARTH_RADIUS_NM


def initial_bearing_deg(a: LatLng, b: LatLng) -> float:
    """Initial great-circle bearing from *a* to *b*, degrees true in [0, 360)."""
    la1, la2 = math.radians(a.lat), math.radians(b.lat)
    dlon = math.radians(b.lng - a.lng)
    y = math.sin(dlon) * math.cos(la2)
    x = math.cos(la1) * math.sin(la2) - math.sin(la1) * math.cos(la2) * math.cos(dlon)
    return normalize_degrees(math.degrees(math.atan2(y, x)))


def midpoint(a: LatLng, b: LatLng) -> LatLng:
    """Great-circle midpoint of *a* and *b*."""
    la1, lo1 = math.radians(a.lat), math.radians(a.lng)
    la2 = math.radians(b.lat)
    dlon = math.radians(b.lng - a.lng)
    bx = math.cos(la2) * math.cos(dlon)
    by = math.cos(la2) * math.sin(dlon)
    lat = math.atan2(
        math.sin(la1) + math.sin(la2),
        math.sqrt((math.cos(la1) + bx) ** 2 + by ** 2),
    )
    lon = lo1 + math.atan2(by, math.cos(la1) + bx)
    lng = (math.degrees(lon) + 540.0) % 360.0 - 180.0
    return LatLng(lat=math.degrees(lat), lng=lng)


def wind_triangle(
    course_deg: float,
    true_airspeed_kt: float,
    wind_from_deg: float,
    wind_speed_kt: float,
) -> tuple[float, float]:
    """Solve the wind triangle for a desired course.

    Returns ``(wind_correction_deg, ground_speed_kt)``. The correction is
    positive to the right (heading = course + correction). Raises
    ``ValueError`` when the crosswind exceeds the airspeed.
    """
    if true_airspeed_kt <= 0:
        raise ValueError("True airspeed must be positive")
    angle = math.radians(wind_from_deg - course_deg)
    crosswind = wind_speed_kt * math.sin(angle)
    ratio = crosswind / true_airspeed_kt
    if abs(ratio) > 1.0:
        raise ValueError(
            f"Crosswind {abs(crosswind):.0f} kt exceeds airspeed {true_airspeed_kt:.0f} kt"
        )
    wca = math.asin(ratio)
    ground_speed = true_airspeed_kt * math.cos(wca) - wind_speed_kt * math.cos(angle)
    return math.degrees(wca), ground_speed
