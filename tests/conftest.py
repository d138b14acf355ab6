"""Shared fixtures: Chicago-area waypoints and a simple test aircraft."""

from __future__ import annotations

import pytest

from flightplan.contracts.aircraft import (
    AircraftProfile,
    CGEnvelope,
    CGPoint,
    FuelCapacity,
    WeightBalanceData,
    WeightStation,
)
from flightplan.contracts.common import LatLng
from flightplan.contracts.enums import StationType, WaypointType
from flightplan.contracts.waypoint import Waypoint


def make_waypoint(
    identifier: str,
    lat: float,
    lng: float,
    wp_type: WaypointType = WaypointType.AIRPORT,
    **kwargs,
) -> Waypoint:
    return Waypoint(
        identifier=identifier,
        type=wp_type,
        coordinates=LatLng(lat=lat, lng=lng),
        **kwargs,
    )


@pytest.fixture
def kord() -> Waypoint:
    return make_waypoint("KORD", 41.9786, -87.9048, name="Chicago O'Hare")


@pytest.fixture
def kmdw() -> Waypoint:
    return make_waypoint("KMDW", 41.7868, -87.7522, name="Chicago Midway")


@pytest.fixture
def kgyy() -> Waypoint:
    return make_waypoint("KGYY", 41.6163, -87.4128, name="Gary/Chicago")


@pytest.fixture
def test_profile() -> AircraftProfile:
    """Two stations far apart, so each CG limit is easy to reach.

    Empty 1000 lbs at 40 in, envelope 35-45 in from 1100 to 2000 lbs.
    """
    return AircraftProfile(
        id="test-aircraft",
        name="Test Aircraft",
        make="Test",
        model="T1",
        weight_balance=WeightBalanceData(
            empty_weight=1000,
            empty_weight_arm=40.0,
            max_gross_weight=2000,
            stations=[
                WeightStation(id="nose", name="Nose locker", max_weight=500, arm=10.0,
                              type=StationType.BAGGAGE),
                WeightStation(id="tail", name="Tail locker", max_weight=500, arm=100.0,
                              type=StationType.BAGGAGE),
            ],
            cg_envelope=CGEnvelope(points=[
                CGPoint(weight=1100, forward=35.0, aft=45.0),
                CGPoint(weight=2000, forward=35.0, aft=45.0),
            ]),
            fuel_capacity=FuelCapacity(total=50, usable=48, unusable=2, arm=40.0),
        ),
    )
