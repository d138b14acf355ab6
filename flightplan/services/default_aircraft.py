"""Built-in Cessna 172S profile, seeded when the aircraft store starts empty.

Figures are rounded POH values (lbs, inches, US gallons) and good enough for
planning practice, not for dispatch.
"""

from __future__ import annotations

from flightplan.contracts.aircraft import (
    AircraftProfile,
    CGEnvelope,
    CGPoint,
    CommunicationEquipment,
    EquipmentData,
    FuelCapacity,
    InstrumentEquipment,
    NavigationEquipment,
    WeightBalanceData,
    WeightStation,
)
from flightplan.contracts.enums import AircraftCategory, StationType
from flightplan.contracts.performance import (
    ClimbEntry,
    CruiseEntry,
    PerformanceData,
    RangeEntry,
    TakeoffLandingEntry,
)

# (weight, altitude_ft, temperature_c, ground_roll_ft, distance_ft)
_TAKEOFF = [
    (2550, 0, 0, 860, 1465), (2550, 0, 20, 940, 1600), (2550, 0, 40, 1025, 1745),
    (2550, 2000, 0, 1025, 1740), (2550, 2000, 20, 1120, 1905), (2550, 2000, 40, 1225, 2085),
    (2550, 4000, 0, 1225, 2085), (2550, 4000, 20, 1340, 2290), (2550, 4000, 40, 1465, 2510),
    (2200, 0, 0, 610, 1055), (2200, 0, 20, 665, 1150), (2200, 0, 40, 725, 1255),
    (2200, 2000, 0, 725, 1250), (2200, 2000, 20, 795, 1370), (2200, 2000, 40, 870, 1495),
    (2200, 4000, 0, 870, 1490), (2200, 4000, 20, 950, 1635), (2200, 4000, 40, 1040, 1795),
]

_LANDING = [
    (2550, 0, 0, 525, 1250), (2550, 0, 20, 560, 1310), (2550, 0, 40, 595, 1370),
    (2550, 2000, 0, 560, 1310), (2550, 2000, 20, 595, 1375), (2550, 2000, 40, 630, 1440),
    (2550, 4000, 0, 595, 1375), (2550, 4000, 20, 635, 1445), (2550, 4000, 40, 675, 1515),
    (2200, 0, 0, 475, 1150), (2200, 0, 20, 505, 1205), (2200, 0, 40, 535, 1260),
    (2200, 2000, 0, 505, 1205), (2200, 2000, 20, 535, 1265), (2200, 2000, 40, 570, 1325),
    (2200, 4000, 0, 535, 1265), (2200, 4000, 20, 570, 1330), (2200, 4000, 40, 610, 1395),
]

# (altitude_ft, rate_fpm at 0/20/40 C) for max gross; 2200 lbs climbs 150 fpm better
_CLIMB_2550 = [
    (0, (730, 695, 660)),
    (4000, (590, 555, 520)),
    (8000, (450, 415, 380)),
    (12000, (310, 275, 240)),
]

# (altitude_ft, speed_kt, fuel_burn_gph)
_CRUISE = [
    (2000, 117, 9.1),
    (4000, 120, 8.8),
    (6000, 122, 8.5),
    (8000, 124, 8.1),
    (10000, 121, 7.4),
    (12000, 118, 6.9),
]

# (altitude_ft, speed_kt, fuel_burn_gph, range_nm) with 45 min reserve
_RANGE = [
    (4000, 110, 7.0, 750), (4000, 110, 9.0, 565),
    (4000, 120, 7.0, 818), (4000, 120, 9.0, 617),
    (8000, 110, 7.0, 773), (8000, 110, 9.0, 582),
    (8000, 120, 7.0, 843), (8000, 120, 9.0, 636),
    (12000, 110, 7.0, 795), (12000, 110, 9.0, 599),
    (12000, 120, 7.0, 867), (12000, 120, 9.0, 654),
]


def _performance() -> PerformanceData:
    climb = []
    for altitude, rates in _CLIMB_2550:
        for temperature, rate in zip((0, 20, 40), rates):
            climb.append(ClimbEntry(weight=2550, altitude_ft=altitude,
                                    temperature_c=temperature, rate_fpm=rate))
            climb.append(ClimbEntry(weight=2200, altitude_ft=altitude,
                                    temperature_c=temperature, rate_fpm=rate + 150))

    return PerformanceData(
        takeoff=[
            TakeoffLandingEntry(weight=w, altitude_ft=a, temperature_c=t,
                                ground_roll_ft=g, distance_ft=d)
            for w, a, t, g, d in _TAKEOFF
        ],
        landing=[
            TakeoffLandingEntry(weight=w, altitude_ft=a, temperature_c=t,
                                ground_roll_ft=g, distance_ft=d)
            for w, a, t, g, d in _LANDING
        ],
        climb=climb,
        cruise=[CruiseEntry(altitude_ft=a, speed_kt=s, fuel_burn=b) for a, s, b in _CRUISE],
        range=[
            RangeEntry(altitude_ft=a, speed_kt=s, fuel_burn=b, range_nm=r)
            for a, s, b, r in _RANGE
        ],
        service_ceiling_ft=14000,
    )


def default_aircraft() -> AircraftProfile:
    """A fresh, unsaved Cessna 172S profile flagged as the default."""
    return AircraftProfile(
        name="Cessna 172S Skyhawk",
        make="Cessna",
        model="172S",
        category=AircraftCategory.SINGLE_ENGINE,
        weight_balance=WeightBalanceData(
            empty_weight=1663,
            empty_weight_arm=39.1,
            max_gross_weight=2550,
            stations=[
                WeightStation(id="front-seats", name="Pilot & front passenger",
                              max_weight=400, arm=37.0, type=StationType.PILOT, position=0),
                WeightStation(id="rear-seats", name="Rear passengers",
                              max_weight=400, arm=73.0, type=StationType.PASSENGER, position=1),
                WeightStation(id="baggage-a", name="Baggage area A",
                              max_weight=120, arm=95.0, type=StationType.BAGGAGE, position=2),
                WeightStation(id="baggage-b", name="Baggage area B",
                              max_weight=50, arm=123.0, type=StationType.BAGGAGE, position=3),
            ],
            cg_envelope=CGEnvelope(points=[
                CGPoint(weight=1500, forward=35.0, aft=47.3),
                CGPoint(weight=1950, forward=35.0, aft=47.3),
                CGPoint(weight=2550, forward=41.0, aft=47.3),
            ]),
            fuel_capacity=FuelCapacity(total=56, usable=53, unusable=3, arm=48.0),
        ),
        performance=_performance(),
        equipment=EquipmentData(
            navigation=NavigationEquipment(gps=True, vor=True, ils=True),
            communication=CommunicationEquipment(com2=True, transponder="mode-c", adsb="out"),
            instruments=InstrumentEquipment(autopilot=True),
            equipment_suffix="G",
        ),
        is_default=True,
    )
