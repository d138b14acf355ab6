"""Tests for aircraft profile contracts."""

import pytest
from pydantic import ValidationError

from flightplan.contracts.aircraft import CGEnvelope, CGPoint, FuelCapacity, WeightBalanceData, WeightStation
from flightplan.contracts.enums import StationType


def _wb(**overrides) -> WeightBalanceData:
    data = dict(
        empty_weight=1000,
        empty_weight_arm=40,
        max_gross_weight=2000,
        stations=[WeightStation(id="seat", name="Seat", max_weight=400, arm=37, type=StationType.PILOT)],
        cg_envelope=CGEnvelope(points=[CGPoint(weight=1100, forward=35, aft=45)]),
        fuel_capacity=FuelCapacity(total=50, usable=48, unusable=2, arm=40),
    )
    data.update(overrides)
    return WeightBalanceData(**data)


class TestWeightBalanceData:
    def test_moment_defaults(self):
        assert _wb().empty_weight_moment == 40000

    def test_explicit_moment_kept(self):
        assert _wb(empty_weight_moment=41000).empty_weight_moment == 41000

    def test_duplicate_station_ids(self):
        seat = WeightStation(id="seat", name="Seat", max_weight=400, arm=37, type=StationType.PILOT)
        with pytest.raises(ValidationError, match="unique"):
            _wb(stations=[seat, seat])

    def test_station_lookup(self, test_profile):
        assert test_profile.weight_balance.station("tail").arm == 100
        assert test_profile.weight_balance.station("wing") is None

    def test_default_units(self):
        units = _wb().units
        assert (units.weight, units.arm, units.fuel) == ("lbs", "inches", "gal")


class TestEnvelopeAndFuel:
    def test_forward_aft_of_aft(self):
        with pytest.raises(ValidationError):
            CGPoint(weight=1500, forward=48, aft=47)

    def test_weights_must_increase(self):
        with pytest.raises(ValidationError, match="strictly increasing"):
            CGEnvelope(points=[CGPoint(weight=2000, forward=35, aft=45), CGPoint(weight=1500, forward=35, aft=45)])

    def test_empty_envelope(self):
        with pytest.raises(ValidationError):
            CGEnvelope(points=[])

    def test_usable_exceeds_total(self):
        with pytest.raises(ValidationError):
            FuelCapacity(total=40, usable=45, arm=48)
