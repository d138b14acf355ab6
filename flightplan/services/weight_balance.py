"""Weight & balance: loading totals, CG position and envelope classification.

All figures are in the profile's own units (``WeightBalanceData.units``);
fuel quantities are converted to weight with avgas density.
"""

from __future__ import annotations

from flightplan.contracts.aircraft import AircraftProfile, CGEnvelope, WeightBalanceData
from flightplan.contracts.enums import CGStatus
from flightplan.contracts.loading import LoadingData, StationLoad
from flightplan.errors import (
    DivisionUndefinedError,
    EnvelopeRangeExceededError,
    PlanValidationError,
)
from flightplan.services.units import fuel_to_weight


def fuel_weight(wb: WeightBalanceData, quantity: float) -> float:
    """Weight of *quantity* fuel, in the profile's weight unit."""
    return fuel_to_weight(quantity, wb.units.fuel, wb.units.weight)


def envelope_limits_at(envelope: CGEnvelope, weight: float) -> tuple[float, float]:
    """Forward and aft CG limits at *weight*, linearly interpolated.

    Weights outside the first/last envelope point are not extrapolated:
    ``EnvelopeRangeExceededError`` is raised instead.
    """
    points = envelope.points
    low, high = points[0].weight, points[-1].weight
    if weight < low or weight > high:
        raise EnvelopeRangeExceededError(weight, low, high)

    for lower, upper in zip(points, points[1:]):
        if lower.weight <= weight <= upper.weight:
            t = (weight - lower.weight) / (upper.weight - lower.weight)
            forward = lower.forward + t * (upper.forward - lower.forward)
            aft = lower.aft + t * (upper.aft - lower.aft)
            return forward, aft

    # Single-point envelope
    return points[0].forward, points[0].aft


def classify_cg(profile: AircraftProfile, total_weight: float, cg_position: float) -> CGStatus:
    """Classify a loading against max gross weight and the CG envelope.

    Over-weight is checked first and wins regardless of CG position.
    """
    wb = profile.weight_balance
    if total_weight > wb.max_gross_weight:
        return CGStatus.OVER_WEIGHT

    forward, aft = envelope_limits_at(wb.cg_envelope, total_weight)
    if cg_position < forward:
        return CGStatus.FORWARD_LIMIT
    if cg_position > aft:
        return CGStatus.AFT_LIMIT
    return CGStatus.WITHIN_LIMITS


def compute_loading(
    profile: AircraftProfile,
    station_weights: dict[str, float],
    fuel_qty: float,
) -> LoadingData:
    """Compute total weight, moment and CG for a loading, then classify it.

    *station_weights* maps ``WeightStation.id`` to the weight placed there;
    stations left out carry nothing. *fuel_qty* is in the profile's fuel
    unit and sits at the fuel arm.
    """
    wb = profile.weight_balance

    if fuel_qty < 0:
        raise PlanValidationError(f"Fuel quantity {fuel_qty} is negative", field="fuel_qty")
    if fuel_qty > wb.fuel_capacity.total:
        raise PlanValidationError(
            f"Fuel quantity {fuel_qty} exceeds tank capacity {wb.fuel_capacity.total}",
            field="fuel_qty",
        )

    loads: list[StationLoad] = []
    for station_id, weight in station_weights.items():
        station = wb.station(station_id)
        if station is None:
            raise PlanValidationError(
                f"Unknown station {station_id!r}", field=f"stations.{station_id}"
            )
        if weight < 0:
            raise PlanValidationError(
                f"Station {station.name} weight {weight} is negative",
                field=f"stations.{station_id}",
            )
        if weight > station.max_weight:
            raise PlanValidationError(
                f"Station {station.name} weight {weight} exceeds max {station.max_weight}",
                field=f"stations.{station_id}",
            )
        loads.append(
            StationLoad(
                station_id=station_id,
                weight=weight,
                arm=station.arm,
                moment=weight * station.arm,
            )
        )

    fuel_wt = fuel_weight(wb, fuel_qty)
    total_weight = wb.empty_weight + sum(load.weight for load in loads) + fuel_wt
    total_moment = (
        wb.empty_weight_moment
        + sum(load.moment for load in loads)
        + fuel_wt * wb.fuel_capacity.arm
    )
    if total_weight <= 0:
        raise DivisionUndefinedError(total_weight)
    cg_position = total_moment / total_weight

    return LoadingData(
        aircraft_id=profile.id,
        stations=loads,
        fuel_quantity=fuel_qty,
        fuel_unit=wb.units.fuel,
        fuel_weight=fuel_wt,
        total_weight=total_weight,
        total_moment=total_moment,
        cg_position=cg_position,
        cg_status=classify_cg(profile, total_weight, cg_position),
    )
