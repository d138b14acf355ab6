"""Magnetic variation collaborator.

The route engine asks a ``MagneticVariationSource`` for the variation at a
leg midpoint. Variation is in degrees, east positive, so that
``magnetic = true - variation``.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol

from flightplan.contracts.common import LatLng


class MagneticVariationSource(Protocol):
    def variation_at(self, coordinate: LatLng, on: date) -> float: ...


class FixedVariation:
    """Same variation everywhere. Good enough for a local area or tests."""

    def __init__(self, degrees: float):
        self.degrees = degrees

    def variation_at(self, coordinate: LatLng, on: date) -> float:
        return self.degrees
