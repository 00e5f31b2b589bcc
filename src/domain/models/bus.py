from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class LocationReport:
    """A validated inbound location report for a single bus."""

    bus_number: str
    current_location: GeoPoint
    destination: GeoPoint
    speed: float  # km/h
    last_updated: datetime  # client-supplied, timezone-aware


@dataclass(frozen=True, slots=True)
class BusRecord:
    """Latest known state of a bus, as persisted in the store."""

    bus_number: str
    current_location: GeoPoint
    speed: float
    destination: GeoPoint
    eta: float  # minutes; math.inf when the bus never arrives
    last_updated: datetime

    @property
    def is_reachable(self) -> bool:
        return math.isfinite(self.eta)


@dataclass(frozen=True, slots=True)
class DelayAssessment:
    elapsed_min: float
    delay_min: float
    is_delayed: bool
