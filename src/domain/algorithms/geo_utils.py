from __future__ import annotations

import math

from src.domain.models import GeoPoint

EARTH_RADIUS_KM = 6371.0


def haversine_distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometers between two points given in degrees."""

    # Convert before subtracting; huge finite degrees overflow a raw difference.
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dlat = phi2 - phi1
    dlon = math.radians(lon2) - math.radians(lon1)

    a = (
        math.sin(dlat / 2.0) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlon / 2.0) ** 2
    )
    # Rounding can push a slightly outside [0, 1] near antipodes.
    a = min(1.0, max(0.0, a))
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return EARTH_RADIUS_KM * c


def distance_between_km(a: GeoPoint, b: GeoPoint) -> float:
    return haversine_distance_km(a.lat, a.lon, b.lat, b.lon)


def eta_minutes(distance_km: float, speed_kmh: float) -> float:
    """Minutes to cover distance_km at speed_kmh; inf if the bus is not moving."""

    if speed_kmh <= 0:
        return math.inf
    return distance_km / speed_kmh * 60.0
