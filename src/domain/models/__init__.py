from .bus import BusRecord, DelayAssessment, LocationReport
from .geo import GeoPoint

__all__ = [
    "BusRecord",
    "DelayAssessment",
    "GeoPoint",
    "LocationReport",
]
