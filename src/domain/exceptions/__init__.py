from .bus_tracking import BusTrackingError, StoreError, ValidationError

__all__ = [
    "BusTrackingError",
    "StoreError",
    "ValidationError",
]
