class BusTrackingError(Exception):
    """Base exception for bus state update failures."""


class ValidationError(BusTrackingError):
    """Raised when an inbound report is missing fields or carries bad values.

    Nothing has been computed or written when this is raised.
    """


class StoreError(BusTrackingError):
    """Raised when persisting bus state fails mid-operation.

    The stored state for the bus is indeterminate; callers may resubmit.
    """
