from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from src.domain.models import BusRecord, GeoPoint


class IBusRepository(ABC):
    """Persistence port for the latest known state of each bus.

    Implementations must make `upsert` atomic per bus_number: concurrent
    writers to one key never interleave fields, and the last writer wins.
    """

    @abstractmethod
    def upsert(
        self,
        *,
        bus_number: str,
        current_location: GeoPoint,
        speed: float,
        destination: GeoPoint,
        eta: float,
        last_updated: datetime,
    ) -> BusRecord:
        """Create or fully replace the record for bus_number and return it."""

    @abstractmethod
    def get(self, *, bus_number: str) -> BusRecord | None:
        raise NotImplementedError

    def close(self) -> None:
        """Release any held resources."""
