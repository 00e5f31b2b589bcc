from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime

from src.app.ports.output import IBusRepository
from src.domain.models import BusRecord, GeoPoint


@dataclass(slots=True)
class InMemoryBusRepository(IBusRepository):
    """Process-local bus store. Records are replaced whole under a lock."""

    _records: dict[str, BusRecord] = field(default_factory=dict, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

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
        record = BusRecord(
            bus_number=bus_number,
            current_location=current_location,
            speed=speed,
            destination=destination,
            eta=eta,
            last_updated=last_updated,
        )
        with self._lock:
            self._records[bus_number] = record
        return record

    def get(self, *, bus_number: str) -> BusRecord | None:
        with self._lock:
            return self._records.get(bus_number)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def close(self) -> None:
        with self._lock:
            self._records.clear()
