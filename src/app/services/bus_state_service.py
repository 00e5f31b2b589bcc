from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from src.app.ports.output import IBusRepository, INotificationSink
from src.domain.algorithms.delay import DELAY_THRESHOLD_MIN, evaluate_delay
from src.domain.algorithms.geo_utils import distance_between_km, eta_minutes
from src.domain.algorithms.reports import parse_report
from src.domain.exceptions import StoreError
from src.domain.models import BusRecord

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class BusStateService:
    """Application service (use case) for bus location reports.

    Validates a report, computes the ETA, upserts the bus record and then
    signals delay/on-time to the notification sink. Holds no state between
    calls; atomicity is the repository's job.
    """

    bus_repository: IBusRepository
    notification_sink: INotificationSink
    clock: Callable[[], datetime] = field(default=_utcnow)
    delay_threshold_min: float = DELAY_THRESHOLD_MIN

    def update_report(self, report: Mapping[str, Any]) -> BusRecord:
        parsed = parse_report(report)

        try:
            distance_km = distance_between_km(
                parsed.current_location, parsed.destination
            )
            eta = eta_minutes(distance_km, parsed.speed)
            record = self.bus_repository.upsert(
                bus_number=parsed.bus_number,
                current_location=parsed.current_location,
                speed=parsed.speed,
                destination=parsed.destination,
                eta=eta,
                last_updated=parsed.last_updated,
            )
        except StoreError:
            raise
        except Exception as exc:
            raise StoreError(
                f"Failed to update bus {parsed.bus_number}: {type(exc).__name__}"
            ) from exc

        self._signal_delay(record)
        return record

    def get_bus(self, *, bus_number: str) -> BusRecord | None:
        return self.bus_repository.get(bus_number=bus_number)

    def close(self) -> None:
        try:
            self.notification_sink.close()
        finally:
            self.bus_repository.close()

    def _signal_delay(self, record: BusRecord) -> None:
        # Best-effort: never fails the update.
        try:
            assessment = evaluate_delay(
                eta_min=record.eta,
                last_updated=record.last_updated,
                now=self.clock(),
                threshold_min=self.delay_threshold_min,
            )
            if assessment.is_delayed:
                self.notification_sink.notify_delay(
                    record.bus_number, assessment.delay_min
                )
            else:
                self.notification_sink.notify_on_time(record.bus_number)
        except Exception:
            logger.exception(
                "Failed to emit delay signal", extra={"bus_number": record.bus_number}
            )
