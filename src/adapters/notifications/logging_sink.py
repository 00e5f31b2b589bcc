from __future__ import annotations

import logging
from dataclasses import dataclass, field

from src.app.ports.output import INotificationSink


@dataclass(slots=True)
class LoggingNotificationSink(INotificationSink):
    """Reports delay/on-time outcomes to the log only."""

    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger("bustrack.notifications")
    )

    def notify_delay(self, bus_number: str, delay_minutes: float) -> None:
        self.logger.warning(
            "Bus %s is delayed by %.2f minutes.", bus_number, delay_minutes
        )
        self.logger.warning(
            "Notification: Bus %s is delayed by %.2f minutes.",
            bus_number,
            delay_minutes,
        )

    def notify_on_time(self, bus_number: str) -> None:
        self.logger.info("Bus %s is on time.", bus_number)
