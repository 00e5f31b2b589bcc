from __future__ import annotations

import json
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

from src.adapters.aws import sqs_client
from src.app.ports.output import INotificationSink


@dataclass(slots=True)
class SqsNotificationSink(INotificationSink):
    """Publishes delay/on-time events as JSON messages to an SQS queue.

    Delivery (email, push, ...) is left to whoever consumes the queue.
    """

    queue_url: str

    def _publish(self, event: Mapping[str, Any]) -> None:
        sqs_client().send_message(
            QueueUrl=self.queue_url, MessageBody=json.dumps(dict(event))
        )

    def notify_delay(self, bus_number: str, delay_minutes: float) -> None:
        self._publish(
            {
                "type": "delay",
                "busNumber": bus_number,
                # JSON has no infinity; null means the bus is not moving.
                "delayMinutes": delay_minutes if math.isfinite(delay_minutes) else None,
                "emittedAt": datetime.now(timezone.utc).isoformat(),
            }
        )

    def notify_on_time(self, bus_number: str) -> None:
        self._publish(
            {
                "type": "on_time",
                "busNumber": bus_number,
                "emittedAt": datetime.now(timezone.utc).isoformat(),
            }
        )
