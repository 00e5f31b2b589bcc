from __future__ import annotations

import logging
import os
import time

from src.adapters.api.dependencies import build_bus_state_service
from src.adapters.messaging.sqs_report_queue import SqsReportQueue
from src.adapters.settings import AppSettings
from src.app.ports.output import IReportQueue, QueuedReport
from src.app.services.bus_state_service import BusStateService
from src.domain.exceptions import StoreError, ValidationError

logger = logging.getLogger("bustrack.worker")


def process_messages(
    service: BusStateService, queue: IReportQueue, messages: list[QueuedReport]
) -> tuple[int, int]:
    """Apply each queued report; return (applied, failed).

    Applied and invalid reports are acknowledged. Reports that hit a
    StoreError stay on the queue and are redelivered.
    """

    applied = 0
    failed = 0
    for msg in messages:
        bus_number = msg.body.get("busNumber")
        try:
            service.update_report(msg.body)
        except ValidationError as exc:
            failed += 1
            logger.warning("Dropping invalid report for bus %s: %s", bus_number, exc)
            queue.acknowledge(msg)
        except StoreError:
            failed += 1
            logger.exception("Error updating ETA for bus %s; left for redelivery", bus_number)
        else:
            applied += 1
            queue.acknowledge(msg)
    return applied, failed


def run(service: BusStateService, queue: IReportQueue, *, loop: bool = True) -> None:
    while True:
        messages = queue.consume_reports(max_messages=5, wait_time_s=10)
        if not messages:
            if not loop:
                return
            time.sleep(0.2)
            continue

        applied, failed = process_messages(service, queue, messages)
        logger.info("Processed %d report(s), %d failed", applied, failed)


def main() -> None:
    logging.basicConfig(
        level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    settings = AppSettings.from_env()
    if not settings.reports_queue_url:
        raise RuntimeError("Missing REPORTS_QUEUE_URL")

    service = build_bus_state_service(settings)
    queue = SqsReportQueue(queue_url=settings.reports_queue_url)
    loop = os.getenv("WORKER_LOOP", "1").strip().lower() not in {"0", "false", "no"}

    try:
        run(service, queue, loop=loop)
    finally:
        service.close()


if __name__ == "__main__":
    main()
