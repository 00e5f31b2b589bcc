from __future__ import annotations

import os

from fastapi import HTTPException, Request

from src.adapters.messaging.sqs_report_queue import SqsReportQueue
from src.adapters.notifications import (
    BackgroundNotificationSink,
    LoggingNotificationSink,
    SqsNotificationSink,
)
from src.adapters.persistence import DynamoDbBusRepository, InMemoryBusRepository
from src.adapters.settings import AppSettings
from src.app.ports.output import IBusRepository, INotificationSink, IReportQueue
from src.app.services.bus_state_service import BusStateService


def build_bus_repository(settings: AppSettings) -> IBusRepository:
    if settings.store_backend == "dynamodb":
        return DynamoDbBusRepository(table_name=settings.bus_table)
    return InMemoryBusRepository()


def build_notification_sink(settings: AppSettings) -> INotificationSink:
    sink: INotificationSink = LoggingNotificationSink()
    if settings.notify_backend == "sqs" and settings.notify_queue_url:
        sink = SqsNotificationSink(queue_url=settings.notify_queue_url)

    if settings.notify_workers > 0:
        sink = BackgroundNotificationSink(inner=sink, max_workers=settings.notify_workers)
    return sink


def build_bus_state_service(settings: AppSettings | None = None) -> BusStateService:
    settings = settings or AppSettings.from_env()
    return BusStateService(
        bus_repository=build_bus_repository(settings),
        notification_sink=build_notification_sink(settings),
    )


def get_bus_state_service(request: Request) -> BusStateService:
    service = getattr(request.app.state, "bus_state_service", None)
    if service is None:
        raise RuntimeError("Bus state service not initialised")
    return service


def get_report_queue() -> IReportQueue:
    queue_url = (os.getenv("REPORTS_QUEUE_URL") or "").strip()
    if not queue_url:
        raise HTTPException(status_code=503, detail="Report queue not configured")
    return SqsReportQueue(queue_url=queue_url)
