from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from src.adapters.api.dependencies import get_bus_state_service, get_report_queue
from src.adapters.api.schemas.buses import BusRecordSchema, EnqueueResponseSchema
from src.app.ports.output import IReportQueue
from src.app.services.bus_state_service import BusStateService
from src.domain.algorithms.reports import parse_report

router = APIRouter(tags=["buses"])


@router.post("/update-eta", response_model=BusRecordSchema)
def update_eta(
    report: Any = Body(default=None),
    service: BusStateService = Depends(get_bus_state_service),
) -> BusRecordSchema:
    record = service.update_report(report)
    return BusRecordSchema.from_record(record)


@router.post("/reports/async", response_model=EnqueueResponseSchema, status_code=202)
def enqueue_report(
    report: Any = Body(default=None),
    queue: IReportQueue = Depends(get_report_queue),
) -> EnqueueResponseSchema:
    # Reject bad reports here rather than in the worker.
    parse_report(report)
    return EnqueueResponseSchema(message_id=queue.publish_report(report))


@router.get("/buses/{bus_number}", response_model=BusRecordSchema)
def get_bus(
    bus_number: str,
    service: BusStateService = Depends(get_bus_state_service),
) -> BusRecordSchema:
    record = service.get_bus(bus_number=bus_number)
    if record is None:
        raise HTTPException(status_code=404, detail="Bus not found")
    return BusRecordSchema.from_record(record)
