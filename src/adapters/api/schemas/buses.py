from __future__ import annotations

import math
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.domain.models import BusRecord, GeoPoint


class CoordinatesSchema(BaseModel):
    latitude: float
    longitude: float

    @classmethod
    def from_point(cls, p: GeoPoint) -> "CoordinatesSchema":
        return cls(latitude=p.lat, longitude=p.lon)


class BusRecordSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    bus_number: str = Field(..., alias="busNumber")
    current_location: CoordinatesSchema = Field(..., alias="currentLocation")
    speed: float
    destination: CoordinatesSchema
    # Minutes; null when the bus is not moving (infinite ETA).
    eta: float | None = None
    last_updated: datetime = Field(..., alias="lastUpdated")

    @classmethod
    def from_record(cls, record: BusRecord) -> "BusRecordSchema":
        return cls(
            bus_number=record.bus_number,
            current_location=CoordinatesSchema.from_point(record.current_location),
            speed=record.speed,
            destination=CoordinatesSchema.from_point(record.destination),
            eta=record.eta if math.isfinite(record.eta) else None,
            last_updated=record.last_updated,
        )


class EnqueueResponseSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message_id: str = Field(..., alias="messageId")
