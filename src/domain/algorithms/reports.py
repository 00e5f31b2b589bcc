from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Mapping

from src.domain.exceptions import ValidationError
from src.domain.models import GeoPoint, LocationReport

REQUIRED_FIELDS = ("busNumber", "currentLocation", "destination", "lastUpdated")

# Reports without a speed are treated as stationary, so their ETA is inf.
DEFAULT_SPEED_KMH = 0.0

MISSING_FIELDS_MESSAGE = "Missing required fields"
INVALID_FIELDS_MESSAGE = "Invalid field values"


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (str, Mapping)):
        return len(value) == 0
    return False


def _as_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"Not a number: {value!r}")
    out = float(value)
    if not math.isfinite(out):
        raise ValueError(f"Not a finite number: {value!r}")
    return out


def _parse_point(raw: Any) -> GeoPoint:
    if not isinstance(raw, Mapping):
        raise ValueError(f"Not a coordinate object: {raw!r}")
    return GeoPoint(lat=_as_float(raw.get("latitude")), lon=_as_float(raw.get("longitude")))


def parse_timestamp(raw: Any) -> datetime:
    """Parse an ISO-8601 string or epoch milliseconds into an aware datetime.

    Naive timestamps are taken to be UTC.
    """

    if isinstance(raw, datetime):
        dt = raw
    elif isinstance(raw, bool):
        raise ValueError(f"Not a timestamp: {raw!r}")
    elif isinstance(raw, (int, float)):
        dt = datetime.fromtimestamp(float(raw) / 1000.0, tz=timezone.utc)
    elif isinstance(raw, str):
        text = raw.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Not a timestamp: {raw!r}")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def parse_report(payload: Mapping[str, Any]) -> LocationReport:
    """Validate a raw report mapping (camelCase wire names)."""

    if not isinstance(payload, Mapping):
        raise ValidationError(MISSING_FIELDS_MESSAGE)
    if any(_is_missing(payload.get(name)) for name in REQUIRED_FIELDS):
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    bus_number = payload["busNumber"]
    if not isinstance(bus_number, str):
        raise ValidationError(INVALID_FIELDS_MESSAGE)

    raw_speed = payload.get("speed")
    try:
        speed = DEFAULT_SPEED_KMH if raw_speed is None else _as_float(raw_speed)
        current = _parse_point(payload["currentLocation"])
        destination = _parse_point(payload["destination"])
        last_updated = parse_timestamp(payload["lastUpdated"])
    except (TypeError, ValueError, OverflowError, OSError) as exc:
        raise ValidationError(INVALID_FIELDS_MESSAGE) from exc

    return LocationReport(
        bus_number=bus_number,
        current_location=current,
        destination=destination,
        speed=speed,
        last_updated=last_updated,
    )
