from __future__ import annotations

import math
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

from botocore.exceptions import BotoCoreError, ClientError

from src.adapters.aws import dynamodb_client
from src.app.ports.output import IBusRepository
from src.domain.algorithms.reports import parse_timestamp
from src.domain.exceptions import StoreError
from src.domain.models import BusRecord, GeoPoint


def _point_to_item(p: GeoPoint) -> dict[str, Any]:
    return {"M": {"latitude": {"N": repr(p.lat)}, "longitude": {"N": repr(p.lon)}}}


def _point_from_item(item: Mapping[str, Any]) -> GeoPoint:
    m = item["M"]
    return GeoPoint(lat=float(m["latitude"]["N"]), lon=float(m["longitude"]["N"]))


def _eta_to_item(eta: float) -> dict[str, Any]:
    # DynamoDB numbers cannot hold infinity.
    if not math.isfinite(eta):
        return {"NULL": True}
    return {"N": repr(eta)}


def _eta_from_item(item: Mapping[str, Any] | None) -> float:
    if not item or "N" not in item:
        return math.inf
    return float(item["N"])


def _record_from_item(item: Mapping[str, Any]) -> BusRecord:
    return BusRecord(
        bus_number=item["bus_number"]["S"],
        current_location=_point_from_item(item["current_location"]),
        speed=float(item["speed"]["N"]),
        destination=_point_from_item(item["destination"]),
        eta=_eta_from_item(item.get("eta")),
        last_updated=parse_timestamp(item["last_updated"]["S"]),
    )


@dataclass(slots=True)
class DynamoDbBusRepository(IBusRepository):
    """Stores the latest state per bus in DynamoDB (hash key `bus_number`).

    A single update_item with SET on every mutable field is atomic per item,
    so concurrent reports for one bus resolve last-writer-wins.

    Env vars:
      - BUS_TABLE (default: bustrack-buses)
      - ENDPOINT_URL (preferred for LocalStack)
      - AWS_REGION
    """

    table_name: str = "bustrack-buses"

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
        now_ms = int(time.time() * 1000)
        try:
            resp = dynamodb_client().update_item(
                TableName=self.table_name,
                Key={"bus_number": {"S": bus_number}},
                UpdateExpression=(
                    "SET #cl = :cl, #sp = :sp, #ds = :ds, #eta = :eta, "
                    "#lu = :lu, updated_at_ms = :u"
                ),
                ExpressionAttributeNames={
                    "#cl": "current_location",
                    "#sp": "speed",
                    "#ds": "destination",
                    "#eta": "eta",
                    "#lu": "last_updated",
                },
                ExpressionAttributeValues={
                    ":cl": _point_to_item(current_location),
                    ":sp": {"N": repr(float(speed))},
                    ":ds": _point_to_item(destination),
                    ":eta": _eta_to_item(eta),
                    ":lu": {"S": last_updated.isoformat()},
                    ":u": {"N": str(now_ms)},
                },
                ReturnValues="ALL_NEW",
            )
        except (ClientError, BotoCoreError) as exc:
            raise StoreError(f"DynamoDB upsert failed for bus {bus_number}") from exc

        return _record_from_item(resp["Attributes"])

    def get(self, *, bus_number: str) -> BusRecord | None:
        try:
            resp = dynamodb_client().get_item(
                TableName=self.table_name,
                Key={"bus_number": {"S": bus_number}},
                ConsistentRead=True,
            )
        except (ClientError, BotoCoreError) as exc:
            raise StoreError(f"DynamoDB read failed for bus {bus_number}") from exc

        item = resp.get("Item")
        if not item:
            return None
        return _record_from_item(item)
