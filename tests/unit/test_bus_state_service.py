from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

import pytest

from src.app.services.bus_state_service import BusStateService
from src.domain.exceptions import StoreError, ValidationError

from .fakes import FakeBusRepository, RecordingSink

NOW = datetime(2026, 1, 8, 8, 0, tzinfo=timezone.utc)


def _service(
    repo: FakeBusRepository | None = None, sink: RecordingSink | None = None
) -> tuple[BusStateService, FakeBusRepository, RecordingSink]:
    repo = repo or FakeBusRepository()
    sink = sink or RecordingSink()
    svc = BusStateService(bus_repository=repo, notification_sink=sink, clock=lambda: NOW)
    return svc, repo, sink


def _report(**overrides: object) -> dict:
    base: dict = {
        "busNumber": "B1",
        "currentLocation": {"latitude": 0.0, "longitude": 0.0},
        "speed": 10,
        "destination": {"latitude": 0.0, "longitude": 0.0},
        "lastUpdated": NOW.isoformat(),
    }
    base.update(overrides)
    return base


def test_bus_at_destination_is_on_time() -> None:
    svc, repo, sink = _service()

    record = svc.update_report(_report())

    assert record.eta == 0.0
    assert repo.records["B1"].eta == 0.0
    assert sink.on_time == ["B1"]
    assert sink.delays == []


def test_old_report_with_zero_eta_is_on_time() -> None:
    svc, _, sink = _service()

    svc.update_report(_report(lastUpdated=(NOW - timedelta(minutes=30)).isoformat()))

    assert sink.on_time == ["B1"]
    assert sink.delays == []


def test_stationary_bus_is_reported_delayed() -> None:
    svc, _, sink = _service()

    record = svc.update_report(
        _report(speed=0, destination={"latitude": 0.0, "longitude": 0.5})
    )

    assert record.eta == math.inf
    assert not record.is_reachable
    assert sink.delays == [("B1", math.inf)]


def test_missing_speed_is_treated_as_stationary() -> None:
    svc, _, sink = _service()
    payload = _report(destination={"latitude": 0.5, "longitude": 0.0})
    del payload["speed"]

    record = svc.update_report(payload)

    assert record.speed == 0.0
    assert record.eta == math.inf
    assert sink.delays and sink.delays[0][0] == "B1"


def test_far_destination_reports_delay_minutes() -> None:
    svc, _, sink = _service()

    # ~111 km at 60 km/h is ~111 minutes, reported just now.
    record = svc.update_report(
        _report(speed=60, destination={"latitude": 1.0, "longitude": 0.0})
    )

    assert record.eta == pytest.approx(111.19, abs=0.01)
    assert len(sink.delays) == 1
    bus, delay = sink.delays[0]
    assert bus == "B1"
    assert delay == pytest.approx(record.eta)


@pytest.mark.parametrize(
    "field", ["busNumber", "currentLocation", "destination", "lastUpdated"]
)
def test_invalid_report_has_no_side_effects(field: str) -> None:
    svc, repo, sink = _service()
    payload = _report()
    del payload[field]

    with pytest.raises(ValidationError):
        svc.update_report(payload)

    assert repo.upserts == 0
    assert repo.records == {}
    assert sink.delays == [] and sink.on_time == []


def test_second_report_replaces_first() -> None:
    svc, repo, _ = _service()

    svc.update_report(_report(speed=10))
    svc.update_report(
        _report(
            speed=25,
            currentLocation={"latitude": 0.1, "longitude": 0.2},
            destination={"latitude": 0.3, "longitude": 0.4},
        )
    )

    assert list(repo.records) == ["B1"]
    stored = repo.records["B1"]
    assert stored.speed == 25.0
    assert stored.current_location.lat == 0.1
    assert stored.destination.lon == 0.4


def test_returned_record_matches_stored_record() -> None:
    svc, _, _ = _service()

    record = svc.update_report(
        _report(speed=42, destination={"latitude": 0.2, "longitude": 0.2})
    )

    assert svc.get_bus(bus_number="B1") == record
    assert svc.get_bus(bus_number="B2") is None


def test_sink_failure_does_not_fail_update() -> None:
    svc, repo, _ = _service(sink=RecordingSink(error=ConnectionError("sink down")))

    record = svc.update_report(_report())

    assert record.bus_number == "B1"
    assert "B1" in repo.records


def test_repository_failure_is_raised_as_store_error() -> None:
    svc, _, sink = _service(repo=FakeBusRepository(error=TimeoutError("slow disk")))

    with pytest.raises(StoreError) as excinfo:
        svc.update_report(_report())

    assert isinstance(excinfo.value.__cause__, TimeoutError)
    assert sink.delays == [] and sink.on_time == []


def test_store_error_passes_through_unchanged() -> None:
    original = StoreError("table missing")
    svc, _, _ = _service(repo=FakeBusRepository(error=original))

    with pytest.raises(StoreError) as excinfo:
        svc.update_report(_report())

    assert excinfo.value is original


def test_close_releases_sink_and_repository() -> None:
    svc, repo, sink = _service()

    svc.close()

    assert sink.closed and repo.closed


def test_extreme_finite_coordinates_are_stored() -> None:
    svc, repo, _ = _service()

    record = svc.update_report(
        _report(
            currentLocation={"latitude": -1e308, "longitude": 0.0},
            destination={"latitude": 1e308, "longitude": 0.0},
        )
    )

    assert math.isfinite(record.eta)
    assert repo.records["B1"] == record
