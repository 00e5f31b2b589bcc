from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

from src.adapters.aws import env_bool

StoreBackend = Literal["memory", "dynamodb"]
NotifyBackend = Literal["log", "sqs"]


def _choice(name: str, allowed: tuple[str, ...], default: str) -> str:
    value = (os.getenv(name) or default).strip().lower()
    if value not in allowed:
        raise RuntimeError(f"Invalid {name}: {value!r} (expected one of {allowed})")
    return value


def _optional(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    return value.strip() or None


@dataclass(frozen=True, slots=True)
class AppSettings:
    """Process settings, read from env vars.

    Env vars:
      - BUS_STORE: memory | dynamodb (default: memory)
      - BUS_TABLE (default: bustrack-buses)
      - NOTIFY_BACKEND: log | sqs (default: log)
      - NOTIFY_QUEUE_URL (required when NOTIFY_BACKEND=sqs)
      - NOTIFY_WORKERS: background emit threads, 0 = inline (default: 2)
      - REPORTS_QUEUE_URL: enables async ingestion and the worker
    """

    store_backend: StoreBackend
    bus_table: str
    notify_backend: NotifyBackend
    notify_queue_url: str | None
    notify_workers: int
    reports_queue_url: str | None

    @staticmethod
    def from_env() -> "AppSettings":
        notify_backend = _choice("NOTIFY_BACKEND", ("log", "sqs"), "log")
        notify_queue_url = _optional("NOTIFY_QUEUE_URL")
        if notify_backend == "sqs" and not notify_queue_url:
            raise RuntimeError("Missing NOTIFY_QUEUE_URL")

        return AppSettings(
            store_backend=_choice("BUS_STORE", ("memory", "dynamodb"), "memory"),  # type: ignore[arg-type]
            bus_table=_optional("BUS_TABLE") or "bustrack-buses",
            notify_backend=notify_backend,  # type: ignore[arg-type]
            notify_queue_url=notify_queue_url,
            notify_workers=max(0, int(os.getenv("NOTIFY_WORKERS", "2"))),
            reports_queue_url=_optional("REPORTS_QUEUE_URL"),
        )
