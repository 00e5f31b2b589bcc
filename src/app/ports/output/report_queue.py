from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class QueuedReport:
    """A decoded report still held by the queue until acknowledged."""

    body: Mapping[str, Any]
    receipt_handle: str | None = None


class IReportQueue(ABC):
    """Messaging port for location reports ingested asynchronously.

    Consumed reports stay on the queue until `acknowledge` is called, so a
    report that is never acknowledged is redelivered.
    """

    @abstractmethod
    def publish_report(self, report: Mapping[str, Any]) -> str:
        """Publish a raw report and return its provider message id."""

    @abstractmethod
    def consume_reports(
        self, *, max_messages: int = 1, wait_time_s: int = 10
    ) -> list[QueuedReport]:
        """Receive up to N messages and return the decodable reports."""

    @abstractmethod
    def acknowledge(self, report: QueuedReport) -> None:
        """Remove a handled report from the queue."""
