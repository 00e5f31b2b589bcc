from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field

from src.app.ports.output import INotificationSink

logger = logging.getLogger(__name__)


def _log_failure(future: Future[None]) -> None:
    exc = future.exception()
    if exc is not None:
        logger.error(
            "Notification delivery failed", exc_info=(type(exc), exc, exc.__traceback__)
        )


@dataclass(slots=True)
class BackgroundNotificationSink(INotificationSink):
    """Hands each notification to a thread pool so callers never wait on I/O.

    Failed deliveries are logged and dropped; retries belong to the wrapped sink.
    """

    inner: INotificationSink
    max_workers: int = 2
    _executor: ThreadPoolExecutor = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=max(1, self.max_workers),
            thread_name_prefix="bustrack-notify",
        )

    def notify_delay(self, bus_number: str, delay_minutes: float) -> None:
        future = self._executor.submit(self.inner.notify_delay, bus_number, delay_minutes)
        future.add_done_callback(_log_failure)

    def notify_on_time(self, bus_number: str) -> None:
        future = self._executor.submit(self.inner.notify_on_time, bus_number)
        future.add_done_callback(_log_failure)

    def close(self) -> None:
        self._executor.shutdown(wait=True)
        self.inner.close()
