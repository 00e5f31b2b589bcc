from __future__ import annotations

from abc import ABC, abstractmethod


class INotificationSink(ABC):
    """Port receiving delay/on-time outcomes. Fire-and-forget."""

    @abstractmethod
    def notify_delay(self, bus_number: str, delay_minutes: float) -> None:
        raise NotImplementedError

    @abstractmethod
    def notify_on_time(self, bus_number: str) -> None:
        raise NotImplementedError

    def close(self) -> None:
        """Flush or release resources."""
