from .bus_repository import IBusRepository
from .notification_sink import INotificationSink
from .report_queue import IReportQueue, QueuedReport

__all__ = [
    "IBusRepository",
    "INotificationSink",
    "IReportQueue",
    "QueuedReport",
]
