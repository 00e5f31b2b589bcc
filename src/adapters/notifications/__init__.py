from .background_sink import BackgroundNotificationSink
from .logging_sink import LoggingNotificationSink
from .sqs_notification_sink import SqsNotificationSink

__all__ = [
    "BackgroundNotificationSink",
    "LoggingNotificationSink",
    "SqsNotificationSink",
]
