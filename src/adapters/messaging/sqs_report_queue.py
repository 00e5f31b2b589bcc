from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from botocore.exceptions import ClientError

from src.adapters.aws import sqs_client
from src.app.ports.output import IReportQueue, QueuedReport

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SqsReportQueue(IReportQueue):
    """SQS adapter for inbound location reports (supports LocalStack via env).

    Reports are deleted only when acknowledged; unacknowledged ones reappear
    after the queue's visibility timeout. Undecodable messages are deleted
    on receipt since no consumer can handle them.

    Env vars:
      - REPORTS_QUEUE_URL
      - ENDPOINT_URL (preferred for LocalStack)
      - USE_LOCALSTACK, LOCALSTACK_ENDPOINT_URL, AWS_REGION
    """

    queue_url: str

    def publish_report(self, report: Mapping[str, Any]) -> str:
        sqs = sqs_client()
        resp = sqs.send_message(QueueUrl=self.queue_url, MessageBody=json.dumps(dict(report)))
        return str(resp.get("MessageId", ""))

    def consume_reports(
        self, *, max_messages: int = 1, wait_time_s: int = 10
    ) -> list[QueuedReport]:
        sqs = sqs_client()

        try:
            resp = sqs.receive_message(
                QueueUrl=self.queue_url,
                MaxNumberOfMessages=max(1, min(10, int(max_messages))),
                WaitTimeSeconds=max(0, min(20, int(wait_time_s))),
            )
        except ClientError as exc:
            # LocalStack race: worker may start polling before init script creates the queue.
            code = (
                exc.response.get("Error", {}).get("Code")
                if isinstance(getattr(exc, "response", None), dict)
                else None
            )
            if code in {"AWS.SimpleQueueService.NonExistentQueue", "QueueDoesNotExist"}:
                return []
            raise

        reports: list[QueuedReport] = []
        for msg in resp.get("Messages", []) or []:
            receipt = msg.get("ReceiptHandle")
            decoded = self._decode(msg.get("Body"))
            if decoded is None:
                if receipt:
                    sqs.delete_message(QueueUrl=self.queue_url, ReceiptHandle=receipt)
                continue
            reports.append(QueuedReport(body=decoded, receipt_handle=receipt))

        return reports

    def acknowledge(self, report: QueuedReport) -> None:
        if not report.receipt_handle:
            return
        sqs_client().delete_message(
            QueueUrl=self.queue_url, ReceiptHandle=report.receipt_handle
        )

    @staticmethod
    def _decode(raw_body: str | None) -> dict[str, Any] | None:
        if raw_body is None:
            return None
        try:
            decoded = json.loads(raw_body)
        except json.JSONDecodeError:
            logger.warning("Dropping undecodable report message")
            return None
        if not isinstance(decoded, dict):
            logger.warning("Dropping non-object report message")
            return None
        return decoded
