"""Change detector — decides whether an order change is worth an email.

Works on before/after order images, the shape a record-change stream
delivers. Only a real status change produces a notification: inserts and
same-status writes are ignored, which keeps redundant or redelivered writes
from emailing the customer twice.

Every record in a batch is handled on its own. Missing templates and missing
recipients are skips, transport failures are recorded, and neither stops the
rest of the batch.
"""

from collections.abc import Iterable

import structlog
from pydantic import BaseModel

from orders import config
from orders.errors import DependencyError, NoRecipientError, NoTemplateError
from orders.notification.channel.email_port import EmailPort
from orders.notification.templates import get_template
from orders.payloads import ChangeRecord

logger = structlog.get_logger(__name__)


class NotificationOutcome(BaseModel):
    order_id: str | None = None
    status: str  # "sent", "skipped" or "failed"
    reason: str | None = None
    message_id: str | None = None
    recipient: str | None = None


class ChangeBatchReport(BaseModel):
    total: int = 0
    sent: int = 0
    skipped: int = 0
    failed: int = 0
    outcomes: list[NotificationOutcome] = []


class ChangeDetector:
    def __init__(self, transport: EmailPort, sender: str | None = None):
        self.transport = transport
        self.sender = sender or config.notification_sender()

    @staticmethod
    def status_changed(record: ChangeRecord) -> bool:
        """True when the record moves the order to a different status."""
        if record.old_image is None:
            return False
        return record.old_image.get("status") != record.new_image.get("status")

    def notify(self, record: ChangeRecord) -> NotificationOutcome:
        """Send the email for one change record.

        Raises NoTemplateError, NoRecipientError or DependencyError.
        """
        order = record.new_image
        order_id = order.get("order_id")

        template_cls = get_template(order.get("status"))
        recipient = order.get("customer_email")
        if not recipient:
            raise NoRecipientError(order_id)

        rendered = template_cls.render(order)
        result = self.transport.send(
            to=recipient,
            subject=rendered["subject"],
            body=rendered["body"],
            sender=self.sender,
        )
        if result.get("status") != "sent":
            raise DependencyError(result.get("error", "Unknown dispatch error"), dependency="email")

        logger.info(
            "Status notification sent",
            order_id=order_id,
            status=order.get("status"),
            message_id=result.get("message_id"),
        )
        return NotificationOutcome(
            order_id=order_id,
            status="sent",
            message_id=result.get("message_id"),
            recipient=recipient,
        )

    def handle(self, record: ChangeRecord) -> NotificationOutcome:
        """Notify for a single record, turning every failure into an outcome."""
        order_id = record.new_image.get("order_id")

        if not self.status_changed(record):
            reason = "insert" if record.old_image is None else "status unchanged"
            logger.debug("No status change, skipping notification", order_id=order_id, reason=reason)
            return NotificationOutcome(order_id=order_id, status="skipped", reason=reason)

        try:
            return self.notify(record)
        except (NoTemplateError, NoRecipientError) as exc:
            logger.info("Notification skipped", order_id=order_id, reason=exc.message)
            return NotificationOutcome(order_id=order_id, status="skipped", reason=exc.message)
        except Exception as exc:
            logger.error("Notification failed", order_id=order_id, error=str(exc))
            return NotificationOutcome(order_id=order_id, status="failed", reason=str(exc))

    def process(self, records: Iterable[ChangeRecord]) -> ChangeBatchReport:
        report = ChangeBatchReport()
        for record in records:
            outcome = self.handle(record)
            report.outcomes.append(outcome)
            report.total += 1
            if outcome.status == "sent":
                report.sent += 1
            elif outcome.status == "skipped":
                report.skipped += 1
            else:
                report.failed += 1

        logger.info(
            "Change batch processed",
            total=report.total,
            sent=report.sent,
            skipped=report.skipped,
            failed=report.failed,
        )
        return report
