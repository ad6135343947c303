"""Order change stream handler — feeds committed order changes to the detector.

Turns ``OrderPlaced`` (insert) and ``OrderStatusChanged`` (modify) into
before/after images and runs them through the ChangeDetector with the
configured email channel.
"""

import structlog
from protean.utils.mixins import handle

from orders.domain import orders
from orders.notification.channel import get_email_channel
from orders.notification.detector import ChangeDetector
from orders.order.events import OrderPlaced, OrderStatusChanged
from orders.order.order import Order
from orders.payloads import ChangeRecord

logger = structlog.get_logger(__name__)


def _iso(value):
    return value.isoformat() if value else None


def _image(event, status) -> dict:
    return {
        "order_id": str(event.order_id),
        "customer_email": event.customer_email,
        "customer_name": event.customer_name,
        "amount": event.amount,
        "created_at": _iso(event.created_at),
        "status": status,
        "shipment_reference": event.shipment_reference,
        "shipped_at": _iso(event.shipped_at),
    }


@orders.event_handler(part_of=Order)
class OrderChangeStream:
    """Notifies customers when their order changes status."""

    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        record = ChangeRecord(old_image=None, new_image=_image(event, event.status))
        ChangeDetector(get_email_channel()).process([record])

    @handle(OrderStatusChanged)
    def on_status_changed(self, event: OrderStatusChanged) -> None:
        new_image = _image(event, event.status)
        old_image = {"order_id": new_image["order_id"], "status": event.previous_status}
        report = ChangeDetector(get_email_channel()).process(
            [ChangeRecord(old_image=old_image, new_image=new_image)]
        )
        if report.failed:
            logger.warning(
                "Status change notification not delivered",
                order_id=new_image["order_id"],
                status=event.status,
            )
