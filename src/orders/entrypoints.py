"""Event-driven entry points.

Each function is one stateless invocation triggered by a collaborator rather
than a client: the advance-to-preparation call, a record-change batch, a
document-arrival batch and the scheduled sweep. Payloads are decoded once,
here, and the result is a JSON-ready report.

All functions expect an active domain context.
"""

from typing import Any

import structlog

from orders.document.intake import DocumentIntakeRouter
from orders.document.storage import get_object_store
from orders.notification.channel import get_email_channel
from orders.notification.detector import ChangeDetector
from orders.order import lifecycle
from orders.order.sweep import PromotionSweeper
from orders.payloads import decode_advance_request, decode_change_records, decode_document_arrivals
from orders.utils.logging import bind_invocation, clear_invocation

logger = structlog.get_logger(__name__)


def invoke_advance(payload: Any) -> dict:
    """Advance one order to IN_PREPARATION.

    Raises MalformedPayloadError, NotFoundError or ConflictError.
    """
    request = decode_advance_request(payload)
    bind_invocation(trigger="advance", order_id=request.order_id)
    try:
        order = lifecycle.advance_to_preparation(request.order_id)
        return {"message": "Order moved to IN_PREPARATION", "order": order.to_snapshot()}
    finally:
        clear_invocation()


def invoke_record_changes(payload: Any) -> dict:
    records = decode_change_records(payload)
    bind_invocation(trigger="record_changes")
    try:
        return ChangeDetector(get_email_channel()).process(records).model_dump()
    finally:
        clear_invocation()


def invoke_document_arrivals(payload: Any) -> dict:
    arrivals = decode_document_arrivals(payload)
    bind_invocation(trigger="document_arrivals")
    try:
        return DocumentIntakeRouter(get_object_store()).process(arrivals).model_dump()
    finally:
        clear_invocation()


def invoke_sweep() -> dict:
    bind_invocation(trigger="sweep")
    try:
        report = PromotionSweeper().run()
        return report.model_dump() | {"promoted": report.promoted, "failed": report.failed}
    finally:
        clear_invocation()
