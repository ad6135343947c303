"""Document intake router — ships orders when their shipping document arrives.

For each stored object: ignore it unless it has a document extension, find
the owning order in the object's metadata, and mark that order shipped with
the file name as the shipment reference. Documents in a batch are routed
independently; one failure never blocks the rest.
"""

from collections.abc import Callable, Iterable

import structlog
from pydantic import BaseModel

from orders.document.storage.port import ObjectStorePort
from orders.errors import ConflictError, OrdersError
from orders.order import lifecycle
from orders.payloads import DocumentArrival

logger = structlog.get_logger(__name__)

DOCUMENT_EXTENSIONS = (".pdf",)

_ORDER_ID_METADATA_KEYS = ("order_id", "orderid", "orderId")


class IntakeOutcome(BaseModel):
    bucket: str
    key: str
    status: str  # "shipped", "unchanged", "ignored", "skipped" or "failed"
    order_id: str | None = None
    shipment_reference: str | None = None
    reason: str | None = None


class IntakeReport(BaseModel):
    total: int = 0
    shipped: int = 0
    failed: int = 0
    outcomes: list[IntakeOutcome] = []


def is_document(key: str) -> bool:
    return key.lower().endswith(DOCUMENT_EXTENSIONS)


def display_name(key: str) -> str:
    """The final path segment of an object key."""
    return key.rsplit("/", 1)[-1]


def order_id_from_metadata(metadata: dict) -> str | None:
    for name in _ORDER_ID_METADATA_KEYS:
        if metadata.get(name):
            return metadata[name]
    return None


def _ship(order_id: str, shipment_reference: str) -> bool:
    before = lifecycle.get_order(order_id).status
    after = lifecycle.mark_shipped(order_id, shipment_reference).status
    return before != after


class DocumentIntakeRouter:
    """Routes document arrivals to the order they belong to.

    ``ship`` is called as ``ship(order_id, shipment_reference)`` and returns
    whether the order changed; it defaults to the lifecycle's mark_shipped.
    """

    def __init__(self, object_store: ObjectStorePort, ship: Callable[[str, str], bool] | None = None):
        self.object_store = object_store
        self.ship = ship or _ship

    def route(self, arrival: DocumentArrival) -> IntakeOutcome:
        """Route one arrival. Raises on store or lifecycle failures."""
        outcome = IntakeOutcome(bucket=arrival.bucket, key=arrival.key, status="ignored")

        if not is_document(arrival.key):
            outcome.reason = "not a shipping document"
            logger.info("Ignoring non-document object", bucket=arrival.bucket, key=arrival.key)
            return outcome

        head = self.object_store.head(arrival.key, bucket=arrival.bucket)
        order_id = order_id_from_metadata(head.get("metadata") or {})
        if not order_id:
            outcome.status = "skipped"
            outcome.reason = "no order_id metadata"
            logger.info("Document has no order_id metadata, skipping", key=arrival.key)
            return outcome

        reference = display_name(arrival.key)
        outcome.order_id = order_id
        outcome.shipment_reference = reference

        changed = self.ship(order_id, reference)
        outcome.status = "shipped" if changed else "unchanged"
        logger.info(
            "Document routed to order",
            order_id=order_id,
            key=arrival.key,
            shipment_reference=reference,
            changed=changed,
        )
        return outcome

    def process(self, arrivals: Iterable[DocumentArrival]) -> IntakeReport:
        report = IntakeReport()
        for arrival in arrivals:
            try:
                outcome = self.route(arrival)
            except ConflictError as exc:
                logger.warning("Document arrived for order in wrong status", key=arrival.key, error=exc.message)
                outcome = IntakeOutcome(
                    bucket=arrival.bucket,
                    key=arrival.key,
                    status="failed",
                    order_id=exc.order_id,
                    reason=exc.message,
                )
            except OrdersError as exc:
                logger.error("Document intake failed", key=arrival.key, error=exc.message)
                outcome = IntakeOutcome(bucket=arrival.bucket, key=arrival.key, status="failed", reason=exc.message)
            except Exception as exc:
                logger.exception("Document intake failed unexpectedly", key=arrival.key)
                outcome = IntakeOutcome(bucket=arrival.bucket, key=arrival.key, status="failed", reason=str(exc))

            report.outcomes.append(outcome)
            report.total += 1
            if outcome.status == "shipped":
                report.shipped += 1
            elif outcome.status == "failed":
                report.failed += 1

        logger.info(
            "Document batch processed",
            total=report.total,
            shipped=report.shipped,
            failed=report.failed,
        )
        return report
