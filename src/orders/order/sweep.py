"""Promotion sweep — moves orders left in RECEIVED into preparation.

Runs on a schedule (every 5 minutes, see ``manage.py sweep``). Each run scans
RECEIVED orders, picks those older than the age threshold and advances each
one. The threshold sits below the sweep interval, so every eligible order is
promoted within one extra cycle at most.

Re-running the sweep is safe: promoted orders are no longer RECEIVED, and an
order that another trigger moved on in the meantime is reported as an
unchanged success rather than a failure.
"""

from collections.abc import Callable
from datetime import UTC, datetime

import structlog
from protean.utils.globals import current_domain
from pydantic import BaseModel

from orders import config
from orders.errors import ConflictError, OrdersError
from orders.order import lifecycle
from orders.order.order import Order, OrderStatus

logger = structlog.get_logger(__name__)


class PromotionOutcome(BaseModel):
    order_id: str
    success: bool
    changed: bool = False
    message: str


class SweepReport(BaseModel):
    total_received: int
    selected: int
    outcomes: list[PromotionOutcome] = []

    @property
    def promoted(self) -> int:
        return sum(1 for o in self.outcomes if o.success and o.changed)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.success)


def _promote(order_id: str) -> bool:
    before = lifecycle.get_order(order_id).status
    after = lifecycle.advance_to_preparation(order_id).status
    return before != after


class PromotionSweeper:
    """Advances RECEIVED orders that are older than ``threshold_minutes``.

    ``promote`` is called with an order id and returns whether the order
    changed; it defaults to the lifecycle's advance_to_preparation. ``clock``
    returns the current time.
    """

    def __init__(
        self,
        promote: Callable[[str], bool] | None = None,
        threshold_minutes: float | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.promote = promote or _promote
        self.threshold_minutes = (
            threshold_minutes if threshold_minutes is not None else config.sweep_age_threshold_minutes()
        )
        self.clock = clock or (lambda: datetime.now(UTC))

    def select(self, received: list[Order], now: datetime) -> list[Order]:
        """Orders strictly older than the threshold."""
        return [order for order in received if order.age_minutes(now) > self.threshold_minutes]

    def _promote_one(self, order_id: str) -> PromotionOutcome:
        try:
            changed = self.promote(order_id)
        except ConflictError as exc:
            logger.info("Order already moved past RECEIVED, skipping", order_id=order_id, status=exc.current_status)
            return PromotionOutcome(order_id=order_id, success=True, changed=False, message=exc.message)
        except OrdersError as exc:
            logger.error("Failed to promote order", order_id=order_id, error=exc.message)
            return PromotionOutcome(order_id=order_id, success=False, message=exc.message)
        except Exception as exc:
            logger.exception("Failed to promote order", order_id=order_id)
            return PromotionOutcome(order_id=order_id, success=False, message=str(exc))

        message = "moved to IN_PREPARATION" if changed else "already in preparation"
        logger.info("Order promoted", order_id=order_id, changed=changed)
        return PromotionOutcome(order_id=order_id, success=True, changed=changed, message=message)

    def run(self) -> SweepReport:
        now = self.clock()
        received = current_domain.repository_for(Order).find_by_status(OrderStatus.RECEIVED.value)
        selected = self.select(received, now)

        logger.info(
            "Promotion sweep started",
            received=len(received),
            selected=len(selected),
            threshold_minutes=self.threshold_minutes,
        )

        report = SweepReport(total_received=len(received), selected=len(selected))
        for order in selected:
            report.outcomes.append(self._promote_one(str(order.id)))

        logger.info(
            "Promotion sweep finished",
            promoted=report.promoted,
            failed=report.failed,
        )
        return report
