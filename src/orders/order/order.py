"""Order aggregate (CQRS) — the core of the orders domain.

The aggregate is the sole authority for which values ``status``,
``shipment_reference`` and ``shipped_at`` may take. Every mutation raises a
domain event; those events are the change stream the notification side reacts
to.

State Machine:
    RECEIVED → IN_PREPARATION → SHIPPED

Requesting the status an order already has is an idempotent no-op: nothing
changes and no event is raised, so duplicate triggers are harmless. Any other
move outside the table (backwards, or skipping IN_PREPARATION) is rejected
with ConflictError.
"""

import math
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, String

from orders.domain import orders
from orders.errors import ConflictError
from orders.order.events import OrderPlaced, OrderStatusChanged


class OrderStatus(Enum):
    RECEIVED = "RECEIVED"
    IN_PREPARATION = "IN_PREPARATION"
    SHIPPED = "SHIPPED"


_VALID_TRANSITIONS = {
    OrderStatus.RECEIVED: {OrderStatus.IN_PREPARATION},
    OrderStatus.IN_PREPARATION: {OrderStatus.SHIPPED},
    OrderStatus.SHIPPED: set(),  # Terminal
}


def transition_allowed(current: OrderStatus, target: OrderStatus) -> bool:
    """True when ``current → target`` appears in the transition table."""
    return target in _VALID_TRANSITIONS.get(current, set())


def _parse_amount(amount):
    if isinstance(amount, bool):
        raise ValidationError({"amount": ["Amount must be a number"]})
    try:
        value = float(amount)
    except (TypeError, ValueError):
        raise ValidationError({"amount": ["Amount must be a number"]}) from None
    if math.isnan(value) or math.isinf(value):
        raise ValidationError({"amount": ["Amount must be a number"]})
    if value <= 0:
        raise ValidationError({"amount": ["Amount must be greater than zero"]})
    return value


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


@orders.aggregate
class Order:
    """A customer order progressing through the fulfilment lifecycle."""

    customer_email = String(required=True, max_length=254)
    customer_name = String(required=True, max_length=255)
    amount = Float(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.RECEIVED.value)
    shipment_reference = String(max_length=500)
    shipped_at = DateTime()
    created_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        customer_email,
        customer_name,
        amount,
        status=None,
        shipment_reference=None,
        shipped_at=None,
    ):
        """Create a new order, RECEIVED unless the caller overrides the status.

        The status override is accepted as-is; it is not checked against the
        transition table.
        """
        missing = {
            field: ["is required"]
            for field, value in (
                ("customer_email", customer_email),
                ("customer_name", customer_name),
                ("amount", amount),
            )
            if value is None or value == ""
        }
        if missing:
            raise ValidationError(missing)

        value = _parse_amount(amount)
        if status is not None and status not in {s.value for s in OrderStatus}:
            raise ValidationError({"status": [f"Unknown status {status!r}"]})

        now = datetime.now(UTC)
        order = cls(
            customer_email=customer_email,
            customer_name=customer_name,
            amount=value,
            status=status or OrderStatus.RECEIVED.value,
            shipment_reference=shipment_reference,
            shipped_at=shipped_at,
            created_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_email=order.customer_email,
                customer_name=order.customer_name,
                amount=order.amount,
                status=order.status,
                shipment_reference=order.shipment_reference,
                shipped_at=order.shipped_at,
                created_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _begin_transition(self, target_status: OrderStatus) -> bool:
        """Check the guard. Returns False when the order is already there."""
        current = OrderStatus(self.status)
        if current == target_status:
            return False
        if not transition_allowed(current, target_status):
            raise ConflictError(str(self.id), current.value, target_status.value)
        return True

    def _raise_status_changed(self, previous_status: str, changed_at: datetime):
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous_status,
                status=self.status,
                customer_email=self.customer_email,
                customer_name=self.customer_name,
                amount=self.amount,
                created_at=self.created_at,
                shipment_reference=self.shipment_reference,
                shipped_at=self.shipped_at,
                changed_at=changed_at,
            )
        )

    def start_preparation(self) -> bool:
        """Move the order to IN_PREPARATION. Returns True if anything changed."""
        if not self._begin_transition(OrderStatus.IN_PREPARATION):
            return False

        previous = self.status
        self.status = OrderStatus.IN_PREPARATION.value
        self._raise_status_changed(previous, datetime.now(UTC))
        return True

    def ship(self, shipment_reference: str, shipped_at: datetime | None = None) -> bool:
        """Move the order to SHIPPED, recording the shipment reference and time.

        A repeated ship request keeps the first reference and timestamp.
        """
        if not shipment_reference:
            raise ValidationError({"shipment_reference": ["is required"]})
        if not self._begin_transition(OrderStatus.SHIPPED):
            return False

        now = shipped_at or datetime.now(UTC)
        previous = self.status
        self.status = OrderStatus.SHIPPED.value
        self.shipment_reference = shipment_reference
        self.shipped_at = now
        self._raise_status_changed(previous, now)
        return True

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def age_minutes(self, now: datetime) -> float:
        """Minutes elapsed since the order was created."""
        created_at = _as_utc(self.created_at)
        return (_as_utc(now) - created_at).total_seconds() / 60

    def to_snapshot(self) -> dict:
        """The record image of this order, as the change stream and API see it."""
        return {
            "order_id": str(self.id),
            "customer_email": self.customer_email,
            "customer_name": self.customer_name,
            "amount": self.amount,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "status": self.status,
            "shipment_reference": self.shipment_reference,
            "shipped_at": self.shipped_at.isoformat() if self.shipped_at else None,
        }
