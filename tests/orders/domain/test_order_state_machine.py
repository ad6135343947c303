"""Tests for the Order state machine — valid transitions, idempotent repeats and guards."""

from datetime import UTC, datetime

import pytest
from orders.errors import ConflictError
from orders.order.events import OrderStatusChanged
from orders.order.order import Order, OrderStatus, transition_allowed
from protean.exceptions import ValidationError


def _order_at_state(target_status):
    """Create an order and advance it to the desired state, with no pending events."""
    order = Order.create(customer_email="joao@example.com", customer_name="Joao", amount=42)
    order._events.clear()

    if target_status == OrderStatus.RECEIVED:
        return order

    order.start_preparation()
    order._events.clear()
    if target_status == OrderStatus.IN_PREPARATION:
        return order

    order.ship("label-001.pdf")
    order._events.clear()
    return order


# ---------------------------------------------------------------
# Transition table
# ---------------------------------------------------------------
class TestTransitionTable:
    @pytest.mark.parametrize(
        "current,target",
        [
            (OrderStatus.RECEIVED, OrderStatus.IN_PREPARATION),
            (OrderStatus.IN_PREPARATION, OrderStatus.SHIPPED),
        ],
    )
    def test_allowed(self, current, target):
        assert transition_allowed(current, target)

    @pytest.mark.parametrize(
        "current,target",
        [
            (OrderStatus.RECEIVED, OrderStatus.SHIPPED),
            (OrderStatus.IN_PREPARATION, OrderStatus.RECEIVED),
            (OrderStatus.SHIPPED, OrderStatus.RECEIVED),
            (OrderStatus.SHIPPED, OrderStatus.IN_PREPARATION),
        ],
    )
    def test_not_allowed(self, current, target):
        assert not transition_allowed(current, target)


# ---------------------------------------------------------------
# Happy path transitions
# ---------------------------------------------------------------
class TestValidTransitions:
    def test_received_to_in_preparation(self):
        order = _order_at_state(OrderStatus.RECEIVED)
        assert order.start_preparation() is True
        assert order.status == OrderStatus.IN_PREPARATION.value

    def test_preparation_raises_status_changed(self):
        order = _order_at_state(OrderStatus.RECEIVED)
        order.start_preparation()
        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderStatusChanged)
        assert event.previous_status == "RECEIVED"
        assert event.status == "IN_PREPARATION"

    def test_in_preparation_to_shipped(self):
        order = _order_at_state(OrderStatus.IN_PREPARATION)
        assert order.ship("label-777.pdf") is True
        assert order.status == OrderStatus.SHIPPED.value
        assert order.shipment_reference == "label-777.pdf"
        assert order.shipped_at is not None

    def test_ship_with_explicit_time(self):
        shipped_at = datetime(2024, 3, 1, 9, 30, tzinfo=UTC)
        order = _order_at_state(OrderStatus.IN_PREPARATION)
        order.ship("label-777.pdf", shipped_at=shipped_at)
        assert order.shipped_at == shipped_at
        assert order._events[0].shipped_at == shipped_at


# ---------------------------------------------------------------
# Repeated requests are no-ops
# ---------------------------------------------------------------
class TestIdempotentTransitions:
    def test_repeat_preparation_is_noop(self):
        order = _order_at_state(OrderStatus.IN_PREPARATION)
        assert order.start_preparation() is False
        assert order.status == OrderStatus.IN_PREPARATION.value
        assert order._events == []

    def test_repeat_ship_keeps_first_reference(self):
        order = _order_at_state(OrderStatus.SHIPPED)
        first_shipped_at = order.shipped_at
        assert order.ship("other.pdf") is False
        assert order.shipment_reference == "label-001.pdf"
        assert order.shipped_at == first_shipped_at
        assert order._events == []


# ---------------------------------------------------------------
# Invalid transitions
# ---------------------------------------------------------------
class TestInvalidTransitions:
    def test_cannot_ship_received_order(self):
        order = _order_at_state(OrderStatus.RECEIVED)
        with pytest.raises(ConflictError) as exc:
            order.ship("label.pdf")
        assert exc.value.current_status == "RECEIVED"
        assert exc.value.target_status == "SHIPPED"
        assert order.status == OrderStatus.RECEIVED.value
        assert order._events == []

    def test_cannot_prepare_shipped_order(self):
        order = _order_at_state(OrderStatus.SHIPPED)
        with pytest.raises(ConflictError):
            order.start_preparation()
        assert order.status == OrderStatus.SHIPPED.value

    def test_ship_requires_reference(self):
        order = _order_at_state(OrderStatus.IN_PREPARATION)
        with pytest.raises(ValidationError) as exc:
            order.ship("")
        assert "shipment_reference" in exc.value.messages
