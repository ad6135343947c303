"""Tests for the Order aggregate — creation, validation and snapshots."""

from datetime import UTC, datetime, timedelta

import pytest
from orders.order.events import OrderPlaced
from orders.order.order import Order, OrderStatus
from protean.exceptions import ValidationError


def _make_order(**overrides):
    defaults = {
        "customer_email": "maria@example.com",
        "customer_name": "Maria Silva",
        "amount": 150.5,
    }
    defaults.update(overrides)
    return Order.create(**defaults)


class TestOrderCreation:
    def test_new_order_is_received(self):
        order = _make_order()
        assert order.status == OrderStatus.RECEIVED.value

    def test_new_order_has_id_and_created_at(self):
        order = _make_order()
        assert order.id is not None
        assert order.created_at is not None

    def test_new_order_has_no_shipment(self):
        order = _make_order()
        assert order.shipment_reference is None
        assert order.shipped_at is None

    def test_amount_from_numeric_string(self):
        order = _make_order(amount="99.90")
        assert order.amount == 99.9

    def test_status_override_is_kept(self):
        order = _make_order(status=OrderStatus.IN_PREPARATION.value)
        assert order.status == OrderStatus.IN_PREPARATION.value

    def test_creation_raises_order_placed(self):
        order = _make_order()
        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderPlaced)
        assert event.order_id == str(order.id)
        assert event.status == OrderStatus.RECEIVED.value


class TestOrderValidation:
    @pytest.mark.parametrize("field", ["customer_email", "customer_name", "amount"])
    def test_missing_field_rejected(self, field):
        with pytest.raises(ValidationError) as exc:
            _make_order(**{field: None})
        assert field in exc.value.messages

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _make_order(customer_name="")
        assert "customer_name" in exc.value.messages

    @pytest.mark.parametrize("amount", [0, -10, "-1"])
    def test_non_positive_amount_rejected(self, amount):
        with pytest.raises(ValidationError) as exc:
            _make_order(amount=amount)
        assert "amount" in exc.value.messages

    @pytest.mark.parametrize("amount", ["abc", float("nan"), float("inf"), True, [1]])
    def test_non_numeric_amount_rejected(self, amount):
        with pytest.raises(ValidationError) as exc:
            _make_order(amount=amount)
        assert exc.value.messages["amount"] == ["Amount must be a number"]

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _make_order(status="DELIVERED")
        assert "status" in exc.value.messages


class TestOrderSnapshot:
    def test_snapshot_keys(self):
        snapshot = _make_order().to_snapshot()
        assert set(snapshot) == {
            "order_id",
            "customer_email",
            "customer_name",
            "amount",
            "created_at",
            "status",
            "shipment_reference",
            "shipped_at",
        }

    def test_snapshot_values(self):
        order = _make_order()
        snapshot = order.to_snapshot()
        assert snapshot["order_id"] == str(order.id)
        assert snapshot["amount"] == 150.5
        assert snapshot["status"] == "RECEIVED"
        assert snapshot["shipped_at"] is None

    def test_snapshot_after_shipping(self):
        order = _make_order()
        order.start_preparation()
        order.ship("invoice-123.pdf")
        snapshot = order.to_snapshot()
        assert snapshot["shipment_reference"] == "invoice-123.pdf"
        assert snapshot["shipped_at"] is not None


class TestOrderAge:
    def test_age_in_minutes(self):
        order = _make_order()
        order.created_at = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
        assert order.age_minutes(datetime(2024, 1, 1, 12, 5, tzinfo=UTC)) == 5

    def test_naive_timestamps_treated_as_utc(self):
        order = _make_order()
        order.created_at = datetime(2024, 1, 1, 12, 0)
        now = datetime(2024, 1, 1, 12, 0, tzinfo=UTC) + timedelta(minutes=2)
        assert order.age_minutes(now) == 2
