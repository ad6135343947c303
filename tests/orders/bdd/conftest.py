"""Shared BDD fixtures and step definitions for the Orders domain."""

import pytest
from orders.errors import ConflictError
from orders.order import lifecycle
from pytest_bdd import given, parsers, then


def _place_order():
    order = lifecycle.create_order("bdd@example.com", "Bdd Customer", 210.0)
    return str(order.id)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured transition errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a received order", target_fixture="order_id")
def received_order():
    return _place_order()


@given("an order in preparation", target_fixture="order_id")
def order_in_preparation():
    order_id = _place_order()
    lifecycle.advance_to_preparation(order_id)
    return order_id


@given("a shipped order", target_fixture="order_id")
def shipped_order():
    order_id = _place_order()
    lifecycle.advance_to_preparation(order_id)
    lifecycle.mark_shipped(order_id, "first-label.pdf")
    return order_id


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order_id, status):
    assert lifecycle.get_order(order_id).status == status


@then(parsers.cfparse("{count:d} emails have been sent"))
def emails_sent(email_channel, count):
    assert len(email_channel.sent_emails) == count


@then(parsers.cfparse('the last email subject is "{subject}"'))
def last_email_subject(email_channel, subject):
    assert email_channel.sent_emails[-1]["subject"] == subject


@then("the transition is rejected")
def transition_rejected(error):
    assert error["exc"] is not None, "Expected a conflict but none was raised"
    assert isinstance(error["exc"], ConflictError)
