"""Domain events for the Order aggregate.

Together these form the record-change stream: ``OrderPlaced`` is the insert,
``OrderStatusChanged`` the modify. Both carry the full post-change snapshot
so consumers never have to reload the order.
"""

from protean.fields import DateTime, Float, Identifier, String

from orders.domain import orders


@orders.event(part_of="Order")
class OrderPlaced:
    """A new order was recorded."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    customer_email = String(required=True)
    customer_name = String(required=True)
    amount = Float(required=True)
    status = String(required=True)
    shipment_reference = String()
    shipped_at = DateTime()
    created_at = DateTime(required=True)


@orders.event(part_of="Order")
class OrderStatusChanged:
    """An order moved from one lifecycle status to the next."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    status = String(required=True)
    customer_email = String(required=True)
    customer_name = String(required=True)
    amount = Float(required=True)
    created_at = DateTime(required=True)
    shipment_reference = String()
    shipped_at = DateTime()
    changed_at = DateTime(required=True)
