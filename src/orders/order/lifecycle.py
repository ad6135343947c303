"""Order lifecycle operations.

The one boundary through which the API, the promotion sweep and the document
intake router read and mutate orders. Writes go through domain commands so the
transition guard and the change events always apply.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from orders.errors import NotFoundError
from orders.order.creation import CreateOrder
from orders.order.order import Order
from orders.order.preparation import AdvanceToPreparation
from orders.order.shipment import MarkShipped


def create_order(
    customer_email,
    customer_name,
    amount,
    status=None,
    shipment_reference=None,
    shipped_at=None,
) -> Order:
    order_id = current_domain.process(
        CreateOrder(
            customer_email=customer_email,
            customer_name=customer_name,
            amount=amount,
            status=status,
            shipment_reference=shipment_reference,
            shipped_at=shipped_at,
        ),
        asynchronous=False,
    )
    return get_order(order_id)


def get_order(order_id: str) -> Order:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise NotFoundError(str(order_id)) from None


def list_orders() -> list[Order]:
    return current_domain.repository_for(Order).find_all()


def advance_to_preparation(order_id: str) -> Order:
    """Move the order to IN_PREPARATION; a no-op if it is already there."""
    current_domain.process(AdvanceToPreparation(order_id=order_id), asynchronous=False)
    return get_order(order_id)


def mark_shipped(order_id: str, shipment_reference: str) -> Order:
    """Move the order to SHIPPED; a no-op if it has already shipped."""
    current_domain.process(
        MarkShipped(order_id=order_id, shipment_reference=shipment_reference),
        asynchronous=False,
    )
    return get_order(order_id)
