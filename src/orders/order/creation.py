"""Order creation — command and handler."""

import structlog
from protean import handle
from protean.fields import DateTime, Float, String
from protean.utils.globals import current_domain

from orders.domain import orders
from orders.order.order import Order

logger = structlog.get_logger(__name__)


@orders.command(part_of="Order")
class CreateOrder:
    """Record a new order placed by a customer.

    Field presence and the amount are validated by ``Order.create`` so that
    every rejection carries the same messages.
    """

    customer_email = String(max_length=254)
    customer_name = String(max_length=255)
    amount = Float()
    status = String(max_length=20)
    shipment_reference = String(max_length=500)
    shipped_at = DateTime()


@orders.command_handler(part_of=Order)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        order = Order.create(
            customer_email=command.customer_email,
            customer_name=command.customer_name,
            amount=command.amount,
            status=command.status,
            shipment_reference=command.shipment_reference,
            shipped_at=command.shipped_at,
        )
        current_domain.repository_for(Order).add(order)

        logger.info("Order created", order_id=str(order.id), status=order.status)
        return str(order.id)
