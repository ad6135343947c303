"""Order shipment — command and handler.

Moves an order from IN_PREPARATION to SHIPPED, recording the shipment
reference (the name of the uploaded shipping document).
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from orders.domain import orders
from orders.errors import NotFoundError
from orders.order.order import Order

logger = structlog.get_logger(__name__)


@orders.command(part_of="Order")
class MarkShipped:
    """Confirm that an order has shipped."""

    order_id = Identifier(required=True)
    shipment_reference = String(required=True, max_length=500)


@orders.command_handler(part_of=Order)
class ShipmentHandler:
    @handle(MarkShipped)
    def mark_shipped(self, command):
        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(command.order_id)
        except ObjectNotFoundError:
            raise NotFoundError(str(command.order_id)) from None

        if not order.ship(command.shipment_reference):
            logger.info(
                "Order already shipped, keeping original shipment",
                order_id=str(order.id),
                shipment_reference=order.shipment_reference,
            )
            return False

        repo.add(order)
        logger.info(
            "Order shipped",
            order_id=str(order.id),
            shipment_reference=order.shipment_reference,
        )
        return True
