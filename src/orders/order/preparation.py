"""Order preparation — command and handler.

Moves an order from RECEIVED to IN_PREPARATION. Invoked by the promotion
sweep and by the external advance-to-preparation call.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from orders.domain import orders
from orders.errors import NotFoundError
from orders.order.order import Order

logger = structlog.get_logger(__name__)


@orders.command(part_of="Order")
class AdvanceToPreparation:
    """Start preparing an order."""

    order_id = Identifier(required=True)


@orders.command_handler(part_of=Order)
class PreparationHandler:
    @handle(AdvanceToPreparation)
    def advance_to_preparation(self, command):
        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(command.order_id)
        except ObjectNotFoundError:
            raise NotFoundError(str(command.order_id)) from None

        if not order.start_preparation():
            logger.info(
                "Order already in preparation, nothing to do",
                order_id=str(order.id),
            )
            return False

        repo.add(order)
        logger.info("Order moved to preparation", order_id=str(order.id))
        return True
