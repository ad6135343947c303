"""Template registry — maps an order status to the email sent on entering it.

Each template renders a subject and a plain-text body from an order snapshot.
"""

from orders.errors import NoTemplateError
from orders.notification.templates.order_in_preparation import OrderInPreparationTemplate
from orders.notification.templates.order_received import OrderReceivedTemplate
from orders.notification.templates.order_shipped import OrderShippedTemplate
from orders.order.order import OrderStatus

TEMPLATE_REGISTRY: dict[str, type] = {
    OrderStatus.RECEIVED.value: OrderReceivedTemplate,
    OrderStatus.IN_PREPARATION.value: OrderInPreparationTemplate,
    OrderStatus.SHIPPED.value: OrderShippedTemplate,
}


def get_template(status):
    """Look up the template class for a status; NoTemplateError if there is none."""
    template_cls = TEMPLATE_REGISTRY.get(status)
    if template_cls is None:
        raise NoTemplateError(status)
    return template_cls
