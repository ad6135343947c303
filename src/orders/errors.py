"""Error taxonomy for the orders domain.

Input validation reuses Protean's ``ValidationError`` (raised by the aggregate
and by field validation); everything else is defined here. The HTTP layer maps
each class to a status code in ``orders.api.errors``.
"""

from protean.exceptions import ValidationError

__all__ = [
    "ConflictError",
    "DependencyError",
    "MalformedPayloadError",
    "NoRecipientError",
    "NoTemplateError",
    "NotFoundError",
    "OrdersError",
    "ValidationError",
]


class OrdersError(Exception):
    """Base class for errors raised by the orders domain."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(OrdersError):
    """No order exists for the given identifier."""

    def __init__(self, order_id: str):
        super().__init__(f"Order {order_id} not found")
        self.order_id = order_id


class ConflictError(OrdersError):
    """The requested status transition is not allowed from the current status."""

    def __init__(self, order_id: str, current_status: str, target_status: str):
        super().__init__(f"Order {order_id} cannot transition from {current_status} to {target_status}")
        self.order_id = order_id
        self.current_status = current_status
        self.target_status = target_status


class DependencyError(OrdersError):
    """A collaborator (record store, object store, email transport) failed.

    ``auth_failure`` marks credential problems so callers can show a hint
    instead of the raw transport message.
    """

    def __init__(self, message: str, dependency: str = "unknown", auth_failure: bool = False):
        super().__init__(message)
        self.dependency = dependency
        self.auth_failure = auth_failure


class MalformedPayloadError(OrdersError):
    """An inbound invocation payload could not be decoded."""


class NoTemplateError(OrdersError):
    """No notification template exists for a status."""

    def __init__(self, status):
        super().__init__(f"No notification template for status {status!r}")
        self.status = status


class NoRecipientError(OrdersError):
    """The order snapshot carries no customer email."""

    def __init__(self, order_id):
        super().__init__(f"Order {order_id} has no customer email")
        self.order_id = order_id
