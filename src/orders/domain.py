"""Orders bounded context — order lifecycle, notifications and document intake.

Orders move RECEIVED → IN_PREPARATION → SHIPPED. Transitions are driven by
direct API calls, a scheduled promotion sweep and document arrivals; every
status change is observed by the change detector, which emails the customer.
"""

from protean.domain import Domain

from orders.utils.logging import configure_logging

configure_logging()

orders = Domain(name="orders")
