"""Orders domain API package."""

from orders.api.errors import register_exception_handlers
from orders.api.routes import health_router, order_router, preparation_router, storage_router

__all__ = ["order_router", "preparation_router", "storage_router", "health_router", "register_exception_handlers"]
