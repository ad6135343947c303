"""Orders FastAPI application.

Web server for the orders domain. Commands are processed synchronously and
every request runs inside the orders domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from orders/domain.toml.
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from orders.domain import orders  # noqa: E402

orders.init()

from orders.utils.db import setup_db  # noqa: E402

setup_db(orders)

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Orders API",
    description="Order intake, preparation, shipping documents and customer notifications",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the orders domain context for each request."""
    with orders.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from orders.api import (  # noqa: E402
    health_router,
    order_router,
    preparation_router,
    register_exception_handlers,
    storage_router,
)

app.include_router(order_router)
app.include_router(preparation_router)
app.include_router(storage_router)
app.include_router(health_router)
register_exception_handlers(app)
