"""FastAPI routes for the Orders domain: orders, documents, buckets and health."""

import structlog
from fastapi import APIRouter, File, HTTPException, Query, Request, UploadFile
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from orders.api.schemas import (
    BucketListResponse,
    CreateOrderRequest,
    DocumentListResponse,
    OrderDocumentsResponse,
    OrderListResponse,
    OrderResponse,
    OrderSchema,
    UploadResponse,
)
from orders.document import documents
from orders.document.storage import get_object_store
from orders.entrypoints import invoke_advance
from orders.errors import DependencyError
from orders.order import lifecycle
from orders.order.order import Order

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest) -> OrderResponse:
    order = lifecycle.create_order(
        customer_email=body.customer_email,
        customer_name=body.customer_name,
        amount=body.amount,
        status=body.status,
        shipment_reference=body.shipment_reference,
        shipped_at=body.shipped_at,
    )
    return OrderResponse(message="Order created", order=OrderSchema(**order.to_snapshot()))


@order_router.get("", response_model=OrderListResponse)
async def list_orders() -> OrderListResponse:
    orders = [OrderSchema(**order.to_snapshot()) for order in lifecycle.list_orders()]
    return OrderListResponse(total=len(orders), orders=orders)


@order_router.get("/{order_id}", response_model=OrderSchema)
async def get_order(order_id: str) -> OrderSchema:
    return OrderSchema(**lifecycle.get_order(order_id).to_snapshot())


@order_router.post("/{order_id}/documents", response_model=UploadResponse)
async def upload_order_document(order_id: str, file: UploadFile | None = File(None)) -> UploadResponse:
    """Upload a document for an order.

    A PDF uploaded for an order in preparation ships the order, with the
    stored file name as its shipment reference.
    """
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file provided")

    content = await file.read()
    stored, outcome = documents.upload_document(
        get_object_store(),
        order_id,
        file.filename,
        content,
        content_type=file.content_type,
    )
    return UploadResponse(message="File uploaded", intake_status=outcome.status, **stored)


@order_router.get("/{order_id}/documents", response_model=OrderDocumentsResponse)
async def list_order_documents(order_id: str) -> OrderDocumentsResponse:
    summary, docs = await documents.list_order_documents(get_object_store(), order_id)
    return OrderDocumentsResponse(order_id=order_id, order=summary, total=len(docs), documents=docs)


# ---------------------------------------------------------------------------
# Preparation Router
# ---------------------------------------------------------------------------
preparation_router = APIRouter(prefix="/preparation", tags=["orders"])


@preparation_router.post("", response_model=OrderResponse)
async def advance_to_preparation(request: Request) -> OrderResponse:
    """Advance one order to IN_PREPARATION; body ``{"order_id": ...}``."""
    result = invoke_advance(await request.body())
    return OrderResponse(message=result["message"], order=OrderSchema(**result["order"]))


# ---------------------------------------------------------------------------
# Storage Router
# ---------------------------------------------------------------------------
storage_router = APIRouter(tags=["documents"])


@storage_router.get("/buckets", response_model=BucketListResponse)
async def list_buckets() -> BucketListResponse:
    buckets = get_object_store().list_buckets()
    return BucketListResponse(total=len(buckets), buckets=buckets)


@storage_router.get("/documents", response_model=DocumentListResponse)
async def list_documents(
    order_id: str | None = None,
    order_id_camel: str | None = Query(None, alias="orderId"),
) -> DocumentListResponse:
    order_id = order_id or order_id_camel
    store = get_object_store()
    docs = await documents.list_documents(store, order_id)
    return DocumentListResponse(total=len(docs), bucket=store.bucket, order_id=order_id, documents=docs)


# ---------------------------------------------------------------------------
# Health Router
# ---------------------------------------------------------------------------
health_router = APIRouter(prefix="/health", tags=["health"])


def _check(name: str, probe) -> dict:
    try:
        probe()
    except DependencyError as exc:
        logger.warning("Health check failed", dependency=name, error=exc.message)
        return {"status": "error", "auth_failure": exc.auth_failure}
    except Exception as exc:
        logger.warning("Health check failed", dependency=name, error=str(exc))
        return {"status": "error", "auth_failure": False}
    return {"status": "ok"}


def _ping_record_store():
    current_domain.repository_for(Order)._dao.query.limit(1).all()


@health_router.get("")
async def health():
    return {"status": "ok", "domain": {"name": current_domain.name}}


@health_router.get("/storage")
async def storage_health():
    """Probe the record store and the object store; 503 if either fails."""
    store = get_object_store()
    checks = {
        "record_store": _check("record_store", _ping_record_store),
        "object_store": _check("object_store", store.ping),
    }
    healthy = all(check["status"] == "ok" for check in checks.values())
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "ok" if healthy else "degraded",
            "bucket": store.bucket,
            "region": store.region,
            "checks": checks,
        },
    )
