"""Document operations — upload and listing of order documents.

Documents live in the object store and are tied to an order only through
their ``order_id`` metadata, so listing the documents of one order means
describing every object. Those lookups are independent and fan out
concurrently.
"""

import asyncio
import re
import time
from datetime import UTC, datetime

import structlog

from orders.document.intake import DocumentIntakeRouter, IntakeOutcome, display_name, order_id_from_metadata
from orders.document.storage.port import ObjectStorePort
from orders.errors import OrdersError
from orders.order import lifecycle
from orders.payloads import DocumentArrival

logger = structlog.get_logger(__name__)

_EPOCH_PREFIX = re.compile(r"^\d+-")


def document_key(filename: str, now_ms: int | None = None) -> str:
    """Storage key for an upload: ``{epoch_millis}-{filename}``."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{now_ms}-{filename}"


def file_name(key: str) -> str:
    """The uploaded file name behind a key, without the upload timestamp."""
    return _EPOCH_PREFIX.sub("", display_name(key), count=1)


def upload_document(
    store: ObjectStorePort,
    order_id: str,
    filename: str,
    content: bytes,
    content_type: str | None = None,
) -> tuple[dict, IntakeOutcome]:
    """Store a document for an existing order and route its arrival.

    Raises NotFoundError if the order does not exist. Routing is the
    in-process counterpart of the bucket notification: a shipping document
    for an order in preparation marks it shipped.
    """
    lifecycle.get_order(order_id)

    key = document_key(filename)
    store.put(
        key,
        content,
        content_type=content_type,
        metadata={"order_id": order_id, "uploaded_at": datetime.now(UTC).isoformat()},
    )
    logger.info("Document uploaded", order_id=order_id, key=key, size=len(content))

    report = DocumentIntakeRouter(store).process([DocumentArrival(bucket=store.bucket, key=key)])
    return {"file_key": key, "order_id": order_id, "bucket": store.bucket}, report.outcomes[0]


async def _describe(store: ObjectStorePort, obj: dict) -> dict | None:
    try:
        head = await asyncio.to_thread(store.head, obj["key"])
    except OrdersError as exc:
        logger.error("Failed to read document metadata", key=obj["key"], error=exc.message)
        return None
    return {**obj, "order_id": order_id_from_metadata(head.get("metadata") or {})}


async def describe_documents(store: ObjectStorePort) -> list[dict]:
    """Every object in the bucket with its owning order id (None if unknown)."""
    objects = await asyncio.to_thread(store.list_objects)
    described = await asyncio.gather(*(_describe(store, obj) for obj in objects))
    return [
        {
            "key": doc["key"],
            "size": doc["size"],
            "last_modified": doc["last_modified"],
            "file_name": file_name(doc["key"]),
            "order_id": doc["order_id"],
        }
        for doc in described
        if doc is not None
    ]


async def list_documents(store: ObjectStorePort, order_id: str | None = None) -> list[dict]:
    """Documents in the bucket, restricted to one order when ``order_id`` is given."""
    documents = await describe_documents(store)
    if order_id:
        documents = [doc for doc in documents if doc["order_id"] == order_id]
    return documents


async def list_order_documents(store: ObjectStorePort, order_id: str) -> tuple[dict, list[dict]]:
    """Summary of an existing order plus its documents with public URLs.

    Raises NotFoundError if the order does not exist.
    """
    order = lifecycle.get_order(order_id)
    documents = await list_documents(store, order_id)
    summary = {"customer_name": order.customer_name, "customer_email": order.customer_email}
    return summary, [
        {
            "key": doc["key"],
            "size": doc["size"],
            "last_modified": doc["last_modified"],
            "file_name": file_name(doc["key"]),
            "url": store.url_for(doc["key"]),
        }
        for doc in documents
    ]
