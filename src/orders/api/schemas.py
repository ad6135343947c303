"""Pydantic request/response schemas for the Orders API.

These are external contracts, separate from the internal Protean commands.
Request bodies accept snake_case names and their camelCase equivalents.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CreateOrderRequest(BaseModel):
    """Fields are optional here; the Order aggregate reports what is missing."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "customer_email": "maria@example.com",
                    "customer_name": "Maria Silva",
                    "amount": 149.9,
                }
            ]
        },
    )

    customer_email: str | None = Field(None, alias="customerEmail")
    customer_name: str | None = Field(None, alias="customerName")
    amount: Any = None
    status: str | None = None
    shipment_reference: str | None = Field(None, alias="shipmentReference")
    shipped_at: datetime | None = Field(None, alias="shippedAt")


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderSchema(BaseModel):
    order_id: str
    customer_email: str
    customer_name: str
    amount: float
    created_at: str | None = None
    status: str
    shipment_reference: str | None = None
    shipped_at: str | None = None


class OrderResponse(BaseModel):
    message: str
    order: OrderSchema


class OrderListResponse(BaseModel):
    total: int
    orders: list[OrderSchema]


class UploadResponse(BaseModel):
    message: str
    file_key: str
    order_id: str
    bucket: str
    intake_status: str


class DocumentSchema(BaseModel):
    key: str
    size: int
    last_modified: str
    file_name: str
    order_id: str | None = None
    url: str | None = None


class OrderSummarySchema(BaseModel):
    customer_name: str
    customer_email: str


class OrderDocumentsResponse(BaseModel):
    order_id: str
    order: OrderSummarySchema
    total: int
    documents: list[DocumentSchema]


class DocumentListResponse(BaseModel):
    total: int
    bucket: str
    order_id: str | None = None
    documents: list[DocumentSchema]


class BucketSchema(BaseModel):
    name: str
    creation_date: str | None = None


class BucketListResponse(BaseModel):
    total: int
    buckets: list[BucketSchema]
