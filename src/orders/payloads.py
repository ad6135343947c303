"""Decoding of inbound invocation payloads.

Each event-driven entry point receives loosely shaped input: a body that may
be a dict or a JSON string, storage notifications with URL-encoded keys, and
so on. Every payload goes through exactly one decode function here, which
returns typed objects or raises MalformedPayloadError.
"""

import json
from typing import Any
from urllib.parse import unquote_plus

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from orders.errors import MalformedPayloadError


class AdvanceRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_id: str = Field(alias="orderId", min_length=1)


class ChangeRecord(BaseModel):
    """A before/after pair of order images. ``old_image`` is None for inserts."""

    model_config = ConfigDict(populate_by_name=True)

    old_image: dict[str, Any] | None = Field(default=None, alias="oldImage")
    new_image: dict[str, Any] = Field(alias="newImage")


class DocumentArrival(BaseModel):
    bucket: str
    key: str


def _load(payload: Any, what: str) -> Any:
    if isinstance(payload, (bytes, bytearray)):
        payload = payload.decode("utf-8")
    if isinstance(payload, str):
        try:
            return json.loads(payload)
        except json.JSONDecodeError as exc:
            raise MalformedPayloadError(f"{what} is not valid JSON: {exc.msg}") from None
    return payload


def _records(payload: Any, what: str) -> list:
    data = _load(payload, what)
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        records = data.get("records", data.get("Records"))
        if isinstance(records, list):
            return records
    raise MalformedPayloadError(f"{what} must be a list of records or an object with 'records'")


def decode_advance_request(payload: Any) -> AdvanceRequest:
    """Decode ``{"order_id": ...}``, either as a dict, a JSON string, or wrapped in ``body``."""
    data = _load(payload, "Advance request")
    if isinstance(data, dict) and "body" in data:
        data = _load(data["body"], "Advance request body")
    if not isinstance(data, dict):
        raise MalformedPayloadError("Advance request must be a JSON object")
    try:
        return AdvanceRequest.model_validate(data)
    except PydanticValidationError as exc:
        raise MalformedPayloadError(f"Advance request is missing order_id ({exc.error_count()} error(s))") from None


def decode_change_records(payload: Any) -> list[ChangeRecord]:
    records = []
    for index, raw in enumerate(_records(payload, "Change batch")):
        try:
            records.append(ChangeRecord.model_validate(raw))
        except PydanticValidationError:
            raise MalformedPayloadError(f"Change record {index} must carry a new_image object") from None
    return records


def decode_document_arrivals(payload: Any) -> list[DocumentArrival]:
    """Decode plain ``{"bucket", "key"}`` records or storage notification records.

    Storage notifications URL-encode object keys, with ``+`` standing for a
    space; those keys are decoded here.
    """
    arrivals = []
    for index, raw in enumerate(_records(payload, "Document batch")):
        if not isinstance(raw, dict):
            raise MalformedPayloadError(f"Document record {index} must be an object")
        if "s3" in raw:
            try:
                bucket = raw["s3"]["bucket"]["name"]
                key = unquote_plus(raw["s3"]["object"]["key"])
            except (KeyError, TypeError):
                raise MalformedPayloadError(f"Document record {index} has no bucket name or object key") from None
            raw = {"bucket": bucket, "key": key}
        try:
            arrivals.append(DocumentArrival.model_validate(raw))
        except PydanticValidationError:
            raise MalformedPayloadError(f"Document record {index} must carry bucket and key") from None
    return arrivals
