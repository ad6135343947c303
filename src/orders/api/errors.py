"""Exception handlers mapping domain errors to JSON HTTP responses.

Every error body has the shape ``{"error": <message>, "details": <extra>}``.
Dependency failures are sanitized: the raw transport message is logged, the
client sees a generic message, or a credentials hint for auth failures.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError
from starlette.exceptions import HTTPException as StarletteHTTPException

from orders.errors import (
    ConflictError,
    DependencyError,
    MalformedPayloadError,
    NotFoundError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

AUTH_HINT = "Storage credentials were rejected. Check the configured access keys and region."


def _error(status_code: int, error: str, details=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "details": details})


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("Request rejected", path=request.url.path, errors=exc.messages)
    return _error(400, "Validation failed", exc.messages)


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Request body rejected", path=request.url.path)
    details = [{"loc": list(err.get("loc", ())), "msg": err.get("msg")} for err in exc.errors()]
    return _error(400, "Validation failed", details)


async def _malformed_payload(request: Request, exc: MalformedPayloadError) -> JSONResponse:
    logger.info("Malformed payload", path=request.url.path, error=exc.message)
    return _error(400, exc.message)


async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error(404, exc.message, {"order_id": exc.order_id})


async def _object_not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return _error(404, "Not found")


async def _conflict(request: Request, exc: ConflictError) -> JSONResponse:
    logger.info("Transition rejected", order_id=exc.order_id, status=exc.current_status, target=exc.target_status)
    return _error(
        409,
        exc.message,
        {"order_id": exc.order_id, "current_status": exc.current_status, "target_status": exc.target_status},
    )


async def _dependency_error(request: Request, exc: DependencyError) -> JSONResponse:
    logger.error("Dependency failure", path=request.url.path, dependency=exc.dependency, error=exc.message)
    if exc.auth_failure:
        return _error(500, AUTH_HINT, {"dependency": exc.dependency})
    return _error(500, "A backing service failed", {"dependency": exc.dependency})


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path)
    return _error(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(MalformedPayloadError, _malformed_payload)
    app.add_exception_handler(NotFoundError, _not_found)
    app.add_exception_handler(ObjectNotFoundError, _object_not_found)
    app.add_exception_handler(ConflictError, _conflict)
    app.add_exception_handler(DependencyError, _dependency_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unexpected_error)
