"""Error envelope for the HTTP layer.

Every failure is rendered as `{"success": false, "message": ...}`. In
development the formatted traceback is added under `stack`.
"""

import os
import traceback

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.errors import ForbiddenError, PaymentGatewayError, WebhookSignatureError

logger = structlog.get_logger(__name__)

NOT_FOUND_ROUTE_MESSAGE = "The Requested Url Does Not Exist"


def error_message(exc: Exception) -> str:
    """Flatten an exception into a single human-readable message."""
    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict):
        parts = []
        for errors in messages.values():
            errors = errors if isinstance(errors, list | tuple) else [errors]
            parts.append(", ".join(str(error) for error in errors))
        return "; ".join(parts)
    if messages:
        return str(messages)
    if exc.args:
        return str(exc.args[0])
    return exc.__class__.__name__


def error_response(status_code: int, exc: Exception, message: str | None = None) -> JSONResponse:
    content = {"success": False, "message": message or error_message(exc)}
    if os.environ.get("PROTEAN_ENV", "development").lower() == "development":
        content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=status_code, content=content)


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return error_response(400, exc)


async def _invalid_operation(request: Request, exc: InvalidOperationError) -> JSONResponse:
    return error_response(400, exc)


async def _forbidden(request: Request, exc: ForbiddenError) -> JSONResponse:
    return error_response(403, exc)


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return error_response(404, exc)


async def _signature_failed(request: Request, exc: WebhookSignatureError) -> JSONResponse:
    logger.warning("webhook_signature_rejected", path=request.url.path, reason=error_message(exc))
    return error_response(400, exc, message=f"Webhook Error: {error_message(exc)}")


async def _gateway_failed(request: Request, exc: PaymentGatewayError) -> JSONResponse:
    logger.error("payment_gateway_failed", path=request.url.path, reason=error_message(exc))
    return error_response(500, exc)


async def _request_invalid(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()]
    return error_response(400, exc, message="; ".join(details) or "Invalid request")


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = NOT_FOUND_ROUTE_MESSAGE if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"success": False, "message": message})


async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path, method=request.method)
    return error_response(500, exc, message="Internal Server Error")


def register_error_handlers(app: FastAPI) -> None:
    """Map domain errors to HTTP status codes on `app`."""
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(InvalidOperationError, _invalid_operation)
    app.add_exception_handler(ForbiddenError, _forbidden)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(WebhookSignatureError, _signature_failed)
    app.add_exception_handler(PaymentGatewayError, _gateway_failed)
    app.add_exception_handler(RequestValidationError, _request_invalid)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unexpected)
