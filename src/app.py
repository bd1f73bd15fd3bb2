"""Storefront FastAPI application.

Web server that processes cart, order and payment commands synchronously
via HTTP. Every request runs inside the storefront domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import os
import uuid
from contextlib import asynccontextmanager

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied.
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from storefront.domain import storefront
from storefront.utils.db import setup_db
from storefront.utils.logging import request_context

storefront.init()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # No-op for the memory provider; creates tables for sqlite/postgresql.
    setup_db(storefront)
    yield


def _allowed_origins() -> list[str]:
    origins = os.environ.get("CORS_ORIGIN", "*")
    return [origin.strip() for origin in origins.split(",") if origin.strip()]


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="E-commerce storefront: cart, checkout, orders and payments",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the storefront domain context for each request."""
    with storefront.domain_context():
        response = await call_next(request)
    return response


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """Bind request identifiers into the structlog context."""
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    with request_context(request_id, request.method, request.url.path):
        response = await call_next(request)
    response.headers["X-Request-Id"] = request_id
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from storefront.api import (  # noqa: E402
    cart_router,
    order_router,
    payment_router,
    product_router,
    register_error_handlers,
)

app.include_router(product_router)
app.include_router(cart_router)
app.include_router(order_router)
app.include_router(payment_router)

register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": storefront.name})
