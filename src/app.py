"""Apparel storefront FastAPI application.

Web server that processes commands synchronously via HTTP. Every request
under a domain route runs inside the apparel domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from pyproject.toml:
#   - "test"       → in-memory stores, synchronous processing
#   - "production" → SQL database from DATABASE_URL
from apparel.domain import apparel  # noqa: E402
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from apparel.api import admin_router, storefront_router, webhook_router

apparel.init()

_DOMAIN_PREFIXES = ("/stores", "/admin", "/webhooks")

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Apparel Store API",
    description="Apparel storefront: catalog, cart pricing, checkout and payment invoices",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the apparel domain context for domain routes."""
    if request.url.path.startswith(_DOMAIN_PREFIXES):
        with apparel.domain_context():
            response = await call_next(request)
        return response
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

app.include_router(storefront_router)
app.include_router(admin_router)
app.include_router(webhook_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domain": apparel.name,
        }
    )
