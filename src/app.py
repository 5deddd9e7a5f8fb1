"""Storefront FastAPI application.

Web server that serves the catalogue and processes checkout, wishlist, review
and lead commands synchronously via HTTP. Every ``/api`` request runs inside
the storefront domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"       → testing flag, in-memory providers
#   - "production" → PostgreSQL via DATABASE_URL
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.domain import storefront
from storefront.utils.logging import bind_request

storefront.init()

API_PREFIX = "/api"

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Furniture and interior-design storefront: catalogue, checkout, wishlist and leads",
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
    """Push the storefront domain context for each API request."""
    bind_request(request.method, request.url.path)
    if request.url.path.startswith(API_PREFIX):
        with storefront.domain_context():
            response = await call_next(request)
        return response
    # Outside the API (health check, docs) no domain is needed
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from storefront.api.handlers import register_exception_handlers  # noqa: E402
from storefront.catalogue.api import (  # noqa: E402
    category_router,
    featured_router,
    product_router,
    service_router,
)
from storefront.identity.api import webhook_router  # noqa: E402
from storefront.leads.api import lead_router  # noqa: E402
from storefront.ordering.api import cart_router, order_router, payment_router  # noqa: E402
from storefront.wishlist.api import wishlist_router  # noqa: E402

for router in (
    product_router,
    category_router,
    service_router,
    featured_router,
    order_router,
    payment_router,
    cart_router,
    wishlist_router,
    lead_router,
    webhook_router,
):
    app.include_router(router, prefix=API_PREFIX)

register_exception_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": {"name": storefront.name}})
