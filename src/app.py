"""Cookie storefront FastAPI application.

Processes commands synchronously via HTTP. Every request runs inside the
ordering domain context and carries a request id in its log context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from uuid import uuid4

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ordering.domain import ordering  # noqa: E402
from ordering.utils.logging import add_context, clear_context

ordering.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Cookie Storefront API",
    description="Cookie orders, prize wheel and staff back office",
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
    """Push the ordering domain context and bind request log context."""
    request_id = request.headers.get("x-request-id") or uuid4().hex[:12]
    add_context(request_id=request_id, path=request.url.path, method=request.method)
    try:
        with ordering.domain_context():
            response = await call_next(request)
    finally:
        clear_context()
    response.headers["X-Request-ID"] = request_id
    return response


# ---------------------------------------------------------------------------
# Routers and error handlers
# ---------------------------------------------------------------------------
from backoffice.api import router as staff_router  # noqa: E402
from notifications.api.routes import router as notifications_router  # noqa: E402
from ordering.api.errors import register_error_handlers  # noqa: E402
from ordering.api.routes import catalog_router, order_router  # noqa: E402

app.include_router(catalog_router)
app.include_router(order_router)
app.include_router(notifications_router)
app.include_router(staff_router)

register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {"ordering": {"name": ordering.name}},
        }
    )
