"""Exception handlers mapping domain and gateway failures to HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from ordering.sheets.port import SheetStoreError

logger = structlog.get_logger(__name__)


def _messages(exc):
    return getattr(exc, "messages", None) or str(exc)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"error": _messages(exc)})

    @app.exception_handler(ObjectNotFoundError)
    async def not_found(request: Request, exc: ObjectNotFoundError):
        return JSONResponse(status_code=404, content={"error": _messages(exc)})

    @app.exception_handler(SheetStoreError)
    async def sheet_store_error(request: Request, exc: SheetStoreError):
        logger.error("Sheet store request failed", path=request.url.path, sheet=exc.sheet, error=str(exc))
        return JSONResponse(status_code=502, content={"error": str(exc)})
