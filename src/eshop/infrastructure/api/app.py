"""eshop FastAPI application.

Usage:
    uvicorn eshop.infrastructure.api.app:app --host 0.0.0.0 --port 8000

or ``eshop serve``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from eshop.domain.exceptions import (
    EntityNotFoundError,
    InventoryError,
    PersistenceFailure,
    ValidationError,
)
from eshop.infrastructure import bootstrap
from eshop.infrastructure.api.routes import order_router, product_router
from eshop.infrastructure.logging import configure_logging

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------
async def _inventory_error(request: Request, exc: InventoryError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"error": str(exc)})


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"errors": exc.messages})


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [
        f"{'.'.join(str(part) for part in error['loc'] if part != 'body')}: {error['msg']}"
        for error in exc.errors()
    ]
    return JSONResponse(status_code=422, content={"errors": messages})


async def _not_found(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": str(exc)})


async def _persistence_failure(request: Request, exc: PersistenceFailure) -> JSONResponse:
    logger.error("Request failed in storage", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error", path=request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
def create_app() -> FastAPI:
    configure_logging(bootstrap.settings())

    app = FastAPI(
        title="eshop API",
        description="Product lookup and order placement",
    )

    app.add_exception_handler(InventoryError, _inventory_error)
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(EntityNotFoundError, _not_found)
    app.add_exception_handler(PersistenceFailure, _persistence_failure)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unexpected_error)

    app.include_router(order_router)
    app.include_router(product_router)

    @app.get("/up")
    async def health():
        return JSONResponse(content={"status": "ok"})

    return app


app = create_app()
