"""BizOps Backend - Main FastAPI Application

Multi-tenant field-service business management (projects, quotes, invoices,
procurement, inventory).

This module creates and configures the FastAPI application, including:
- Storage lifecycle (built at startup, closed at shutdown)
- Middleware (request ID correlation, tenant resolution)
- Storage exception handlers
- Health and observability endpoints
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from config import Settings, get_settings
from dependencies import register_storage_exception_handlers
from observability.logging_config import configure_logging
from observability.middleware import RequestIDMiddleware
from observability.router import router as observability_router
from projects.router import router as projects_router
from quotes.router import router as quotes_router
from storage import Storage, create_storage
from tenancy.middleware import TenantContextMiddleware

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, storage: Optional[Storage] = None) -> FastAPI:
    """Application factory.

    Args:
        settings: Settings to use (defaults to environment settings)
        storage: Prebuilt storage; when given, the app does not create or close one

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)
        logger.info("BizOps API starting up...")
        logger.info(f"Environment: {settings.ENVIRONMENT}")

        app.state.storage = storage if storage is not None else await create_storage(settings)

        yield

        logger.info("BizOps API shutting down...")
        if storage is None:
            await app.state.storage.close()

    app = FastAPI(
        title="BizOps API",
        description="Multi-tenant business management backend",
        version="0.1.0",
        docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
        redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
        openapi_url="/openapi.json" if settings.ENVIRONMENT != "production" else None,
        lifespan=lifespan,
    )

    # =========================================================================
    # MIDDLEWARE
    # =========================================================================

    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(TenantContextMiddleware)

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    register_storage_exception_handlers(app)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning(
            f"Validation error on {request.method} {request.url.path}",
            extra={"errors": exc.errors()},
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": "validation_error",
                "message": "Request validation failed",
                "details": exc.errors(),
            },
        )

    # =========================================================================
    # ROUTERS
    # =========================================================================

    app.include_router(observability_router)
    app.include_router(projects_router, prefix="/api/v1")
    app.include_router(quotes_router, prefix="/api/v1")

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, Any]:
        return {"name": "BizOps API", "version": "0.1.0", "status": "running"}

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:create_app", factory=True, host="0.0.0.0", port=8000)
