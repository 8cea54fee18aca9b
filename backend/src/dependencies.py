"""Global FastAPI dependencies for storage access and tenant scoping.

This module provides:
- get_storage: The Storage built at startup (kept on app.state)
- get_tenant_filter: TenantFilter for the request's tenant (400 when missing)
- require_found: Turn a storage "not found" result into a 404
- register_storage_exception_handlers: Map storage errors to HTTP responses

Tenant-facing endpoints must scope every storage call with get_tenant_filter.
"""

import logging
from typing import Optional, TypeVar

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from domain.storage.errors import ConstraintViolation, DeletionBlocked, StorageError, ValidationError
from domain.storage.tenant_filter import TenantFilter
from storage import Storage
from tenancy.middleware import get_tenant_id_from_request

logger = logging.getLogger(__name__)

T = TypeVar("T")


def get_storage(request: Request) -> Storage:
    """Storage instance created by the application lifespan handler."""
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Storage is not initialized",
        )
    return storage


def get_tenant_filter(request: Request) -> TenantFilter:
    """Tenant scope for the current request.

    Raises:
        HTTPException 400: No tenant could be resolved for the request
    """
    tenant_id = get_tenant_id_from_request(request)
    if tenant_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Tenant context required",
        )
    return TenantFilter.for_tenant(tenant_id)


def require_found(result: Optional[T], entity: str = "Resource") -> T:
    """Return ``result`` or raise 404.

    Missing rows and rows of other tenants look the same to the client.
    """
    if result is None or result is False:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{entity} not found")
    return result


def register_storage_exception_handlers(app: FastAPI) -> None:
    """Install handlers mapping the storage error taxonomy onto HTTP statuses.

    ValidationError -> 400, ConstraintViolation -> 409, StorageError -> 500.
    """

    @app.exception_handler(ValidationError)
    async def storage_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        logger.warning(
            f"Rejected input on {request.method} {request.url.path}: {exc.message}",
            extra={"entity": exc.entity},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "validation_error", "message": exc.message, "field": exc.field},
        )

    @app.exception_handler(ConstraintViolation)
    async def constraint_violation_handler(request: Request, exc: ConstraintViolation) -> JSONResponse:
        logger.warning(
            f"Constraint violation on {request.method} {request.url.path}: {exc.message}",
            extra={"entity": exc.entity},
        )
        if isinstance(exc, DeletionBlocked):
            content = {"error": "deletion_blocked", "message": exc.reason}
        else:
            content = {"error": "constraint_violation", "kind": exc.kind.value, "message": exc.message}
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=content)

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
        logger.error(
            f"Storage error on {request.method} {request.url.path}: {exc.message}",
            extra={"entity": exc.entity},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "storage_error", "message": "A storage error occurred"},
        )
