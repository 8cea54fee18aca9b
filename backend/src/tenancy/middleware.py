"""Middleware for tenant context extraction.

Resolves the tenant of each HTTP request and attaches it to
``request.state.tenant_id`` (and to the logging context). Resolution order:
``request.state.tenant_id`` already set by an authentication layer, then the
``X-Tenant-ID`` header, then a ``tenant-<id>.`` host prefix, then the
``tenantId`` query parameter.

The middleware never rejects a request; ``dependencies.get_tenant_filter``
turns a missing tenant into a 400 for tenant-facing routes.
"""

import logging
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from observability.request_id import set_current_tenant_id

logger = logging.getLogger(__name__)

TENANT_HEADER = "X-Tenant-ID"


def _parse_tenant_id(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    return value if value > 0 else None


def resolve_tenant_id(request: Request) -> Optional[int]:
    existing = getattr(request.state, "tenant_id", None)
    if isinstance(existing, int):
        return existing

    tenant_id = _parse_tenant_id(request.headers.get(TENANT_HEADER))
    if tenant_id is not None:
        return tenant_id

    hostname = request.url.hostname or ""
    first_label = hostname.split(".")[0]
    if first_label.startswith("tenant-"):
        tenant_id = _parse_tenant_id(first_label[len("tenant-"):])
        if tenant_id is not None:
            return tenant_id

    return _parse_tenant_id(request.query_params.get("tenantId"))


class TenantContextMiddleware(BaseHTTPMiddleware):
    """Attach the resolved tenant id (or None) to request state.

    Usage:
        app.add_middleware(TenantContextMiddleware)
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        tenant_id = resolve_tenant_id(request)
        request.state.tenant_id = tenant_id
        set_current_tenant_id(tenant_id)
        if tenant_id is not None:
            logger.debug(f"Resolved tenant {tenant_id} for {request.url.path}")
        return await call_next(request)


def get_tenant_id_from_request(request: Request) -> Optional[int]:
    """Tenant id from request state (None if middleware not installed or unresolved)."""
    return getattr(request.state, "tenant_id", None)
