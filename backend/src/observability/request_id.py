"""Request and tenant correlation context.

Context-aware request ID generation plus the tenant id of the request being
served, propagated across async operations so log records can carry both.
"""

import uuid
from contextvars import ContextVar
from typing import Optional

# Context variables (async-safe)
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
tenant_id_var: ContextVar[Optional[int]] = ContextVar("tenant_id", default=None)


def generate_request_id() -> str:
    """Generate a new unique request ID (UUID v4)."""
    return str(uuid.uuid4())


def get_request_id() -> str:
    """Get current request ID from context.

    Returns:
        str: Current request ID or "no-request-id" if not set
    """
    return request_id_var.get() or "no-request-id"


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def get_current_tenant_id() -> Optional[int]:
    """Tenant id bound to the current request, or None outside tenant context."""
    return tenant_id_var.get()


def set_current_tenant_id(tenant_id: Optional[int]) -> None:
    tenant_id_var.set(tenant_id)
