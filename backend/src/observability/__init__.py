"""Observability module: structured logging, request correlation and metrics."""

from .logging_config import configure_logging, get_logger
from .metrics import (
    cascade_deletes_total,
    number_allocation_retries_total,
    stock_adjustments_total,
    storage_errors_total,
    storage_transaction_seconds,
    unknown_related_type_total,
)
from .middleware import RequestIDMiddleware
from .request_id import (
    generate_request_id,
    get_current_tenant_id,
    get_request_id,
    request_id_var,
    set_current_tenant_id,
    set_request_id,
    tenant_id_var,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Metrics
    "cascade_deletes_total",
    "number_allocation_retries_total",
    "stock_adjustments_total",
    "storage_errors_total",
    "storage_transaction_seconds",
    "unknown_related_type_total",
    # Request context
    "request_id_var",
    "tenant_id_var",
    "get_request_id",
    "set_request_id",
    "generate_request_id",
    "get_current_tenant_id",
    "set_current_tenant_id",
    # Middleware
    "RequestIDMiddleware",
]
