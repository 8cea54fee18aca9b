"""Metrics around record store transactions, shared by both adapters."""

import time
from contextlib import asynccontextmanager

from domain.storage.errors import ConstraintViolation, StorageError, ValidationError
from observability.metrics import storage_errors_total, storage_transaction_seconds


def error_kind(exc: StorageError) -> str:
    if isinstance(exc, ConstraintViolation):
        return exc.kind.value
    if isinstance(exc, ValidationError):
        return "validation"
    return "storage"


@asynccontextmanager
async def instrumented(backend: str):
    """Time the enclosed transaction and count the storage error it ends with, if any."""
    started = time.perf_counter()
    try:
        yield
    except StorageError as exc:
        storage_errors_total.labels(backend=backend, kind=error_kind(exc)).inc()
        raise
    finally:
        storage_transaction_seconds.labels(backend=backend).observe(time.perf_counter() - started)
