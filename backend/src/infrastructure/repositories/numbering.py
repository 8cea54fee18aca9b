"""Race-safe allocation of human-facing document numbers.

Allocation reads the highest issued sequence and inserts inside one store
transaction. Two concurrent allocations can still pick the same number; the
``(number, tenant_id)`` unique constraint rejects the loser, whose whole
transaction is rolled back and retried with exponential backoff.
"""

import asyncio
import logging
import random
from datetime import date
from typing import Any, Awaitable, Callable, Mapping, TypeVar, Union

from pydantic import BaseModel

from domain.storage.errors import ConstraintViolation, ValidationError
from domain.storage.numbering import (
    DocumentPrefix,
    document_year,
    format_document_number,
    next_sequence,
    number_stem,
)
from domain.storage.ports.record_store_port import StorageTransactionPort
from domain.storage.tenant_filter import TenantFilter
from observability.metrics import number_allocation_retries_total

from .base import EntityRepository, TenantArg

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def allocate_number(
    tx: StorageTransactionPort,
    model: type,
    column: str,
    prefix: DocumentPrefix,
    tenant_id: int,
    year: int,
) -> str:
    """Next free number for ``tenant_id`` and ``year`` as seen by ``tx``."""
    stem = number_stem(prefix, tenant_id, year)
    existing = await tx.records(model).values_with_prefix(column, stem, TenantFilter.for_tenant(tenant_id))
    return format_document_number(prefix, tenant_id, year, next_sequence(existing, stem))


async def run_with_number_retry(
    operation: Callable[[], Awaitable[T]],
    prefix: DocumentPrefix,
    attempts: int = 10,
    backoff_base: float = 0.01,
) -> T:
    """Run ``operation`` again while it fails on a duplicate number.

    ``operation`` must open its own transaction so each attempt starts clean.
    Other constraint violations propagate immediately.
    """
    attempts = max(1, attempts)
    for attempt in range(attempts - 1):
        try:
            return await operation()
        except ConstraintViolation as e:
            if not e.is_duplicate:
                raise
            number_allocation_retries_total.labels(prefix=prefix.value).inc()
            delay = backoff_base * (2 ** attempt) * (1 + random.random())
            logger.info(
                f"{prefix.value} number collision (attempt {attempt + 1}/{attempts}), retrying in {delay:.3f}s"
            )
            await asyncio.sleep(delay)
    return await operation()


class NumberedEntityRepository(EntityRepository):
    """Repository for documents carrying a human-facing number.

    Subclasses set ``number_column`` and ``number_prefix``. A number supplied
    by the caller is stored as given (one attempt); otherwise one is allocated
    from the issue date's year.
    """

    number_column: str = None
    number_prefix: DocumentPrefix = None

    async def create(self, data: Union[BaseModel, Mapping[str, Any]]):
        values = self._prepare_create(data)
        if values.get("issue_date") is None:
            values["issue_date"] = date.today()
        if values.get(self.number_column):
            async with self.store.transaction() as tx:
                return await self._insert(tx, values)

        async def attempt():
            async with self.store.transaction() as tx:
                return await self._insert_numbered(tx, values)

        return await run_with_number_retry(
            attempt,
            self.number_prefix,
            attempts=self.settings.NUMBER_ALLOCATION_ATTEMPTS,
            backoff_base=self.settings.NUMBER_ALLOCATION_BACKOFF,
        )

    async def get_by_number(self, number: str, tenant: TenantArg = None):
        return await self._find_one(tenant, **{self.number_column: number})

    async def insert_numbered_in(self, tx: StorageTransactionPort, data: Union[BaseModel, Mapping[str, Any]]):
        """Insert with a freshly allocated number inside the caller's transaction.

        Allocation conflicts surface as ConstraintViolation; the caller owns
        the retry (see ``run_with_number_retry``).
        """
        values = self._prepare_create(data)
        if values.get("issue_date") is None:
            values["issue_date"] = date.today()
        return await self._insert_numbered(tx, values)

    async def _insert_numbered(self, tx: StorageTransactionPort, values: Mapping[str, Any]):
        values = dict(values)
        if values.get("tenant_id") is None:
            raise ValidationError(f"tenant_id is required for {self.entity}", entity=self.entity, field="tenant_id")
        values[self.number_column] = await allocate_number(
            tx,
            self.model,
            self.number_column,
            self.number_prefix,
            values["tenant_id"],
            document_year(values["issue_date"]),
        )
        return await self._insert(tx, values)
