"""Unit tests for the duplicate-number retry loop."""

import pytest

from domain.storage.errors import ConstraintKind, ConstraintViolation
from domain.storage.numbering import DocumentPrefix
from infrastructure.repositories.numbering import run_with_number_retry


def _duplicate():
    return ConstraintViolation("UNIQUE constraint failed: invoices.invoice_number", kind=ConstraintKind.UNIQUE)


class FlakyOperation:
    """Fails with the given errors, then returns ``result``."""

    def __init__(self, errors, result="INV-1-2025-0001"):
        self.errors = list(errors)
        self.result = result
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.result


@pytest.mark.asyncio
async def test_retries_duplicates_until_success():
    operation = FlakyOperation([_duplicate(), _duplicate()])

    result = await run_with_number_retry(operation, DocumentPrefix.INVOICE, attempts=5, backoff_base=0)

    assert result == "INV-1-2025-0001"
    assert operation.calls == 3


@pytest.mark.asyncio
async def test_gives_up_after_last_attempt():
    operation = FlakyOperation([_duplicate()] * 3)

    with pytest.raises(ConstraintViolation) as exc:
        await run_with_number_retry(operation, DocumentPrefix.INVOICE, attempts=3, backoff_base=0)

    assert exc.value.is_duplicate
    assert operation.calls == 3


@pytest.mark.asyncio
async def test_other_constraint_violations_are_not_retried():
    dangling = ConstraintViolation("FOREIGN KEY constraint failed", kind=ConstraintKind.FOREIGN_KEY)
    operation = FlakyOperation([dangling])

    with pytest.raises(ConstraintViolation) as exc:
        await run_with_number_retry(operation, DocumentPrefix.PURCHASE_ORDER, attempts=5, backoff_base=0)

    assert exc.value.is_dangling_reference
    assert operation.calls == 1


@pytest.mark.asyncio
async def test_single_attempt_runs_once():
    operation = FlakyOperation([])

    assert await run_with_number_retry(operation, DocumentPrefix.QUOTE, attempts=0) == "INV-1-2025-0001"
    assert operation.calls == 1
