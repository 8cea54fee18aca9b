"""Integration tests for per-tenant, per-year document numbering."""

import asyncio
from datetime import date

import pytest

from domain.storage.errors import ConstraintViolation, ValidationError
from fixtures.entities import make_purchase_order, make_quote, make_supplier

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


class TestSequentialNumbers:

    async def test_numbers_increase_per_tenant(self, storage, tenant_a, tenant_b):
        supplier_a = await make_supplier(storage, tenant_a)
        supplier_b = await make_supplier(storage, tenant_b)

        first = await make_purchase_order(storage, tenant_a, supplier_a)
        second = await make_purchase_order(storage, tenant_a, supplier_a)
        other = await make_purchase_order(storage, tenant_b, supplier_b)

        assert first.po_number == f"PO-{tenant_a.id}-2025-0001"
        assert second.po_number == f"PO-{tenant_a.id}-2025-0002"
        assert other.po_number == f"PO-{tenant_b.id}-2025-0001"

    async def test_year_comes_from_issue_date(self, storage, tenant_a):
        supplier = await make_supplier(storage, tenant_a)

        await make_purchase_order(storage, tenant_a, supplier, issue_date=date(2024, 12, 31))
        new_year = await make_purchase_order(storage, tenant_a, supplier, issue_date=date(2025, 1, 1))

        assert new_year.po_number == f"PO-{tenant_a.id}-2025-0001"

    async def test_issue_date_defaults_to_today(self, storage, tenant_a):
        quote = await storage.quotes.create({"tenant_id": tenant_a.id, "subtotal": 10, "total": 10})

        assert quote.issue_date == date.today()
        assert quote.quote_number == f"QUO-{tenant_a.id}-{date.today().year}-0001"

    async def test_sequence_follows_highest_number(self, storage, tenant_a):
        await make_quote(storage, tenant_a, quote_number=f"QUO-{tenant_a.id}-2025-0009")

        quote = await make_quote(storage, tenant_a)

        assert quote.quote_number == f"QUO-{tenant_a.id}-2025-0010"

    async def test_lookup_by_number(self, storage, tenant_a, tenant_b):
        quote = await make_quote(storage, tenant_a)

        assert (await storage.quotes.get_by_number(quote.quote_number, tenant_a.id)).id == quote.id
        assert await storage.quotes.get_by_number(quote.quote_number, tenant_b.id) is None


class TestSuppliedNumbers:

    async def test_supplied_number_is_kept(self, storage, tenant_a):
        quote = await make_quote(storage, tenant_a, quote_number="Q-MANUAL-1")

        assert quote.quote_number == "Q-MANUAL-1"

    async def test_duplicate_supplied_number_is_rejected(self, storage, tenant_a):
        await make_quote(storage, tenant_a, quote_number="Q-MANUAL-1")

        with pytest.raises(ConstraintViolation) as exc:
            await make_quote(storage, tenant_a, quote_number="Q-MANUAL-1")

        assert exc.value.is_duplicate

    async def test_same_number_in_two_tenants(self, storage, tenant_a, tenant_b):
        await make_quote(storage, tenant_a, quote_number="Q-SHARED")

        assert (await make_quote(storage, tenant_b, quote_number="Q-SHARED")).quote_number == "Q-SHARED"


class TestConcurrentAllocation:

    async def test_parallel_creates_get_distinct_numbers(self, storage, tenant_a):
        supplier = await make_supplier(storage, tenant_a)

        orders = await asyncio.gather(*(make_purchase_order(storage, tenant_a, supplier) for _ in range(5)))

        numbers = sorted(order.po_number for order in orders)
        assert numbers == [f"PO-{tenant_a.id}-2025-{seq:04d}" for seq in range(1, 6)]
        assert len(await storage.purchase_orders.list_all(tenant_a.id)) == 5


class TestCallerTransactions:

    async def test_document_and_lines_in_one_transaction(self, storage, tenant_a):
        async with storage.record_store.transaction() as tx:
            invoice = await storage.invoices.insert_numbered_in(
                tx,
                {"tenant_id": tenant_a.id, "issue_date": date(2025, 6, 1), "due_date": date(2025, 7, 1),
                 "subtotal": 80, "total": 80},
            )
            await storage.invoice_items.insert_in(
                tx, {"invoice_id": invoice.id, "description": "Hinges", "quantity": 8, "unit_price": 10, "total": 80}
            )

        assert invoice.invoice_number == f"INV-{tenant_a.id}-2025-0001"
        [item] = await storage.invoice_items.list_by_invoice(invoice.id, tenant_a.id)
        assert item.tenant_id == tenant_a.id

    async def test_failed_transaction_gives_the_number_back(self, storage, tenant_a):
        with pytest.raises(RuntimeError):
            async with storage.record_store.transaction() as tx:
                await storage.invoices.insert_numbered_in(
                    tx,
                    {"tenant_id": tenant_a.id, "issue_date": date(2025, 6, 1), "due_date": date(2025, 7, 1),
                     "subtotal": 80, "total": 80},
                )
                raise RuntimeError("line items rejected")

        assert await storage.invoices.list_all(tenant_a.id) == []
        retried = await storage.invoices.create(
            {"tenant_id": tenant_a.id, "issue_date": date(2025, 6, 1), "due_date": date(2025, 7, 1),
             "subtotal": 80, "total": 80}
        )
        assert retried.invoice_number == f"INV-{tenant_a.id}-2025-0001"

    async def test_caller_transaction_still_validates_input(self, storage, tenant_a):
        async with storage.record_store.transaction() as tx:
            with pytest.raises(ValidationError):
                await storage.invoice_items.insert_in(tx, {"invoice_id": 1, "colour": "oak"})
