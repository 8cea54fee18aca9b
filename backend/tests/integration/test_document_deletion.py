"""Integration tests for deletes that take dependent rows with them."""

from datetime import date

import pytest

from domain.storage.errors import ConstraintViolation
from fixtures.entities import (
    make_attachment,
    make_inventory_item,
    make_project,
    make_purchase_order,
    make_supplier,
)

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


async def _invoice(storage, tenant, project=None):
    invoice = await storage.invoices.create(
        {
            "tenant_id": tenant.id,
            "project_id": project.id if project is not None else None,
            "issue_date": date(2025, 3, 1),
            "due_date": date(2025, 3, 31),
            "subtotal": 500.0,
            "total": 600.0,
        }
    )
    await storage.invoice_items.create(
        {"invoice_id": invoice.id, "description": "Deposit", "quantity": 1, "unit_price": 500, "total": 500}
    )
    return invoice


class TestInvoiceDeletion:

    async def test_removes_items_and_attachments(self, storage, tenant_a):
        invoice = await _invoice(storage, tenant_a)
        await make_attachment(storage, tenant_a, "invoice", invoice.id)

        assert await storage.invoices.delete(invoice.id, tenant_a.id) is True

        assert await storage.invoices.get(invoice.id) is None
        assert await storage.invoice_items.list_by_invoice(invoice.id) == []
        assert await storage.file_attachments.list_all(tenant_a.id) == []

    async def test_projects_stop_pointing_at_invoice(self, storage, tenant_a):
        project = await make_project(storage, tenant_a)
        invoice = await _invoice(storage, tenant_a, project)
        await storage.projects.update(
            project.id, {"deposit_invoice_id": invoice.id, "final_invoice_id": invoice.id}, tenant_a.id
        )

        await storage.invoices.delete(invoice.id, tenant_a.id)

        project = await storage.projects.get(project.id, tenant_a.id)
        assert (project.deposit_invoice_id, project.final_invoice_id) == (None, None)

    async def test_installation_deposit_link_is_released(self, storage, tenant_a):
        project = await make_project(storage, tenant_a)
        invoice = await _invoice(storage, tenant_a, project)
        installation = await storage.installations.create(
            {
                "tenant_id": tenant_a.id,
                "project_id": project.id,
                "scheduled_date": date(2025, 4, 1),
                "deposit_invoice_id": invoice.id,
            }
        )

        assert await storage.invoices.delete(invoice.id, tenant_a.id)

        assert (await storage.installations.get(installation.id)).deposit_invoice_id is None

    async def test_other_tenant_cannot_delete(self, storage, tenant_a, tenant_b):
        invoice = await _invoice(storage, tenant_a)

        assert await storage.invoices.delete(invoice.id, tenant_b.id) is False
        assert len(await storage.invoice_items.list_by_invoice(invoice.id, tenant_a.id)) == 1


class TestPurchaseOrderDeletion:

    async def test_keeps_stock_history_but_unlinks_it(self, storage, tenant_a):
        supplier = await make_supplier(storage, tenant_a)
        order = await make_purchase_order(storage, tenant_a, supplier)
        await storage.purchase_order_items.create(
            {"purchase_order_id": order.id, "description": "Oak", "quantity": 2, "unit_price": 50, "total": 100}
        )
        item = await make_inventory_item(storage, tenant_a)
        receipt = await storage.inventory_transactions.create(
            {
                "inventory_item_id": item.id,
                "transaction_type": "incoming",
                "quantity": 2,
                "purchase_order_id": order.id,
            }
        )

        assert await storage.purchase_orders.delete(order.id, tenant_a.id) is True

        assert await storage.purchase_order_items.list_by_purchase_order(order.id) == []
        kept = await storage.inventory_transactions.get(receipt.id, tenant_a.id)
        assert kept is not None
        assert kept.purchase_order_id is None
        assert (await storage.inventory_items.get(item.id)).current_stock == 12


class TestTaskListDeletion:

    async def test_removes_tasks_and_snagging_link(self, storage, tenant_a):
        project = await make_project(storage, tenant_a)
        task_list = await storage.task_lists.create({"tenant_id": tenant_a.id, "project_id": project.id, "name": "Snags"})
        task = await storage.tasks.create(
            {"tenant_id": tenant_a.id, "task_list_id": task_list.id, "description": "Fix hinge"}
        )
        await make_attachment(storage, tenant_a, "task", task.id)
        installation = await storage.installations.create(
            {
                "tenant_id": tenant_a.id,
                "project_id": project.id,
                "scheduled_date": date(2025, 4, 1),
                "snagging_task_list_id": task_list.id,
            }
        )

        assert await storage.task_lists.delete(task_list.id, tenant_a.id) is True

        assert await storage.tasks.list_by_task_list(task_list.id) == []
        assert await storage.file_attachments.list_all(tenant_a.id) == []
        assert (await storage.installations.get(installation.id)).snagging_task_list_id is None


class TestAttachmentCleanup:

    async def _survey(self, storage, tenant):
        project = await make_project(storage, tenant)
        return await storage.surveys.create(
            {"tenant_id": tenant.id, "project_id": project.id, "scheduled_date": date(2025, 4, 1)}
        )

    async def test_plain_delete_removes_attachments(self, storage, tenant_a):
        survey = await self._survey(storage, tenant_a)
        await make_attachment(storage, tenant_a, "survey", survey.id, file_name="old-site-photo.jpg")

        assert await storage.surveys.delete(survey.id, tenant_a.id) is True

        assert await storage.file_attachments.list_all(tenant_a.id) == []

    async def test_replacement_row_starts_without_attachments(self, storage, tenant_a):
        survey = await self._survey(storage, tenant_a)
        await make_attachment(storage, tenant_a, "survey", survey.id, file_name="old-site-photo.jpg")
        await storage.surveys.delete(survey.id, tenant_a.id)

        replacement = await self._survey(storage, tenant_a)

        assert await storage.file_attachments.list_by_related_entity("survey", replacement.id, tenant_a.id) == []

    async def test_legacy_spelling_is_removed_too(self, storage, tenant_a):
        supplier = await make_supplier(storage, tenant_a)
        await make_attachment(storage, tenant_a, "Supplier", supplier.id)

        assert await storage.suppliers.delete(supplier.id, tenant_a.id) is True

        assert await storage.file_attachments.list_all(tenant_a.id) == []

    async def test_other_tenant_delete_keeps_attachments(self, storage, tenant_a, tenant_b):
        survey = await self._survey(storage, tenant_a)
        await make_attachment(storage, tenant_a, "survey", survey.id)

        assert await storage.surveys.delete(survey.id, tenant_b.id) is False

        assert len(await storage.file_attachments.list_all(tenant_a.id)) == 1

    async def test_refused_delete_keeps_attachments(self, storage, tenant_a):
        item = await make_inventory_item(storage, tenant_a)
        await storage.inventory_transactions.create(
            {"inventory_item_id": item.id, "transaction_type": "incoming", "quantity": 1}
        )
        await make_attachment(storage, tenant_a, "inventory_item", item.id)

        with pytest.raises(ConstraintViolation):
            await storage.inventory_items.delete(item.id, tenant_a.id)

        assert len(await storage.file_attachments.list_all(tenant_a.id)) == 1


class TestSecondaryLookups:

    async def test_lookups_by_name_sku_and_status(self, storage, tenant_a, tenant_b):
        supplier = await make_supplier(storage, tenant_a, name="Timber Supplies")
        item = await make_inventory_item(storage, tenant_a, current_stock=2, reorder_point=5)
        project = await make_project(storage, tenant_a)

        assert (await storage.suppliers.get_by_name("Timber Supplies", tenant_a.id)).id == supplier.id
        assert await storage.suppliers.get_by_name("Timber Supplies", tenant_b.id) is None
        assert (await storage.inventory_items.get_by_sku("OAK-01", tenant_a.id)).id == item.id
        assert [i.id for i in await storage.inventory_items.list_low_stock(tenant_a.id)] == [item.id]
        assert [p.id for p in await storage.projects.list_by_status("pending", tenant_a.id)] == [project.id]

    async def test_catalog_lookups(self, storage, tenant_a, tenant_b):
        entry = await storage.catalog_items.create(
            {
                "tenant_id": tenant_a.id,
                "name": "Oak worktop",
                "description": "Solid oak, 40mm",
                "unit_price": 320.0,
                "category": "worktops",
            }
        )

        assert [c.id for c in await storage.catalog_items.list_by_category("worktops", tenant_a.id)] == [entry.id]
        assert await storage.catalog_items.list_by_category("worktops", tenant_b.id) == []
