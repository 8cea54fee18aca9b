"""Tenant scoping checked on every tenant-owned repository, both backends.

A row created for tenant A must look missing to tenant B through every
generic operation: get, list_all, update and delete.
"""

from datetime import date, datetime

import pytest

from fixtures.entities import (
    make_attachment,
    make_customer,
    make_inventory_item,
    make_project,
    make_purchase_order,
    make_quote,
    make_supplier,
)

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]

EXPIRES = datetime(2030, 1, 1)


async def _user(storage, tenant):
    return await storage.users.create(
        {
            "tenant_id": tenant.id,
            "username": "sam",
            "password": "not-a-real-hash",
            "email": "sam@example.test",
            "full_name": "Sam Fitter",
        }
    )


async def _invitation(storage, tenant):
    inviter = await _user(storage, tenant)
    return await storage.user_invitations.create(
        {
            "tenant_id": tenant.id,
            "email": "new.starter@example.test",
            "invited_by": inviter.id,
            "invitation_token": "invite-token-1",
            "expires_at": EXPIRES,
        }
    )


async def _reset_token(storage, tenant):
    user = await _user(storage, tenant)
    return await storage.password_reset_tokens.create({"user_id": user.id, "token": "reset-1", "expires_at": EXPIRES})


async def _organization(storage, tenant):
    return await storage.organizations.create({"tenant_id": tenant.id, "name": "Workshop"})


async def _membership(storage, tenant):
    user = await _user(storage, tenant)
    organization = await _organization(storage, tenant)
    return await storage.user_organizations.create({"organization_id": organization.id, "user_id": user.id})


async def _quote_item(storage, tenant):
    quote = await make_quote(storage, tenant)
    return await storage.quote_items.create(
        {"quote_id": quote.id, "description": "Doors", "quantity": 4, "unit_price": 90, "total": 360}
    )


async def _invoice(storage, tenant):
    return await storage.invoices.create(
        {
            "tenant_id": tenant.id,
            "issue_date": date(2025, 3, 1),
            "due_date": date(2025, 3, 31),
            "subtotal": 500.0,
            "total": 600.0,
        }
    )


async def _invoice_item(storage, tenant):
    invoice = await _invoice(storage, tenant)
    return await storage.invoice_items.create(
        {"invoice_id": invoice.id, "description": "Deposit", "quantity": 1, "unit_price": 500, "total": 500}
    )


async def _catalog_item(storage, tenant):
    return await storage.catalog_items.create(
        {"tenant_id": tenant.id, "name": "Oak worktop", "description": "Solid oak, 40mm", "unit_price": 320.0}
    )


async def _employee(storage, tenant):
    return await storage.employees.create({"tenant_id": tenant.id, "full_name": "Sam Fitter"})


async def _timesheet(storage, tenant):
    employee = await _employee(storage, tenant)
    return await storage.timesheets.create(
        {"tenant_id": tenant.id, "employee_id": employee.id, "date": date(2025, 3, 10), "hours": 8}
    )


async def _survey(storage, tenant):
    project = await make_project(storage, tenant)
    return await storage.surveys.create(
        {"tenant_id": tenant.id, "project_id": project.id, "scheduled_date": date(2025, 4, 1)}
    )


async def _installation(storage, tenant):
    project = await make_project(storage, tenant)
    return await storage.installations.create(
        {"tenant_id": tenant.id, "project_id": project.id, "scheduled_date": date(2025, 5, 1)}
    )


async def _task_list(storage, tenant):
    project = await make_project(storage, tenant)
    return await storage.task_lists.create({"tenant_id": tenant.id, "project_id": project.id, "name": "Snags"})


async def _task(storage, tenant):
    task_list = await _task_list(storage, tenant)
    return await storage.tasks.create(
        {"tenant_id": tenant.id, "task_list_id": task_list.id, "description": "Fix hinge"}
    )


async def _expense(storage, tenant):
    return await storage.expenses.create(
        {
            "tenant_id": tenant.id,
            "description": "Van hire",
            "amount": 85.0,
            "date": date(2025, 3, 12),
            "category": "transport",
        }
    )


async def _purchase_order(storage, tenant):
    supplier = await make_supplier(storage, tenant)
    return await make_purchase_order(storage, tenant, supplier)


async def _purchase_order_item(storage, tenant):
    order = await _purchase_order(storage, tenant)
    return await storage.purchase_order_items.create(
        {"purchase_order_id": order.id, "description": "Oak", "quantity": 2, "unit_price": 50, "total": 100}
    )


async def _inventory_transaction(storage, tenant):
    item = await make_inventory_item(storage, tenant)
    return await storage.inventory_transactions.create(
        {"inventory_item_id": item.id, "transaction_type": "incoming", "quantity": 3}
    )


async def _attachment(storage, tenant):
    customer = await make_customer(storage, tenant)
    return await make_attachment(storage, tenant, "customer", customer.id)


# (repository attribute on Storage, builder, harmless update)
SCOPED_REPOSITORIES = [
    ("users", _user, {"full_name": "Renamed"}),
    ("user_invitations", _invitation, {"status": "revoked"}),
    ("password_reset_tokens", _reset_token, {"used": True}),
    ("organizations", _organization, {"description": "Renamed"}),
    ("user_organizations", _membership, {"role": "admin"}),
    ("customers", make_customer, {"notes": "Renamed"}),
    ("projects", make_project, {"description": "Renamed"}),
    ("quotes", make_quote, {"notes": "Renamed"}),
    ("quote_items", _quote_item, {"description": "Renamed"}),
    ("invoices", _invoice, {"notes": "Renamed"}),
    ("invoice_items", _invoice_item, {"description": "Renamed"}),
    ("catalog_items", _catalog_item, {"description": "Renamed"}),
    ("employees", _employee, {"notes": "Renamed"}),
    ("timesheets", _timesheet, {"notes": "Renamed"}),
    ("surveys", _survey, {"notes": "Renamed"}),
    ("installations", _installation, {"notes": "Renamed"}),
    ("task_lists", _task_list, {"name": "Renamed"}),
    ("tasks", _task, {"description": "Renamed"}),
    ("expenses", _expense, {"notes": "Renamed"}),
    ("suppliers", make_supplier, {"notes": "Renamed"}),
    ("purchase_orders", _purchase_order, {"notes": "Renamed"}),
    ("purchase_order_items", _purchase_order_item, {"description": "Renamed"}),
    ("inventory_items", make_inventory_item, {"notes": "Renamed"}),
    ("inventory_transactions", _inventory_transaction, {"notes": "Renamed"}),
    ("file_attachments", _attachment, {"description": "Renamed"}),
]


@pytest.mark.parametrize(
    "attribute,build,changes",
    SCOPED_REPOSITORIES,
    ids=[attribute for attribute, _, _ in SCOPED_REPOSITORIES],
)
async def test_other_tenant_sees_nothing(storage, tenant_a, tenant_b, attribute, build, changes):
    repository = getattr(storage, attribute)
    row = await build(storage, tenant_a)
    field = next(iter(changes))
    before = getattr(row, field)

    assert await repository.get(row.id, tenant_b.id) is None
    assert await repository.list_all(tenant_b.id) == []
    assert await repository.update(row.id, changes, tenant_b.id) is None
    assert await repository.delete(row.id, tenant_b.id) is False

    kept = await repository.get(row.id, tenant_a.id)
    assert kept is not None
    assert getattr(kept, field) == before


@pytest.mark.parametrize(
    "attribute,build,changes",
    SCOPED_REPOSITORIES,
    ids=[attribute for attribute, _, _ in SCOPED_REPOSITORIES],
)
async def test_owner_can_update(storage, tenant_a, attribute, build, changes):
    repository = getattr(storage, attribute)
    row = await build(storage, tenant_a)

    updated = await repository.update(row.id, changes, tenant_a.id)

    field, value = next(iter(changes.items()))
    assert getattr(updated, field) == value
    assert [r.id for r in await repository.list_all(tenant_a.id) if r.id == row.id] == [row.id]
