"""Integration tests creating every entity from its pydantic insert schema."""

from datetime import date, datetime

import pytest

from fixtures.entities import make_customer, make_inventory_item, make_project, make_quote, make_supplier
from schemas import (
    CatalogItemCreate,
    CompanySettingsCreate,
    CustomerCreate,
    EmployeeCreate,
    ExpenseCreate,
    FileAttachmentCreate,
    InstallationCreate,
    InventoryItemCreate,
    InventoryTransactionCreate,
    InvoiceCreate,
    InvoiceItemCreate,
    OrganizationCreate,
    PasswordResetTokenCreate,
    ProjectCreate,
    PurchaseOrderCreate,
    PurchaseOrderItemCreate,
    QuoteCreate,
    QuoteItemCreate,
    SupplierCreate,
    SurveyCreate,
    SystemSettingsCreate,
    TaskCreate,
    TaskListCreate,
    TenantCreate,
    TimesheetCreate,
    UserCreate,
    UserInvitationCreate,
    UserOrganizationCreate,
)

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


async def _user(storage, tenant):
    return await storage.users.create(
        UserCreate(
            tenant_id=tenant.id,
            username="sam",
            password="not-a-real-hash",
            email="sam@example.test",
            full_name="Sam Fitter",
        )
    )


async def _invoice(storage, tenant):
    return await storage.invoices.create(
        InvoiceCreate(tenant_id=tenant.id, issue_date=date(2025, 3, 1), due_date=date(2025, 3, 31), total=600.0)
    )


async def _task_list(storage, tenant):
    project = await make_project(storage, tenant)
    return await storage.task_lists.create(TaskListCreate(tenant_id=tenant.id, project_id=project.id, name="Snags"))


async def _purchase_order(storage, tenant):
    supplier = await make_supplier(storage, tenant)
    return await storage.purchase_orders.create(
        PurchaseOrderCreate(tenant_id=tenant.id, supplier_id=supplier.id, issue_date=date(2025, 3, 1), total=120.0)
    )


# Each case returns (repository attribute on Storage, insert schema)


async def tenant_case(storage, tenant):
    return "tenants", TenantCreate(name="Cedar Joinery", subdomain="cedar", plan="pro")


async def user_case(storage, tenant):
    return "users", UserCreate(
        tenant_id=tenant.id, username="lee", password="not-a-real-hash", email="lee@example.test", full_name="Lee Cole"
    )


async def invitation_case(storage, tenant):
    inviter = await _user(storage, tenant)
    return "user_invitations", UserInvitationCreate(
        tenant_id=tenant.id,
        email="new.starter@example.test",
        invited_by=inviter.id,
        invitation_token="invite-token-1",
        expires_at=datetime(2030, 1, 1),
    )


async def reset_token_case(storage, tenant):
    user = await _user(storage, tenant)
    return "password_reset_tokens", PasswordResetTokenCreate(
        user_id=user.id, token="reset-1", expires_at=datetime(2030, 1, 1)
    )


async def organization_case(storage, tenant):
    return "organizations", OrganizationCreate(tenant_id=tenant.id, name="  Workshop ", description="Main site")


async def membership_case(storage, tenant):
    user = await _user(storage, tenant)
    organization = await storage.organizations.create(OrganizationCreate(tenant_id=tenant.id, name="Workshop"))
    return "user_organizations", UserOrganizationCreate(user_id=user.id, organization_id=organization.id, role="admin")


async def customer_case(storage, tenant):
    return "customers", CustomerCreate(tenant_id=tenant.id, name="Jane Doe", email="jane@example.test", city="Leeds")


async def project_case(storage, tenant):
    customer = await make_customer(storage, tenant)
    return "projects", ProjectCreate(
        tenant_id=tenant.id, name="Kitchen refit", customer_id=customer.id, budget=12000.0, deadline=date(2025, 9, 1)
    )


async def quote_case(storage, tenant):
    project = await make_project(storage, tenant)
    return "quotes", QuoteCreate(
        tenant_id=tenant.id, project_id=project.id, issue_date=date(2025, 3, 1), subtotal=1000.0, total=1200.0
    )


async def quote_item_case(storage, tenant):
    quote = await make_quote(storage, tenant)
    return "quote_items", QuoteItemCreate(quote_id=quote.id, description="Doors", quantity=4, unit_price=90, total=360)


async def invoice_case(storage, tenant):
    return "invoices", InvoiceCreate(
        tenant_id=tenant.id, issue_date=date(2025, 3, 1), due_date=date(2025, 3, 31), subtotal=500.0, total=600.0
    )


async def invoice_item_case(storage, tenant):
    invoice = await _invoice(storage, tenant)
    return "invoice_items", InvoiceItemCreate(
        invoice_id=invoice.id, description="Deposit", quantity=1, unit_price=500, total=500
    )


async def catalog_item_case(storage, tenant):
    return "catalog_items", CatalogItemCreate(
        tenant_id=tenant.id, name="Oak worktop", description="Solid oak, 40mm", unit_price=320.0, category="worktops"
    )


async def employee_case(storage, tenant):
    return "employees", EmployeeCreate(tenant_id=tenant.id, full_name="Sam Fitter", hourly_rate=18.5)


async def timesheet_case(storage, tenant):
    employee = await storage.employees.create(EmployeeCreate(tenant_id=tenant.id, full_name="Sam Fitter"))
    return "timesheets", TimesheetCreate(tenant_id=tenant.id, employee_id=employee.id, date=date(2025, 3, 10), hours=7.5)


async def survey_case(storage, tenant):
    project = await make_project(storage, tenant)
    return "surveys", SurveyCreate(tenant_id=tenant.id, project_id=project.id, scheduled_date=date(2025, 4, 1))


async def installation_case(storage, tenant):
    project = await make_project(storage, tenant)
    user = await _user(storage, tenant)
    return "installations", InstallationCreate(
        tenant_id=tenant.id, project_id=project.id, scheduled_date=date(2025, 5, 1), assigned_to=[user.id]
    )


async def task_list_case(storage, tenant):
    project = await make_project(storage, tenant)
    return "task_lists", TaskListCreate(tenant_id=tenant.id, project_id=project.id, name="Snags")


async def task_case(storage, tenant):
    task_list = await _task_list(storage, tenant)
    return "tasks", TaskCreate(
        tenant_id=tenant.id, task_list_id=task_list.id, description="Fix hinge", photo_urls=["/uploads/hinge.jpg"]
    )


async def expense_case(storage, tenant):
    return "expenses", ExpenseCreate(
        tenant_id=tenant.id, description="Van hire", amount=85.0, date=date(2025, 3, 12), category="transport"
    )


async def supplier_case(storage, tenant):
    return "suppliers", SupplierCreate(tenant_id=tenant.id, name="Timber Supplies", rating=4)


async def purchase_order_case(storage, tenant):
    supplier = await make_supplier(storage, tenant)
    return "purchase_orders", PurchaseOrderCreate(
        tenant_id=tenant.id, supplier_id=supplier.id, issue_date=date(2025, 3, 1), subtotal=100.0, total=120.0
    )


async def purchase_order_item_case(storage, tenant):
    order = await _purchase_order(storage, tenant)
    return "purchase_order_items", PurchaseOrderItemCreate(
        purchase_order_id=order.id, description="Oak", quantity=2, unit_price=50, total=100
    )


async def inventory_item_case(storage, tenant):
    return "inventory_items", InventoryItemCreate(tenant_id=tenant.id, name="Oak worktop", sku="OAK-01", reorder_point=5)


async def inventory_transaction_case(storage, tenant):
    item = await make_inventory_item(storage, tenant)
    return "inventory_transactions", InventoryTransactionCreate(
        inventory_item_id=item.id, transaction_type="incoming", quantity=3, reference="GRN-7"
    )


async def attachment_case(storage, tenant):
    customer = await make_customer(storage, tenant)
    return "file_attachments", FileAttachmentCreate(
        tenant_id=tenant.id,
        file_name="plan.pdf",
        file_size=4096,
        file_type="application/pdf",
        file_url="/uploads/plan.pdf",
        related_type="customer",
        related_id=customer.id,
    )


async def company_settings_case(storage, tenant):
    return "company_settings", CompanySettingsCreate(company_name="Acme Kitchens Ltd", certifications=["FSC"])


async def system_settings_case(storage, tenant):
    return "system_settings", SystemSettingsCreate(dark_mode=True, term_customer="Client")


CASES = [
    tenant_case,
    user_case,
    invitation_case,
    reset_token_case,
    organization_case,
    membership_case,
    customer_case,
    project_case,
    quote_case,
    quote_item_case,
    invoice_case,
    invoice_item_case,
    catalog_item_case,
    employee_case,
    timesheet_case,
    survey_case,
    installation_case,
    task_list_case,
    task_case,
    expense_case,
    supplier_case,
    purchase_order_case,
    purchase_order_item_case,
    inventory_item_case,
    inventory_transaction_case,
    attachment_case,
    company_settings_case,
    system_settings_case,
]


@pytest.mark.parametrize("case", CASES, ids=[case.__name__[: -len("_case")] for case in CASES])
async def test_create_from_schema(storage, tenant_a, case):
    attribute, payload = await case(storage, tenant_a)
    repository = getattr(storage, attribute)

    created = await repository.create(payload)

    assert created.id is not None
    stored = await repository.get(created.id)
    for field, value in payload.model_dump(exclude_none=True).items():
        assert getattr(stored, field) == value, field
