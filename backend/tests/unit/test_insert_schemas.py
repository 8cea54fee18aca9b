"""Unit tests keeping the pydantic insert schemas in line with the models."""

import pytest
from pydantic import ValidationError

import schemas
from models import (
    CatalogItem,
    CompanySettings,
    Customer,
    Employee,
    Expense,
    FileAttachment,
    Installation,
    InventoryItem,
    InventoryTransaction,
    Invoice,
    InvoiceItem,
    Organization,
    PasswordResetToken,
    Project,
    PurchaseOrder,
    PurchaseOrderItem,
    Quote,
    QuoteItem,
    Supplier,
    Survey,
    SystemSettings,
    Task,
    TaskList,
    Tenant,
    Timesheet,
    User,
    UserInvitation,
    UserOrganization,
)

SCHEMA_MODELS = {
    "TenantCreate": Tenant,
    "UserCreate": User,
    "UserInvitationCreate": UserInvitation,
    "PasswordResetTokenCreate": PasswordResetToken,
    "OrganizationCreate": Organization,
    "UserOrganizationCreate": UserOrganization,
    "CustomerCreate": Customer,
    "ProjectCreate": Project,
    "QuoteCreate": Quote,
    "QuoteItemCreate": QuoteItem,
    "InvoiceCreate": Invoice,
    "InvoiceItemCreate": InvoiceItem,
    "CatalogItemCreate": CatalogItem,
    "EmployeeCreate": Employee,
    "TimesheetCreate": Timesheet,
    "SurveyCreate": Survey,
    "InstallationCreate": Installation,
    "TaskListCreate": TaskList,
    "TaskCreate": Task,
    "ExpenseCreate": Expense,
    "SupplierCreate": Supplier,
    "PurchaseOrderCreate": PurchaseOrder,
    "PurchaseOrderItemCreate": PurchaseOrderItem,
    "InventoryItemCreate": InventoryItem,
    "InventoryTransactionCreate": InventoryTransaction,
    "FileAttachmentCreate": FileAttachment,
    "CompanySettingsCreate": CompanySettings,
    "SystemSettingsCreate": SystemSettings,
}


def test_every_exported_schema_has_a_model():
    assert set(schemas.__all__) == set(SCHEMA_MODELS)


@pytest.mark.parametrize("name", sorted(SCHEMA_MODELS))
def test_schema_fields_are_model_columns(name):
    schema = getattr(schemas, name)
    columns = set(SCHEMA_MODELS[name].__table__.c.keys())

    assert set(schema.model_fields) - columns == set()


@pytest.mark.parametrize("name", sorted(SCHEMA_MODELS))
def test_generated_columns_cannot_be_supplied(name):
    fields = getattr(schemas, name).model_fields

    assert "id" not in fields
    assert "created_at" not in fields


def test_subdomain_is_normalized():
    assert schemas.TenantCreate(name="Cedar Joinery", subdomain="  Cedar ").subdomain == "cedar"


def test_unknown_transaction_type_is_rejected():
    with pytest.raises(ValidationError):
        schemas.InventoryTransactionCreate(inventory_item_id=1, transaction_type="gift", quantity=1)
