"""Pydantic insert schemas, one per entity"""

from .files import FileAttachmentCreate
from .inventory import InventoryItemCreate, InventoryTransactionCreate
from .operations import (
    EmployeeCreate,
    ExpenseCreate,
    InstallationCreate,
    SurveyCreate,
    TaskCreate,
    TaskListCreate,
    TimesheetCreate,
)
from .procurement import PurchaseOrderCreate, PurchaseOrderItemCreate, SupplierCreate
from .sales import (
    CatalogItemCreate,
    CustomerCreate,
    InvoiceCreate,
    InvoiceItemCreate,
    ProjectCreate,
    QuoteCreate,
    QuoteItemCreate,
)
from .settings import CompanySettingsCreate, SystemSettingsCreate
from .tenancy import (
    OrganizationCreate,
    PasswordResetTokenCreate,
    TenantCreate,
    UserCreate,
    UserInvitationCreate,
    UserOrganizationCreate,
)

__all__ = [
    "TenantCreate",
    "UserCreate",
    "UserInvitationCreate",
    "PasswordResetTokenCreate",
    "OrganizationCreate",
    "UserOrganizationCreate",
    "CustomerCreate",
    "ProjectCreate",
    "QuoteCreate",
    "QuoteItemCreate",
    "InvoiceCreate",
    "InvoiceItemCreate",
    "CatalogItemCreate",
    "EmployeeCreate",
    "TimesheetCreate",
    "SurveyCreate",
    "InstallationCreate",
    "TaskListCreate",
    "TaskCreate",
    "ExpenseCreate",
    "SupplierCreate",
    "PurchaseOrderCreate",
    "PurchaseOrderItemCreate",
    "InventoryItemCreate",
    "InventoryTransactionCreate",
    "FileAttachmentCreate",
    "CompanySettingsCreate",
    "SystemSettingsCreate",
]
