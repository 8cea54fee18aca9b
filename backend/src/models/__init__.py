"""SQLAlchemy models for the business-operations storage layer"""

from .base import (
    Base,
    PortableJSONB,
    as_dict,
    entity_name,
    model_for_table,
    tenant_column_name,
    utcnow,
)
from .tenant import Tenant
from .user import PasswordResetToken, User, UserInvitation
from .organization import Organization, UserOrganization
from .customer import Customer
from .project import Project
from .quote import Quote, QuoteItem, QuoteStatus
from .invoice import Invoice, InvoiceItem, InvoiceStatus
from .employee import Employee, Timesheet
from .field_work import Installation, Survey, SurveyStatus
from .task import Task, TaskList
from .catalog import CatalogItem
from .supplier import Supplier
from .expense import Expense
from .purchase_order import PurchaseOrder, PurchaseOrderItem
from .inventory import InventoryItem, InventoryTransaction, TransactionType
from .file_attachment import FileAttachment
from .settings import CompanySettings, SystemSettings
from .session import SessionRecord

# Entities partitioned by tenant (every row carries its owner)
TENANT_SCOPED_MODELS = (
    Tenant,
    User,
    UserInvitation,
    PasswordResetToken,
    Organization,
    UserOrganization,
    Customer,
    Project,
    Quote,
    QuoteItem,
    Invoice,
    InvoiceItem,
    Employee,
    Timesheet,
    Survey,
    Installation,
    TaskList,
    Task,
    CatalogItem,
    Supplier,
    Expense,
    PurchaseOrder,
    PurchaseOrderItem,
    InventoryItem,
    InventoryTransaction,
    FileAttachment,
)

# Singletons shared by every tenant
GLOBAL_MODELS = (
    CompanySettings,
    SystemSettings,
)

__all__ = [
    "Base",
    "PortableJSONB",
    "as_dict",
    "entity_name",
    "model_for_table",
    "tenant_column_name",
    "utcnow",
    "Tenant",
    "User",
    "UserInvitation",
    "PasswordResetToken",
    "Organization",
    "UserOrganization",
    "Customer",
    "Project",
    "Quote",
    "QuoteItem",
    "QuoteStatus",
    "Invoice",
    "InvoiceItem",
    "InvoiceStatus",
    "Employee",
    "Timesheet",
    "Survey",
    "SurveyStatus",
    "Installation",
    "TaskList",
    "Task",
    "CatalogItem",
    "Supplier",
    "Expense",
    "PurchaseOrder",
    "PurchaseOrderItem",
    "InventoryItem",
    "InventoryTransaction",
    "TransactionType",
    "FileAttachment",
    "CompanySettings",
    "SystemSettings",
    "SessionRecord",
    "TENANT_SCOPED_MODELS",
    "GLOBAL_MODELS",
]
