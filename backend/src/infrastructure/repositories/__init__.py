"""Entity repositories - backend-agnostic, tenant-scoped CRUD per entity type."""

from .base import DateRangeMixin, EntityRepository
from .files import FileAttachmentRepository
from .inventory import InventoryItemRepository, InventoryTransactionRepository
from .numbering import NumberedEntityRepository, allocate_number, run_with_number_retry
from .operations import (
    EmployeeRepository,
    ExpenseRepository,
    InstallationRepository,
    SurveyRepository,
    TaskListRepository,
    TaskRepository,
    TimesheetRepository,
)
from .procurement import PurchaseOrderItemRepository, PurchaseOrderRepository, SupplierRepository
from .sales import (
    CatalogItemRepository,
    CustomerRepository,
    InvoiceItemRepository,
    InvoiceRepository,
    ProjectRepository,
    QuoteItemRepository,
    QuoteRepository,
)
from .settings import CompanySettingsRepository, SystemSettingsRepository
from .tenancy import (
    OrganizationRepository,
    PasswordResetTokenRepository,
    TenantRepository,
    UserInvitationRepository,
    UserOrganizationRepository,
    UserRepository,
)

__all__ = [
    "DateRangeMixin",
    "EntityRepository",
    "NumberedEntityRepository",
    "allocate_number",
    "run_with_number_retry",
    "TenantRepository",
    "UserRepository",
    "UserInvitationRepository",
    "PasswordResetTokenRepository",
    "OrganizationRepository",
    "UserOrganizationRepository",
    "CustomerRepository",
    "ProjectRepository",
    "QuoteRepository",
    "QuoteItemRepository",
    "InvoiceRepository",
    "InvoiceItemRepository",
    "CatalogItemRepository",
    "EmployeeRepository",
    "TimesheetRepository",
    "SurveyRepository",
    "InstallationRepository",
    "TaskListRepository",
    "TaskRepository",
    "ExpenseRepository",
    "SupplierRepository",
    "PurchaseOrderRepository",
    "PurchaseOrderItemRepository",
    "InventoryItemRepository",
    "InventoryTransactionRepository",
    "FileAttachmentRepository",
    "CompanySettingsRepository",
    "SystemSettingsRepository",
]
