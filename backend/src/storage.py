"""Storage composition root.

``Storage`` bundles a record store with every entity repository and the
cross-entity tenant verifier. It is built once at application start by
``create_storage`` and handed to consumers explicitly (FastAPI keeps it on
``app.state``); nothing here is a module-level singleton.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from config import Settings, get_settings
from domain.storage.ports.record_store_port import RecordStorePort
from domain.storage.ports.session_store_port import SessionStorePort
from domain.storage.tenant_filter import TenantFilter
from infrastructure.repositories import (
    CatalogItemRepository,
    CompanySettingsRepository,
    CustomerRepository,
    EmployeeRepository,
    ExpenseRepository,
    FileAttachmentRepository,
    InstallationRepository,
    InventoryItemRepository,
    InventoryTransactionRepository,
    InvoiceItemRepository,
    InvoiceRepository,
    OrganizationRepository,
    PasswordResetTokenRepository,
    ProjectRepository,
    PurchaseOrderItemRepository,
    PurchaseOrderRepository,
    QuoteItemRepository,
    QuoteRepository,
    SupplierRepository,
    SurveyRepository,
    SystemSettingsRepository,
    TaskListRepository,
    TaskRepository,
    TenantRepository,
    TimesheetRepository,
    UserInvitationRepository,
    UserOrganizationRepository,
    UserRepository,
)
from infrastructure.storage import MemoryRecordStore, MemorySessionStore, SqlRecordStore, SqlSessionStore
from models import TENANT_SCOPED_MODELS, Tenant
from tenancy.verifier import TenantVerifier

logger = logging.getLogger(__name__)

STORAGE_BACKENDS = ("sql", "memory")


class Storage:
    """Every repository over one record store.

    Example:
        storage = await create_storage(Settings(STORAGE_BACKEND="memory"))
        tenant = await storage.tenants.create({"name": "Acme", "subdomain": "acme"})
        project = await storage.projects.create({"tenant_id": tenant.id, "name": "Kitchen"})
        await storage.projects.delete(project.id, TenantFilter.for_tenant(tenant.id))
    """

    def __init__(
        self,
        record_store: RecordStorePort,
        settings: Optional[Settings] = None,
        sessions: Optional[SessionStorePort] = None,
    ):
        self.record_store = record_store
        self.settings = settings or get_settings()
        self.sessions = sessions or MemorySessionStore(self.settings.SESSION_TTL_SECONDS)
        self.verifier = TenantVerifier(record_store)

        s = self.settings
        self.tenants = TenantRepository(record_store, s)
        self.users = UserRepository(record_store, s)
        self.user_invitations = UserInvitationRepository(record_store, s)
        self.password_reset_tokens = PasswordResetTokenRepository(record_store, s)
        self.organizations = OrganizationRepository(record_store, s)
        self.user_organizations = UserOrganizationRepository(record_store, s)
        self.customers = CustomerRepository(record_store, s)
        self.projects = ProjectRepository(record_store, s)
        self.quotes = QuoteRepository(record_store, s)
        self.quote_items = QuoteItemRepository(record_store, s)
        self.invoices = InvoiceRepository(record_store, s)
        self.invoice_items = InvoiceItemRepository(record_store, s)
        self.catalog_items = CatalogItemRepository(record_store, s)
        self.employees = EmployeeRepository(record_store, s)
        self.timesheets = TimesheetRepository(record_store, s)
        self.surveys = SurveyRepository(record_store, s)
        self.installations = InstallationRepository(record_store, s)
        self.task_lists = TaskListRepository(record_store, s)
        self.tasks = TaskRepository(record_store, s)
        self.expenses = ExpenseRepository(record_store, s)
        self.suppliers = SupplierRepository(record_store, s)
        self.purchase_orders = PurchaseOrderRepository(record_store, s)
        self.purchase_order_items = PurchaseOrderItemRepository(record_store, s)
        self.inventory_items = InventoryItemRepository(record_store, s)
        self.inventory_transactions = InventoryTransactionRepository(record_store, s, verifier=self.verifier)
        self.file_attachments = FileAttachmentRepository(record_store, s, verifier=self.verifier)
        self.company_settings = CompanySettingsRepository(record_store, s)
        self.system_settings = SystemSettingsRepository(record_store, s)

    @property
    def backend_name(self) -> str:
        return self.record_store.backend_name

    async def execute_raw(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """Parameterized SQL across all tenants (administrative reporting only).

        Bypasses every tenant check; never route tenant-facing requests here.

        Raises:
            UnsupportedOperation: The in-memory backend has no SQL engine
        """
        logger.warning(f"Administrative raw query on {self.backend_name} backend")
        return await self.record_store.execute_raw(sql, params)

    async def tenant_entity_counts(self, tenant_id: int) -> Dict[str, int]:
        """Row count per tenant-owned table for one tenant (works on both backends)."""
        tenant_filter = TenantFilter.for_tenant(tenant_id)
        counts = {}
        async with self.record_store.transaction() as tx:
            for model in TENANT_SCOPED_MODELS:
                if model is Tenant:
                    continue
                counts[model.__tablename__] = await tx.records(model).count(tenant_filter)
        return counts

    async def close(self) -> None:
        await self.record_store.close()
        logger.info("Storage closed")


async def create_storage(settings: Optional[Settings] = None) -> Storage:
    """Build the configured backend and wrap it in a Storage.

    ``STORAGE_BACKEND=memory`` keeps everything in process; ``sql`` connects
    to ``DATABASE_URL`` and, with ``DB_AUTO_CREATE``, creates missing tables.
    """
    settings = settings or get_settings()
    backend = settings.STORAGE_BACKEND.lower()
    if backend not in STORAGE_BACKENDS:
        raise ValueError(f"Unknown STORAGE_BACKEND '{settings.STORAGE_BACKEND}' (expected one of {STORAGE_BACKENDS})")

    if backend == "memory":
        record_store = MemoryRecordStore()
        sessions = MemorySessionStore(settings.SESSION_TTL_SECONDS)
    else:
        record_store = SqlRecordStore.from_url(settings.DATABASE_URL, settings)
        sessions = SqlSessionStore(record_store.session_factory, settings.SESSION_TTL_SECONDS)

    if settings.DB_AUTO_CREATE:
        await record_store.create_schema()

    logger.info(f"Storage ready: backend={backend}")
    return Storage(record_store, settings, sessions=sessions)
