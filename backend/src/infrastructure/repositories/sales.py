"""Repositories for customers, projects, quotes, invoices and the price catalog"""

import logging
from typing import List, Optional

from domain.storage.errors import DeletionBlocked
from domain.storage.numbering import DocumentPrefix
from domain.storage.tenant_filter import TenantFilter
from infrastructure.storage.references import delete_attachments, release_references
from models import (
    CatalogItem,
    Customer,
    Invoice,
    InvoiceItem,
    Project,
    Quote,
    QuoteItem,
)
from projects.cascade import delete_project_cascade
from quotes.conversion import convert_quote
from quotes.deletion_guard import QUOTE_NOT_FOUND, QuoteDeletionCheck, evaluate_quote_deletion
from tenancy.verifier import RelatedEntityType

from .base import EntityRepository, TenantArg
from .numbering import NumberedEntityRepository, run_with_number_retry

logger = logging.getLogger(__name__)


class CustomerRepository(EntityRepository):
    model = Customer

    async def get_by_name(self, name: str, tenant: TenantArg = None) -> Optional[Customer]:
        return await self._find_one(tenant, name=name)


class ProjectRepository(EntityRepository):
    model = Project

    async def list_by_customer(self, customer_id: int, tenant: TenantArg = None) -> List[Project]:
        return await self._list_by(tenant, customer_id=customer_id)

    async def list_by_status(self, status: str, tenant: TenantArg = None) -> List[Project]:
        return await self._list_by(tenant, status=status)

    async def delete(self, record_id: int, tenant: TenantArg = None) -> bool:
        """Delete the project together with everything that depends on it."""
        return await delete_project_cascade(self.store, record_id, TenantFilter.coerce(tenant))


class QuoteItemRepository(EntityRepository):
    model = QuoteItem
    parent = ("quote_id", Quote)

    async def list_by_quote(self, quote_id: int, tenant: TenantArg = None) -> List[QuoteItem]:
        return await self._list_by(tenant, quote_id=quote_id)


class InvoiceItemRepository(EntityRepository):
    model = InvoiceItem
    parent = ("invoice_id", Invoice)

    async def list_by_invoice(self, invoice_id: int, tenant: TenantArg = None) -> List[InvoiceItem]:
        return await self._list_by(tenant, invoice_id=invoice_id)


class InvoiceRepository(NumberedEntityRepository):
    model = Invoice
    number_column = "invoice_number"
    number_prefix = DocumentPrefix.INVOICE

    async def list_by_project(self, project_id: int, tenant: TenantArg = None) -> List[Invoice]:
        return await self._list_by(tenant, project_id=project_id)

    async def list_by_customer(self, customer_id: int, tenant: TenantArg = None) -> List[Invoice]:
        return await self._list_by(tenant, customer_id=customer_id)

    async def list_by_status(self, status: str, tenant: TenantArg = None) -> List[Invoice]:
        return await self._list_by(tenant, status=status)

    async def list_by_quote(self, quote_id: int, tenant: TenantArg = None) -> List[Invoice]:
        return await self._list_by(tenant, quote_id=quote_id)

    async def _delete(self, tx, record_id, tenant=None) -> bool:
        """Invoice with its items and attachments; projects stop pointing at it."""
        if await tx.records(Invoice).get(record_id, TenantFilter.coerce(tenant)) is None:
            return False
        await release_references(tx, Invoice, [record_id])
        # Plain integer links, not foreign keys
        for column in ("deposit_invoice_id", "final_invoice_id"):
            await tx.records(Project).nullify(column, [record_id])
        await tx.records(InvoiceItem).delete_where(invoice_id=record_id)
        await delete_attachments(tx, RelatedEntityType.INVOICE, [record_id])
        return await tx.records(Invoice).delete(record_id)


class QuoteRepository(NumberedEntityRepository):
    """Quotes, with the deletion guard applied inside ``delete``."""

    model = Quote
    number_column = "quote_number"
    number_prefix = DocumentPrefix.QUOTE

    def __init__(self, store, settings=None):
        super().__init__(store, settings)
        self._invoices = InvoiceRepository(store, self.settings)
        self._invoice_items = InvoiceItemRepository(store, self.settings)

    async def list_by_project(self, project_id: int, tenant: TenantArg = None) -> List[Quote]:
        return await self._list_by(tenant, project_id=project_id)

    async def list_by_customer(self, customer_id: int, tenant: TenantArg = None) -> List[Quote]:
        return await self._list_by(tenant, customer_id=customer_id)

    async def list_by_status(self, status: str, tenant: TenantArg = None) -> List[Quote]:
        return await self._list_by(tenant, status=status)

    async def can_delete(self, quote_id: int, tenant: TenantArg = None) -> QuoteDeletionCheck:
        async with self.store.transaction() as tx:
            return await evaluate_quote_deletion(tx, quote_id, TenantFilter.coerce(tenant))

    async def delete(self, record_id: int, tenant: TenantArg = None) -> bool:
        """Delete a quote with its items and attachments.

        Returns False when the quote is not visible.

        Raises:
            DeletionBlocked: The deletion guard refused (converted, accepted,
                invoiced, or surveyed quote)
        """
        tenant_filter = TenantFilter.coerce(tenant)
        async with self.store.transaction() as tx:
            check = await evaluate_quote_deletion(tx, record_id, tenant_filter)
            if check.reason == QUOTE_NOT_FOUND:
                return False
            if not check.can_delete:
                raise DeletionBlocked(check.reason, entity=self.entity)

            await release_references(tx, Quote, [record_id])
            await tx.records(QuoteItem).delete_where(quote_id=record_id)
            await delete_attachments(tx, RelatedEntityType.QUOTE, [record_id])
            return await tx.records(Quote).delete(record_id, tenant_filter)

    async def convert_to_invoice(
        self,
        quote_id: int,
        tenant: TenantArg = None,
        created_by: Optional[int] = None,
    ) -> Optional[Invoice]:
        """Turn an accepted quote into an issued invoice (None when not visible).

        Raises:
            ValidationError: The quote is not accepted
        """
        tenant_filter = TenantFilter.coerce(tenant)

        async def attempt():
            async with self.store.transaction() as tx:
                return await convert_quote(
                    tx,
                    quote_id,
                    tenant_filter,
                    self._invoices,
                    self._invoice_items,
                    due_days=self.settings.INVOICE_DUE_DAYS,
                    created_by=created_by,
                )

        return await run_with_number_retry(
            attempt,
            DocumentPrefix.INVOICE,
            attempts=self.settings.NUMBER_ALLOCATION_ATTEMPTS,
            backoff_base=self.settings.NUMBER_ALLOCATION_BACKOFF,
        )


class CatalogItemRepository(EntityRepository):
    model = CatalogItem

    async def list_by_category(self, category: str, tenant: TenantArg = None) -> List[CatalogItem]:
        return await self._list_by(tenant, category=category)

    async def list_by_type(self, item_type: str, tenant: TenantArg = None) -> List[CatalogItem]:
        return await self._list_by(tenant, type=item_type)

    async def list_by_user(self, user_id: int, tenant: TenantArg = None) -> List[CatalogItem]:
        return await self._list_by(tenant, created_by=user_id)
