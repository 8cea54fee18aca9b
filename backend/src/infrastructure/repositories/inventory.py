"""Repositories for inventory items and the inventory transaction log.

Transaction writes go through the inventory ledger so that each item's
``current_stock`` moves in the same store transaction as the log row.
"""

import logging
from typing import Any, List, Mapping, Optional, Sequence

from domain.storage.errors import StorageError, ValidationError
from domain.storage.ports.record_store_port import StorageTransactionPort
from domain.storage.tenant_filter import TenantFilter
from inventory.ledger import is_low_stock, record_created, record_revised, remove_transaction, signed_delta
from models import InventoryItem, InventoryTransaction, TransactionType
from tenancy.verifier import RelatedEntityType, TenantVerifier

from .base import DateRangeMixin, EntityRepository, TenantArg

logger = logging.getLogger(__name__)

_TRANSACTION_TYPES = (TransactionType.INCOMING, TransactionType.OUTGOING, TransactionType.ADJUSTMENT)

# Links that prove ownership of a transaction row written without a tenant
_LEGACY_OWNERS = (
    ("inventory_item_id", RelatedEntityType.INVENTORY_ITEM),
    ("purchase_order_id", RelatedEntityType.PURCHASE_ORDER),
    ("project_id", RelatedEntityType.PROJECT),
)


class InventoryItemRepository(EntityRepository):
    """Inventory items. ``current_stock`` is only set on create; the ledger owns it afterwards."""

    model = InventoryItem
    readonly_fields = ("current_stock",)

    async def get_by_sku(self, sku: str, tenant: TenantArg = None) -> Optional[InventoryItem]:
        return await self._find_one(tenant, sku=sku)

    async def list_by_category(self, category: str, tenant: TenantArg = None) -> List[InventoryItem]:
        return await self._list_by(tenant, category=category)

    async def list_by_supplier(self, supplier_id: int, tenant: TenantArg = None) -> List[InventoryItem]:
        return await self._list_by(tenant, preferred_supplier_id=supplier_id)

    async def list_low_stock(self, tenant: TenantArg = None) -> List[InventoryItem]:
        """Items at or below their reorder point, evaluated against current stock."""
        return [item for item in await self._list_by(tenant) if is_low_stock(item)]


class InventoryTransactionRepository(DateRangeMixin, EntityRepository):
    """Ledger-backed inventory transactions.

    Rows written before transactions carried their own tenant have a NULL
    ``tenant_id``. Under a tenant filter such a row is visible when every
    entity it references (item, purchase order, project) belongs to that
    tenant.
    """

    model = InventoryTransaction
    parent = ("inventory_item_id", InventoryItem)
    date_column = "transaction_date"

    def __init__(self, store, settings=None, verifier: Optional[TenantVerifier] = None):
        super().__init__(store, settings)
        self.verifier = verifier or TenantVerifier(store)

    # Visibility

    async def _legacy_row_visible(self, tx: StorageTransactionPort, row, tenant_id: int) -> bool:
        for column, related_type in _LEGACY_OWNERS:
            related_id = getattr(row, column)
            if related_id is None:
                continue
            if not await self.verifier.belongs_to_tenant_in(tx, related_type, related_id, tenant_id):
                return False
        return True

    async def _visible(
        self,
        tx: StorageTransactionPort,
        tenant: TenantArg = None,
        order_by: Optional[Sequence[str]] = None,
        **criteria,
    ) -> List[InventoryTransaction]:
        tenant_filter = TenantFilter.coerce(tenant)
        records = tx.records(InventoryTransaction)
        if not tenant_filter.is_scoped:
            return await records.list(order_by=order_by, **criteria)

        tenant_id = tenant_filter.tenant_id
        visible = []
        for row in await records.list(order_by=order_by, tenant_id=[tenant_id, None], **criteria):
            if row.tenant_id == tenant_id or await self._legacy_row_visible(tx, row, tenant_id):
                visible.append(row)
        return visible

    async def _get_visible(self, tx: StorageTransactionPort, record_id: int, tenant: TenantArg = None):
        rows = await self._visible(tx, tenant, id=record_id)
        return rows[0] if rows else None

    # Reads

    async def get(self, record_id: int, tenant: TenantArg = None) -> Optional[InventoryTransaction]:
        async with self.store.transaction() as tx:
            return await self._get_visible(tx, record_id, tenant)

    async def _list_by(self, tenant: TenantArg = None, order_by=None, **criteria) -> List[InventoryTransaction]:
        async with self.store.transaction() as tx:
            return await self._visible(tx, tenant, order_by, **criteria)

    async def list_by_item(self, item_id: int, tenant: TenantArg = None) -> List[InventoryTransaction]:
        return await self._list_by(tenant, inventory_item_id=item_id)

    async def list_by_project(self, project_id: int, tenant: TenantArg = None) -> List[InventoryTransaction]:
        return await self._list_by(tenant, project_id=project_id)

    async def list_by_purchase_order(self, purchase_order_id: int, tenant: TenantArg = None) -> List[InventoryTransaction]:
        return await self._list_by(tenant, purchase_order_id=purchase_order_id)

    async def list_by_type(self, transaction_type: str, tenant: TenantArg = None) -> List[InventoryTransaction]:
        return await self._list_by(tenant, transaction_type=transaction_type)

    async def list_by_date_range(self, start, end, tenant: TenantArg = None) -> List[InventoryTransaction]:
        tenant_filter = TenantFilter.coerce(tenant)
        rows = await self._list_between(self.date_column, start, end)
        if not tenant_filter.is_scoped or not rows:
            return rows
        try:
            visible = await self._list_by(tenant_filter, id=[row.id for row in rows])
        except StorageError as e:
            logger.error(
                f"Date range visibility check on {self.entity} failed, returning no rows: {e}",
                extra={"entity": self.entity, "tenant_id": tenant_filter.tenant_id},
            )
            return []
        visible_ids = {row.id for row in visible}
        return [row for row in rows if row.id in visible_ids]

    # Writes

    def _check_type(self, values: Mapping[str, Any]) -> None:
        if "transaction_type" in values and values["transaction_type"] not in _TRANSACTION_TYPES:
            raise ValidationError(
                f"Unknown inventory transaction type: {values['transaction_type']}",
                entity=self.entity,
                field="transaction_type",
            )

    async def create(self, data) -> InventoryTransaction:
        """Insert a transaction and apply it to the item's stock."""
        values = self._prepare_create(data)
        self._check_type(values)
        async with self.store.transaction() as tx:
            transaction = await self._insert(tx, values)
            await record_created(tx, transaction)
            return transaction

    async def update(self, record_id: int, changes, tenant: TenantArg = None) -> Optional[InventoryTransaction]:
        """Patch a transaction; its old stock effect is reversed and the new one applied."""
        values = self._prepare_update(changes)
        self._check_type(values)
        async with self.store.transaction() as tx:
            existing = await self._get_visible(tx, record_id, tenant)
            if existing is None:
                return None
            if not values:
                return existing

            # Captured before the write: the store may hand back the same instance
            old_item_id = existing.inventory_item_id
            old_delta = signed_delta(existing.transaction_type, existing.quantity)
            owner = existing.tenant_id if existing.tenant_id is not None else TenantFilter.coerce(tenant).tenant_id

            await self._check_references(tx, values, owner)
            updated = await tx.records(InventoryTransaction).update(record_id, values)
            await record_revised(tx, old_item_id, old_delta, updated)
            return updated

    async def delete(self, record_id: int, tenant: TenantArg = None) -> bool:
        """Delete a transaction and give its stock effect back to the item."""
        async with self.store.transaction() as tx:
            if await self._get_visible(tx, record_id, tenant) is None:
                return False
            return await remove_transaction(tx, record_id)
