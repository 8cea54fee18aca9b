"""Repositories for suppliers and purchase orders"""

from typing import List, Optional

from domain.storage.numbering import DocumentPrefix
from domain.storage.tenant_filter import TenantFilter
from infrastructure.storage.references import delete_attachments, release_references
from models import PurchaseOrder, PurchaseOrderItem, Supplier
from tenancy.verifier import RelatedEntityType

from .base import EntityRepository, TenantArg
from .numbering import NumberedEntityRepository


class SupplierRepository(EntityRepository):
    model = Supplier

    async def get_by_name(self, name: str, tenant: TenantArg = None) -> Optional[Supplier]:
        return await self._find_one(tenant, name=name)

    async def list_by_category(self, category: str, tenant: TenantArg = None) -> List[Supplier]:
        return await self._list_by(tenant, category=category)


class PurchaseOrderRepository(NumberedEntityRepository):
    """Purchase orders, numbered PO-<tenant>-<year>-<seq>."""

    model = PurchaseOrder
    number_column = "po_number"
    number_prefix = DocumentPrefix.PURCHASE_ORDER

    async def list_by_project(self, project_id: int, tenant: TenantArg = None) -> List[PurchaseOrder]:
        return await self._list_by(tenant, project_id=project_id)

    async def list_by_supplier(self, supplier_id: int, tenant: TenantArg = None) -> List[PurchaseOrder]:
        return await self._list_by(tenant, supplier_id=supplier_id)

    async def list_by_status(self, status: str, tenant: TenantArg = None) -> List[PurchaseOrder]:
        return await self._list_by(tenant, status=status)

    async def _delete(self, tx, record_id, tenant=None) -> bool:
        """Purchase order with its items and attachments.

        Inventory transactions booked against it stay (stock is history) but
        lose the link.
        """
        if await tx.records(PurchaseOrder).get(record_id, TenantFilter.coerce(tenant)) is None:
            return False
        await release_references(tx, PurchaseOrder, [record_id])
        await tx.records(PurchaseOrderItem).delete_where(purchase_order_id=record_id)
        await delete_attachments(tx, RelatedEntityType.PURCHASE_ORDER, [record_id])
        return await tx.records(PurchaseOrder).delete(record_id)


class PurchaseOrderItemRepository(EntityRepository):
    model = PurchaseOrderItem
    parent = ("purchase_order_id", PurchaseOrder)

    async def list_by_purchase_order(self, purchase_order_id: int, tenant: TenantArg = None) -> List[PurchaseOrderItem]:
        return await self._list_by(tenant, purchase_order_id=purchase_order_id)
