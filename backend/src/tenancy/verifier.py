"""Cross-entity tenant verifier.

Answers "does the entity named by (related_type, related_id) belong to this
tenant?" for polymorphic links such as file attachments and for legacy
inventory transactions that lack their own tenant column.
"""

import logging
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple, Union

from domain.storage.ports.record_store_port import RecordStorePort, StorageTransactionPort
from domain.storage.tenant_filter import TenantFilter
from models import (
    CatalogItem,
    Customer,
    Employee,
    Expense,
    Installation,
    InventoryItem,
    Invoice,
    Project,
    PurchaseOrder,
    Quote,
    Supplier,
    Survey,
    Task,
    TaskList,
    Timesheet,
    User,
)
from observability.metrics import unknown_related_type_total

logger = logging.getLogger(__name__)


def _normalize(raw: str) -> str:
    return raw.strip().replace("_", "").replace("-", "").lower()


class RelatedEntityType(str, Enum):
    """Closed set of entity kinds a polymorphic link may point at."""

    PROJECT = "project"
    QUOTE = "quote"
    INVOICE = "invoice"
    PURCHASE_ORDER = "purchase_order"
    CUSTOMER = "customer"
    SURVEY = "survey"
    INSTALLATION = "installation"
    TASK_LIST = "task_list"
    TASK = "task"
    EXPENSE = "expense"
    SUPPLIER = "supplier"
    EMPLOYEE = "employee"
    TIMESHEET = "timesheet"
    INVENTORY_ITEM = "inventory_item"
    CATALOG_ITEM = "catalog_item"
    USER = "user"

    @classmethod
    def parse(cls, raw: Union["RelatedEntityType", str, None]) -> Optional["RelatedEntityType"]:
        """Case-insensitive parse ignoring ``_`` and ``-``; None when unknown.

        ``purchaseOrder``, ``PURCHASE_ORDER`` and ``purchase-order`` all parse
        to PURCHASE_ORDER.
        """
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        return _TYPES_BY_KEY.get(_normalize(raw))

    def spellings(self) -> Tuple[str, ...]:
        """Every stored spelling this type may appear under."""
        words = self.value.split("_")
        camel = words[0] + "".join(word.capitalize() for word in words[1:])
        pascal = "".join(word.capitalize() for word in words)
        kebab = "-".join(words)
        return tuple(dict.fromkeys([self.value, camel, pascal, kebab, self.value.upper()]))


_TYPES_BY_KEY: Dict[str, RelatedEntityType] = {
    _normalize(member.value): member for member in RelatedEntityType
}

DEFAULT_RELATED_MODELS: Dict[RelatedEntityType, type] = {
    RelatedEntityType.PROJECT: Project,
    RelatedEntityType.QUOTE: Quote,
    RelatedEntityType.INVOICE: Invoice,
    RelatedEntityType.PURCHASE_ORDER: PurchaseOrder,
    RelatedEntityType.CUSTOMER: Customer,
    RelatedEntityType.SURVEY: Survey,
    RelatedEntityType.INSTALLATION: Installation,
    RelatedEntityType.TASK_LIST: TaskList,
    RelatedEntityType.TASK: Task,
    RelatedEntityType.EXPENSE: Expense,
    RelatedEntityType.SUPPLIER: Supplier,
    RelatedEntityType.EMPLOYEE: Employee,
    RelatedEntityType.TIMESHEET: Timesheet,
    RelatedEntityType.INVENTORY_ITEM: InventoryItem,
    RelatedEntityType.CATALOG_ITEM: CatalogItem,
    RelatedEntityType.USER: User,
}

RELATED_TYPES_BY_MODEL: Dict[type, RelatedEntityType] = {
    model: member for member, model in DEFAULT_RELATED_MODELS.items()
}


class TenantVerifier:
    """Resolve a related entity to its owner through a tenant-scoped lookup.

    Construction fails if any RelatedEntityType lacks a model, so a new
    member cannot silently verify as "not owned".
    """

    def __init__(
        self,
        store: RecordStorePort,
        models: Optional[Mapping[RelatedEntityType, type]] = None,
    ):
        mapping = dict(DEFAULT_RELATED_MODELS if models is None else models)
        missing = [member.value for member in RelatedEntityType if member not in mapping]
        if missing:
            raise ValueError(f"No model registered for related entity types: {', '.join(missing)}")
        self._store = store
        self._models = mapping

    def model_for(self, related_type: RelatedEntityType) -> type:
        return self._models[related_type]

    def _parse_or_warn(self, related_type, related_id) -> Optional[RelatedEntityType]:
        parsed = RelatedEntityType.parse(related_type)
        if parsed is None:
            unknown_related_type_total.inc()
            logger.warning(
                f"Unknown related entity type '{related_type}' (id={related_id}); denying access",
                extra={"entity": str(related_type), "entity_id": related_id},
            )
        return parsed

    async def belongs_to_tenant(
        self,
        related_type: Union[RelatedEntityType, str],
        related_id: Optional[int],
        tenant_id: Optional[int],
    ) -> bool:
        """True iff the named entity exists and is owned by ``tenant_id``.

        Unknown types, missing ids and a missing tenant all answer False.
        """
        parsed = self._parse_or_warn(related_type, related_id)
        if parsed is None:
            return False
        async with self._store.transaction() as tx:
            return await self.belongs_to_tenant_in(tx, parsed, related_id, tenant_id)

    async def belongs_to_tenant_in(
        self,
        tx: StorageTransactionPort,
        related_type: Union[RelatedEntityType, str],
        related_id: Optional[int],
        tenant_id: Optional[int],
    ) -> bool:
        """Same check as ``belongs_to_tenant`` inside an already open transaction."""
        parsed = self._parse_or_warn(related_type, related_id)
        if parsed is None or related_id is None or tenant_id is None:
            return False
        row = await tx.records(self._models[parsed]).get(related_id, TenantFilter.for_tenant(tenant_id))
        return row is not None
