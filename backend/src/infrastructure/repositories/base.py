"""Generic tenant-scoped entity repository.

Every repository wraps one model and a RecordStorePort. Public methods open
their own store transaction; the underscore variants take an open
transaction so that services (ledger, cascade, quote conversion) can compose
several writes into one atomic unit.

Tenant rules enforced here, on top of the store's own constraints:
- mandatory-tenant entities must name their tenant on create
- child entities inherit their tenant from the parent row
- every foreign key must point at a row of the same tenant
"""

import logging
from datetime import date, datetime, time
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel
from sqlalchemy import Date, DateTime

from config import Settings, get_settings
from domain.storage.errors import ConstraintKind, ConstraintViolation, StorageError, ValidationError
from domain.storage.ports.record_store_port import RecordStorePort, StorageTransactionPort
from domain.storage.tenant_filter import TenantFilter
from infrastructure.storage.references import delete_attachments
from models import model_for_table, tenant_column_name
from tenancy.verifier import RELATED_TYPES_BY_MODEL

logger = logging.getLogger(__name__)

TenantArg = Union[TenantFilter, int, None]


def _as_dict(data: Union[BaseModel, Mapping[str, Any]], partial: bool) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        if partial:
            return data.model_dump(exclude_unset=True)
        return data.model_dump(exclude_none=True)
    return dict(data)


class EntityRepository:
    """CRUD over one entity type, scoped by an optional TenantFilter.

    Subclasses set ``model`` and, where it applies:
        tenant_required: create fails with ValidationError without tenant_id
        parent: (column, ParentModel) whose tenant the row inherits
        readonly_fields: columns only maintained by services (never by update)
    """

    model: type = None
    tenant_required: bool = True
    parent: Optional[Tuple[str, type]] = None
    immutable_fields: Tuple[str, ...] = ("id", "tenant_id", "created_at")
    readonly_fields: Tuple[str, ...] = ()

    def __init__(self, store: RecordStorePort, settings: Optional[Settings] = None):
        self.store = store
        self.settings = settings or get_settings()
        self.entity = self.model.__name__
        self.tenant_column = tenant_column_name(self.model)
        self._columns = set(self.model.__table__.c.keys())

    # Public API (one transaction per call)

    async def get(self, record_id: int, tenant: TenantArg = None):
        """Fetch by primary key. None when absent or owned by another tenant."""
        async with self.store.transaction() as tx:
            return await tx.records(self.model).get(record_id, TenantFilter.coerce(tenant))

    async def list_all(self, tenant: TenantArg = None, order_by: Optional[Sequence[str]] = None):
        return await self._list_by(tenant, order_by=order_by)

    async def create(self, data: Union[BaseModel, Mapping[str, Any]]):
        """Insert a row; id and created_at are generated."""
        values = self._prepare_create(data)
        async with self.store.transaction() as tx:
            return await self._insert(tx, values)

    async def update(self, record_id: int, changes: Union[BaseModel, Mapping[str, Any]], tenant: TenantArg = None):
        """Merge-patch the named fields. None when absent or owned by another tenant."""
        values = self._prepare_update(changes)
        async with self.store.transaction() as tx:
            return await self._update(tx, record_id, values, tenant)

    async def delete(self, record_id: int, tenant: TenantArg = None) -> bool:
        async with self.store.transaction() as tx:
            return await self._delete(tx, record_id, tenant)

    # Input preparation

    def _check_known(self, values: Mapping[str, Any]) -> None:
        unknown = sorted(name for name in values if name not in self._columns)
        if unknown:
            raise ValidationError(
                f"Unknown field(s) for {self.entity}: {', '.join(unknown)}",
                entity=self.entity,
                field=unknown[0],
            )

    def _prepare_create(self, data) -> Dict[str, Any]:
        values = _as_dict(data, partial=False)
        self._check_known(values)
        for generated in ("id", "created_at"):
            if values.get(generated) is not None:
                raise ValidationError(
                    f"{generated} is generated and cannot be supplied for {self.entity}",
                    entity=self.entity,
                    field=generated,
                )
            values.pop(generated, None)

        if (
            self.tenant_required
            and self.tenant_column == "tenant_id"
            and self.parent is None
            and values.get("tenant_id") is None
        ):
            raise ValidationError(f"tenant_id is required for {self.entity}", entity=self.entity, field="tenant_id")
        return values

    def _prepare_update(self, changes) -> Dict[str, Any]:
        values = _as_dict(changes, partial=True)
        self._check_known(values)
        for name in values:
            if name in self.immutable_fields:
                raise ValidationError(f"{self.entity}.{name} cannot be changed", entity=self.entity, field=name)
            if name in self.readonly_fields:
                raise ValidationError(
                    f"{self.entity}.{name} is maintained by the system and cannot be set directly",
                    entity=self.entity,
                    field=name,
                )
        return values

    # Tenant and reference checks

    def owner_of(self, row) -> Optional[int]:
        if self.tenant_column is None:
            return None
        return getattr(row, self.tenant_column)

    async def _inherit_tenant(self, tx: StorageTransactionPort, values: Dict[str, Any]) -> None:
        column, parent_model = self.parent
        parent_id = values.get(column)
        if parent_id is None:
            raise ValidationError(f"{column} is required for {self.entity}", entity=self.entity, field=column)

        parent_row = await tx.records(parent_model).get(parent_id)
        if parent_row is None:
            raise ConstraintViolation(
                f"{self.entity}.{column} references missing {parent_model.__name__} {parent_id}",
                kind=ConstraintKind.FOREIGN_KEY,
                entity=self.entity,
                column=column,
            )

        parent_tenant = getattr(parent_row, tenant_column_name(parent_model))
        supplied = values.get("tenant_id")
        if supplied is not None and parent_tenant is not None and supplied != parent_tenant:
            raise ConstraintViolation(
                f"{self.entity} tenant {supplied} does not match {parent_model.__name__} tenant {parent_tenant}",
                kind=ConstraintKind.FOREIGN_KEY,
                entity=self.entity,
                column="tenant_id",
            )
        if supplied is None:
            values["tenant_id"] = parent_tenant

    async def _check_references(
        self,
        tx: StorageTransactionPort,
        values: Mapping[str, Any],
        owner_tenant: Optional[int],
    ) -> None:
        """Every non-null foreign key must exist and share the row's tenant."""
        for fk in self.model.__table__.foreign_keys:
            column = fk.parent.name
            if column == self.tenant_column or values.get(column) is None:
                continue
            target_model = model_for_table(fk.column.table.name)
            if target_model is None:
                continue

            target = await tx.records(target_model).get(values[column])
            if target is None:
                raise ConstraintViolation(
                    f"{self.entity}.{column} references missing {target_model.__name__} {values[column]}",
                    kind=ConstraintKind.FOREIGN_KEY,
                    entity=self.entity,
                    column=column,
                )

            target_tenant_column = tenant_column_name(target_model)
            if owner_tenant is None or target_tenant_column is None:
                continue
            if getattr(target, target_tenant_column) != owner_tenant:
                raise ConstraintViolation(
                    f"{self.entity}.{column} references {target_model.__name__} {values[column]} "
                    f"of another tenant",
                    kind=ConstraintKind.FOREIGN_KEY,
                    entity=self.entity,
                    column=column,
                )

    # Transaction-scoped operations

    async def _insert(self, tx: StorageTransactionPort, values: Mapping[str, Any]):
        values = dict(values)
        if self.parent is not None:
            await self._inherit_tenant(tx, values)
        owner = values.get(self.tenant_column) if self.tenant_column else None
        await self._check_references(tx, values, owner)
        return await tx.records(self.model).insert(values)

    async def _update(
        self,
        tx: StorageTransactionPort,
        record_id: int,
        changes: Mapping[str, Any],
        tenant: TenantArg = None,
    ):
        records = tx.records(self.model)
        tenant_filter = TenantFilter.coerce(tenant)
        existing = await records.get(record_id, tenant_filter)
        if existing is None or not changes:
            return existing
        await self._check_references(tx, changes, self.owner_of(existing))
        return await records.update(record_id, changes, tenant_filter)

    async def _delete(self, tx: StorageTransactionPort, record_id: int, tenant: TenantArg = None) -> bool:
        """Delete the row together with the file attachments linked to it."""
        records = tx.records(self.model)
        if await records.get(record_id, TenantFilter.coerce(tenant)) is None:
            return False
        related_type = RELATED_TYPES_BY_MODEL.get(self.model)
        if related_type is not None:
            await delete_attachments(tx, related_type, [record_id])
        return await records.delete(record_id)

    async def insert_in(self, tx: StorageTransactionPort, data: Union[BaseModel, Mapping[str, Any]]):
        """``create`` inside a transaction the caller already holds."""
        return await self._insert(tx, self._prepare_create(data))

    # Lookup helpers for subclasses

    async def _find_one(self, tenant: TenantArg = None, **criteria):
        async with self.store.transaction() as tx:
            return await tx.records(self.model).find_one(TenantFilter.coerce(tenant), **criteria)

    async def _list_by(self, tenant: TenantArg = None, order_by: Optional[Sequence[str]] = None, **criteria) -> List:
        async with self.store.transaction() as tx:
            return await tx.records(self.model).list(TenantFilter.coerce(tenant), order_by=order_by, **criteria)

    def _range_bounds(self, column: str, start, end):
        column_type = self.model.__table__.c[column].type
        if isinstance(column_type, DateTime):
            if isinstance(start, date) and not isinstance(start, datetime):
                start = datetime.combine(start, time.min)
            if isinstance(end, date) and not isinstance(end, datetime):
                end = datetime.combine(end, time.max)
        elif isinstance(column_type, Date):
            if isinstance(start, datetime):
                start = start.date()
            if isinstance(end, datetime):
                end = end.date()
        return start, end

    async def _list_between(self, column: str, start, end, tenant: TenantArg = None) -> List:
        tenant_filter = TenantFilter.coerce(tenant)
        start, end = self._range_bounds(column, start, end)
        try:
            async with self.store.transaction() as tx:
                return await tx.records(self.model).list_between(column, start, end, tenant_filter)
        except StorageError as e:
            logger.error(
                f"Date range query on {self.entity}.{column} failed, returning no rows: {e}",
                extra={"entity": self.entity, "tenant_id": tenant_filter.tenant_id},
            )
            return []


class DateRangeMixin:
    """Adds ``list_by_date_range`` to repositories of dated entities.

    Mixed in ahead of EntityRepository; subclasses set ``date_column``.
    """

    date_column: str = None

    async def list_by_date_range(self, start, end, tenant: TenantArg = None) -> List:
        """Rows whose ``date_column`` falls within [start, end], bounds inclusive.

        Query failures are logged and answered with an empty list.
        """
        return await self._list_between(self.date_column, start, end, tenant)
