"""File attachment repository.

Attachments link to other entities polymorphically through
``(related_type, related_id)``, without a foreign key. The link is checked
against the cross-entity tenant verifier on every write and, for tenant
scoped reads, on every read.
"""

import logging
from typing import Any, Dict, List, Optional

from domain.storage.errors import ConstraintKind, ConstraintViolation, ValidationError
from domain.storage.ports.record_store_port import StorageTransactionPort
from domain.storage.tenant_filter import TenantFilter
from models import FileAttachment
from tenancy.verifier import RelatedEntityType, TenantVerifier

from .base import EntityRepository, TenantArg

logger = logging.getLogger(__name__)


class FileAttachmentRepository(EntityRepository):
    model = FileAttachment

    def __init__(self, store, settings=None, verifier: Optional[TenantVerifier] = None):
        super().__init__(store, settings)
        self.verifier = verifier or TenantVerifier(store)

    def _normalize_link(self, values: Dict[str, Any]) -> None:
        raw = values.get("related_type")
        if raw is None:
            return
        related_type = RelatedEntityType.parse(raw)
        if related_type is None:
            raise ValidationError(
                f"Unknown related entity type for attachment: {raw}",
                entity=self.entity,
                field="related_type",
            )
        values["related_type"] = related_type.value

    async def _check_link(self, tx: StorageTransactionPort, related_type, related_id, tenant_id) -> None:
        if related_type is None or related_id is None:
            return
        if not await self.verifier.belongs_to_tenant_in(tx, related_type, related_id, tenant_id):
            raise ConstraintViolation(
                f"Attachment target {related_type} {related_id} does not belong to tenant {tenant_id}",
                kind=ConstraintKind.FOREIGN_KEY,
                entity=self.entity,
                column="related_id",
            )

    async def create(self, data) -> FileAttachment:
        values = self._prepare_create(data)
        self._normalize_link(values)
        async with self.store.transaction() as tx:
            await self._check_link(tx, values.get("related_type"), values.get("related_id"), values["tenant_id"])
            return await self._insert(tx, values)

    async def update(self, record_id: int, changes, tenant: TenantArg = None) -> Optional[FileAttachment]:
        values = self._prepare_update(changes)
        self._normalize_link(values)
        async with self.store.transaction() as tx:
            existing = await tx.records(FileAttachment).get(record_id, TenantFilter.coerce(tenant))
            if existing is None:
                return None
            if "related_type" in values or "related_id" in values:
                await self._check_link(
                    tx,
                    values.get("related_type", existing.related_type),
                    values.get("related_id", existing.related_id),
                    existing.tenant_id,
                )
            return await self._update(tx, record_id, values, tenant)

    async def list_by_related_entity(
        self,
        related_type: str,
        related_id: int,
        tenant: TenantArg = None,
    ) -> List[FileAttachment]:
        """Attachments of one entity.

        Under a tenant filter the entity itself must belong to the tenant;
        otherwise nothing is returned. Unknown types return nothing.
        """
        parsed = RelatedEntityType.parse(related_type)
        if parsed is None:
            logger.warning(
                f"Attachment lookup with unknown related entity type '{related_type}'",
                extra={"entity": self.entity},
            )
            return []

        tenant_filter = TenantFilter.coerce(tenant)
        async with self.store.transaction() as tx:
            if tenant_filter.is_scoped and not await self.verifier.belongs_to_tenant_in(
                tx, parsed, related_id, tenant_filter.tenant_id
            ):
                return []
            return await tx.records(FileAttachment).list(
                tenant_filter,
                related_type=list(parsed.spellings()),
                related_id=related_id,
            )

    async def get_verified(self, record_id: int, tenant_id: int) -> Optional[FileAttachment]:
        """Attachment owned by ``tenant_id`` whose linked entity is owned by it too."""
        async with self.store.transaction() as tx:
            attachment = await tx.records(FileAttachment).get(record_id, TenantFilter.for_tenant(tenant_id))
            if attachment is None:
                return None
            if attachment.related_type is None or attachment.related_id is None:
                return attachment
            if not await self.verifier.belongs_to_tenant_in(
                tx, attachment.related_type, attachment.related_id, tenant_id
            ):
                return None
            return attachment
