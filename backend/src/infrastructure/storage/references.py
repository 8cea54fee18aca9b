"""Reference bookkeeping shared by multi-row deletes.

Before a parent row goes away, nullable foreign keys pointing at it are set
to NULL so the store's RESTRICT rule cannot fire, and file attachments
(linked polymorphically, without a foreign key) are removed with it.
"""

import logging
from typing import Iterable, List, Tuple

from domain.storage.ports.record_store_port import StorageTransactionPort
from models import Base, FileAttachment, model_for_table
from tenancy.verifier import RelatedEntityType

logger = logging.getLogger(__name__)


def nullable_references(model: type) -> List[Tuple[type, str]]:
    """(referencing model, column) for every nullable foreign key into ``model``."""
    target_table = model.__tablename__
    references = []
    for table in Base.metadata.sorted_tables:
        for fk in table.foreign_keys:
            if fk.column.table.name != target_table or not fk.parent.nullable:
                continue
            referencing = model_for_table(table.name)
            if referencing is not None:
                references.append((referencing, fk.parent.name))
    return references


async def release_references(tx: StorageTransactionPort, model: type, ids: Iterable[int]) -> int:
    """Set every nullable foreign key that points at ``ids`` of ``model`` to NULL."""
    targets = [record_id for record_id in ids if record_id is not None]
    if not targets:
        return 0
    released = 0
    for referencing, column in nullable_references(model):
        released += await tx.records(referencing).nullify(column, targets)
    if released:
        logger.debug(f"Released {released} reference(s) to {model.__name__} {targets}")
    return released


async def delete_attachments(
    tx: StorageTransactionPort,
    related_type: RelatedEntityType,
    related_ids: Iterable[int],
) -> int:
    """Remove attachments linked to ``related_ids``, under any stored spelling of the type."""
    targets = [related_id for related_id in related_ids if related_id is not None]
    if not targets:
        return 0
    return await tx.records(FileAttachment).delete_where(
        related_type=list(related_type.spellings()),
        related_id=targets,
    )
