"""Project cascade deletion.

Deleting a project removes every row that exists only because of it, children
before parents, inside a single store transaction. Either the whole project
disappears or nothing does.

Order:
    1. attachments of the project
    2. surveys and installations (with their attachments)
    3. quotes with their items and attachments
    4. invoices with their items and attachments
    5. timesheets, tasks and task lists, expenses, inventory transactions
    6. purchase orders with their items and attachments
    7. the project row

Nullable references from surviving rows into the doomed rows are cleared
first, and removed inventory transactions give their stock effect back.
"""

import logging
from typing import Dict, List, Optional

from domain.storage.ports.record_store_port import RecordStorePort, StorageTransactionPort
from domain.storage.tenant_filter import TenantFilter
from infrastructure.storage.references import delete_attachments, release_references
from inventory.ledger import remove_transaction
from models import (
    Expense,
    Installation,
    InventoryTransaction,
    Invoice,
    InvoiceItem,
    Project,
    PurchaseOrder,
    PurchaseOrderItem,
    Quote,
    QuoteItem,
    Survey,
    Task,
    TaskList,
    Timesheet,
)
from observability.metrics import cascade_deletes_total
from tenancy.verifier import RelatedEntityType

logger = logging.getLogger(__name__)

# Models whose project rows are gathered up front, in deletion order
_DEPENDENTS = (
    Survey,
    Installation,
    Quote,
    Invoice,
    Timesheet,
    TaskList,
    Expense,
    InventoryTransaction,
    PurchaseOrder,
)


async def _ids(tx: StorageTransactionPort, model: type, **criteria) -> List[int]:
    return [row.id for row in await tx.records(model).list(**criteria)]


async def _collect(tx: StorageTransactionPort, project_id: int) -> Dict[type, List[int]]:
    doomed = {model: await _ids(tx, model, project_id=project_id) for model in _DEPENDENTS}
    doomed[Task] = await _ids(tx, Task, task_list_id=doomed[TaskList]) if doomed[TaskList] else []
    return doomed


async def _delete_with_children(
    tx: StorageTransactionPort,
    model: type,
    item_model: type,
    item_column: str,
    related_type: RelatedEntityType,
    record_ids: List[int],
) -> None:
    for record_id in record_ids:
        await tx.records(item_model).delete_where(**{item_column: record_id})
        await delete_attachments(tx, related_type, [record_id])
        await tx.records(model).delete(record_id)


async def _delete_project(tx: StorageTransactionPort, project_id: int) -> bool:
    doomed = await _collect(tx, project_id)

    for model in (Quote, Invoice, Survey, Installation, TaskList, PurchaseOrder):
        await release_references(tx, model, doomed[model])

    # Field work
    await delete_attachments(tx, RelatedEntityType.PROJECT, [project_id])
    for model, related_type in (
        (Survey, RelatedEntityType.SURVEY),
        (Installation, RelatedEntityType.INSTALLATION),
    ):
        await delete_attachments(tx, related_type, doomed[model])
        await tx.records(model).delete_where(id=doomed[model])

    # Sales documents
    await _delete_with_children(tx, Quote, QuoteItem, "quote_id", RelatedEntityType.QUOTE, doomed[Quote])
    await _delete_with_children(tx, Invoice, InvoiceItem, "invoice_id", RelatedEntityType.INVOICE, doomed[Invoice])

    # Time, tasks, expenses and stock movements
    await delete_attachments(tx, RelatedEntityType.TIMESHEET, doomed[Timesheet])
    await tx.records(Timesheet).delete_where(id=doomed[Timesheet])

    await delete_attachments(tx, RelatedEntityType.TASK, doomed[Task])
    await tx.records(Task).delete_where(id=doomed[Task])
    await delete_attachments(tx, RelatedEntityType.TASK_LIST, doomed[TaskList])
    await tx.records(TaskList).delete_where(id=doomed[TaskList])

    await delete_attachments(tx, RelatedEntityType.EXPENSE, doomed[Expense])
    await tx.records(Expense).delete_where(id=doomed[Expense])

    for transaction_id in doomed[InventoryTransaction]:
        await remove_transaction(tx, transaction_id, operation="cascade")

    await _delete_with_children(
        tx,
        PurchaseOrder,
        PurchaseOrderItem,
        "purchase_order_id",
        RelatedEntityType.PURCHASE_ORDER,
        doomed[PurchaseOrder],
    )

    return await tx.records(Project).delete(project_id)


async def delete_project_cascade(
    store: RecordStorePort,
    project_id: int,
    tenant: Optional[TenantFilter] = None,
) -> bool:
    """Delete a project and everything that depends on it.

    Returns True only when the project row itself was deleted. A project that
    is missing (or owned by another tenant) yields False. Any failure rolls
    the whole unit back, is logged, and also yields False.
    """
    tenant_filter = TenantFilter.coerce(tenant)
    try:
        async with store.transaction() as tx:
            if await tx.records(Project).get(project_id, tenant_filter) is None:
                cascade_deletes_total.labels(status="not_found").inc()
                return False
            deleted = await _delete_project(tx, project_id)
    except Exception:
        cascade_deletes_total.labels(status="error").inc()
        logger.exception(
            f"Cascade delete of project {project_id} failed; no rows were removed",
            extra={"entity": "Project", "entity_id": project_id, "tenant_id": tenant_filter.tenant_id},
        )
        return False

    cascade_deletes_total.labels(status="success" if deleted else "not_found").inc()
    if deleted:
        logger.info(
            f"Deleted project {project_id} and its dependents",
            extra={"entity": "Project", "entity_id": project_id, "tenant_id": tenant_filter.tenant_id},
        )
    return deleted
