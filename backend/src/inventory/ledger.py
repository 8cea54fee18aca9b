"""Inventory ledger.

``InventoryItem.current_stock`` is derived: it equals the signed sum of the
quantities of the item's inventory transactions (incoming positive, anything
else negative). Every create, update and delete of a transaction adjusts the
item in the same store transaction, using the store's atomic increment so
concurrent adjustments of one item are never lost.

Items whose stock is NULL are not tracked and are left untouched.
"""

import logging
from typing import Optional

from domain.storage.ports.record_store_port import StorageTransactionPort
from models import InventoryItem, InventoryTransaction, TransactionType
from observability.metrics import stock_adjustments_total

logger = logging.getLogger(__name__)


def signed_delta(transaction_type: str, quantity: Optional[float]) -> float:
    """Stock effect of one transaction."""
    amount = quantity or 0
    if transaction_type == TransactionType.INCOMING:
        return amount
    return -amount


async def apply_stock_delta(
    tx: StorageTransactionPort,
    item_id: Optional[int],
    delta: float,
    operation: str,
) -> bool:
    """Atomically add ``delta`` to the item's stock.

    Returns False when the item is gone or does not track stock.
    """
    if item_id is None or not delta:
        return False
    applied = await tx.records(InventoryItem).increment(item_id, "current_stock", delta)
    if applied:
        stock_adjustments_total.labels(operation=operation).inc()
        logger.debug(
            f"Adjusted stock of inventory item {item_id} by {delta:+g} ({operation})",
            extra={"entity": "InventoryItem", "entity_id": item_id},
        )
    return applied


async def record_created(tx: StorageTransactionPort, transaction) -> None:
    """Apply a freshly inserted transaction to its item."""
    await apply_stock_delta(
        tx,
        transaction.inventory_item_id,
        signed_delta(transaction.transaction_type, transaction.quantity),
        "create",
    )


async def record_revised(
    tx: StorageTransactionPort,
    old_item_id: Optional[int],
    old_delta: float,
    transaction,
) -> None:
    """Reverse the pre-update effect and apply the post-update one.

    ``old_item_id`` and ``old_delta`` must be captured before the update is
    written. When the transaction moved to another item the reversal and the
    new effect land on different items.
    """
    new_delta = signed_delta(transaction.transaction_type, transaction.quantity)
    if old_item_id == transaction.inventory_item_id:
        await apply_stock_delta(tx, old_item_id, new_delta - old_delta, "update")
        return
    await apply_stock_delta(tx, old_item_id, -old_delta, "update")
    await apply_stock_delta(tx, transaction.inventory_item_id, new_delta, "update")


async def remove_transaction(
    tx: StorageTransactionPort,
    transaction_id: int,
    operation: str = "delete",
) -> bool:
    """Delete one transaction row and reverse its stock effect."""
    records = tx.records(InventoryTransaction)
    transaction = await records.get(transaction_id)
    if transaction is None:
        return False
    item_id = transaction.inventory_item_id
    delta = signed_delta(transaction.transaction_type, transaction.quantity)

    if not await records.delete(transaction_id):
        return False
    await apply_stock_delta(tx, item_id, -delta, operation)
    return True


def is_low_stock(item) -> bool:
    """``current_stock`` at or below the reorder point (legacy: minimum stock)."""
    threshold = item.reorder_point if item.reorder_point is not None else item.minimum_stock
    if item.current_stock is None or threshold is None:
        return False
    return item.current_stock <= threshold
