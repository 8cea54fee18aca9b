"""Inventory module - derived stock balances maintained from the transaction log."""

from .ledger import (
    apply_stock_delta,
    is_low_stock,
    record_created,
    record_revised,
    remove_transaction,
    signed_delta,
)

__all__ = [
    "signed_delta",
    "apply_stock_delta",
    "record_created",
    "record_revised",
    "remove_transaction",
    "is_low_stock",
]
