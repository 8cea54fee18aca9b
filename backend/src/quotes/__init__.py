"""Quotes module - deletion guard and conversion of accepted quotes into invoices."""

from .conversion import convert_quote
from .deletion_guard import QuoteDeletionCheck, evaluate_quote_deletion

__all__ = [
    "QuoteDeletionCheck",
    "evaluate_quote_deletion",
    "convert_quote",
]
