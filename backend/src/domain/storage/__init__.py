"""Storage domain module - tenant filter, error taxonomy, ports, document numbering"""

from .errors import (
    ConstraintKind,
    ConstraintViolation,
    DeletionBlocked,
    StorageError,
    UnsupportedOperation,
    ValidationError,
)
from .numbering import (
    DocumentPrefix,
    document_year,
    format_document_number,
    next_sequence,
    number_stem,
    parse_sequence,
)
from .tenant_filter import UNSCOPED, TenantFilter

__all__ = [
    "ConstraintKind",
    "ConstraintViolation",
    "DeletionBlocked",
    "StorageError",
    "UnsupportedOperation",
    "ValidationError",
    "DocumentPrefix",
    "document_year",
    "format_document_number",
    "next_sequence",
    "number_stem",
    "parse_sequence",
    "TenantFilter",
    "UNSCOPED",
]
