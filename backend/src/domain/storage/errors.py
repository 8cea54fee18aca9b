"""Storage error taxonomy.

Repositories return ``None`` / ``False`` / ``[]`` for missing rows (a row that
exists but belongs to another tenant is reported exactly the same way). Every
other failure is raised as one of the exceptions below.
"""

from enum import Enum
from typing import Optional


class ConstraintKind(str, Enum):
    """Which store constraint a write ran into."""

    UNIQUE = "unique"            # duplicate natural key
    FOREIGN_KEY = "foreign_key"  # dangling (or cross-tenant) reference
    NOT_NULL = "not_null"
    OTHER = "other"


class StorageError(Exception):
    """Generic I/O, timeout or connection failure. Retryable at the caller's discretion."""

    def __init__(self, message: str, entity: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.entity = entity


class ValidationError(StorageError):
    """Input rejected before any store round-trip (missing tenant, immutable field)."""

    def __init__(self, message: str, entity: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message, entity=entity)
        self.field = field


class ConstraintViolation(StorageError):
    """Uniqueness, foreign key or NOT NULL conflict surfaced from the store."""

    def __init__(
        self,
        message: str,
        kind: ConstraintKind = ConstraintKind.OTHER,
        entity: Optional[str] = None,
        column: Optional[str] = None,
    ):
        super().__init__(message, entity=entity)
        self.kind = kind
        self.column = column

    @property
    def is_duplicate(self) -> bool:
        return self.kind is ConstraintKind.UNIQUE

    @property
    def is_dangling_reference(self) -> bool:
        return self.kind is ConstraintKind.FOREIGN_KEY


class DeletionBlocked(ConstraintViolation):
    """A guarded delete was refused; ``reason`` is safe to show to users."""

    def __init__(self, reason: str, entity: Optional[str] = None):
        super().__init__(reason, kind=ConstraintKind.OTHER, entity=entity)
        self.reason = reason


class UnsupportedOperation(StorageError):
    """The configured backend cannot serve this request."""
