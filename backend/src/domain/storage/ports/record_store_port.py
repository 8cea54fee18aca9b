"""Record Store Port - Domain interface for tenant-scoped relational storage.

The port is deliberately narrow: a transaction hands out one table gateway per
model, and every gateway call takes the tenant filter explicitly. Two
adapters implement it (SQLAlchemy and in-memory) and must behave identically.

Criteria conventions shared by every gateway method taking ``**criteria``:
    column=value         equality
    column=None          IS NULL
    column=[a, b, None]  IN (a, b) OR IS NULL

Architecture: Hexagonal - Port interface in domain layer
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any, AsyncContextManager, Dict, Generic, Iterable, List, Mapping, Optional, Sequence, TypeVar, Union

from ..tenant_filter import TenantFilter

M = TypeVar("M")

Bound = Union[date, datetime]


class RecordSetPort(ABC, Generic[M]):
    """Table gateway bound to one open transaction.

    Rows come back as detached model instances; mutating them has no effect
    on stored state.
    """

    @property
    @abstractmethod
    def model(self) -> type:
        """Mapped model class this gateway serves."""
        pass

    @abstractmethod
    async def get(self, record_id: int, tenant: Optional[TenantFilter] = None) -> Optional[M]:
        """Fetch by primary key. A row owned by another tenant is reported as None."""
        pass

    @abstractmethod
    async def find_one(self, tenant: Optional[TenantFilter] = None, **criteria: Any) -> Optional[M]:
        """First row (lowest id) matching ``criteria``, or None."""
        pass

    @abstractmethod
    async def list(
        self,
        tenant: Optional[TenantFilter] = None,
        order_by: Optional[Sequence[str]] = None,
        **criteria: Any,
    ) -> List[M]:
        """Rows matching ``criteria``.

        Args:
            tenant: Visibility scope
            order_by: Column names, ``-`` prefix for descending (default: id)
        """
        pass

    @abstractmethod
    async def list_between(
        self,
        column: str,
        start: Bound,
        end: Bound,
        tenant: Optional[TenantFilter] = None,
    ) -> List[M]:
        """Rows whose ``column`` lies in the inclusive range ``[start, end]``."""
        pass

    @abstractmethod
    async def insert(self, values: Mapping[str, Any]) -> M:
        """Insert one row; the store assigns the primary key and column defaults.

        Raises:
            ConstraintViolation: NOT NULL, UNIQUE or FOREIGN KEY conflict
        """
        pass

    @abstractmethod
    async def update(
        self,
        record_id: int,
        changes: Mapping[str, Any],
        tenant: Optional[TenantFilter] = None,
    ) -> Optional[M]:
        """Merge ``changes`` into one row. Returns None when not visible."""
        pass

    @abstractmethod
    async def delete(self, record_id: int, tenant: Optional[TenantFilter] = None) -> bool:
        """Hard delete. False when the row is missing or not visible.

        Raises:
            ConstraintViolation: another row still references this one
        """
        pass

    @abstractmethod
    async def delete_where(self, tenant: Optional[TenantFilter] = None, **criteria: Any) -> int:
        """Delete all matching rows and return how many were removed."""
        pass

    @abstractmethod
    async def nullify(self, column: str, ids: Iterable[int]) -> int:
        """Set ``column`` to NULL wherever it currently holds one of ``ids``."""
        pass

    @abstractmethod
    async def increment(self, record_id: int, column: str, delta: Any) -> bool:
        """Atomically add ``delta`` to a numeric column.

        Rows whose column is NULL are left untouched. Returns whether a row
        was adjusted.
        """
        pass

    @abstractmethod
    async def values_with_prefix(
        self,
        column: str,
        prefix: str,
        tenant: Optional[TenantFilter] = None,
    ) -> List[str]:
        """Every value of a text column that starts with ``prefix`` (literal match)."""
        pass

    @abstractmethod
    async def count(self, tenant: Optional[TenantFilter] = None, **criteria: Any) -> int:
        pass


class StorageTransactionPort(ABC):
    """Unit of work handed out by ``RecordStorePort.transaction()``."""

    @abstractmethod
    def records(self, model: type) -> RecordSetPort:
        """Table gateway for ``model`` inside this transaction."""
        pass


class RecordStorePort(ABC):
    """Port interface for the relational record store.

    Example Usage:
        async with store.transaction() as tx:
            quotes = tx.records(Quote)
            quote = await quotes.get(quote_id, TenantFilter.for_tenant(7))

    A transaction commits when the ``async with`` block exits cleanly and
    rolls back when it raises; writes inside it are never observable to
    other transactions before commit.
    """

    backend_name: str = "abstract"

    @abstractmethod
    def transaction(self) -> AsyncContextManager[StorageTransactionPort]:
        pass

    @abstractmethod
    async def execute_raw(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """Run parameterized SQL outside every tenant check (administrative use only).

        Raises:
            UnsupportedOperation: backend has no SQL engine
        """
        pass

    @abstractmethod
    async def create_schema(self) -> None:
        """Create missing tables."""
        pass

    @abstractmethod
    async def close(self) -> None:
        pass
