"""In-memory record store - dict-backed implementation of RecordStorePort.

Used for tests and local development without a database. It enforces the same
tenant scoping and the same NOT NULL, UNIQUE and FOREIGN KEY rules as the SQL
store (rules are read from the shared table metadata), and gives the same
all-or-nothing transaction semantics: an asyncio lock serializes transactions
and a snapshot taken on entry is restored when the transaction fails.

Architecture: Hexagonal - Adapter implementation in infrastructure layer
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from copy import deepcopy
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from domain.storage.errors import ConstraintKind, ConstraintViolation, StorageError, UnsupportedOperation
from domain.storage.ports.record_store_port import (
    RecordSetPort,
    RecordStorePort,
    StorageTransactionPort,
)
from domain.storage.tenant_filter import TenantFilter
from models import Base, tenant_column_name

from .instrumentation import instrumented
from .table_rules import SchemaRules, TableRules

logger = logging.getLogger(__name__)

_COLLECTION_TYPES = (list, tuple, set, frozenset)


def _matches_value(actual: Any, expected: Any) -> bool:
    if expected is None:
        return actual is None
    if isinstance(expected, _COLLECTION_TYPES):
        return actual in expected
    return actual == expected


def _sort_key(value: Any):
    return (value is not None, value)


class MemoryRecordSet(RecordSetPort):
    """Table gateway over one dict table of a MemoryRecordStore."""

    def __init__(self, store: "MemoryRecordStore", model: type):
        self._store = store
        self._model = model
        self._rules: TableRules = store.rules.for_table(model.__tablename__)
        self._tenant_column = tenant_column_name(model)
        self._entity = model.__name__

    @property
    def model(self) -> type:
        return self._model

    # Row helpers

    @property
    def _rows(self) -> Dict[Any, Dict[str, Any]]:
        return self._store.table(self._rules.table_name)

    def _check_columns(self, names: Iterable[str]) -> None:
        unknown = self._rules.unknown_columns(names)
        if unknown:
            raise StorageError(
                f"{self._entity} has no column(s): {', '.join(sorted(unknown))}",
                entity=self._entity,
            )

    def _visible(self, row: Dict[str, Any], tenant: Optional[TenantFilter]) -> bool:
        if tenant is None or self._tenant_column is None:
            return True
        return tenant.matches(row.get(self._tenant_column))

    def _select(self, tenant: Optional[TenantFilter], criteria: Mapping[str, Any]) -> List[Dict[str, Any]]:
        self._check_columns(criteria.keys())
        return [
            row
            for _, row in sorted(self._rows.items(), key=lambda item: item[0])
            if self._visible(row, tenant)
            and all(_matches_value(row.get(name), value) for name, value in criteria.items())
        ]

    def _materialize(self, row: Dict[str, Any]):
        return self._model(**deepcopy(row))

    def _check_row(self, row: Dict[str, Any], row_id: Any) -> None:
        table = self._rules.table_name

        for name in self._rules.required:
            if row.get(name) is None:
                raise ConstraintViolation(
                    f"NOT NULL constraint failed: {table}.{name}",
                    kind=ConstraintKind.NOT_NULL,
                    entity=self._entity,
                    column=name,
                )

        for fk in self._rules.foreign_keys:
            value = row.get(fk.column)
            if value is None:
                continue
            if not self._store.has_row(fk.target_table, fk.target_column, value):
                raise ConstraintViolation(
                    f"FOREIGN KEY constraint failed: {table}.{fk.column} -> "
                    f"{fk.target_table}.{fk.target_column} ({value})",
                    kind=ConstraintKind.FOREIGN_KEY,
                    entity=self._entity,
                    column=fk.column,
                )

        for columns in self._rules.unique_sets:
            key = tuple(row.get(name) for name in columns)
            if any(part is None for part in key):
                continue  # NULLs never collide
            for other_id, other in self._rows.items():
                if other_id == row_id:
                    continue
                if tuple(other.get(name) for name in columns) == key:
                    raise ConstraintViolation(
                        "UNIQUE constraint failed: "
                        + ", ".join(f"{table}.{name}" for name in columns),
                        kind=ConstraintKind.UNIQUE,
                        entity=self._entity,
                        column=columns[0],
                    )

    def _check_not_referenced(self, row_id: Any) -> None:
        for child_table, child_column, target_column in self._store.rules.referenced_by.get(
            self._rules.table_name, []
        ):
            value = self._rows[row_id].get(target_column)
            for child in self._store.table(child_table).values():
                if child.get(child_column) == value:
                    raise ConstraintViolation(
                        f"FOREIGN KEY constraint failed: {child_table}.{child_column} "
                        f"still references {self._rules.table_name} {value}",
                        kind=ConstraintKind.FOREIGN_KEY,
                        entity=self._entity,
                        column=child_column,
                    )

    # RecordSetPort

    async def get(self, record_id, tenant=None):
        row = self._rows.get(record_id)
        if row is None or not self._visible(row, tenant):
            return None
        return self._materialize(row)

    async def find_one(self, tenant=None, **criteria):
        rows = self._select(tenant, criteria)
        return self._materialize(rows[0]) if rows else None

    async def list(self, tenant=None, order_by: Optional[Sequence[str]] = None, **criteria):
        rows = self._select(tenant, criteria)
        if order_by:
            self._check_columns(name.lstrip("-") for name in order_by)
            # Stable sorts applied from the least significant key
            for name in reversed(order_by):
                descending = name.startswith("-")
                column = name.lstrip("-")
                rows.sort(key=lambda row: _sort_key(row.get(column)), reverse=descending)
        return [self._materialize(row) for row in rows]

    async def list_between(self, column, start, end, tenant=None):
        self._check_columns([column])
        results = []
        for row in self._select(tenant, {}):
            value = row.get(column)
            if value is None:
                continue
            try:
                in_range = start <= value <= end
            except TypeError as e:
                raise StorageError(
                    f"Cannot compare {self._entity}.{column} with range bounds: {e}",
                    entity=self._entity,
                ) from e
            if in_range:
                results.append(self._materialize(row))
        return results

    async def insert(self, values):
        values = dict(values)
        self._check_columns(values.keys())

        row = {
            name: deepcopy(values[name]) if name in values else self._rules.default_for(name)
            for name in self._rules.columns
        }

        pk = self._rules.primary_key
        if row.get(pk) is None:
            row[pk] = self._store.next_id(self._rules.table_name)
        elif row[pk] in self._rows:
            raise ConstraintViolation(
                f"UNIQUE constraint failed: {self._rules.table_name}.{pk}",
                kind=ConstraintKind.UNIQUE,
                entity=self._entity,
                column=pk,
            )
        else:
            self._store.observe_id(self._rules.table_name, row[pk])

        self._check_row(row, row[pk])
        self._rows[row[pk]] = row
        return self._materialize(row)

    async def update(self, record_id, changes, tenant=None):
        changes = dict(changes)
        self._check_columns(changes.keys())
        pk = self._rules.primary_key
        if pk in changes and changes[pk] != record_id:
            raise StorageError(f"Primary key of {self._entity} cannot change", entity=self._entity)

        row = self._rows.get(record_id)
        if row is None or not self._visible(row, tenant):
            return None

        updated = dict(row)
        updated.update(deepcopy(changes))
        self._check_row(updated, record_id)
        self._rows[record_id] = updated
        return self._materialize(updated)

    async def delete(self, record_id, tenant=None):
        row = self._rows.get(record_id)
        if row is None or not self._visible(row, tenant):
            return False
        self._check_not_referenced(record_id)
        del self._rows[record_id]
        return True

    async def delete_where(self, tenant=None, **criteria):
        pk = self._rules.primary_key
        doomed = [row[pk] for row in self._select(tenant, criteria)]
        for row_id in doomed:
            self._check_not_referenced(row_id)
            del self._rows[row_id]
        return len(doomed)

    async def nullify(self, column, ids):
        self._check_columns([column])
        targets = set(ids)
        if not targets:
            return 0
        matched = [row for row in self._rows.values() if row.get(column) in targets]
        if matched and not self._rules.is_nullable(column):
            raise ConstraintViolation(
                f"NOT NULL constraint failed: {self._rules.table_name}.{column}",
                kind=ConstraintKind.NOT_NULL,
                entity=self._entity,
                column=column,
            )
        for row in matched:
            row[column] = None
        return len(matched)

    async def increment(self, record_id, column, delta):
        self._check_columns([column])
        row = self._rows.get(record_id)
        if row is None or row.get(column) is None:
            return False
        row[column] = row[column] + delta
        return True

    async def values_with_prefix(self, column, prefix, tenant=None):
        self._check_columns([column])
        return [
            row[column]
            for row in self._select(tenant, {})
            if isinstance(row.get(column), str) and row[column].startswith(prefix)
        ]

    async def count(self, tenant=None, **criteria):
        return len(self._select(tenant, criteria))


class MemoryStorageTransaction(StorageTransactionPort):

    def __init__(self, store: "MemoryRecordStore"):
        self._store = store
        self._gateways: Dict[type, MemoryRecordSet] = {}

    def records(self, model: type) -> MemoryRecordSet:
        if model not in self._gateways:
            if self._store.rules.for_table(getattr(model, "__tablename__", None)) is None:
                raise StorageError(f"{model!r} is not a mapped table")
            self._gateways[model] = MemoryRecordSet(self._store, model)
        return self._gateways[model]


class MemoryRecordStore(RecordStorePort):
    """Dict-backed record store.

    Example:
        store = MemoryRecordStore()
        async with store.transaction() as tx:
            customer = await tx.records(Customer).insert({"tenant_id": 1, "name": "Acme", "email": "a@acme.test"})
    """

    backend_name = "memory"

    def __init__(self, metadata=None):
        self.rules = SchemaRules(metadata if metadata is not None else Base.metadata)
        self._tables: Dict[str, Dict[Any, Dict[str, Any]]] = {}
        self._sequences: Dict[str, int] = {}
        self._lock = asyncio.Lock()
        logger.info(f"Initialized in-memory record store with {len(self.rules.tables)} tables")

    def table(self, name: str) -> Dict[Any, Dict[str, Any]]:
        return self._tables.setdefault(name, {})

    def has_row(self, table_name: str, column: str, value: Any) -> bool:
        rows = self.table(table_name)
        rules = self.rules.for_table(table_name)
        if rules is not None and column == rules.primary_key:
            return value in rows
        return any(row.get(column) == value for row in rows.values())

    def next_id(self, table_name: str) -> int:
        self._sequences[table_name] = self._sequences.get(table_name, 0) + 1
        return self._sequences[table_name]

    def observe_id(self, table_name: str, value: Any) -> None:
        if isinstance(value, int) and value > self._sequences.get(table_name, 0):
            self._sequences[table_name] = value

    @asynccontextmanager
    async def transaction(self):
        async with self._lock:
            async with instrumented(self.backend_name):
                snapshot = (deepcopy(self._tables), dict(self._sequences))
                try:
                    yield MemoryStorageTransaction(self)
                except BaseException:
                    self._tables, self._sequences = snapshot
                    raise

    async def execute_raw(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        raise UnsupportedOperation("Raw SQL is not available on the in-memory backend")

    async def create_schema(self) -> None:
        for name in self.rules.tables:
            self.table(name)

    async def close(self) -> None:
        self._tables.clear()
        self._sequences.clear()
