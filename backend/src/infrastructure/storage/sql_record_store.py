"""SQL record store - SQLAlchemy asyncio implementation of RecordStorePort.

Each transaction is one AsyncSession inside ``session.begin()``. Driver and
SQLAlchemy failures are translated into the storage error taxonomy:
IntegrityError becomes ConstraintViolation (kind taken from the SQLSTATE,
or from the driver message on SQLite), everything else becomes StorageError.

Architecture: Hexagonal - Adapter implementation in infrastructure layer
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy import delete, func, or_, select, text, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from config import Settings
from database import build_engine, build_session_factory, init_models
from domain.storage.errors import ConstraintKind, ConstraintViolation, StorageError
from domain.storage.ports.record_store_port import (
    RecordSetPort,
    RecordStorePort,
    StorageTransactionPort,
)
from domain.storage.tenant_filter import TenantFilter
from models import tenant_column_name

from .instrumentation import instrumented

logger = logging.getLogger(__name__)

_COLLECTION_TYPES = (list, tuple, set, frozenset)

# PostgreSQL class 23 (integrity constraint violation)
_SQLSTATE_KINDS = {
    "23505": ConstraintKind.UNIQUE,
    "23503": ConstraintKind.FOREIGN_KEY,
    "23502": ConstraintKind.NOT_NULL,
}


def _sqlstate(exc: IntegrityError) -> Optional[str]:
    orig = exc.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code:
            return str(code)
    return None


def classify_integrity_error(exc: IntegrityError) -> ConstraintKind:
    """Tell duplicate keys, dangling references and missing values apart."""
    code = _sqlstate(exc)
    if code in _SQLSTATE_KINDS:
        return _SQLSTATE_KINDS[code]

    message = str(exc.orig).upper()
    if "UNIQUE" in message or "DUPLICATE KEY" in message:
        return ConstraintKind.UNIQUE
    if "FOREIGN KEY" in message:
        return ConstraintKind.FOREIGN_KEY
    if "NOT NULL" in message or "NOT-NULL" in message:
        return ConstraintKind.NOT_NULL
    return ConstraintKind.OTHER


def translate_error(exc: BaseException, entity: Optional[str] = None) -> StorageError:
    if isinstance(exc, IntegrityError):
        return ConstraintViolation(str(exc.orig), kind=classify_integrity_error(exc), entity=entity)
    if isinstance(exc, (asyncio.TimeoutError, TimeoutError)):
        return StorageError(f"Storage operation timed out: {exc}", entity=entity)
    return StorageError(f"Storage operation failed: {exc}", entity=entity)


def _match(column, value):
    if value is None:
        return column.is_(None)
    if isinstance(value, _COLLECTION_TYPES):
        present = [item for item in value if item is not None]
        clause = column.in_(present)
        if len(present) != len(value):
            clause = or_(clause, column.is_(None))
        return clause
    return column == value


class SqlRecordSet(RecordSetPort):
    """Table gateway issuing statements on one AsyncSession."""

    def __init__(self, session: AsyncSession, model: type):
        self._session = session
        self._model = model
        self._table = model.__table__
        self._pk = list(self._table.primary_key.columns)[0]
        self._tenant_column = tenant_column_name(model)
        self._entity = model.__name__

    @property
    def model(self) -> type:
        return self._model

    # Statement helpers

    def _column(self, name: str):
        try:
            return self._table.c[name]
        except KeyError:
            raise StorageError(f"{self._entity} has no column: {name}", entity=self._entity)

    def _scoped(self, stmt, tenant: Optional[TenantFilter]):
        if tenant is not None and tenant.is_scoped and self._tenant_column is not None:
            stmt = stmt.where(self._table.c[self._tenant_column] == tenant.tenant_id)
        return stmt

    def _filtered(self, stmt, tenant: Optional[TenantFilter], criteria: Mapping[str, Any]):
        stmt = self._scoped(stmt, tenant)
        for name, value in criteria.items():
            stmt = stmt.where(_match(self._column(name), value))
        return stmt

    def _ordered(self, stmt, order_by: Optional[Sequence[str]]):
        if not order_by:
            return stmt.order_by(self._pk.asc())
        for name in order_by:
            column = self._column(name.lstrip("-"))
            stmt = stmt.order_by(column.desc() if name.startswith("-") else column.asc())
        return stmt

    def _check_values(self, values: Mapping[str, Any]) -> None:
        unknown = [name for name in values if name not in self._table.c]
        if unknown:
            raise StorageError(
                f"{self._entity} has no column(s): {', '.join(sorted(unknown))}",
                entity=self._entity,
            )

    async def _execute(self, stmt):
        try:
            return await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise translate_error(e, self._entity) from e

    async def _flush(self) -> None:
        try:
            await self._session.flush()
        except SQLAlchemyError as e:
            raise translate_error(e, self._entity) from e

    def _select_rows(self):
        return select(self._model).execution_options(populate_existing=True)

    # RecordSetPort

    async def get(self, record_id, tenant=None):
        stmt = self._scoped(self._select_rows().where(self._pk == record_id), tenant)
        result = await self._execute(stmt)
        return result.scalars().first()

    async def find_one(self, tenant=None, **criteria):
        stmt = self._ordered(self._filtered(self._select_rows(), tenant, criteria), None).limit(1)
        result = await self._execute(stmt)
        return result.scalars().first()

    async def list(self, tenant=None, order_by: Optional[Sequence[str]] = None, **criteria):
        stmt = self._ordered(self._filtered(self._select_rows(), tenant, criteria), order_by)
        result = await self._execute(stmt)
        return result.scalars().all()

    async def list_between(self, column, start, end, tenant=None):
        stmt = self._scoped(self._select_rows().where(self._column(column).between(start, end)), tenant)
        result = await self._execute(self._ordered(stmt, None))
        return result.scalars().all()

    async def insert(self, values):
        self._check_values(values)
        instance = self._model(**dict(values))
        self._session.add(instance)
        await self._flush()
        return instance

    async def update(self, record_id, changes, tenant=None):
        self._check_values(changes)
        if self._pk.name in changes and changes[self._pk.name] != record_id:
            raise StorageError(f"Primary key of {self._entity} cannot change", entity=self._entity)

        instance = await self.get(record_id, tenant)
        if instance is None:
            return None
        for name, value in changes.items():
            setattr(instance, name, value)
        await self._flush()
        return instance

    async def delete(self, record_id, tenant=None):
        stmt = self._scoped(delete(self._table).where(self._pk == record_id), tenant)
        result = await self._execute(stmt.execution_options(synchronize_session=False))
        return result.rowcount > 0

    async def delete_where(self, tenant=None, **criteria):
        stmt = self._filtered(delete(self._table), tenant, criteria)
        result = await self._execute(stmt.execution_options(synchronize_session=False))
        return result.rowcount

    async def nullify(self, column, ids):
        targets = list(ids)
        if not targets:
            return 0
        target_column = self._column(column)
        stmt = update(self._table).where(target_column.in_(targets)).values({column: None})
        result = await self._execute(stmt.execution_options(synchronize_session=False))
        return result.rowcount

    async def increment(self, record_id, column, delta):
        target_column = self._column(column)
        stmt = (
            update(self._table)
            .where(self._pk == record_id, target_column.is_not(None))
            .values({column: target_column + delta})
        )
        result = await self._execute(stmt.execution_options(synchronize_session=False))
        return result.rowcount > 0

    async def values_with_prefix(self, column, prefix, tenant=None):
        target_column = self._column(column)
        stmt = self._scoped(
            select(target_column).where(target_column.startswith(prefix, autoescape=True)),
            tenant,
        )
        result = await self._execute(stmt)
        return list(result.scalars().all())

    async def count(self, tenant=None, **criteria):
        stmt = self._filtered(select(func.count()).select_from(self._table), tenant, criteria)
        result = await self._execute(stmt)
        return int(result.scalar_one())


class SqlStorageTransaction(StorageTransactionPort):

    def __init__(self, session: AsyncSession):
        self.session = session
        self._gateways: Dict[type, SqlRecordSet] = {}

    def records(self, model: type) -> SqlRecordSet:
        if model not in self._gateways:
            if getattr(model, "__table__", None) is None:
                raise StorageError(f"{model!r} is not a mapped table")
            self._gateways[model] = SqlRecordSet(self.session, model)
        return self._gateways[model]


class SqlRecordStore(RecordStorePort):
    """Record store backed by a SQLAlchemy async engine (PostgreSQL or SQLite).

    Example:
        store = SqlRecordStore.from_url("postgresql+asyncpg://bizops:secret@db/bizops")
        async with store.transaction() as tx:
            project = await tx.records(Project).get(42, TenantFilter.for_tenant(7))
    """

    backend_name = "sql"

    def __init__(self, engine: AsyncEngine, session_factory: Optional[async_sessionmaker] = None):
        self.engine = engine
        self.session_factory = session_factory or build_session_factory(engine)
        logger.info(f"Initialized SQL record store: dialect={engine.dialect.name}")

    @classmethod
    def from_url(cls, database_url: str, settings: Optional[Settings] = None) -> "SqlRecordStore":
        return cls(build_engine(database_url, settings))

    @asynccontextmanager
    async def transaction(self):
        async with instrumented(self.backend_name):
            session = self.session_factory()
            try:
                async with session.begin():
                    yield SqlStorageTransaction(session)
            except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
                # Commit-time and connection failures
                raise translate_error(e) from e
            finally:
                await session.close()

    async def execute_raw(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        logger.warning("Executing raw SQL outside tenant scoping")
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(text(sql), dict(params or {}))
                if not result.returns_rows:
                    return []
                return [dict(row._mapping) for row in result]
        except SQLAlchemyError as e:
            raise translate_error(e) from e

    async def create_schema(self) -> None:
        try:
            await init_models(self.engine)
        except SQLAlchemyError as e:
            raise translate_error(e) from e

    async def close(self) -> None:
        await self.engine.dispose()
