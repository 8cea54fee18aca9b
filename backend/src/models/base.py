"""Base SQLAlchemy declarative base for all models"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import JSON, TypeDecorator
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base


class PortableJSONB(TypeDecorator):
    """JSON type that works with both PostgreSQL (JSONB) and SQLite (JSON).

    Uses JSONB on PostgreSQL for efficient indexing and querying,
    falls back to JSON on SQLite for testing compatibility.
    """
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(JSONB())
        else:
            return dialect.type_descriptor(JSON())


Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the ``timestamp without time zone`` columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def tenant_column_name(model) -> Optional[str]:
    """Column that holds the owning tenant for ``model``.

    Models may override with ``__tenant_column__``; otherwise any model with a
    ``tenant_id`` column is tenant-owned and the rest are global.
    """
    explicit = getattr(model, "__tenant_column__", None)
    if explicit:
        return explicit
    if "tenant_id" in model.__table__.c:
        return "tenant_id"
    return None


def entity_name(model) -> str:
    return model.__name__


def model_for_table(table_name: str):
    """Mapped class for ``table_name`` (None when the table is not mapped)."""
    for mapper in Base.registry.mappers:
        if mapper.local_table is not None and mapper.local_table.name == table_name:
            return mapper.class_
    return None


def as_dict(row) -> dict:
    """Column values of a mapped row keyed by column name."""
    return {column.name: getattr(row, column.key) for column in row.__table__.columns}
