"""SQL session store on the ``sessions`` table (sid / sess / expire)."""

import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from domain.storage.ports.session_store_port import SessionStorePort
from models import SessionRecord, utcnow

from .sql_record_store import translate_error

logger = logging.getLogger(__name__)


class SqlSessionStore(SessionStorePort):
    """Session persistence sharing the record store's database."""

    def __init__(self, session_factory: async_sessionmaker, default_ttl_seconds: int = 86_400):
        self._session_factory = session_factory
        self.default_ttl_seconds = default_ttl_seconds

    def _expiry(self, ttl_seconds: Optional[int]):
        return utcnow() + timedelta(seconds=ttl_seconds or self.default_ttl_seconds)

    async def get(self, sid):
        try:
            async with self._session_factory() as session:
                record = await session.get(SessionRecord, sid)
                if record is None or record.expire <= utcnow():
                    return None
                return dict(record.sess)
        except SQLAlchemyError as e:
            raise translate_error(e, "SessionRecord") from e

    async def set(self, sid, data, ttl_seconds=None):
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await session.merge(
                        SessionRecord(sid=sid, sess=dict(data), expire=self._expiry(ttl_seconds))
                    )
        except SQLAlchemyError as e:
            raise translate_error(e, "SessionRecord") from e

    async def destroy(self, sid):
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await session.execute(delete(SessionRecord).where(SessionRecord.sid == sid))
        except SQLAlchemyError as e:
            raise translate_error(e, "SessionRecord") from e

    async def touch(self, sid, ttl_seconds=None):
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    record = await session.get(SessionRecord, sid)
                    if record is None or record.expire <= utcnow():
                        return False
                    record.expire = self._expiry(ttl_seconds)
                    return True
        except SQLAlchemyError as e:
            raise translate_error(e, "SessionRecord") from e

    async def prune_expired(self):
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    result = await session.execute(
                        delete(SessionRecord).where(SessionRecord.expire <= utcnow())
                    )
                    removed = result.rowcount
        except SQLAlchemyError as e:
            raise translate_error(e, "SessionRecord") from e
        if removed:
            logger.info(f"Pruned {removed} expired sessions")
        return removed
