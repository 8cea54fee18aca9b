"""Storage adapters: SQL and in-memory record stores and session stores."""

from .memory_record_store import MemoryRecordStore
from .memory_session_store import MemorySessionStore
from .sql_record_store import SqlRecordStore
from .sql_session_store import SqlSessionStore

__all__ = [
    "MemoryRecordStore",
    "MemorySessionStore",
    "SqlRecordStore",
    "SqlSessionStore",
]
