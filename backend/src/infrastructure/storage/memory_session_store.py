"""In-memory session store with per-session expiry."""

import asyncio
from copy import deepcopy
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Tuple

from domain.storage.ports.session_store_port import SessionStorePort
from models import utcnow


class MemorySessionStore(SessionStorePort):
    """Session store for tests and single-process development servers."""

    def __init__(self, default_ttl_seconds: int = 86_400):
        self.default_ttl_seconds = default_ttl_seconds
        self._sessions: Dict[str, Tuple[Dict[str, Any], datetime]] = {}
        self._lock = asyncio.Lock()

    def _expiry(self, ttl_seconds: Optional[int]) -> datetime:
        return utcnow() + timedelta(seconds=ttl_seconds or self.default_ttl_seconds)

    async def get(self, sid):
        async with self._lock:
            entry = self._sessions.get(sid)
            if entry is None:
                return None
            data, expires_at = entry
            if expires_at <= utcnow():
                del self._sessions[sid]
                return None
            return deepcopy(data)

    async def set(self, sid, data, ttl_seconds=None):
        async with self._lock:
            self._sessions[sid] = (deepcopy(data), self._expiry(ttl_seconds))

    async def destroy(self, sid):
        async with self._lock:
            self._sessions.pop(sid, None)

    async def touch(self, sid, ttl_seconds=None):
        async with self._lock:
            entry = self._sessions.get(sid)
            if entry is None or entry[1] <= utcnow():
                return False
            self._sessions[sid] = (entry[0], self._expiry(ttl_seconds))
            return True

    async def prune_expired(self):
        async with self._lock:
            now = utcnow()
            expired = [sid for sid, (_, expires_at) in self._sessions.items() if expires_at <= now]
            for sid in expired:
                del self._sessions[sid]
            return len(expired)
