"""Session Store Port - key/value persistence for HTTP sessions."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class SessionStorePort(ABC):
    """Session persistence keyed by session id.

    Expired sessions are never returned, whether or not they were pruned yet.
    """

    @abstractmethod
    async def get(self, sid: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    async def set(self, sid: str, data: Dict[str, Any], ttl_seconds: Optional[int] = None) -> None:
        """Create or replace a session, resetting its expiry."""
        pass

    @abstractmethod
    async def destroy(self, sid: str) -> None:
        pass

    @abstractmethod
    async def touch(self, sid: str, ttl_seconds: Optional[int] = None) -> bool:
        """Extend a live session. Returns False when it is missing or expired."""
        pass

    @abstractmethod
    async def prune_expired(self) -> int:
        """Delete expired sessions and return how many were removed."""
        pass
