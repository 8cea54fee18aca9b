"""Repositories for the global settings singletons (shared by every tenant)"""

from models import CompanySettings, SystemSettings, utcnow

from .base import EntityRepository, TenantArg


class SingletonSettingsRepository(EntityRepository):
    """Global singleton rows. Tenant filters are accepted and ignored."""

    tenant_required = False
    immutable_fields = ("id",)

    async def get_current(self):
        """The first (normally only) settings row, or None before first save."""
        rows = await self._list_by()
        return rows[0] if rows else None

    async def update(self, record_id: int, changes, tenant: TenantArg = None):
        values = self._prepare_update(changes)
        values.setdefault("updated_at", utcnow())
        async with self.store.transaction() as tx:
            return await self._update(tx, record_id, values)

    async def save(self, changes):
        """Update the current row, creating it when none exists yet."""
        current = await self.get_current()
        if current is None:
            return await self.create(changes)
        return await self.update(current.id, changes)


class CompanySettingsRepository(SingletonSettingsRepository):
    model = CompanySettings


class SystemSettingsRepository(SingletonSettingsRepository):
    model = SystemSettings
