"""Repositories for tenants, users, invitations and organizations"""

import logging
from datetime import datetime
from typing import List, Optional

from models import (
    Organization,
    PasswordResetToken,
    Tenant,
    User,
    UserInvitation,
    UserOrganization,
    utcnow,
)

from .base import EntityRepository, TenantArg

logger = logging.getLogger(__name__)


class TenantRepository(EntityRepository):
    """Tenants own themselves: a tenant filter matches the tenant's own id.

    Creating and deleting tenants is administrative and runs unscoped.
    """

    model = Tenant
    tenant_required = False
    immutable_fields = ("id", "created_at")

    async def get_by_subdomain(self, subdomain: str, tenant: TenantArg = None) -> Optional[Tenant]:
        return await self._find_one(tenant, subdomain=subdomain.strip().lower())

    async def get_by_custom_domain(self, domain: str, tenant: TenantArg = None) -> Optional[Tenant]:
        return await self._find_one(tenant, custom_domain=domain)

    async def update(self, record_id, changes, tenant: TenantArg = None):
        values = self._prepare_update(changes)
        values.setdefault("updated_at", utcnow())
        async with self.store.transaction() as tx:
            return await self._update(tx, record_id, values, tenant)


class UserRepository(EntityRepository):
    model = User

    async def get_by_username(self, username: str, tenant: TenantArg = None) -> Optional[User]:
        return await self._find_one(tenant, username=username)

    async def get_by_email(self, email: str, tenant: TenantArg = None) -> Optional[User]:
        return await self._find_one(tenant, email=email)


class UserInvitationRepository(EntityRepository):
    model = UserInvitation

    async def get_by_token(self, token: str, tenant: TenantArg = None) -> Optional[UserInvitation]:
        return await self._find_one(tenant, invitation_token=token)

    async def list_by_tenant(self, tenant_id: int) -> List[UserInvitation]:
        return await self._list_by(tenant_id)

    async def list_by_email(self, email: str, tenant: TenantArg = None) -> List[UserInvitation]:
        return await self._list_by(tenant, email=email)


class PasswordResetTokenRepository(EntityRepository):
    model = PasswordResetToken
    parent = ("user_id", User)

    async def get_by_token(self, token: str, tenant: TenantArg = None) -> Optional[PasswordResetToken]:
        return await self._find_one(tenant, token=token)

    async def list_by_user(self, user_id: int, tenant: TenantArg = None) -> List[PasswordResetToken]:
        return await self._list_by(tenant, user_id=user_id)

    async def mark_used(self, token_id: int, tenant: TenantArg = None) -> Optional[PasswordResetToken]:
        return await self.update(token_id, {"used": True}, tenant)

    async def delete_expired(self, now: Optional[datetime] = None) -> int:
        """Remove every token past its expiry (all tenants). Returns the count removed."""
        cutoff = now or utcnow()
        async with self.store.transaction() as tx:
            records = tx.records(PasswordResetToken)
            expired = [token.id for token in await records.list() if token.expires_at < cutoff]
            removed = await records.delete_where(id=expired) if expired else 0
        if removed:
            logger.info(f"Removed {removed} expired password reset token(s)")
        return removed


class OrganizationRepository(EntityRepository):
    model = Organization


class UserOrganizationRepository(EntityRepository):
    model = UserOrganization
    parent = ("organization_id", Organization)

    async def list_by_user(self, user_id: int, tenant: TenantArg = None) -> List[UserOrganization]:
        return await self._list_by(tenant, user_id=user_id)

    async def list_by_organization(self, organization_id: int, tenant: TenantArg = None) -> List[UserOrganization]:
        return await self._list_by(tenant, organization_id=organization_id)
