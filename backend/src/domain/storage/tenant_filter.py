"""Tenant filter value object threaded through every storage call."""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class TenantFilter:
    """Visibility scope for one storage operation.

    ``tenant_id`` set: only rows owned by that tenant are visible.
    ``tenant_id`` None: unscoped, for administrative code paths only.
    """

    tenant_id: Optional[int] = None

    def __post_init__(self):
        if self.tenant_id is not None and (
            isinstance(self.tenant_id, bool) or not isinstance(self.tenant_id, int)
        ):
            raise TypeError(f"tenant_id must be an int, got {type(self.tenant_id).__name__}")

    @classmethod
    def for_tenant(cls, tenant_id: int) -> "TenantFilter":
        return cls(tenant_id=tenant_id)

    @classmethod
    def unscoped(cls) -> "TenantFilter":
        return cls(tenant_id=None)

    @classmethod
    def coerce(cls, value: Union["TenantFilter", int, None]) -> "TenantFilter":
        """Accept a filter, a bare tenant id, or None (unscoped)."""
        if isinstance(value, TenantFilter):
            return value
        return cls(tenant_id=value)

    @property
    def is_scoped(self) -> bool:
        return self.tenant_id is not None

    def matches(self, owner_tenant_id: Optional[int]) -> bool:
        """Whether a row owned by ``owner_tenant_id`` is visible under this filter."""
        if self.tenant_id is None:
            return True
        return owner_tenant_id == self.tenant_id


UNSCOPED = TenantFilter()
