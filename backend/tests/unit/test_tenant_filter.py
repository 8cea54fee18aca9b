"""Unit tests for the TenantFilter value object."""

import pytest

from domain.storage.tenant_filter import UNSCOPED, TenantFilter


class TestTenantFilter:

    def test_scoped_filter_matches_only_its_tenant(self):
        tenant_filter = TenantFilter.for_tenant(3)

        assert tenant_filter.is_scoped
        assert tenant_filter.matches(3)
        assert not tenant_filter.matches(4)
        assert not tenant_filter.matches(None)

    def test_unscoped_filter_matches_everything(self):
        assert not UNSCOPED.is_scoped
        assert UNSCOPED.matches(1)
        assert UNSCOPED.matches(None)
        assert TenantFilter.unscoped() == UNSCOPED

    def test_coerce_accepts_filter_int_and_none(self):
        scoped = TenantFilter.for_tenant(9)

        assert TenantFilter.coerce(scoped) is scoped
        assert TenantFilter.coerce(9) == scoped
        assert TenantFilter.coerce(None) == UNSCOPED

    @pytest.mark.parametrize("bad", ["3", 3.0, True])
    def test_rejects_non_integer_tenant(self, bad):
        with pytest.raises(TypeError):
            TenantFilter(tenant_id=bad)

    def test_is_immutable(self):
        tenant_filter = TenantFilter.for_tenant(1)
        with pytest.raises(Exception):
            tenant_filter.tenant_id = 2
