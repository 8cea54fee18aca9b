"""
Schema verification tests for table conventions.

Ensures the mapped tables follow the storage layer's rules:
- Every entity table has an integer ``id`` primary key and ``created_at``
- tenants is the root entity (no tenant_id on itself)
- Tenant-owned tables carry a tenant_id foreign key to tenants
- Global settings tables carry no tenant_id
- Document numbers are unique per tenant, not globally
"""

import pytest
from sqlalchemy import DateTime, Integer, UniqueConstraint

from models import (
    GLOBAL_MODELS,
    TENANT_SCOPED_MODELS,
    InventoryTransaction,
    Invoice,
    InvoiceItem,
    PurchaseOrder,
    PurchaseOrderItem,
    Quote,
    QuoteItem,
    Tenant,
    tenant_column_name,
)

pytestmark = pytest.mark.schema

TENANT_OWNED = [model for model in TENANT_SCOPED_MODELS if model is not Tenant]

# Line and ledger rows are stamped by their parent document or transaction_date
UNSTAMPED = (QuoteItem, InvoiceItem, PurchaseOrderItem, InventoryTransaction)


def _tenant_fk_targets(table):
    return {fk.target_fullname for fk in table.c.tenant_id.foreign_keys}


class TestTableConventions:
    """Verify all mapped tables follow the conventions."""

    @pytest.mark.parametrize("model", TENANT_SCOPED_MODELS + GLOBAL_MODELS, ids=lambda m: m.__tablename__)
    def test_integer_id_primary_key(self, model):
        table = model.__table__

        assert [column.name for column in table.primary_key.columns] == ["id"]
        assert isinstance(table.c.id.type, Integer)

    @pytest.mark.parametrize(
        "model", [m for m in TENANT_SCOPED_MODELS if m not in UNSTAMPED], ids=lambda m: m.__tablename__
    )
    def test_created_at_is_required_timestamp(self, model):
        column = model.__table__.c.created_at

        assert isinstance(column.type, DateTime)
        assert not column.nullable

    def test_tenants_is_root_entity(self):
        assert "tenant_id" not in Tenant.__table__.c
        assert tenant_column_name(Tenant) == "id"

    @pytest.mark.parametrize("model", TENANT_OWNED, ids=lambda m: m.__tablename__)
    def test_tenant_owned_tables_reference_tenants(self, model):
        assert tenant_column_name(model) == "tenant_id"
        assert _tenant_fk_targets(model.__table__) == {"tenants.id"}

    @pytest.mark.parametrize("model", [m for m in TENANT_OWNED if m is not InventoryTransaction], ids=lambda m: m.__tablename__)
    def test_tenant_id_is_required(self, model):
        assert not model.__table__.c.tenant_id.nullable

    def test_legacy_inventory_transactions_may_lack_tenant(self):
        assert InventoryTransaction.__table__.c.tenant_id.nullable

    @pytest.mark.parametrize("model", GLOBAL_MODELS, ids=lambda m: m.__tablename__)
    def test_global_tables_have_no_tenant(self, model):
        assert "tenant_id" not in model.__table__.c
        assert tenant_column_name(model) is None

    @pytest.mark.parametrize(
        "model, number_column",
        [(Quote, "quote_number"), (Invoice, "invoice_number"), (PurchaseOrder, "po_number")],
    )
    def test_document_number_unique_per_tenant(self, model, number_column):
        unique_sets = {
            frozenset(column.name for column in constraint.columns)
            for constraint in model.__table__.constraints
            if isinstance(constraint, UniqueConstraint)
        }

        assert frozenset({number_column, "tenant_id"}) in unique_sets
        assert not model.__table__.c[number_column].unique


class TestEmittedSchema:
    """Check the DDL the SQL store creates."""

    @pytest.mark.asyncio
    async def test_every_table_is_created(self, reflected_metadata):
        expected = {model.__tablename__ for model in TENANT_SCOPED_MODELS + GLOBAL_MODELS} | {"sessions"}

        assert expected <= set(reflected_metadata.tables)

    @pytest.mark.asyncio
    async def test_reflected_tenant_foreign_keys(self, reflected_metadata):
        for model in TENANT_OWNED:
            table = reflected_metadata.tables[model.__tablename__]
            assert _tenant_fk_targets(table) == {"tenants.id"}, table.name
