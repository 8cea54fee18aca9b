"""Unit tests for integrity rules derived from the shared table metadata."""

from datetime import datetime

from infrastructure.storage.table_rules import SchemaRules
from models import Base


class TestSchemaRules:

    def setup_method(self):
        self.rules = SchemaRules(Base.metadata)

    def test_required_columns_exclude_primary_key_and_nullable(self):
        quotes = self.rules.for_table("quotes")

        assert "quote_number" in quotes.required
        assert "tenant_id" in quotes.required
        assert "id" not in quotes.required
        assert "notes" not in quotes.required

    def test_unique_sets_include_composite_constraints(self):
        purchase_orders = self.rules.for_table("purchase_orders")
        tenants = self.rules.for_table("tenants")

        assert ("po_number", "tenant_id") in purchase_orders.unique_sets
        assert ("subdomain",) in tenants.unique_sets

    def test_foreign_keys_and_reverse_index(self):
        items = self.rules.for_table("inventory_transactions")
        targets = {(fk.column, fk.target_table) for fk in items.foreign_keys}

        assert ("inventory_item_id", "inventory_items") in targets
        assert ("inventory_transactions", "inventory_item_id", "id") in self.rules.referenced_by["inventory_items"]

    def test_defaults(self):
        tenants = self.rules.for_table("tenants")

        assert tenants.default_for("plan") == "basic"
        assert tenants.default_for("active") is True
        assert tenants.default_for("logo_url") is None
        assert isinstance(tenants.default_for("created_at"), datetime)

    def test_inventory_transaction_tenant_is_nullable(self):
        transactions = self.rules.for_table("inventory_transactions")

        assert transactions.is_nullable("tenant_id")
        assert not transactions.is_nullable("inventory_item_id")

    def test_unknown_table(self):
        assert self.rules.for_table("no_such_table") is None
