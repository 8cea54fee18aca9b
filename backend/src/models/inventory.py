"""Inventory item and inventory transaction models"""

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Index, Integer, Text

from .base import Base, utcnow


class TransactionType:
    INCOMING = "incoming"
    OUTGOING = "outgoing"
    ADJUSTMENT = "adjustment"


class InventoryItem(Base):
    """Stocked item.

    ``current_stock`` is derived from the transaction ledger and is never
    written through the regular update path. ``minimum_stock`` is the legacy
    low-stock threshold, consulted only when ``reorder_point`` is unset.
    """
    __tablename__ = "inventory_items"
    __table_args__ = (
        Index("ix_inventory_items_tenant_id", "tenant_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    sku = Column(Text, nullable=True)
    category = Column(Text, nullable=True)
    unit_of_measure = Column(Text, default="each")
    current_stock = Column(Float, default=0)
    reorder_point = Column(Float, nullable=True)
    minimum_stock = Column(Float, nullable=True)
    reorder_quantity = Column(Float, nullable=True)
    location = Column(Text, nullable=True)
    cost = Column(Float, nullable=True)
    last_purchase_price = Column(Float, nullable=True)
    tax_rate = Column(Float, default=0.1)
    preferred_supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=True)
    notes = Column(Text, nullable=True)
    active = Column(Boolean, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)


class InventoryTransaction(Base):
    """Signed stock movement against one inventory item.

    ``tenant_id`` is nullable only to accommodate rows written before the
    column was enforced; new rows always carry it.
    """
    __tablename__ = "inventory_transactions"
    __table_args__ = (
        Index("ix_inventory_transactions_item_id", "inventory_item_id"),
        Index("ix_inventory_transactions_tenant_id", "tenant_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=True)
    inventory_item_id = Column(Integer, ForeignKey("inventory_items.id"), nullable=False)
    transaction_type = Column(Text, nullable=False)
    quantity = Column(Float, nullable=False)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=True)
    purchase_order_id = Column(Integer, ForeignKey("purchase_orders.id"), nullable=True)
    unit_cost = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)
    reference = Column(Text, nullable=True)
    transaction_date = Column(DateTime, nullable=False, default=utcnow)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
