"""Purchase order and purchase order line item models"""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
)

from .base import Base, utcnow


class PurchaseOrder(Base):
    """Order placed with a supplier. PO numbers are unique per tenant."""
    __tablename__ = "purchase_orders"
    __table_args__ = (
        UniqueConstraint("po_number", "tenant_id", name="po_number_tenant_unique"),
        Index("ix_purchase_orders_project_id", "project_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    po_number = Column(Text, nullable=False)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=False)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=True)
    issue_date = Column(Date, nullable=False)
    expected_delivery_date = Column(Date, nullable=True)
    delivery_address = Column(Text, nullable=True)
    status = Column(Text, nullable=False, default="draft")
    subtotal = Column(Float, nullable=False)
    tax = Column(Float, nullable=True)
    shipping = Column(Float, nullable=True)
    total = Column(Float, nullable=False)
    notes = Column(Text, nullable=True)
    terms = Column(Text, nullable=True)
    supplier_reference = Column(Text, nullable=True)
    received_date = Column(Date, nullable=True)
    received_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    invoice_received = Column(Boolean, default=False)
    invoice_paid = Column(Boolean, default=False)
    invoice_amount = Column(Float, nullable=True)
    invoice_date = Column(Date, nullable=True)
    invoice_number = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)


class PurchaseOrderItem(Base):
    __tablename__ = "purchase_order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    purchase_order_id = Column(Integer, ForeignKey("purchase_orders.id"), nullable=False)
    description = Column(Text, nullable=False)
    sku = Column(Text, nullable=True)
    quantity = Column(Float, nullable=False)
    unit_price = Column(Float, nullable=False)
    unit = Column(Text, default="each")
    inventory_item_id = Column(Integer, ForeignKey("inventory_items.id"), nullable=True)
    total = Column(Float, nullable=False)
    received_quantity = Column(Float, default=0)
    notes = Column(Text, nullable=True)
