"""Invoice and invoice line item models"""

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


class InvoiceStatus:
    DRAFT = "draft"
    ISSUED = "issued"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class Invoice(Base):
    """Invoice issued to a customer, optionally generated from a quote."""
    __tablename__ = "invoices"
    __table_args__ = (
        UniqueConstraint("invoice_number", "tenant_id", name="invoice_number_tenant_unique"),
        Index("ix_invoices_project_id", "project_id"),
        Index("ix_invoices_quote_id", "quote_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    invoice_number = Column(Text, nullable=False)
    reference = Column(Text, nullable=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True)
    quote_id = Column(Integer, ForeignKey("quotes.id"), nullable=True)
    type = Column(Text, nullable=False, default="final")
    issue_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(Text, nullable=False, default=InvoiceStatus.DRAFT)
    payment_date = Column(Date, nullable=True)
    payment_amount = Column(Float, nullable=True)
    payment_method = Column(Text, nullable=True)
    payment_reference = Column(Text, nullable=True)
    fabrication_drawings_included = Column(Boolean, default=False)
    installation_requested = Column(Boolean, default=False)
    installation_id = Column(
        Integer,
        ForeignKey("installations.id", use_alter=True, name="invoices_installation_id_fk"),
        nullable=True,
    )
    subtotal = Column(Float, nullable=False)
    tax = Column(Float, nullable=True)
    discount = Column(Float, nullable=True)
    total = Column(Float, nullable=False)
    notes = Column(Text, nullable=True)
    terms = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)


class InvoiceItem(Base):
    __tablename__ = "invoice_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False)
    description = Column(Text, nullable=False)
    quantity = Column(Float, nullable=False)
    unit_price = Column(Float, nullable=False)
    total = Column(Float, nullable=False)
    catalog_item_id = Column(Integer, ForeignKey("catalog_items.id"), nullable=True)
