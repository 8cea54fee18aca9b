"""Quote and quote line item models"""

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


class QuoteStatus:
    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    CONVERTED = "converted"


class Quote(Base):
    """Quote issued to a customer.

    Quote numbers are unique per tenant (``QUO-{tenant}-{year}-{seq}``).
    """
    __tablename__ = "quotes"
    __table_args__ = (
        UniqueConstraint("quote_number", "tenant_id", name="quote_number_tenant_unique"),
        Index("ix_quotes_project_id", "project_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    quote_number = Column(Text, nullable=False)
    reference = Column(Text, nullable=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True)
    issue_date = Column(Date, nullable=False)
    expiry_date = Column(Date, nullable=True)
    status = Column(Text, nullable=False, default=QuoteStatus.DRAFT)
    client_accepted_at = Column(DateTime, nullable=True)
    client_rejected_at = Column(DateTime, nullable=True)
    client_accepted_by = Column(Text, nullable=True)
    survey_scheduled = Column(Boolean, default=False)
    survey_id = Column(
        Integer,
        ForeignKey("surveys.id", use_alter=True, name="quotes_survey_id_fk"),
        nullable=True,
    )
    fabrication_drawings_ready = Column(Boolean, default=False)
    subtotal = Column(Float, nullable=False)
    tax = Column(Float, nullable=True)
    discount = Column(Float, nullable=True)
    total = Column(Float, nullable=False)
    notes = Column(Text, nullable=True)
    terms = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)


class QuoteItem(Base):
    __tablename__ = "quote_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    quote_id = Column(Integer, ForeignKey("quotes.id"), nullable=False)
    description = Column(Text, nullable=False)
    quantity = Column(Float, nullable=False)
    unit_price = Column(Float, nullable=False)
    total = Column(Float, nullable=False)
    catalog_item_id = Column(Integer, ForeignKey("catalog_items.id"), nullable=True)
