"""Supplier SQLAlchemy model"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Text

from .base import Base, utcnow


class Supplier(Base):
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    name = Column(Text, nullable=False)
    contact_name = Column(Text, nullable=True)
    email = Column(Text, nullable=True)
    phone = Column(Text, nullable=True)
    address = Column(Text, nullable=True)
    city = Column(Text, nullable=True)
    state = Column(Text, nullable=True)
    zip_code = Column(Text, nullable=True)
    country = Column(Text, nullable=True)
    website = Column(Text, nullable=True)
    tax_id = Column(Text, nullable=True)
    payment_terms = Column(Text, nullable=True)
    category = Column(Text, nullable=True)
    rating = Column(Integer, nullable=True)
    preferred_supplier = Column(Boolean, default=False)
    notes = Column(Text, nullable=True)
    bank_details = Column(Text, nullable=True)
    active = Column(Boolean, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
