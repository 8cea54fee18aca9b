"""Catalog item model (reusable price-list entries)"""

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, Text

from .base import Base, utcnow


class CatalogItem(Base):
    __tablename__ = "catalog_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    unit_price = Column(Float, nullable=False)
    category = Column(Text, nullable=True)
    sku = Column(Text, nullable=True)
    type = Column(Text, default="product")
    active = Column(Boolean, default=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
