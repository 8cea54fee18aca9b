"""Tenant SQLAlchemy model"""

from sqlalchemy import Boolean, Column, DateTime, Integer, Text

from .base import Base, PortableJSONB, utcnow


class Tenant(Base):
    """Top-level partition. Every business row belongs to exactly one tenant.

    A tenant owns itself: tenant-scoped lookups compare against ``id``.
    """
    __tablename__ = "tenants"
    __tenant_column__ = "id"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    subdomain = Column(Text, nullable=False, unique=True)
    status = Column(Text, default="active")
    company_name = Column(Text, nullable=True)
    contact_email = Column(Text, nullable=True)
    contact_phone = Column(Text, nullable=True)
    logo_url = Column(Text, nullable=True)
    custom_domain = Column(Text, nullable=True, unique=True)
    primary_color = Column(Text, default="#1E40AF")
    active = Column(Boolean, nullable=False, default=True)
    plan = Column(Text, nullable=False, default="basic")
    trial_ends = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=True)
    custom_terminology = Column(PortableJSONB, nullable=True)
    settings = Column(PortableJSONB, nullable=True)

    def __repr__(self):
        return f"<Tenant(id={self.id}, subdomain='{self.subdomain}')>"
