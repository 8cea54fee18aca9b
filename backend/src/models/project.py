"""Project SQLAlchemy model"""

from sqlalchemy import Boolean, Column, Date, DateTime, Float, ForeignKey, Index, Integer, Text

from .base import Base, utcnow


class Project(Base):
    """Project for a customer; the root of the cascade deletion tree.

    ``deposit_invoice_id`` / ``final_invoice_id`` are informational pointers
    without a foreign key, so invoices can be removed before their project.
    """
    __tablename__ = "projects"
    __table_args__ = (
        Index("ix_projects_tenant_id", "tenant_id"),
        Index("ix_projects_customer_id", "customer_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True)
    status = Column(Text, nullable=False, default="pending")
    start_date = Column(Date, nullable=True)
    deadline = Column(Date, nullable=True)
    completed_date = Column(Date, nullable=True)
    budget = Column(Float, nullable=True)
    fabrication_drawings_url = Column(Text, nullable=True)
    snagging_required = Column(Boolean, default=False)
    deposit_invoice_id = Column(Integer, nullable=True)
    final_invoice_id = Column(Integer, nullable=True)
    deposit_paid = Column(Boolean, default=False)
    final_paid = Column(Boolean, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
