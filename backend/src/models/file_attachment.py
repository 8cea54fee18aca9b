"""File attachment model (polymorphic link to any business entity)"""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, Text

from .base import Base, utcnow


class FileAttachment(Base):
    """Uploaded file attached to ``(related_type, related_id)``.

    The related pair is not a foreign key; ownership of the target is
    checked by the tenant verifier instead.
    """
    __tablename__ = "file_attachments"
    __table_args__ = (
        Index("ix_file_attachments_related", "related_type", "related_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    file_name = Column(Text, nullable=False)
    file_size = Column(Integer, nullable=False)
    file_type = Column(Text, nullable=False)
    file_url = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    related_id = Column(Integer, nullable=True)
    related_type = Column(Text, nullable=True)
    uploaded_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
