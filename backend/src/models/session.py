"""HTTP session persistence table"""

from sqlalchemy import Column, DateTime, Index, Text

from .base import Base, PortableJSONB


class SessionRecord(Base):
    """Serialized session payload keyed by session id."""
    __tablename__ = "sessions"
    __table_args__ = (
        Index("ix_sessions_expire", "expire"),
    )

    sid = Column(Text, primary_key=True)
    sess = Column(PortableJSONB, nullable=False)
    expire = Column(DateTime, nullable=False)
