"""User, invitation and password reset token models"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
)

from .base import Base, utcnow


class User(Base):
    """Application user. Usernames are unique within a tenant."""
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("username", "tenant_id", name="username_tenant_unique"),
        Index("ix_users_tenant_id", "tenant_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    username = Column(Text, nullable=False)
    password = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    full_name = Column(Text, nullable=False)
    role = Column(Text, nullable=False, default="employee")
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    last_login = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', tenant_id={self.tenant_id})>"


class UserInvitation(Base):
    __tablename__ = "user_invitations"
    __table_args__ = (
        UniqueConstraint("email", "tenant_id", name="invitation_email_tenant_unique"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    email = Column(Text, nullable=False)
    role = Column(Text, nullable=False, default="employee")
    invited_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    invitation_token = Column(Text, nullable=False, unique=True)
    status = Column(Text, nullable=False, default="pending")
    expires_at = Column(DateTime, nullable=False)
    accepted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)


class PasswordResetToken(Base):
    """Single-use password reset token; tenant is inherited from the user."""
    __tablename__ = "password_reset_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    token = Column(Text, nullable=False, unique=True)
    expires_at = Column(DateTime, nullable=False)
    used = Column(Boolean, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
