"""Pydantic insert schemas for tenants, users and organizations"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


class TenantCreate(BaseModel):
    """Schema for creating a tenant (administrative)"""
    name: str = Field(..., min_length=1, max_length=200)
    subdomain: str = Field(..., min_length=1, max_length=63)
    status: Optional[str] = None
    company_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    logo_url: Optional[str] = None
    custom_domain: Optional[str] = None
    primary_color: Optional[str] = None
    active: Optional[bool] = None
    plan: Optional[str] = None
    trial_ends: Optional[datetime] = None
    custom_terminology: Optional[Dict[str, Any]] = None
    settings: Optional[Dict[str, Any]] = None

    @field_validator('subdomain')
    @classmethod
    def normalize_subdomain(cls, v: str) -> str:
        return v.strip().lower()


class UserCreate(BaseModel):
    tenant_id: Optional[int] = None
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1, description="Password hash")
    email: str = Field(..., min_length=3)
    full_name: str = Field(..., min_length=1)
    role: Optional[str] = None
    active: Optional[bool] = None
    last_login: Optional[datetime] = None


class UserInvitationCreate(BaseModel):
    tenant_id: Optional[int] = None
    email: str = Field(..., min_length=3)
    role: Optional[str] = None
    invited_by: int
    invitation_token: str = Field(..., min_length=1)
    status: Optional[str] = None
    expires_at: datetime
    accepted_at: Optional[datetime] = None


class PasswordResetTokenCreate(BaseModel):
    """Tenant is inherited from the user when omitted"""
    user_id: int
    tenant_id: Optional[int] = None
    token: str = Field(..., min_length=1)
    expires_at: datetime
    used: Optional[bool] = None


class OrganizationCreate(BaseModel):
    tenant_id: Optional[int] = None
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    active: Optional[bool] = None

    @field_validator('name')
    @classmethod
    def validate_name_not_empty(cls, v: str) -> str:
        """Ensure name is not whitespace-only"""
        if not v.strip():
            raise ValueError("Organization name cannot be empty or whitespace")
        return v.strip()


class UserOrganizationCreate(BaseModel):
    """Tenant is inherited from the organization when omitted"""
    user_id: int
    organization_id: int
    tenant_id: Optional[int] = None
    role: Optional[str] = None
