"""Pydantic insert schema for file attachments"""

from typing import Optional

from pydantic import BaseModel, Field


class FileAttachmentCreate(BaseModel):
    """``related_type`` must name a known entity kind (see RelatedEntityType)"""
    tenant_id: Optional[int] = None
    file_name: str = Field(..., min_length=1)
    file_size: int = Field(..., ge=0)
    file_type: str
    file_url: str
    description: Optional[str] = None
    related_id: Optional[int] = None
    related_type: Optional[str] = None
    uploaded_by: Optional[int] = None
