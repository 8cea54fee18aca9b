"""Pydantic insert schemas for customers, projects, quotes, invoices and the catalog"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class CustomerCreate(BaseModel):
    tenant_id: Optional[int] = None
    name: str = Field(..., min_length=1)
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    notes: Optional[str] = None
    created_by: Optional[int] = None


class ProjectCreate(BaseModel):
    tenant_id: Optional[int] = None
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    customer_id: Optional[int] = None
    status: Optional[str] = None
    start_date: Optional[date] = None
    deadline: Optional[date] = None
    completed_date: Optional[date] = None
    budget: Optional[float] = None
    fabrication_drawings_url: Optional[str] = None
    snagging_required: Optional[bool] = None
    deposit_invoice_id: Optional[int] = None
    final_invoice_id: Optional[int] = None
    deposit_paid: Optional[bool] = None
    final_paid: Optional[bool] = None
    created_by: Optional[int] = None


class QuoteCreate(BaseModel):
    """Schema for creating a quote.

    ``quote_number`` is allocated (QUO-<tenant>-<year>-<seq>) when omitted.
    """
    tenant_id: Optional[int] = None
    quote_number: Optional[str] = None
    reference: Optional[str] = None
    project_id: Optional[int] = None
    customer_id: Optional[int] = None
    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None
    status: Optional[str] = None
    client_accepted_at: Optional[datetime] = None
    client_rejected_at: Optional[datetime] = None
    client_accepted_by: Optional[str] = None
    survey_scheduled: Optional[bool] = None
    survey_id: Optional[int] = None
    fabrication_drawings_ready: Optional[bool] = None
    subtotal: float = 0
    tax: Optional[float] = None
    discount: Optional[float] = None
    total: float = 0
    notes: Optional[str] = None
    terms: Optional[str] = None
    created_by: Optional[int] = None


class LineItemCreate(BaseModel):
    description: str = Field(..., min_length=1)
    quantity: float
    unit_price: float
    total: float
    catalog_item_id: Optional[int] = None
    tenant_id: Optional[int] = None


class QuoteItemCreate(LineItemCreate):
    """Tenant is inherited from the quote when omitted"""
    quote_id: int


class InvoiceCreate(BaseModel):
    """Schema for creating an invoice.

    ``invoice_number`` is allocated (INV-<tenant>-<year>-<seq>) when omitted.
    """
    tenant_id: Optional[int] = None
    invoice_number: Optional[str] = None
    reference: Optional[str] = None
    project_id: Optional[int] = None
    customer_id: Optional[int] = None
    quote_id: Optional[int] = None
    type: Optional[str] = None
    issue_date: Optional[date] = None
    due_date: date
    status: Optional[str] = None
    payment_date: Optional[date] = None
    payment_amount: Optional[float] = None
    payment_method: Optional[str] = None
    payment_reference: Optional[str] = None
    fabrication_drawings_included: Optional[bool] = None
    installation_requested: Optional[bool] = None
    installation_id: Optional[int] = None
    subtotal: float = 0
    tax: Optional[float] = None
    discount: Optional[float] = None
    total: float = 0
    notes: Optional[str] = None
    terms: Optional[str] = None
    created_by: Optional[int] = None


class InvoiceItemCreate(LineItemCreate):
    """Tenant is inherited from the invoice when omitted"""
    invoice_id: int


class CatalogItemCreate(BaseModel):
    tenant_id: Optional[int] = None
    name: str = Field(..., min_length=1)
    description: str
    unit_price: float
    category: Optional[str] = None
    sku: Optional[str] = None
    type: Optional[str] = None
    active: Optional[bool] = None
    created_by: Optional[int] = None
