"""Pydantic insert schemas for suppliers and purchase orders"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class SupplierCreate(BaseModel):
    tenant_id: Optional[int] = None
    name: str = Field(..., min_length=1)
    contact_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    website: Optional[str] = None
    tax_id: Optional[str] = None
    payment_terms: Optional[str] = None
    category: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    preferred_supplier: Optional[bool] = None
    notes: Optional[str] = None
    bank_details: Optional[str] = None
    active: Optional[bool] = None
    created_by: Optional[int] = None


class PurchaseOrderCreate(BaseModel):
    """Schema for creating a purchase order.

    ``po_number`` is allocated (PO-<tenant>-<year>-<seq>) when omitted.
    """
    tenant_id: Optional[int] = None
    po_number: Optional[str] = None
    supplier_id: int
    project_id: Optional[int] = None
    issue_date: Optional[date] = None
    expected_delivery_date: Optional[date] = None
    delivery_address: Optional[str] = None
    status: Optional[str] = None
    subtotal: float = 0
    tax: Optional[float] = None
    shipping: Optional[float] = None
    total: float = 0
    notes: Optional[str] = None
    terms: Optional[str] = None
    supplier_reference: Optional[str] = None
    received_date: Optional[date] = None
    received_by: Optional[int] = None
    invoice_received: Optional[bool] = None
    invoice_paid: Optional[bool] = None
    invoice_amount: Optional[float] = None
    invoice_date: Optional[date] = None
    invoice_number: Optional[str] = None
    created_by: Optional[int] = None


class PurchaseOrderItemCreate(BaseModel):
    """Tenant is inherited from the purchase order when omitted"""
    purchase_order_id: int
    tenant_id: Optional[int] = None
    description: str = Field(..., min_length=1)
    sku: Optional[str] = None
    quantity: float
    unit_price: float
    unit: Optional[str] = None
    inventory_item_id: Optional[int] = None
    total: float
    received_quantity: Optional[float] = None
    notes: Optional[str] = None
