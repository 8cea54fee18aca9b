"""Pydantic insert schemas for inventory items and the inventory transaction log"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


class InventoryItemCreate(BaseModel):
    """``current_stock`` is the opening balance; afterwards only the ledger moves it"""
    tenant_id: Optional[int] = None
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    sku: Optional[str] = None
    category: Optional[str] = None
    unit_of_measure: Optional[str] = None
    current_stock: Optional[float] = None
    reorder_point: Optional[float] = None
    minimum_stock: Optional[float] = None
    reorder_quantity: Optional[float] = None
    location: Optional[str] = None
    cost: Optional[float] = None
    last_purchase_price: Optional[float] = None
    tax_rate: Optional[float] = None
    preferred_supplier_id: Optional[int] = None
    notes: Optional[str] = None
    active: Optional[bool] = None
    created_by: Optional[int] = None


class InventoryTransactionCreate(BaseModel):
    """Tenant is inherited from the inventory item when omitted"""
    inventory_item_id: int
    tenant_id: Optional[int] = None
    transaction_type: Literal["incoming", "outgoing", "adjustment"]
    quantity: float = Field(..., gt=0)
    project_id: Optional[int] = None
    purchase_order_id: Optional[int] = None
    unit_cost: Optional[float] = None
    notes: Optional[str] = None
    reference: Optional[str] = None
    transaction_date: Optional[datetime] = None
    created_by: Optional[int] = None
