"""Pydantic insert schemas for staff, field work, tasks and expenses"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class EmployeeCreate(BaseModel):
    tenant_id: Optional[int] = None
    user_id: Optional[int] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    hire_date: Optional[date] = None
    termination_date: Optional[date] = None
    hourly_rate: Optional[float] = None
    salary: Optional[float] = None
    notes: Optional[str] = None
    created_by: Optional[int] = None


class TimesheetCreate(BaseModel):
    tenant_id: Optional[int] = None
    employee_id: int
    project_id: Optional[int] = None
    date: date
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    break_duration: Optional[int] = Field(None, ge=0, description="Minutes")
    hours: Optional[float] = Field(None, ge=0)
    billable: Optional[bool] = None
    task_description: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = None
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None


class SurveyCreate(BaseModel):
    tenant_id: Optional[int] = None
    project_id: int
    quote_id: Optional[int] = None
    scheduled_date: date
    status: Optional[str] = None
    notes: Optional[str] = None
    measurements_collected: Optional[bool] = None
    photos_collected: Optional[bool] = None
    client_present: Optional[bool] = None
    deposit_invoice_requested: Optional[bool] = None
    assigned_to: Optional[int] = None
    completed_by: Optional[int] = None
    completed_at: Optional[datetime] = None
    created_by: Optional[int] = None


class InstallationCreate(BaseModel):
    tenant_id: Optional[int] = None
    project_id: int
    quote_id: Optional[int] = None
    deposit_invoice_id: Optional[int] = None
    scheduled_date: date
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    assigned_to: Optional[List[int]] = None
    client_signoff: Optional[bool] = None
    snagging_required: Optional[bool] = None
    snagging_task_list_id: Optional[int] = None
    final_invoice_requested: Optional[bool] = None
    completed_by: Optional[int] = None
    completed_at: Optional[datetime] = None
    created_by: Optional[int] = None


class TaskListCreate(BaseModel):
    tenant_id: Optional[int] = None
    project_id: int
    installation_id: Optional[int] = None
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    due_date: Optional[date] = None
    status: Optional[str] = None
    final_invoice_blocked: Optional[bool] = None
    all_tasks_completed: Optional[bool] = None
    client_signoff: Optional[bool] = None
    client_signoff_date: Optional[datetime] = None
    created_by: Optional[int] = None


class TaskCreate(BaseModel):
    """Tasks name their tenant explicitly; it must match the task list's"""
    tenant_id: Optional[int] = None
    task_list_id: int
    description: str = Field(..., min_length=1)
    status: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[date] = None
    estimated_hours: Optional[float] = None
    actual_hours: Optional[float] = None
    assigned_to: Optional[int] = None
    client_approved: Optional[bool] = None
    photos_required: Optional[bool] = None
    photo_urls: Optional[List[str]] = None
    completed_by: Optional[int] = None
    completed_at: Optional[datetime] = None


class ExpenseCreate(BaseModel):
    tenant_id: Optional[int] = None
    description: str = Field(..., min_length=1)
    amount: float
    date: date
    category: str = Field(..., min_length=1)
    project_id: Optional[int] = None
    supplier_id: Optional[int] = None
    payment_method: Optional[str] = None
    receipt_url: Optional[str] = None
    reimbursable: Optional[bool] = None
    reimbursed_at: Optional[datetime] = None
    approved: Optional[bool] = None
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_by: Optional[int] = None
