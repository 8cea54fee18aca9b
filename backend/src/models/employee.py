"""Employee and timesheet models"""

from sqlalchemy import Boolean, Column, Date, DateTime, Float, ForeignKey, Index, Integer, Text

from .base import Base, utcnow


class Employee(Base):
    """Employee record, optionally linked one-to-one with a login user."""
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, unique=True)
    full_name = Column(Text, nullable=True)
    email = Column(Text, nullable=True)
    phone = Column(Text, nullable=True)
    position = Column(Text, nullable=True)
    department = Column(Text, nullable=True)
    hire_date = Column(Date, nullable=True)
    termination_date = Column(Date, nullable=True)
    hourly_rate = Column(Float, nullable=True)
    salary = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)


class Timesheet(Base):
    __tablename__ = "timesheets"
    __table_args__ = (
        Index("ix_timesheets_employee_id", "employee_id"),
        Index("ix_timesheets_date", "date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=True)
    date = Column(Date, nullable=False)
    start_time = Column(DateTime, nullable=True)
    end_time = Column(DateTime, nullable=True)
    break_duration = Column(Integer, nullable=True)
    hours = Column(Float, nullable=True)
    billable = Column(Boolean, default=True)
    task_description = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(Text, default="pending")
    approved_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    approved_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
