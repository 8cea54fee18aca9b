"""Task list and task models"""

from sqlalchemy import Boolean, Column, Date, DateTime, Float, ForeignKey, Integer, Text

from .base import Base, PortableJSONB, utcnow


class TaskList(Base):
    """Checklist of work for a project.

    ``all_tasks_completed`` and ``client_signoff`` gate final invoicing.
    """
    __tablename__ = "task_lists"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False)
    installation_id = Column(Integer, ForeignKey("installations.id"), nullable=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    due_date = Column(Date, nullable=True)
    status = Column(Text, nullable=False, default="open")
    final_invoice_blocked = Column(Boolean, default=True)
    all_tasks_completed = Column(Boolean, default=False)
    client_signoff = Column(Boolean, default=False)
    client_signoff_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    task_list_id = Column(Integer, ForeignKey("task_lists.id"), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(Text, nullable=False, default="pending")
    priority = Column(Text, default="medium")
    due_date = Column(Date, nullable=True)
    estimated_hours = Column(Float, nullable=True)
    actual_hours = Column(Float, nullable=True)
    assigned_to = Column(Integer, ForeignKey("users.id"), nullable=True)
    client_approved = Column(Boolean, default=False)
    photos_required = Column(Boolean, default=False)
    photo_urls = Column(PortableJSONB, nullable=True)
    completed_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
