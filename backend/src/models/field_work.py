"""Survey and installation models (on-site work scheduled against a project)"""

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, Text

from .base import Base, PortableJSONB, utcnow


class SurveyStatus:
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Survey(Base):
    __tablename__ = "surveys"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False)
    quote_id = Column(Integer, ForeignKey("quotes.id"), nullable=True)
    scheduled_date = Column(Date, nullable=False)
    status = Column(Text, nullable=False, default=SurveyStatus.SCHEDULED)
    notes = Column(Text, nullable=True)
    measurements_collected = Column(Boolean, default=False)
    photos_collected = Column(Boolean, default=False)
    client_present = Column(Boolean, default=False)
    deposit_invoice_requested = Column(Boolean, default=False)
    assigned_to = Column(Integer, ForeignKey("users.id"), nullable=True)
    completed_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)


class Installation(Base):
    __tablename__ = "installations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False)
    quote_id = Column(Integer, ForeignKey("quotes.id"), nullable=True)
    deposit_invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=True)
    scheduled_date = Column(Date, nullable=False)
    start_time = Column(DateTime, nullable=True)
    end_time = Column(DateTime, nullable=True)
    status = Column(Text, nullable=False, default="scheduled")
    notes = Column(Text, nullable=True)
    assigned_to = Column(PortableJSONB, nullable=True)
    client_signoff = Column(Boolean, default=False)
    snagging_required = Column(Boolean, default=False)
    snagging_task_list_id = Column(
        Integer,
        ForeignKey("task_lists.id", use_alter=True, name="installations_snagging_task_list_id_fk"),
        nullable=True,
    )
    final_invoice_requested = Column(Boolean, default=False)
    completed_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
