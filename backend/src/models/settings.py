"""Global settings singletons (not tenant-owned)"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Text

from .base import Base, PortableJSONB, utcnow


class CompanySettings(Base):
    __tablename__ = "company_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_name = Column(Text, nullable=False)
    company_logo = Column(Text, nullable=True)
    address = Column(Text, nullable=True)
    city = Column(Text, nullable=True)
    state = Column(Text, nullable=True)
    zip_code = Column(Text, nullable=True)
    country = Column(Text, nullable=True)
    phone = Column(Text, nullable=True)
    email = Column(Text, nullable=True)
    website = Column(Text, nullable=True)
    vat_number = Column(Text, nullable=True)
    registration_number = Column(Text, nullable=True)
    certifications = Column(PortableJSONB, nullable=True)
    default_invoice_terms = Column(Text, nullable=True)
    default_quote_terms = Column(Text, nullable=True)
    terms_and_conditions = Column(Text, nullable=True)
    bank_details = Column(Text, nullable=True)
    bank_account_name = Column(Text, nullable=True)
    bank_sort_code = Column(Text, nullable=True)
    bank_account_number = Column(Text, nullable=True)
    bank_name = Column(Text, nullable=True)
    footer_text = Column(Text, nullable=True)
    primary_color = Column(Text, default="#2563eb")
    currency = Column(Text, default="USD")
    currency_code = Column(Text, default="USD")
    currency_symbol = Column(Text, default="$")
    custom_terminology = Column(PortableJSONB, nullable=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow)
    updated_by = Column(Integer, ForeignKey("users.id"), nullable=True)


class SystemSettings(Base):
    __tablename__ = "system_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    dark_mode = Column(Boolean, default=False)
    email_notifications = Column(Boolean, default=True)
    auto_save = Column(Boolean, default=True)
    default_page_size = Column(Integer, default=10)
    term_customer = Column(Text, default="Customer")
    term_project = Column(Text, default="Project")
    term_quote = Column(Text, default="Quote")
    term_invoice = Column(Text, default="Invoice")
    term_survey = Column(Text, default="Survey")
    term_installation = Column(Text, default="Installation")
    term_supplier = Column(Text, default="Supplier")
    term_expense = Column(Text, default="Expense")
    term_purchase_order = Column(Text, default="Purchase Order")
    updated_at = Column(DateTime, nullable=False, default=utcnow)
    updated_by = Column(Integer, ForeignKey("users.id"), nullable=True)
