"""Pydantic insert schemas for the global settings singletons"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class CompanySettingsCreate(BaseModel):
    company_name: str
    company_logo: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    vat_number: Optional[str] = None
    registration_number: Optional[str] = None
    certifications: Optional[List[str]] = None
    default_invoice_terms: Optional[str] = None
    default_quote_terms: Optional[str] = None
    terms_and_conditions: Optional[str] = None
    bank_details: Optional[str] = None
    bank_account_name: Optional[str] = None
    bank_sort_code: Optional[str] = None
    bank_account_number: Optional[str] = None
    bank_name: Optional[str] = None
    footer_text: Optional[str] = None
    primary_color: Optional[str] = None
    currency: Optional[str] = None
    currency_code: Optional[str] = None
    currency_symbol: Optional[str] = None
    custom_terminology: Optional[Dict[str, Any]] = None
    updated_by: Optional[int] = None


class SystemSettingsCreate(BaseModel):
    dark_mode: Optional[bool] = None
    email_notifications: Optional[bool] = None
    auto_save: Optional[bool] = None
    default_page_size: Optional[int] = None
    term_customer: Optional[str] = None
    term_project: Optional[str] = None
    term_quote: Optional[str] = None
    term_invoice: Optional[str] = None
    term_survey: Optional[str] = None
    term_installation: Optional[str] = None
    term_supplier: Optional[str] = None
    term_expense: Optional[str] = None
    term_purchase_order: Optional[str] = None
    updated_by: Optional[int] = None
