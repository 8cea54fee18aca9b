"""Quote deletion guard.

A quote may only be deleted while nothing downstream depends on it. Rules
are evaluated in order and the first failing rule decides the reason.
"""

from dataclasses import dataclass
from typing import Optional

from domain.storage.ports.record_store_port import StorageTransactionPort
from domain.storage.tenant_filter import TenantFilter
from models import Invoice, Quote, QuoteStatus, Survey, SurveyStatus

QUOTE_NOT_FOUND = "Quote not found"
QUOTE_CONVERTED = "Quote has been converted to an invoice and cannot be deleted"
QUOTE_ACCEPTED = "Quote has been accepted by the client and cannot be deleted"
QUOTE_INVOICED = "Quote is linked to one or more invoices"
QUOTE_SURVEYED = "Quote is linked to a completed survey"


@dataclass(frozen=True)
class QuoteDeletionCheck:
    can_delete: bool
    reason: Optional[str] = None


async def evaluate_quote_deletion(
    tx: StorageTransactionPort,
    quote_id: int,
    tenant: Optional[TenantFilter] = None,
) -> QuoteDeletionCheck:
    quote = await tx.records(Quote).get(quote_id, tenant)
    if quote is None:
        return QuoteDeletionCheck(False, QUOTE_NOT_FOUND)

    if quote.status == QuoteStatus.CONVERTED:
        return QuoteDeletionCheck(False, QUOTE_CONVERTED)
    if quote.status == QuoteStatus.ACCEPTED:
        return QuoteDeletionCheck(False, QUOTE_ACCEPTED)

    # Unscoped on purpose: an invoice of any tenant pointing here still blocks
    if await tx.records(Invoice).count(quote_id=quote.id) > 0:
        return QuoteDeletionCheck(False, QUOTE_INVOICED)

    if quote.survey_id is not None:
        survey = await tx.records(Survey).get(quote.survey_id)
        if survey is not None and survey.status == SurveyStatus.COMPLETED:
            return QuoteDeletionCheck(False, QUOTE_SURVEYED)

    return QuoteDeletionCheck(True)
