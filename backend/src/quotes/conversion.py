"""Quote to invoice conversion.

An accepted quote becomes an issued invoice carrying the quote's totals,
notes, terms and line items; the quote is then marked converted. All writes
happen in the caller's transaction.
"""

import logging
from datetime import date, timedelta
from typing import Optional

from domain.storage.errors import ValidationError
from domain.storage.numbering import DocumentPrefix
from domain.storage.ports.record_store_port import StorageTransactionPort
from domain.storage.tenant_filter import TenantFilter
from models import Invoice, InvoiceStatus, Quote, QuoteItem, QuoteStatus

logger = logging.getLogger(__name__)


async def convert_quote(
    tx: StorageTransactionPort,
    quote_id: int,
    tenant: TenantFilter,
    invoices,
    invoice_items,
    due_days: int = 30,
    created_by: Optional[int] = None,
):
    """Create the invoice for an accepted quote.

    Args:
        tx: Open store transaction
        quote_id: Quote to convert
        tenant: Visibility scope for the quote lookup
        invoices: Invoice repository (its ``insert_numbered_in`` allocates the number)
        invoice_items: Invoice item repository
        due_days: Days from today until the invoice falls due
        created_by: User recorded as the invoice author

    Returns:
        The new invoice, or None when the quote is not visible

    Raises:
        ValidationError: The quote is not in accepted status
    """
    quote = await tx.records(Quote).get(quote_id, tenant)
    if quote is None:
        return None
    if quote.status != QuoteStatus.ACCEPTED:
        raise ValidationError(
            "Only accepted quotes can be converted to invoices",
            entity="Quote",
            field="status",
        )

    quote_values = {
        "id": quote.id,
        "tenant_id": quote.tenant_id,
        "project_id": quote.project_id,
        "customer_id": quote.customer_id,
        "subtotal": quote.subtotal,
        "tax": quote.tax,
        "discount": quote.discount,
        "total": quote.total,
        "notes": quote.notes,
        "terms": quote.terms,
        "quote_number": quote.quote_number,
    }
    items = await tx.records(QuoteItem).list(quote_id=quote.id)

    today = date.today()
    invoice = await invoices.insert_numbered_in(
        tx,
        {
            "tenant_id": quote_values["tenant_id"],
            "project_id": quote_values["project_id"],
            "customer_id": quote_values["customer_id"],
            "quote_id": quote_values["id"],
            "type": "final",
            "issue_date": today,
            "due_date": today + timedelta(days=due_days),
            "status": InvoiceStatus.ISSUED,
            "subtotal": quote_values["subtotal"],
            "tax": quote_values["tax"] or 0,
            "discount": quote_values["discount"] or 0,
            "total": quote_values["total"],
            "notes": quote_values["notes"],
            "terms": quote_values["terms"],
            "created_by": created_by,
        },
    )

    for item in items:
        await invoice_items.insert_in(
            tx,
            {
                "invoice_id": invoice.id,
                "description": item.description,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "total": item.total,
                "catalog_item_id": item.catalog_item_id,
            },
        )

    await tx.records(Quote).update(quote_values["id"], {"status": QuoteStatus.CONVERTED})
    logger.info(
        f"Converted quote {quote_values['quote_number']} into invoice {invoice.invoice_number}",
        extra={"tenant_id": quote_values["tenant_id"], "entity": "Quote", "entity_id": quote_values["id"]},
    )
    return invoice
