"""Quote API endpoints: deletion guard and conversion to invoice"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request, status

from dependencies import get_storage, get_tenant_filter, require_found
from domain.storage.tenant_filter import TenantFilter
from models import as_dict
from storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quotes", tags=["quotes"])


def _current_user_id(request: Request) -> Optional[int]:
    user_id = getattr(request.state, "user_id", None)
    return user_id if isinstance(user_id, int) else None


@router.get("/{quote_id}/can-delete")
async def can_delete_quote(
    quote_id: int,
    storage: Storage = Depends(get_storage),
    tenant: TenantFilter = Depends(get_tenant_filter),
) -> Dict[str, Any]:
    check = await storage.quotes.can_delete(quote_id, tenant)
    return {"canDelete": check.can_delete, "reason": check.reason}


@router.delete("/{quote_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_quote(
    quote_id: int,
    storage: Storage = Depends(get_storage),
    tenant: TenantFilter = Depends(get_tenant_filter),
) -> None:
    """
    Delete a quote unless the deletion guard blocks it.

    Raises:
        HTTPException 404: Quote does not exist for this tenant
        DeletionBlocked (409): Quote is converted, accepted, invoiced or surveyed
    """
    require_found(await storage.quotes.delete(quote_id, tenant), "Quote")


@router.post("/{quote_id}/convert-to-invoice", status_code=status.HTTP_201_CREATED)
async def convert_quote_to_invoice(
    quote_id: int,
    request: Request,
    storage: Storage = Depends(get_storage),
    tenant: TenantFilter = Depends(get_tenant_filter),
) -> Dict[str, Any]:
    """
    Create a final invoice from an accepted quote.

    Raises:
        HTTPException 404: Quote does not exist for this tenant
        ValidationError (400): Quote is not accepted
    """
    invoice = await storage.quotes.convert_to_invoice(quote_id, tenant, created_by=_current_user_id(request))
    invoice = require_found(invoice, "Quote")
    logger.info(
        f"Quote {quote_id} converted to invoice {invoice.invoice_number}",
        extra={"tenant_id": tenant.tenant_id, "entity": "quotes", "entity_id": quote_id},
    )
    return as_dict(invoice)
