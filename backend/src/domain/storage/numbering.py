"""Human-facing document numbers.

Numbers look like ``PO-7-2025-0042``: prefix, owning tenant, year and a
per-tenant-per-year sequence padded to four digits. The sequence is one
greater than the highest sequence already issued for that tenant and year.
"""

from datetime import date, datetime
from enum import Enum
from typing import Iterable, Optional, Union


class DocumentPrefix(str, Enum):
    QUOTE = "QUO"
    INVOICE = "INV"
    PURCHASE_ORDER = "PO"


def number_stem(prefix: Union[DocumentPrefix, str], tenant_id: int, year: int) -> str:
    """Common leading part shared by every number of one tenant and year."""
    prefix_value = prefix.value if isinstance(prefix, DocumentPrefix) else prefix
    return f"{prefix_value}-{tenant_id}-{year}-"


def format_document_number(
    prefix: Union[DocumentPrefix, str],
    tenant_id: int,
    year: int,
    sequence: int,
) -> str:
    """Render a document number.

    Sequences above 9999 keep growing in width rather than wrapping.
    """
    if sequence < 1:
        raise ValueError(f"Sequence must be positive, got {sequence}")
    return f"{number_stem(prefix, tenant_id, year)}{sequence:04d}"


def parse_sequence(number: str, stem: str) -> Optional[int]:
    """Sequence part of ``number`` if it was issued under ``stem``, else None."""
    if not number or not number.startswith(stem):
        return None
    tail = number[len(stem):]
    if not tail.isdigit():
        return None
    return int(tail)


def next_sequence(existing_numbers: Iterable[str], stem: str) -> int:
    """One past the highest sequence found among ``existing_numbers`` (1 if none)."""
    highest = 0
    for number in existing_numbers:
        sequence = parse_sequence(number, stem)
        if sequence is not None and sequence > highest:
            highest = sequence
    return highest + 1


def document_year(issue_date: Optional[Union[date, datetime]] = None) -> int:
    """Year a document is numbered under: its issue date, else today."""
    if issue_date is not None:
        return issue_date.year
    return date.today().year
