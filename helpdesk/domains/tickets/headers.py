"""Map free-form spreadsheet headers onto the canonical ticket fields."""

import logging
import re
from collections.abc import Iterable
from typing import Any

import pandas as pd

from helpdesk.utils.types import CanonicalField, NormalizedRow, RawRow

logger = logging.getLogger(__name__)

_HEADER_NOISE = re.compile(r"[\s_-]")
_CANONICAL = {str(field) for field in CanonicalField}

# Keys are already in normalized header form (see normalize_header_key)
SYNONYMS: dict[str, CanonicalField] = {
    # Ticket type
    "tickettype": CanonicalField.TICKET_TYPE,
    "type": CanonicalField.TICKET_TYPE,
    "module": CanonicalField.TICKET_TYPE,
    "category": CanonicalField.TICKET_TYPE,
    "classification": CanonicalField.TICKET_TYPE,
    "item": CanonicalField.TICKET_TYPE,
    "issuetype": CanonicalField.TICKET_TYPE,
    # Resolution date
    "resolutionby": CanonicalField.RESOLUTION_BY,
    "resolveddate": CanonicalField.RESOLUTION_BY,
    "resolvedon": CanonicalField.RESOLUTION_BY,
    "completedon": CanonicalField.RESOLUTION_BY,
    "closedon": CanonicalField.RESOLUTION_BY,
    "resolutiontime": CanonicalField.RESOLUTION_BY,
    # Assignees
    "assignedto": CanonicalField.ASSIGN,
    "assign": CanonicalField.ASSIGN,
    "assignee": CanonicalField.ASSIGN,
    "assignees": CanonicalField.ASSIGN,
    "agent": CanonicalField.ASSIGN,
    "handledby": CanonicalField.ASSIGN,
    "allocatedto": CanonicalField.ASSIGN,
    "user": CanonicalField.ASSIGN,
    # Creation date
    "createdon": CanonicalField.CREATION,
    "creation": CanonicalField.CREATION,
    "created": CanonicalField.CREATION,
    "date": CanonicalField.CREATION,
    "opendate": CanonicalField.CREATION,
    "timestamp": CanonicalField.CREATION,
    "postingdate": CanonicalField.CREATION,
    "submittedon": CanonicalField.CREATION,
    # Subject
    "subject": CanonicalField.SUBJECT,
    "title": CanonicalField.SUBJECT,
    "issue": CanonicalField.SUBJECT,
    "description": CanonicalField.SUBJECT,
    "summary": CanonicalField.SUBJECT,
    "name": CanonicalField.SUBJECT,
    # Status
    "workflowstate": CanonicalField.STATUS,
    "state": CanonicalField.STATUS,
    "status": CanonicalField.STATUS,
    "stage": CanonicalField.STATUS,
    "currentstatus": CanonicalField.STATUS,
    # Customer
    "customer": CanonicalField.CUSTOMER,
    "client": CanonicalField.CUSTOMER,
    "caller": CanonicalField.CUSTOMER,
    "raisedby": CanonicalField.CUSTOMER,
    "contact": CanonicalField.CUSTOMER,
    "sender": CanonicalField.CUSTOMER,
    # Priority
    "priority": CanonicalField.PRIORITY,
    "urgency": CanonicalField.PRIORITY,
    "severity": CanonicalField.PRIORITY,
    "impact": CanonicalField.PRIORITY,
    # Owner
    "owner": CanonicalField.OWNER,
    "createdby": CanonicalField.OWNER,
    "author": CanonicalField.OWNER,
    # Rating
    "rating": CanonicalField.RATING,
    "feedback": CanonicalField.RATING,
    "csat": CanonicalField.RATING,
    "score": CanonicalField.RATING,
    "stars": CanonicalField.RATING,
    # Identifier
    "sr": CanonicalField.ID,
    "id": CanonicalField.ID,
    "ticketid": CanonicalField.ID,
    "number": CanonicalField.ID,
    "ref": CanonicalField.ID,
}

ROW_DEFAULTS: dict[CanonicalField, str] = {
    CanonicalField.TICKET_TYPE: "Unspecified",
    CanonicalField.STATUS: "Open",
    CanonicalField.SUBJECT: "No Subject",
}


def is_blank(value: Any) -> bool:
    """True for cells a spreadsheet reader leaves empty."""
    match value:
        case str():
            return value.strip() == ""
        case list() | tuple():
            return False
        case _:
            return bool(pd.isna(value))


def normalize_header_key(header: str) -> str:
    return _HEADER_NOISE.sub("", str(header).lower().strip())


def normalize_header(header: str) -> str:
    """Return the canonical field name for a header, or the header unchanged."""
    canonical = SYNONYMS.get(normalize_header_key(header))
    return str(canonical) if canonical is not None else header


def normalize_row(row: RawRow) -> NormalizedRow:
    """Rename a raw row's keys to canonical fields and apply row defaults.

    Unmapped keys are kept verbatim. If two headers map to the same field,
    the later non-blank value wins.
    """
    out: NormalizedRow = {}
    for key, value in row.items():
        target = normalize_header(key)
        if target in out and is_blank(value):
            continue
        out[target] = value

    for field, default in ROW_DEFAULTS.items():
        if is_blank(out.get(field)):
            out[str(field)] = default

    owner = out.get(CanonicalField.OWNER)
    if is_blank(out.get(CanonicalField.ASSIGN)) and not is_blank(owner):
        out[str(CanonicalField.ASSIGN)] = owner

    return out


def normalize_rows(rows: Iterable[RawRow]) -> list[NormalizedRow]:
    normalized = [normalize_row(row) for row in rows]

    unmapped = sorted({
        key
        for row in normalized
        for key in row
        if key not in _CANONICAL
    })
    if unmapped:
        logger.info("Keeping %d unmapped columns as extras: %s", len(unmapped), unmapped)
    logger.info("Normalized headers for %d rows", len(normalized))
    return normalized
