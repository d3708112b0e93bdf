"""Build canonical tickets from header-normalized export rows."""

import logging
import re
import uuid
from collections.abc import Iterable
from typing import Any

from helpdesk.domains.tickets.assignees import parse_assignees
from helpdesk.domains.tickets.dates import is_known, parse_date
from helpdesk.domains.tickets.headers import is_blank
from helpdesk.domains.tickets.models import CLOSED, CLOSED_SYNONYMS, Ticket
from helpdesk.utils.types import CanonicalField, NormalizedRow

logger = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _text(value: Any, default: str) -> str:
    if is_blank(value):
        return default
    return str(value).strip()


def _map_status(raw_status: Any) -> str:
    """Collapse the closing synonyms to ``Closed``; other labels pass through."""
    status = _text(raw_status, "Open")
    if status.lower() in CLOSED_SYNONYMS:
        return CLOSED
    return status


def _parse_rating(raw_rating: Any) -> float:
    if is_blank(raw_rating) or isinstance(raw_rating, bool):
        return 0.0
    if isinstance(raw_rating, (int, float)):
        rating = float(raw_rating)
    else:
        match = _LEADING_NUMBER.match(str(raw_rating))
        rating = float(match.group(1)) if match else 0.0
    return rating if rating > 0 else 0.0


def _source_id(raw_id: Any) -> str | None:
    if is_blank(raw_id):
        return None
    if isinstance(raw_id, float) and raw_id.is_integer():
        return str(int(raw_id))
    return str(raw_id).strip()


def _synthetic_id() -> str:
    return uuid.uuid4().hex[:9]


def _resolution_hours(created_at, resolved_at) -> float:
    if not (is_known(created_at) and is_known(resolved_at)):
        return 0.0
    hours = (resolved_at - created_at).total_seconds() / 3600
    return max(0.0, round(hours, 2))


def build_ticket(row: NormalizedRow, ticket_id: str | None = None) -> Ticket:
    """Build one ticket from a normalized row. Never raises.

    ``resolved_at`` is only read for closed tickets; a resolution date that
    cannot be parsed leaves it unset.
    """
    status = _map_status(row.get(CanonicalField.STATUS))
    owner = _text(row.get(CanonicalField.OWNER), "")
    created_at = parse_date(row.get(CanonicalField.CREATION))

    resolved_at = None
    raw_resolution = row.get(CanonicalField.RESOLUTION_BY)
    if status == CLOSED and not is_blank(raw_resolution):
        parsed = parse_date(raw_resolution)
        resolved_at = parsed if is_known(parsed) else None

    return Ticket(
        id=ticket_id or _source_id(row.get(CanonicalField.ID)) or _synthetic_id(),
        subject=_text(row.get(CanonicalField.SUBJECT), "No Subject"),
        status=status,
        assignees=tuple(parse_assignees(row.get(CanonicalField.ASSIGN), owner=owner)),
        customer=_text(row.get(CanonicalField.CUSTOMER), "Unknown"),
        priority=_text(row.get(CanonicalField.PRIORITY), "Medium"),
        ticket_type=_text(row.get(CanonicalField.TICKET_TYPE), "Unspecified"),
        owner=owner,
        rating=_parse_rating(row.get(CanonicalField.RATING)),
        created_at=created_at,
        resolved_at=resolved_at,
        resolution_time_hours=_resolution_hours(created_at, resolved_at),
    )


def build_tickets(rows: Iterable[NormalizedRow]) -> list[Ticket]:
    """Build tickets for a whole batch, keeping synthetic ids unique."""
    tickets: list[Ticket] = []
    seen: set[str] = set()

    for row in rows:
        ticket_id = _source_id(row.get(CanonicalField.ID))
        if ticket_id is None:
            ticket_id = _synthetic_id()
            while ticket_id in seen:
                ticket_id = _synthetic_id()
        seen.add(ticket_id)
        tickets.append(build_ticket(row, ticket_id=ticket_id))

    closed = sum(1 for t in tickets if t.is_closed)
    logger.info(
        "Built %d tickets: %d closed, %d open",
        len(tickets),
        closed,
        len(tickets) - closed,
    )
    return tickets
