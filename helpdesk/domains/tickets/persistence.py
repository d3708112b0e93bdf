"""Persist the ticket collection as a JSON document in a key-value store."""

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Any, Protocol

from helpdesk.domains.tickets.dates import EPOCH
from helpdesk.domains.tickets.models import Ticket
from helpdesk.utils.store import KeyValueStore

logger = logging.getLogger(__name__)

TICKETS_KEY = "helpdesk_db_tickets"

type TicketRecord = dict[str, Any]


class Clearable(Protocol):
    def clear(self) -> None: ...


def ticket_to_record(ticket: Ticket) -> TicketRecord:
    return {
        "id": ticket.id,
        "subject": ticket.subject,
        "status": ticket.status,
        "assignees": list(ticket.assignees),
        "customer": ticket.customer,
        "priority": ticket.priority,
        "ticketType": ticket.ticket_type,
        "owner": ticket.owner,
        "rating": ticket.rating,
        "createdAt": ticket.created_at.isoformat(),
        "resolvedAt": ticket.resolved_at.isoformat() if ticket.resolved_at else None,
        "resolutionTimeHours": ticket.resolution_time_hours,
    }


def _revive(value: Any) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        logger.warning("Unreadable stored date %r", value)
        return None


def ticket_from_record(record: TicketRecord) -> Ticket:
    """Rebuild a stored ticket, turning ISO date strings back into datetimes."""
    return Ticket(
        id=str(record["id"]),
        subject=record.get("subject", "No Subject"),
        status=record.get("status", "Open"),
        assignees=tuple(record.get("assignees") or ()),
        customer=record.get("customer", "Unknown"),
        priority=record.get("priority", "Medium"),
        ticket_type=record.get("ticketType") or "Unspecified",
        owner=record.get("owner", ""),
        rating=float(record.get("rating") or 0),
        created_at=_revive(record.get("createdAt")) or EPOCH,
        resolved_at=_revive(record.get("resolvedAt")),
        resolution_time_hours=float(record.get("resolutionTimeHours") or 0),
    )


class TicketRepository:
    """Load, replace and reset the stored ticket collection.

    The collection is only ever written whole. Replacing or resetting it
    clears any dependent cache passed in as ``dependents``.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str = TICKETS_KEY,
        dependents: Sequence[Clearable] = (),
    ):
        self.store = store
        self.key = key
        self.dependents = list(dependents)

    def load(self) -> list[Ticket]:
        records = self.store.get(self.key)
        if not records:
            return []
        tickets = [ticket_from_record(r) for r in records]
        logger.info("Loaded %d tickets from store", len(tickets))
        return tickets

    def save(self, tickets: Sequence[Ticket]) -> None:
        self.store.set(self.key, [ticket_to_record(t) for t in tickets])
        self._clear_dependents()
        logger.info("Saved %d tickets to store", len(tickets))

    def reset(self) -> None:
        self.store.delete(self.key)
        self._clear_dependents()
        logger.info("Cleared stored tickets")

    def _clear_dependents(self) -> None:
        for dependent in self.dependents:
            dependent.clear()
