"""Generate demo tickets for an empty workspace."""

import logging
from datetime import datetime, timedelta

import numpy as np

from helpdesk.domains.tickets.models import CLOSED, Ticket

logger = logging.getLogger(__name__)

DEMO_AGENTS = [
    "darshitha.d@utilitarianlabs.com",
    "navya.a@tridasa.in",
    "santhosh.m@tridasa.in",
    "mounika.t@tridasa.in",
]
DEMO_TYPES = ["SFDC", "SmartApp", "IT Operations", "Unspecified"]
DEMO_PRIORITIES = ["Low", "Medium", "High"]


def generate_sample_tickets(
    count: int = 100,
    seed: int | None = None,
    now: datetime | None = None,
) -> list[Ticket]:
    """Random tickets from the last 60 days, about 70% of them closed."""
    rng = np.random.default_rng(seed)
    now = now or datetime.now()
    tickets = []

    for i in range(1, count + 1):
        is_closed = rng.random() > 0.3
        created = now - timedelta(days=float(rng.random() * 60))
        resolved = created + timedelta(hours=float(rng.random() * 48)) if is_closed else None
        hours = (resolved - created).total_seconds() / 3600 if resolved else 0.0

        tickets.append(Ticket(
            id=str(i),
            subject=f"Issue regarding {rng.choice(DEMO_TYPES)} module",
            status=CLOSED if is_closed else "Open",
            assignees=(str(rng.choice(DEMO_AGENTS)),),
            customer=f"user{i}@client.com",
            priority=str(rng.choice(DEMO_PRIORITIES)),
            ticket_type=str(rng.choice(DEMO_TYPES)),
            owner="System",
            rating=float(rng.integers(3, 5)) if is_closed else 0.0,
            created_at=created,
            resolved_at=resolved,
            resolution_time_hours=round(hours, 2),
        ))

    logger.info("Generated %d demo tickets", len(tickets))
    return tickets
