"""
Sample data fixtures for testing

Ticket objects and raw export rows shaped like real helpdesk exports.
"""

from dataclasses import replace
from datetime import datetime, timedelta
from pathlib import Path

import pandas as pd

from helpdesk.domains.tickets.models import CLOSED, Ticket

_BASE_TICKET = Ticket(
    id="1",
    subject="Printer offline",
    status="Open",
    assignees=("x@y.com",),
    customer="user@client.com",
    priority="Medium",
    ticket_type="IT Operations",
    owner="System",
    rating=0.0,
    created_at=datetime(2024, 3, 15, 9, 0),
    resolved_at=None,
    resolution_time_hours=0.0,
)


def make_ticket(**overrides) -> Ticket:
    """
    Build a ticket from sensible defaults.

    Passing ``status="Closed"`` without ``resolution_time_hours`` keeps
    the default of zero hours.
    """
    return replace(_BASE_TICKET, **overrides)


def closed_ticket(hours: float, rating: float, **overrides) -> Ticket:
    created = overrides.pop("created_at", _BASE_TICKET.created_at)
    return make_ticket(
        status=CLOSED,
        rating=rating,
        created_at=created,
        resolved_at=created + timedelta(hours=hours),
        resolution_time_hours=hours,
        **overrides,
    )


def create_sample_export_rows() -> list[dict]:
    """
    Raw rows as read from a spreadsheet export.

    Headers use the vendor's own spelling, not the canonical field names.
    """
    return [
        {
            "Sr": 1,
            "Subject": "VPN drops every hour",
            "Workflow State": "Resolved",
            "Assigned To": "['a@corp.com', 'b@corp.com']",
            "Created On": "15-03-2024 09:00",
            "Resolved Date": "15-03-2024 17:30",
            "Module": "IT Operations",
            "Rating": "5",
            "Department": "Finance",
        },
        {
            "Sr": 2,
            "Subject": "Cannot log in to SFDC",
            "Workflow State": "Open",
            "Assigned To": "a@corp.com",
            "Created On": "2024-03-16",
            "Resolved Date": None,
            "Module": "SFDC",
            "Rating": None,
            "Department": "Sales",
        },
        {
            "Sr": 3,
            "Subject": "",
            "Workflow State": "Completed",
            "Assigned To": "",
            "Owner": "c@corp.com",
            "Created On": "16.03.2024 10:00",
            "Resolved Date": "17.03.2024 10:00",
            "Module": "",
            "Rating": "4 stars",
        },
    ]


def write_sample_csv(directory: Path, name: str = "export.csv") -> Path:
    """Write the sample export rows to a CSV file and return its path."""
    path = Path(directory) / name
    pd.DataFrame(create_sample_export_rows()).to_csv(path, index=False)
    return path
