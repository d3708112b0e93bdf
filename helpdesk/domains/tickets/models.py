"""Ticket and agent records, plus pandera schemas for their DataFrame form."""

from collections.abc import Sequence
from dataclasses import asdict, dataclass, fields
from datetime import datetime

import pandas as pd
import pandera.pandas as pa
from pandera.pandas import Check, Column

CLOSED = "Closed"
CLOSED_SYNONYMS = frozenset({"resolved", "completed", "verified"})


@dataclass(frozen=True)
class Ticket:
    id: str
    subject: str
    status: str
    assignees: tuple[str, ...]
    customer: str
    priority: str
    ticket_type: str
    owner: str
    rating: float
    created_at: datetime
    resolved_at: datetime | None
    resolution_time_hours: float

    @property
    def is_closed(self) -> bool:
        return self.status == CLOSED


@dataclass(frozen=True)
class AgentMetrics:
    email: str
    total_tickets: int
    avg_rating: float
    avg_resolution_hours: float
    active_tickets: int


TICKET_COLUMNS = [f.name for f in fields(Ticket)]
AGENT_COLUMNS = [f.name for f in fields(AgentMetrics)]


def tickets_to_frame(tickets: Sequence[Ticket]) -> pd.DataFrame:
    """One row per ticket; ``assignees`` stays a list-valued column."""
    if not tickets:
        return pd.DataFrame(columns=TICKET_COLUMNS)
    frame = pd.DataFrame([asdict(t) for t in tickets], columns=TICKET_COLUMNS)
    frame["assignees"] = frame["assignees"].map(list)
    frame["is_closed"] = frame["status"] == CLOSED
    return frame


def agents_to_frame(agents: Sequence[AgentMetrics]) -> pd.DataFrame:
    return pd.DataFrame([asdict(a) for a in agents], columns=AGENT_COLUMNS)


TicketSchema = pa.DataFrameSchema(
    columns={
        "id": Column(str, Check.str_length(min_value=1), nullable=False),
        "subject": Column(str, Check.str_length(min_value=1), nullable=False),
        "status": Column(str, Check.str_length(min_value=1), nullable=False),
        "customer": Column(str, nullable=False),
        "priority": Column(str, nullable=False),
        "ticket_type": Column(str, Check.str_length(min_value=1), nullable=False),
        "owner": Column(str, nullable=False),
        "rating": Column(float, Check.ge(0), nullable=False),
        "created_at": Column("datetime64[ns]", nullable=False),
        "resolved_at": Column("datetime64[ns]", nullable=True),
        "resolution_time_hours": Column(float, Check.ge(0), nullable=False),
    },
    checks=[
        Check(
            lambda df: df["resolved_at"].isna() | (df["status"] == CLOSED),
            error="resolved_at is only set on closed tickets",
        ),
    ],
    coerce=True,
    strict=False,
)


AgentSchema = pa.DataFrameSchema(
    columns={
        "email": Column(str, Check.str_length(min_value=1), unique=True),
        "total_tickets": Column(int, Check.ge(1)),
        "avg_rating": Column(float, Check.ge(0)),
        "avg_resolution_hours": Column(float, Check.ge(0)),
        "active_tickets": Column(int, Check.ge(0)),
    },
    checks=[
        Check(
            lambda df: df["active_tickets"] <= df["total_tickets"],
            error="active_tickets cannot exceed total_tickets",
        ),
    ],
    coerce=True,
    strict=False,
)
