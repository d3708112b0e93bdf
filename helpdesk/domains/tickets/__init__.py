"""Tickets domain: export ingestion, normalization, time windows and rollups."""

from collections.abc import Sequence
from datetime import datetime

from helpdesk.domains.tickets.headers import normalize_header, normalize_rows
from helpdesk.domains.tickets.dates import EPOCH, parse_date
from helpdesk.domains.tickets.assignees import parse_assignees
from helpdesk.domains.tickets.transform import build_ticket, build_tickets
from helpdesk.domains.tickets.windows import filter_by_range, previous_period, range_label
from helpdesk.domains.tickets.aggregate import aggregate, compare_periods
from helpdesk.domains.tickets.agents import agent_metrics, agent_metrics_frame
from helpdesk.domains.tickets.charts import agent_workload, type_distribution
from helpdesk.domains.tickets.ingest import (
    EmptyFileError,
    IngestError,
    NoTicketsParsedError,
    ingest_file,
)
from helpdesk.domains.tickets.models import (
    AgentMetrics,
    AgentSchema,
    Ticket,
    TicketSchema,
    tickets_to_frame,
)
from helpdesk.utils.types import TimeRange
from helpdesk.utils.validators import validate_dataframe, validate_unique


def validate(tickets: Sequence[Ticket], source: str = "tickets") -> dict:
    """Validate the ticket collection or its agent rollup against the schemas."""
    match source:
        case "tickets":
            frame = tickets_to_frame(tickets)
            outcome = validate_dataframe(frame, TicketSchema)
            if outcome["valid"] and not frame.empty:
                outcome = validate_unique(frame, ["id"])
        case "agents":
            outcome = validate_dataframe(agent_metrics_frame(tickets), AgentSchema)
        case unknown:
            return {"status": "error", "message": f"Unknown source: {unknown}"}

    if outcome["valid"]:
        return {"status": "ok", "row_count": len(tickets)}
    return {"status": "error", "message": "; ".join(outcome["errors"])}


def run(
    tickets: Sequence[Ticket],
    time_range: TimeRange | str = TimeRange.ALL,
    now: datetime | None = None,
    top_n: int = 10,
) -> dict:
    """Build the full dashboard report for one reporting range."""
    now = now or datetime.now()
    current = filter_by_range(tickets, time_range, now=now)
    previous = previous_period(tickets, time_range, now=now)

    current_stats = aggregate(current)
    previous_stats = aggregate(previous)
    agents = agent_metrics(current)

    return {
        "range": TimeRange(time_range),
        "label": range_label(time_range),
        "tickets": current,
        "stats": current_stats,
        "previous_stats": previous_stats,
        "trends": compare_periods(current_stats, previous_stats),
        "agents": agents,
        "type_distribution": type_distribution(current, limit=top_n),
        "agent_workload": agent_workload(agents, limit=top_n),
    }
