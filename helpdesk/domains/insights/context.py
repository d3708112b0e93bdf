"""Summaries of the current ticket population handed to the language model."""

import json
import logging
from collections.abc import Sequence

import pandas as pd

from helpdesk.domains.tickets.aggregate import aggregate
from helpdesk.domains.tickets.models import AgentMetrics, Ticket, tickets_to_frame
from helpdesk.domains.tickets.windows import range_label
from helpdesk.utils.types import JSONPayload, TimeRange

logger = logging.getLogger(__name__)


def _agent_handle(email: str) -> str:
    # Only the local part leaves the machine
    return email.split("@")[0]


def _resolution_buckets(hours: pd.Series) -> dict[str, int]:
    """Bin closed-ticket resolution times into speed bands."""
    bands = pd.cut(
        hours,
        bins=[-float("inf"), 4, 24, float("inf")],
        labels=["fast_under_4h", "medium_4_to_24h", "slow_over_24h"],
        right=False,
    )
    counts = bands.value_counts()
    return {str(label): int(counts.get(label, 0)) for label in bands.cat.categories}


def _csat_breakdown(ratings: pd.Series) -> dict[str, int]:
    rated = ratings[ratings > 0]
    return {
        "positive_4_5": int((rated >= 4).sum()),
        "neutral_3": int((rated == 3).sum()),
        "negative_1_2": int((rated < 3).sum()),
    }


def _counts(frame: pd.DataFrame, column: str) -> dict[str, int]:
    if frame.empty:
        return {}
    return {str(k): int(v) for k, v in frame[column].value_counts(sort=False).items()}


def _team_stats(frame: pd.DataFrame) -> list[JSONPayload]:
    """Per ticket-type load, speed and rating; types stand in for teams."""
    teams = []
    for ticket_type, group in frame.groupby("ticket_type", sort=False):
        closed = group[group["is_closed"]]
        resolved = len(closed) > 0
        teams.append({
            "team": ticket_type,
            "load": len(group),
            "avgResolutionHours": (
                f"{closed['resolution_time_hours'].mean():.1f}" if resolved else "N/A"
            ),
            "rating": f"{closed['rating'].mean():.2f}" if resolved else "N/A",
        })
    return teams


def build_insight_payload(
    tickets: Sequence[Ticket],
    agents: Sequence[AgentMetrics],
    label: str,
    agent_limit: int = 10,
) -> JSONPayload:
    """Aggregate view of one period: overall stats, per-type stats and the busiest agents."""
    frame = tickets_to_frame(tickets)
    stats = aggregate(tickets)
    closed = frame[frame["is_closed"]] if not frame.empty else frame

    logger.debug("Insight payload for %s: %d tickets, %d agents", label, stats.total, len(agents))
    summary = {
        "total": stats.total,
        "closedCount": stats.closed,
        "avgResolutionTimeHours": f"{stats.avg_resolution_hours:.2f}",
        "resolutionTimeBreakdown": _resolution_buckets(
            closed.get("resolution_time_hours", pd.Series(dtype=float)).astype(float)
        ),
        "csatBreakdown": _csat_breakdown(closed.get("rating", pd.Series(dtype=float)).astype(float)),
        "byType": _counts(frame, "ticket_type"),
        "byPriority": _counts(frame, "priority"),
        "avgRating": f"{stats.avg_rating:.2f}",
    }

    return {
        "period": label,
        "overall": summary,
        "teams": _team_stats(frame) if not frame.empty else [],
        "agents": [
            {
                "id": _agent_handle(a.email),
                "load": a.total_tickets,
                "performance": f"{a.avg_rating:.2f}",
                "speed": f"{a.avg_resolution_hours:.1f} hrs",
            }
            for a in list(agents)[:agent_limit]
        ],
    }


def build_insight_prompt(payload: JSONPayload) -> str:
    label = payload["period"]
    return f"""
Analyze the following Helpdesk performance data for the period: {label}.

Overall Stats: {json.dumps(payload["overall"])}

Team/Module Stats (includes Resolution Time and Rating):
{json.dumps(payload["teams"])}

Agent Stats: {json.dumps(payload["agents"])}

Act as an IT Service Management expert. Pay close attention to resolution
time bottlenecks (tickets over 24 hours) and customer satisfaction (CSAT).

Return ONLY a JSON object with these keys:
1. summary: executive summary for {label}, stating whether resolution speed
   and quality meet expectations.
2. periodContext: "Insights for {label}".
3. resourceAllocation: who is overloaded, who needs training, staffing needs.
4. ticketReductionStrategy: how to reduce volume given the ticket types.
5. teamAnalysis: array of {{"teamName", "insight", "recommendation"}} per ticket type.
6. agentPerformance: {{"topPerformer", "needsAttention", "suggestion"}}.
""".strip()


def build_data_context(
    tickets: Sequence[Ticket],
    agents: Sequence[AgentMetrics],
    time_range: TimeRange | str,
) -> str:
    """Plain-text dashboard snapshot used as the assistant's system context."""
    stats = aggregate(tickets)
    mean_agent_rating = (
        f"{sum(a.avg_rating for a in agents) / len(agents):.1f}" if agents else "0"
    )
    top_agent = agents[0].email if agents else "N/A"
    ticket_types = ", ".join(dict.fromkeys(t.ticket_type for t in tickets))

    return "\n".join([
        f"Total Tickets: {stats.total}",
        f"Open Tickets: {stats.open}",
        f"Closed Tickets: {stats.closed}",
        f"Average Agent Rating: {mean_agent_rating}/5",
        f"Top Agent by Volume: {top_agent}",
        f"Time Period: {range_label(time_range)}",
        f"Ticket Types: {ticket_types}",
    ])


def assistant_instruction(data_context: str) -> str:
    return (
        "You are a helpful IT Helpdesk Data Assistant.\n"
        "You have access to the following current dashboard metrics:\n"
        f"{data_context}\n\n"
        "Answer the user's question concisely based on this data. "
        "If the answer isn't in the data, say so. "
        "Keep responses under 50 words unless asked for detail."
    )
