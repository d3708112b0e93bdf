"""Series behind the dashboard charts."""

from collections.abc import Sequence

import pandas as pd

from helpdesk.domains.tickets.models import AgentMetrics, Ticket

type ChartSeries = list[dict[str, str | int | float]]


def type_distribution(tickets: Sequence[Ticket], limit: int = 10) -> ChartSeries:
    """Ticket counts per type, largest first, capped to keep legends readable."""
    if not tickets:
        return []
    types = pd.Series([t.ticket_type.strip() or "Unspecified" for t in tickets])
    counts = types.value_counts(sort=False).sort_values(ascending=False, kind="stable")
    return [
        {"name": name, "value": int(count)}
        for name, count in counts.head(limit).items()
    ]


def agent_workload(agents: Sequence[AgentMetrics], limit: int = 10) -> ChartSeries:
    """Ticket volume against average rating for the busiest agents."""
    return [
        {
            "name": agent.email.split("@")[0] or "Unknown",
            "tickets": agent.total_tickets,
            "rating": round(agent.avg_rating, 1),
        }
        for agent in list(agents)[:limit]
    ]
