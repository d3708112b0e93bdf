"""Agent performance rollups and workload distribution."""

import logging
from collections.abc import Sequence

import pandas as pd

from helpdesk.domains.tickets.models import AgentMetrics, Ticket, tickets_to_frame

logger = logging.getLogger(__name__)


def _assignment_frame(tickets: Sequence[Ticket]) -> pd.DataFrame:
    """One row per (ticket, assignee) pair."""
    frame = tickets_to_frame(tickets)
    if frame.empty:
        return frame.assign(agent=pd.Series(dtype=str))

    pairs = frame.explode("assignees").rename(columns={"assignees": "agent"})
    pairs = pairs[pairs["agent"].notna()].copy()
    pairs["agent"] = pairs["agent"].astype(str).str.strip()
    return pairs[pairs["agent"] != ""]


def agent_metrics_frame(tickets: Sequence[Ticket]) -> pd.DataFrame:
    """Per-agent totals, closed-ticket averages and active backlog.

    A ticket with several assignees counts once for each of them. Rows are
    ordered by ticket volume, ties keeping first-seen order.
    """
    pairs = _assignment_frame(tickets)
    if pairs.empty:
        return pd.DataFrame(columns=[
            "email", "total_tickets", "avg_rating", "avg_resolution_hours", "active_tickets",
        ])

    pairs["closed_rating"] = pairs["rating"].where(pairs["is_closed"])
    pairs["closed_hours"] = pairs["resolution_time_hours"].where(pairs["is_closed"])

    report = pairs.groupby("agent", sort=False).agg(
        total_tickets=("id", "size"),
        closed_tickets=("is_closed", "sum"),
        avg_rating=("closed_rating", "mean"),
        avg_resolution_hours=("closed_hours", "mean"),
    ).reset_index()

    report["active_tickets"] = report["total_tickets"] - report["closed_tickets"]
    report[["avg_rating", "avg_resolution_hours"]] = (
        report[["avg_rating", "avg_resolution_hours"]].astype(float).fillna(0.0)
    )
    report = report.rename(columns={"agent": "email"}).drop(columns="closed_tickets")
    report = report.sort_values("total_tickets", ascending=False, kind="stable")

    logger.info("Computed metrics for %d agents across %d tickets", len(report), len(tickets))
    return report[["email", "total_tickets", "avg_rating", "avg_resolution_hours", "active_tickets"]]


def agent_metrics(tickets: Sequence[Ticket]) -> list[AgentMetrics]:
    report = agent_metrics_frame(tickets)
    return [
        AgentMetrics(
            email=row.email,
            total_tickets=int(row.total_tickets),
            avg_rating=float(row.avg_rating),
            avg_resolution_hours=float(row.avg_resolution_hours),
            active_tickets=int(row.active_tickets),
        )
        for row in report.itertuples(index=False)
    ]
