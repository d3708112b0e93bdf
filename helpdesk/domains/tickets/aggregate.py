"""Dashboard statistics and period-over-period trend deltas."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd

from helpdesk.domains.tickets.models import Ticket, tickets_to_frame

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PeriodStats:
    total: int
    open: int
    closed: int
    avg_resolution_hours: float
    avg_rating: float


@dataclass(frozen=True)
class Trend:
    """A formatted delta and whether the move is good news."""

    text: str
    favorable: bool
    delta: float


@dataclass(frozen=True)
class TrendReport:
    total: Trend
    resolution: Trend
    rating: Trend
    open: Trend


def _closed_mean(frame: pd.DataFrame, column: str) -> float:
    closed = frame.loc[frame["is_closed"], column]
    return float(closed.mean()) if len(closed) > 0 else 0.0


def aggregate(tickets: Sequence[Ticket]) -> PeriodStats:
    """Totals and closed-ticket averages for one ticket population."""
    frame = tickets_to_frame(tickets)
    if frame.empty:
        return PeriodStats(total=0, open=0, closed=0, avg_resolution_hours=0.0, avg_rating=0.0)

    closed = int(frame["is_closed"].sum())
    return PeriodStats(
        total=len(frame),
        open=len(frame) - closed,
        closed=closed,
        avg_resolution_hours=_closed_mean(frame, "resolution_time_hours"),
        avg_rating=_closed_mean(frame, "rating"),
    )


def pct_change(current: float, previous: float) -> float:
    if previous == 0:
        return 0.0 if current == 0 else 100.0
    return (current - previous) / previous * 100


def format_trend(delta: float, suffix: str = "%") -> str:
    sign = "+" if delta > 0 else ""
    return f"{sign}{delta:.1f}{suffix}"


def _lower_is_better(delta: float) -> Trend:
    return Trend(text=format_trend(delta), favorable=delta <= 0, delta=delta)


def compare_periods(current: PeriodStats, previous: PeriodStats) -> TrendReport:
    """Trend deltas between two periods.

    Volume, resolution time and open backlog are better when they fall;
    rating is compared as an absolute difference and is better when it rises.
    """
    rating_delta = current.avg_rating - previous.avg_rating
    report = TrendReport(
        total=_lower_is_better(pct_change(current.total, previous.total)),
        resolution=_lower_is_better(
            pct_change(current.avg_resolution_hours, previous.avg_resolution_hours)
        ),
        rating=Trend(
            text=format_trend(rating_delta, suffix=""),
            favorable=rating_delta >= 0,
            delta=rating_delta,
        ),
        open=_lower_is_better(pct_change(current.open, previous.open)),
    )
    logger.debug("Trends: total=%s resolution=%s rating=%s open=%s",
                 report.total.text, report.resolution.text,
                 report.rating.text, report.open.text)
    return report
