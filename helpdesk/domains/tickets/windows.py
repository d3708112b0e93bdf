"""Named reporting windows over ticket creation dates."""

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta

from helpdesk.domains.tickets.models import Ticket
from helpdesk.utils.types import TimeRange, Window

logger = logging.getLogger(__name__)

RANGE_LABELS: dict[TimeRange, str] = {
    TimeRange.ALL: "All Time",
    TimeRange.LAST_7_DAYS: "Last 7 Days",
    TimeRange.LAST_30_DAYS: "Last 30 Days",
    TimeRange.THIS_MONTH: "This Month",
    TimeRange.LAST_MONTH: "Last Month",
}


def range_label(time_range: TimeRange | str) -> str:
    return RANGE_LABELS[TimeRange(time_range)]


def _month_start(instant: datetime, months_back: int = 0) -> datetime:
    """First instant of the calendar month ``months_back`` months before ``instant``."""
    index = instant.year * 12 + (instant.month - 1) - months_back
    return datetime(index // 12, index % 12 + 1, 1)


def current_window(time_range: TimeRange | str, now: datetime | None = None) -> Window | None:
    """Window for the range itself; ``None`` means no filtering at all."""
    now = now or datetime.now()
    match TimeRange(time_range):
        case TimeRange.ALL:
            return None
        case TimeRange.LAST_7_DAYS:
            return Window(start=now - timedelta(days=7))
        case TimeRange.LAST_30_DAYS:
            return Window(start=now - timedelta(days=30))
        case TimeRange.THIS_MONTH:
            return Window(start=_month_start(now))
        case TimeRange.LAST_MONTH:
            return Window(start=_month_start(now, 1), end=_month_start(now))


def previous_window(time_range: TimeRange | str, now: datetime | None = None) -> Window | None:
    """The comparable window immediately before the current one.

    ``None`` means the previous period is empty (there is nothing before
    all time).
    """
    now = now or datetime.now()
    match TimeRange(time_range):
        case TimeRange.ALL:
            return None
        case TimeRange.LAST_7_DAYS:
            return Window(start=now - timedelta(days=14), end=now - timedelta(days=7))
        case TimeRange.LAST_30_DAYS:
            return Window(start=now - timedelta(days=60), end=now - timedelta(days=30))
        case TimeRange.THIS_MONTH:
            return Window(start=_month_start(now, 1), end=_month_start(now))
        case TimeRange.LAST_MONTH:
            return Window(start=_month_start(now, 2), end=_month_start(now, 1))


def filter_by_range(
    tickets: Sequence[Ticket],
    time_range: TimeRange | str,
    now: datetime | None = None,
) -> list[Ticket]:
    """Tickets created inside the named range, anchored at ``now``."""
    window = current_window(time_range, now)
    if window is None:
        return list(tickets)
    selected = [t for t in tickets if window.contains(t.created_at)]
    logger.debug("Range %s kept %d of %d tickets", time_range, len(selected), len(tickets))
    return selected


def previous_period(
    tickets: Sequence[Ticket],
    time_range: TimeRange | str,
    now: datetime | None = None,
) -> list[Ticket]:
    window = previous_window(time_range, now)
    if window is None:
        return []
    return [t for t in tickets if window.contains(t.created_at)]
