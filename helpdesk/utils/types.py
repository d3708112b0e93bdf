"""Shared type definitions for the helpdesk analytics package."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any


type RawRow = Mapping[str, Any]
type NormalizedRow = dict[str, Any]
type ValidationOutcome = dict[str, bool | str | list[str]]
type MetricValue = int | float
type JSONPayload = dict[str, Any]


class TimeRange(StrEnum):
    ALL = "all"
    LAST_7_DAYS = "last-7-days"
    LAST_30_DAYS = "last-30-days"
    THIS_MONTH = "this-month"
    LAST_MONTH = "last-month"


class CanonicalField(StrEnum):
    """Internal field names that spreadsheet headers are mapped onto."""

    TICKET_TYPE = "TicketType"
    RESOLUTION_BY = "ResolutionBy"
    ASSIGN = "Assign"
    CREATION = "Creation"
    SUBJECT = "Subject"
    STATUS = "Status"
    CUSTOMER = "Customer"
    PRIORITY = "Priority"
    OWNER = "Owner"
    RATING = "Rating"
    ID = "Sr"


@dataclass(frozen=True)
class Window:
    """Creation-time bounds; ``end`` is exclusive and ``None`` means open-ended."""

    start: datetime
    end: datetime | None = None

    def contains(self, instant: datetime) -> bool:
        if instant < self.start:
            return False
        return self.end is None or instant < self.end
