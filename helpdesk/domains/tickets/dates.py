"""Best-effort parsing of the date formats found in helpdesk exports.

Exports mix native spreadsheet dates, ISO strings and hand-typed
``DD-MM-YYYY`` / ``DD.MM.YYYY hh:mm`` text. Nothing here raises: a value
that cannot be read becomes ``EPOCH``, which downstream code treats as
"unknown". Ambiguous day/month orders resolve day-first, so ``03-04-2024``
is 3 April 2024; ``03/15/2024`` can only be month-first and is read that way.
"""

import re
from datetime import date, datetime, time, timezone
from typing import Any

import numpy as np
import pandas as pd

from helpdesk.domains.tickets.headers import is_blank

EPOCH = datetime(1970, 1, 1)

_DASHES = re.compile(r"-+")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

# Month-name layouts are never ambiguous, so they are accepted before the
# day-first fallback.
_NAMED_MONTH_FORMATS = (
    "%d %b %Y",
    "%d %B %Y",
    "%d-%b-%Y",
    "%d %b %Y %H:%M",
    "%d %b %Y %H:%M:%S",
    "%d-%b-%Y %H:%M:%S",
    "%b %d, %Y",
    "%B %d, %Y",
    "%b %d %Y",
    "%B %d %Y",
    "%a %b %d %Y",
    "%b %d, %Y %H:%M",
    "%B %d, %Y %H:%M:%S",
)


def is_known(instant: datetime | None) -> bool:
    """True when an instant is a real date rather than the sentinel."""
    return instant is not None and instant > EPOCH


def _naive(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _leading_int(text: str) -> int | None:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def _parse_generic(text: str) -> datetime | None:
    try:
        return _naive(datetime.fromisoformat(text))
    except ValueError:
        pass

    for fmt in _NAMED_MONTH_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _parse_time(text: str) -> tuple[int, int, int]:
    pieces = (text.split(":") + ["0", "0", "0"])[:3]
    return tuple(_leading_int(p) or 0 for p in pieces)


def _parse_day_first(text: str) -> datetime:
    cleaned = text.replace(".", "-").replace("/", "-")
    date_part, _, time_part = cleaned.partition(" ")
    parts = date_part.split("-")
    if len(parts) != 3:
        return EPOCH

    if len(parts[0]) == 4:
        year, month, day = (_leading_int(p) for p in parts)
    else:
        day, month, year = (_leading_int(p) for p in parts)
    if None in (year, month, day):
        return EPOCH
    if len(parts[0]) != 4 and month > 12 and day <= 12:
        # Only a US-style MM-DD-YYYY date can have a day in the middle
        day, month = month, day
    if 0 <= year < 100:
        year += 2000

    hours, minutes, seconds = _parse_time(time_part.split(" ")[0]) if time_part else (0, 0, 0)
    try:
        return datetime(year, month, day, hours, minutes, seconds)
    except (ValueError, OverflowError):
        return EPOCH


def parse_date(value: Any) -> datetime:
    """Convert one raw cell to a naive ``datetime``, or ``EPOCH`` if unreadable."""
    if is_blank(value):
        return EPOCH

    match value:
        case pd.Timestamp():
            return _naive(value.to_pydatetime())
        case datetime():
            return _naive(value)
        case date():
            return datetime.combine(value, time())
        case np.datetime64():
            return parse_date(pd.Timestamp(value))

    text = str(value).strip()
    if _DASHES.fullmatch(text) or text.lower() == "null":
        return EPOCH

    parsed = _parse_generic(text)
    if parsed is not None:
        return parsed
    return _parse_day_first(text)
