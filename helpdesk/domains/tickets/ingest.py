"""Ingest helpdesk spreadsheet exports into canonical tickets."""

import logging
from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from helpdesk.domains.tickets.headers import is_blank, normalize_rows
from helpdesk.domains.tickets.models import Ticket
from helpdesk.domains.tickets.transform import build_tickets
from helpdesk.utils.io import read_spreadsheet
from helpdesk.utils.types import RawRow

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".csv", ".xlsx", ".xls")


class IngestError(ValueError):
    """A whole export could not be turned into tickets."""


class EmptyFileError(IngestError):
    def __init__(self, source: str = "export"):
        super().__init__(f"The file appears to be empty: {source}")


class NoTicketsParsedError(IngestError):
    def __init__(self, source: str = "export"):
        super().__init__(
            f"Could not parse any tickets from {source}. Please check your column headers."
        )


def tickets_from_rows(rows: Iterable[RawRow], source: str = "export") -> list[Ticket]:
    """Run header normalization and ticket building over already-read rows.

    Rows with no filled-in cell at all are dropped before building.
    """
    rows = list(rows)
    if not rows:
        raise EmptyFileError(source)

    usable = [row for row in rows if any(not is_blank(v) for v in row.values())]
    if len(usable) < len(rows):
        logger.warning("Skipping %d blank rows in %s", len(rows) - len(usable), source)

    tickets = build_tickets(normalize_rows(usable))
    if not tickets:
        raise NoTicketsParsedError(source)
    return tickets


def ingest_file(path: str | Path) -> list[Ticket]:
    """Read an export from disk and return its tickets."""
    path = Path(path)
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported export format: {path.suffix}")

    try:
        rows = read_spreadsheet(path)
    except pd.errors.EmptyDataError as exc:
        raise EmptyFileError(path.name) from exc

    tickets = tickets_from_rows(rows, source=path.name)
    logger.info("Ingested %d tickets from %s", len(tickets), path.name)
    return tickets
