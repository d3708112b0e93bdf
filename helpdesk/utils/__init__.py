"""Shared utilities for the helpdesk analytics package."""

from helpdesk.utils.io import read_spreadsheet, write_output
from helpdesk.utils.store import JsonFileStore, KeyValueStore, MemoryStore
from helpdesk.utils.validators import validate_dataframe, validate_unique
from helpdesk.utils.types import NormalizedRow, RawRow, TimeRange, ValidationOutcome
