"""File I/O utilities for reading helpdesk exports and writing reports."""

import logging
import tomllib
from pathlib import Path

import pandas as pd

from helpdesk.utils.types import RawRow

type FilePath = str | Path

logger = logging.getLogger(__name__)


def read_excel_file(path: FilePath, sheet_name: str | int = 0) -> pd.DataFrame:
    """Read the first (or named) sheet of an Excel workbook."""
    path = Path(path)

    match path.suffix.lower():
        case ".xlsx":
            return pd.read_excel(path, sheet_name=sheet_name, engine="openpyxl")
        case ".xls":
            return pd.read_excel(path, sheet_name=sheet_name, engine="xlrd")
        case ext:
            raise ValueError(f"Unsupported Excel format: {ext}")


def read_spreadsheet(path: FilePath) -> list[RawRow]:
    """Read a helpdesk export into a list of raw rows keyed by header text.

    Cells are read as objects so identifiers keep their spreadsheet form;
    date columns recognised by Excel arrive as ``pd.Timestamp`` values.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Export not found: {path}")

    match path.suffix.lower():
        case ".csv":
            frame = pd.read_csv(path, dtype=object, keep_default_na=False, na_values=[""])
        case ".xlsx" | ".xls":
            frame = read_excel_file(path)
        case ext:
            raise ValueError(f"Unsupported export format: {ext}")

    frame = frame.dropna(how="all")
    frame.columns = [str(col) for col in frame.columns]
    logger.info("Read %d rows with %d columns from %s", len(frame), len(frame.columns), path.name)
    return frame.to_dict(orient="records")


def write_output(df: pd.DataFrame, path: FilePath, fmt: str = "csv") -> None:
    """Write a DataFrame to the specified format."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    match fmt:
        case "csv":
            df.to_csv(path, index=False)
        case "excel":
            df.to_excel(path, index=False)
        case "json":
            df.to_json(path, orient="records", indent=2, date_format="iso")
        case other:
            raise ValueError(f"Unsupported output format: {other}")

    logger.info("Wrote %d report rows as %s to %s", len(df), fmt, path)


def load_toml_config(path: FilePath) -> dict:
    """Load a TOML configuration file using Python 3.11+ stdlib."""
    with open(path, "rb") as f:
        return tomllib.load(f)
