"""Schema and key checks over ticket and agent frames, using pandera."""

import pandas as pd
from pandera.errors import SchemaErrors
from pandera.pandas import DataFrameSchema

from helpdesk.utils.types import ValidationOutcome


def validate_dataframe(df: pd.DataFrame, schema: DataFrameSchema) -> ValidationOutcome:
    """Collect every schema failure instead of stopping at the first one."""
    try:
        schema.validate(df, lazy=True)
    except SchemaErrors as e:
        errors = []
        for _, row in e.failure_cases.iterrows():
            match row.to_dict():
                case {"column": str() as col, "check": check, "failure_case": val}:
                    errors.append(f"{col}: {check} failed for {val!r}")
                case {"check": check, "index": idx}:
                    errors.append(f"row {idx}: {check}")
                case failure:
                    errors.append(f"schema failure: {failure}")
        return {"valid": False, "status": "error", "errors": errors}
    return {"valid": True, "status": "ok", "errors": []}


def validate_unique(df: pd.DataFrame, columns: list[str]) -> ValidationOutcome:
    """Check that ``columns`` identify each row, e.g. ticket ids."""
    dup_count = int(df.duplicated(subset=columns, keep=False).sum())
    if dup_count == 0:
        return {"valid": True, "status": "ok", "errors": []}
    key = ", ".join(columns)
    return {
        "valid": False,
        "status": "error",
        "errors": [f"{dup_count} rows share a duplicate {key}"],
    }
