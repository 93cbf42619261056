"""Data validation utilities using pandera."""

import pandas as pd
import pandera as pa
from pandera import DataFrameSchema

from po_analytics.utils.types import ReportResult


def validate_dataframe(df: pd.DataFrame, schema: DataFrameSchema) -> ReportResult:
    """Validate a DataFrame against a pandera schema, collecting every failure."""
    try:
        schema.validate(df, lazy=True)
        return {"valid": True, "status": "ok", "errors": []}
    except pa.errors.SchemaErrors as e:
        errors = []
        for _, row in e.failure_cases.iterrows():
            match row.to_dict():
                case {"column": str() as col, "check": check, "failure_case": val}:
                    errors.append(f"Column '{col}' failed check '{check}': {val}")
                case {"check": check, "failure_case": val}:
                    errors.append(f"Frame failed check '{check}': {val}")
                case failure:
                    errors.append(f"Validation failure: {failure}")
        return {"valid": False, "status": "error", "errors": errors}
