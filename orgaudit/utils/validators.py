"""Data validation utilities using pandera."""

import pandas as pd
import pandera as pa
from pandera import DataFrameSchema

type ValidationOutcome = dict[str, bool | str | list | pd.DataFrame | None]


def validate_dataframe(df: pd.DataFrame, schema: DataFrameSchema) -> ValidationOutcome:
    """Validate (and coerce) a DataFrame against a pandera schema.

    On success ``data`` holds the coerced frame. On failure ``failures`` lists
    one dict per failing cell, ordered by row.
    """
    try:
        validated = schema.validate(df, lazy=True)
        return {"valid": True, "status": "ok", "errors": [], "failures": [], "data": validated}
    except pa.errors.SchemaErrors as e:
        cases = e.failure_cases
        if "index" in cases.columns:
            cases = cases.sort_values("index", na_position="last", kind="stable")

        errors = []
        failures = []
        for _, row in cases.iterrows():
            match row.to_dict():
                case {"column": col, "check": check, "failure_case": val, **rest}:
                    errors.append(f"Column '{col}' failed check '{check}': {val}")
                    failures.append({
                        "column": col,
                        "check": check,
                        "failure_case": val,
                        "index": rest.get("index"),
                    })
                case failure:
                    errors.append(f"Validation failure: {failure}")
        return {
            "valid": False,
            "status": "error",
            "errors": errors,
            "failures": failures,
            "data": None,
        }


def find_duplicates(df: pd.DataFrame, columns: list[str]) -> pd.DataFrame:
    """Rows repeating an earlier row's key on ``columns`` (first occurrence excluded)."""
    return df[df.duplicated(subset=columns, keep="first")]
