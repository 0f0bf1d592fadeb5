"""Tabular validation helpers used by the dataset audit.

These return result dicts instead of raising, so an audit can collect every
problem in one pass.
"""

import pandas as pd
from pandera.errors import SchemaErrors
from pandera.pandas import DataFrameSchema

from sales_pipeline.utils.types import ValidationOutcome, ValidationStatus


def _outcome(errors: list[str]) -> ValidationOutcome:
    match errors:
        case []:
            return {"valid": True, "status": ValidationStatus.OK, "errors": []}
        case _:
            return {"valid": False, "status": ValidationStatus.ERROR, "errors": errors}


def validate_dataframe(df: pd.DataFrame, schema: DataFrameSchema) -> ValidationOutcome:
    """Validate a DataFrame against a pandera schema, collecting all failures."""
    try:
        schema.validate(df, lazy=True)
    except SchemaErrors as e:
        errors = []
        for _, row in e.failure_cases.iterrows():
            match row.to_dict():
                case {"column": col, "check": check, "failure_case": val}:
                    errors.append(f"{schema.name or 'frame'}: column '{col}' failed check '{check}': {val}")
                case failure:
                    errors.append(f"{schema.name or 'frame'}: validation failure: {failure}")
        return _outcome(errors)
    return _outcome([])


def validate_no_nulls(df: pd.DataFrame, columns: list[str]) -> ValidationOutcome:
    """Check that the given columns are present and hold no nulls."""
    issues = []
    for col in columns:
        if col not in df.columns:
            issues.append(f"Column '{col}' is missing")
            continue
        null_count = int(df[col].isnull().sum())
        if null_count > 0:
            issues.append(f"Column '{col}' has {null_count} null values")
    return _outcome(issues)


def validate_unique(df: pd.DataFrame, columns: list[str]) -> ValidationOutcome:
    """Check that the given columns form a unique key."""
    if df.empty or not set(columns).issubset(df.columns):
        return _outcome([])

    dup_count = int(df.duplicated(subset=columns, keep=False).sum())
    match dup_count:
        case 0:
            return _outcome([])
        case n:
            return _outcome([f"Found {n} duplicate rows on columns {columns}"])


def validate_referential_integrity(
    child: pd.DataFrame,
    parent: pd.DataFrame,
    child_key: str,
    parent_key: str,
) -> ValidationOutcome:
    """Check that every child key exists in the parent table."""
    if child.empty or child_key not in child.columns:
        return _outcome([])

    known = set(parent[parent_key].dropna()) if parent_key in parent.columns else set()
    orphans = [key for key in child[child_key].drop_duplicates() if key not in known]

    match len(orphans):
        case 0:
            return _outcome([])
        case n:
            sample = orphans[:5]
            return _outcome([f"Found {n} orphan {child_key} values. Sample: {sample}"])
