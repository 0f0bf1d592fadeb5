"""Shared utilities for the seller performance pipeline."""

from sales_pipeline.utils.grouping import group_by
from sales_pipeline.utils.rounding import round_money
from sales_pipeline.utils.types import DatasetKey, ValidationOutcome
from sales_pipeline.utils.validators import (
    validate_dataframe,
    validate_no_nulls,
    validate_referential_integrity,
    validate_unique,
)
