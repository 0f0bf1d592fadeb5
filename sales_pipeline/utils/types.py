"""Shared type definitions for the pipeline."""

from collections.abc import Mapping
from enum import StrEnum
from typing import Any


type SellerID = str | int
type SKU = str
type RawRecord = Mapping[str, Any]
type Dataset = Mapping[str, Any]
type Money = float
type ValidationOutcome = dict[str, bool | str | list[str]]


class DatasetKey(StrEnum):
    SELLERS = "sellers"
    PRODUCTS = "products"
    PURCHASE_RECORDS = "purchase_records"


class ValidationStatus(StrEnum):
    OK = "ok"
    ERROR = "error"


def is_hashable(value: object) -> bool:
    """True when ``value`` can key a dict. A tuple holding a list cannot."""
    try:
        hash(value)
    except TypeError:
        return False
    return True
