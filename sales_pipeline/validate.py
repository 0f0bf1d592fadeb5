"""Precondition checks run before any aggregation state is created."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sales_pipeline.errors import InvalidInput, MissingOptions, MissingStrategy
from sales_pipeline.models import Product, Seller
from sales_pipeline.strategies import BonusStrategy, RevenueStrategy
from sales_pipeline.utils.types import DatasetKey, is_hashable

# Mapping keys accepted for each strategy, first match wins
REVENUE_KEYS = ("calculate_revenue", "calculateRevenue")
BONUS_KEYS = ("calculate_bonus", "calculateBonus")


@dataclass(frozen=True)
class AnalysisOptions:
    calculate_revenue: RevenueStrategy
    calculate_bonus: BonusStrategy


def _lookup(options: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if options.get(key) is not None:
            return options[key]
    return None


def _entry_key(entry: Any, field: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(field)
    return getattr(entry, field)


def validate_dataset(dataset: Any) -> None:
    if dataset is None or not isinstance(dataset, Mapping):
        raise InvalidInput("Dataset is missing or is not a mapping")

    for key in DatasetKey:
        collection = dataset.get(key)
        if not isinstance(collection, (list, tuple)) or len(collection) == 0:
            raise InvalidInput(f"Dataset '{key}' must be a non-empty list")

    for key, model, field in ((DatasetKey.SELLERS, Seller, "id"), (DatasetKey.PRODUCTS, Product, "sku")):
        bad = [i for i, entry in enumerate(dataset[key]) if not isinstance(entry, (Mapping, model))]
        if bad:
            raise InvalidInput(f"Dataset '{key}' has non-mapping entries at positions {bad[:5]}")

        unhashable = [i for i, entry in enumerate(dataset[key]) if not is_hashable(_entry_key(entry, field))]
        if unhashable:
            raise InvalidInput(f"Dataset '{key}' has unhashable '{field}' values at positions {unhashable[:5]}")


def validate_options(options: Any) -> AnalysisOptions:
    match options:
        case None:
            raise MissingOptions("Options were not provided")
        case AnalysisOptions():
            revenue, bonus = options.calculate_revenue, options.calculate_bonus
        case Mapping():
            revenue, bonus = _lookup(options, REVENUE_KEYS), _lookup(options, BONUS_KEYS)
        case other:
            raise MissingOptions(f"Options must be a mapping or AnalysisOptions, got {type(other).__name__}")

    missing = [
        name
        for name, fn in (("calculate_revenue", revenue), ("calculate_bonus", bonus))
        if fn is None or not callable(fn)
    ]
    if missing:
        raise MissingStrategy(f"Missing or non-callable strategies: {', '.join(missing)}")

    return AnalysisOptions(calculate_revenue=revenue, calculate_bonus=bonus)


def validate_inputs(dataset: Any, options: Any) -> AnalysisOptions:
    """Check dataset shape, then options. Returns the normalized options."""
    validate_dataset(dataset)
    return validate_options(options)
