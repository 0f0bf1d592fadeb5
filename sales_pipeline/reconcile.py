"""Audit a dataset for what the lenient matcher will skip, and compare billed
revenue against strategy-modeled revenue per seller.

Neither function changes how ``analyze`` behaves; they only report.
"""

from collections.abc import Mapping
from typing import Any

import numpy as np
import pandas as pd
from rich.console import Console

from sales_pipeline.aggregate import as_purchase_record, resolve_purchases
from sales_pipeline.index import build_product_index, build_seller_index, build_seller_stats
from sales_pipeline.models import Product, PurchaseRecord, Seller
from sales_pipeline.schemas import ITEMS_SCHEMA, PRODUCTS_SCHEMA, SELLERS_SCHEMA
from sales_pipeline.utils.types import DatasetKey, ValidationStatus, is_hashable
from sales_pipeline.utils.validators import (
    validate_dataframe,
    validate_no_nulls,
    validate_referential_integrity,
    validate_unique,
)
from sales_pipeline.validate import validate_dataset, validate_inputs

type AuditResult = dict[str, bool | str | int | list[str]]

console = Console(stderr=True)

TOLERANCE_PCT = 0.01  # 1% threshold


def _records(dataset: Mapping[str, Any]) -> list[PurchaseRecord | None]:
    return [as_purchase_record(raw) for raw in dataset[DatasetKey.PURCHASE_RECORDS]]


def _replace_unhashable(frame: pd.DataFrame, column: str) -> int:
    """Swap unhashable key values for their ``repr`` in place; return how many."""
    if frame.empty:
        return 0
    bad = ~frame[column].map(is_hashable).astype(bool)
    if bad.any():
        frame.loc[bad, column] = frame.loc[bad, column].map(repr)
    return int(bad.sum())


def _dataset_frames(records: list[PurchaseRecord], dataset: Mapping[str, Any]) -> dict[str, pd.DataFrame]:
    """Flatten the nested dataset into one DataFrame per entity."""
    sellers = [s if isinstance(s, Seller) else Seller.from_mapping(s) for s in dataset[DatasetKey.SELLERS]]
    products = [p if isinstance(p, Product) else Product.from_mapping(p) for p in dataset[DatasetKey.PRODUCTS]]

    return {
        "sellers": pd.DataFrame(
            [{"id": s.id, "first_name": s.first_name, "last_name": s.last_name} for s in sellers],
            columns=["id", "first_name", "last_name"],
        ),
        "products": pd.DataFrame(
            [{"sku": p.sku, "purchase_price": p.purchase_price} for p in products],
            columns=["sku", "purchase_price"],
        ),
        "records": pd.DataFrame(
            [
                {"seller_id": r.seller_id, "total_amount": r.total_amount, "item_count": len(r.items)}
                for r in records
            ],
            columns=["seller_id", "total_amount", "item_count"],
        ),
        "items": pd.DataFrame(
            [
                {
                    "seller_id": r.seller_id,
                    "sku": i.sku,
                    "quantity": i.quantity,
                    "sale_price": i.sale_price,
                    "discount": i.discount,
                }
                for r in records
                for i in r.items
            ],
            columns=["seller_id", "sku", "quantity", "sale_price", "discount"],
        ),
    }


def audit_dataset(dataset: Any) -> AuditResult:
    """Collect data-quality problems without raising.

    Raises ``InvalidInput`` only when the dataset fails the basic shape check
    that ``analyze`` would also reject.
    """
    validate_dataset(dataset)
    parsed = _records(dataset)
    usable = [r for r in parsed if r is not None]
    frames = _dataset_frames(usable, dataset)
    sellers, products = frames["sellers"], frames["products"]
    records, items = frames["records"], frames["items"]

    errors = []
    malformed = len(parsed) - len(usable)
    if malformed:
        errors.append(f"Found {malformed} malformed purchase records")
    dropped = sum(r.dropped_items for r in usable)
    if dropped:
        errors.append(f"Found {dropped} malformed purchase items")
    for frame, column in ((records, "seller_id"), (items, "sku")):
        if n := _replace_unhashable(frame, column):
            errors.append(f"Found {n} unhashable {column} values")

    checks = [
        validate_dataframe(sellers, SELLERS_SCHEMA),
        validate_dataframe(products, PRODUCTS_SCHEMA),
        validate_dataframe(items, ITEMS_SCHEMA),
        validate_unique(sellers, ["id"]),
        validate_unique(products, ["sku"]),
        validate_no_nulls(records, ["seller_id", "total_amount"]),
        validate_referential_integrity(records, sellers, "seller_id", "id"),
        validate_referential_integrity(items, products, "sku", "sku"),
    ]
    errors += [e for check in checks for e in check["errors"]]

    known_sellers = sellers["id"].tolist()
    known_skus = products["sku"].tolist()
    orphan_records = int((~records["seller_id"].isin(known_sellers)).sum())
    orphan_items = int((~items["sku"].isin(known_skus)).sum())

    if errors:
        console.print(f"  [red]Dataset audit found {len(errors)} issues[/red]")
    else:
        console.print("  [green]Dataset audit passed[/green]")

    return {
        "valid": not errors,
        "status": ValidationStatus.ERROR if errors else ValidationStatus.OK,
        "errors": errors,
        "record_count": len(records),
        "item_count": len(items),
        "orphan_records": orphan_records,
        "orphan_items": orphan_items,
    }


def reconcile_revenue(
    dataset: Any,
    options: Any,
    tolerance: float = TOLERANCE_PCT,
) -> pd.DataFrame:
    """Compare billed revenue (record totals) with modeled revenue (strategy
    output per item) for every seller, flagging differences above ``tolerance``.
    """
    opts = validate_inputs(dataset, options)
    stats = build_seller_stats(dataset[DatasetKey.SELLERS])
    seller_index = build_seller_index(stats)
    product_index = build_product_index(dataset[DatasetKey.PRODUCTS])

    rows = [
        {
            "seller_id": seller.id,
            "billed_revenue": record.total_amount,
            "modeled_revenue": sum(opts.calculate_revenue(item, product) for item, product in items),
        }
        for seller, record, items in resolve_purchases(
            dataset[DatasetKey.PURCHASE_RECORDS], seller_index, product_index
        )
    ]
    seller_ids = list(dict.fromkeys(s.id for s in stats))
    per_record = pd.DataFrame(rows, columns=["seller_id", "billed_revenue", "modeled_revenue"])
    merged = (
        per_record.groupby("seller_id", sort=False)[["billed_revenue", "modeled_revenue"]]
        .sum()
        .reindex(seller_ids, fill_value=0.0)
        .rename_axis("seller_id")
        .reset_index()
    )
    merged["billed_revenue"] = merged["billed_revenue"].astype(float)
    merged["modeled_revenue"] = merged["modeled_revenue"].astype(float)
    merged["difference"] = merged["billed_revenue"] - merged["modeled_revenue"]
    merged["pct_diff"] = np.where(
        merged["modeled_revenue"] != 0,
        merged["difference"] / merged["modeled_revenue"].where(merged["modeled_revenue"] != 0),
        np.nan,
    )
    merged["flagged"] = merged["pct_diff"].abs() > tolerance

    flagged = merged[merged["flagged"]]
    if len(flagged):
        console.print(f"  [red]Found {len(flagged)} sellers with revenue gaps > {tolerance:.0%}[/red]")
        for _, issue in flagged.iterrows():
            console.print(
                f"    {issue['seller_id']}: billed={issue['billed_revenue']:,.2f} "
                f"modeled={issue['modeled_revenue']:,.2f} diff={issue['pct_diff']:.2%}"
            )
    else:
        console.print("  [green]All sellers reconcile within tolerance[/green]")

    return merged
