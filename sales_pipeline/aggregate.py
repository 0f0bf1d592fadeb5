"""Walk purchase records and accumulate per-seller revenue, profit and volume."""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from numbers import Real
from typing import Any

from rich.console import Console

from sales_pipeline.models import Product, PurchaseItem, PurchaseRecord, SellerStats
from sales_pipeline.strategies import RevenueStrategy
from sales_pipeline.utils.types import SKU, SellerID, is_hashable

type ResolvedItem = tuple[PurchaseItem, Product]
type ResolvedPurchase = tuple[SellerStats, PurchaseRecord, list[ResolvedItem]]

console = Console(stderr=True)


@dataclass
class AggregationSummary:
    records_processed: int = 0
    records_skipped: int = 0
    items_processed: int = 0
    items_skipped: int = 0


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _lookup[V](index: Mapping[Any, V], key: Any) -> V | None:
    if not is_hashable(key):
        return None
    return index.get(key)


def as_purchase_record(raw: Any) -> PurchaseRecord | None:
    """Build a record from a mapping, or ``None`` when the shape is unusable.

    A missing ``items`` key means no items. Any ``items`` value other than a
    list or tuple makes the whole record unusable.
    """
    match raw:
        case PurchaseRecord():
            return raw
        case Mapping() if isinstance(raw.get("items", ()), (list, tuple)):
            return PurchaseRecord.from_mapping(raw)
        case _:
            return None


def _item_is_usable(item: PurchaseItem, product: Product) -> bool:
    values = (item.quantity, item.sale_price, item.discount, product.purchase_price)
    return all(_is_number(v) for v in values)


def resolve_purchases(
    records: Iterable[Any],
    seller_index: Mapping[SellerID, SellerStats],
    product_index: Mapping[SKU, Product],
    summary: AggregationSummary | None = None,
) -> Iterator[ResolvedPurchase]:
    """Yield each record with its seller and the items whose sku is known.

    Records with an unknown seller, a non-numeric total or a non-list
    ``items`` are dropped whole. Unknown, non-numeric or non-mapping items are
    dropped from their record only.
    """
    summary = summary if summary is not None else AggregationSummary()

    for raw in records:
        record = as_purchase_record(raw)
        seller = _lookup(seller_index, record.seller_id) if record else None
        if seller is None or not _is_number(record.total_amount):
            summary.records_skipped += 1
            continue

        items: list[ResolvedItem] = []
        for item in record.items:
            product = _lookup(product_index, item.sku)
            if product is None or not _item_is_usable(item, product):
                summary.items_skipped += 1
                continue
            items.append((item, product))

        summary.records_processed += 1
        summary.items_processed += len(items)
        summary.items_skipped += record.dropped_items
        yield seller, record, items


def aggregate_purchases(
    records: Iterable[Any],
    seller_index: Mapping[SellerID, SellerStats],
    product_index: Mapping[SKU, Product],
    calculate_revenue: RevenueStrategy,
    verbose: bool = True,
) -> AggregationSummary:
    """Fold every purchase record into the matching seller accumulator.

    Revenue is the record's billed ``total_amount``. Profit is the strategy's
    per-item revenue minus purchase cost, so the two are not expected to agree.
    Skipped records and items are counted in the returned summary; nothing is
    rolled back.
    """
    summary = AggregationSummary()

    for seller, record, items in resolve_purchases(records, seller_index, product_index, summary):
        seller.sales_count += 1
        seller.revenue += record.total_amount

        for item, product in items:
            cost = product.purchase_price * item.quantity
            revenue_item = calculate_revenue(item, product)
            seller.profit += revenue_item - cost
            seller.products_sold[item.sku] = seller.products_sold.get(item.sku, 0) + item.quantity

    if verbose:
        console.print(
            f"  Aggregated {summary.records_processed:,} records, "
            f"{summary.items_processed:,} items"
        )
        if summary.records_skipped or summary.items_skipped:
            console.print(
                f"  [yellow]Skipped {summary.records_skipped:,} records and "
                f"{summary.items_skipped:,} items with unknown references[/yellow]"
            )

    return summary
