"""Pipeline runner: validate, index, aggregate, then rank and report."""

from typing import Any

from rich.console import Console

from sales_pipeline.aggregate import aggregate_purchases
from sales_pipeline.config import AnalysisConfig
from sales_pipeline.index import build_product_index, build_seller_index, build_seller_stats
from sales_pipeline.models import SellerReport
from sales_pipeline.rank import build_reports, rank_sellers
from sales_pipeline.utils.types import DatasetKey
from sales_pipeline.validate import validate_inputs

console = Console(stderr=True)


def analyze(dataset: Any, options: Any, config: AnalysisConfig | None = None) -> list[SellerReport]:
    """Build the seller performance report, ordered by profit descending.

    Raises ``InvalidInput``, ``MissingOptions`` or ``MissingStrategy`` before
    any accumulator is created. Each call owns its own accumulator state.
    """
    opts = validate_inputs(dataset, options)
    config = config or AnalysisConfig()

    stats = build_seller_stats(dataset[DatasetKey.SELLERS])
    seller_index = build_seller_index(stats)
    product_index = build_product_index(dataset[DatasetKey.PRODUCTS])
    if config.verbose:
        console.print(f"  Indexed {len(seller_index)} sellers, {len(product_index)} products")

    aggregate_purchases(
        dataset[DatasetKey.PURCHASE_RECORDS],
        seller_index,
        product_index,
        opts.calculate_revenue,
        verbose=config.verbose,
    )

    ranked = rank_sellers(stats, opts.calculate_bonus, config)
    return build_reports(ranked, config)
