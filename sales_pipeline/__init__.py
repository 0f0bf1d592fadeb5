"""Seller performance pipeline: validation, indexing, aggregation and ranking."""

from sales_pipeline.config import AnalysisConfig, BonusRates, load_analysis_config, load_profile
from sales_pipeline.errors import (
    ConfigError,
    InvalidInput,
    MissingOptions,
    MissingStrategy,
    SalesPipelineError,
)
from sales_pipeline.models import (
    Product,
    PurchaseItem,
    PurchaseRecord,
    Seller,
    SellerReport,
    SellerStats,
    TopProduct,
)
from sales_pipeline.reconcile import audit_dataset, reconcile_revenue
from sales_pipeline.report import render_report, report_to_frame, summarize_report, top_products_frame
from sales_pipeline.run import analyze
from sales_pipeline.strategies import (
    BonusStrategy,
    RankBonusPolicy,
    RevenueStrategy,
    default_bonus_strategy,
    default_revenue_strategy,
)
from sales_pipeline.utils.grouping import group_by
from sales_pipeline.utils.rounding import round_money
from sales_pipeline.validate import AnalysisOptions


def default_options(config: AnalysisConfig | None = None) -> AnalysisOptions:
    """Options wired to the reference revenue strategy and a rank bonus policy
    using the bonus rates of ``config`` (the built-in rates when omitted).
    """
    if config is None:
        return AnalysisOptions(
            calculate_revenue=default_revenue_strategy,
            calculate_bonus=default_bonus_strategy,
        )
    return AnalysisOptions(
        calculate_revenue=default_revenue_strategy,
        calculate_bonus=RankBonusPolicy(config.bonus),
    )
