"""Rank sellers by profit, assign bonuses and shape the final report."""

from collections.abc import Iterable

from rich.console import Console

from sales_pipeline.config import AnalysisConfig
from sales_pipeline.models import SellerReport, SellerStats, TopProduct
from sales_pipeline.strategies import BonusStrategy
from sales_pipeline.utils.rounding import round_money

console = Console(stderr=True)


def select_top_products(products_sold: dict, limit: int = 10) -> list[TopProduct]:
    """Best sellers by quantity; equal quantities are ordered by sku."""
    ranked = sorted(products_sold.items(), key=lambda kv: (-kv[1], str(kv[0])))
    return [TopProduct(sku=sku, quantity=qty) for sku, qty in ranked[:limit]]


def rank_sellers(
    stats: Iterable[SellerStats],
    calculate_bonus: BonusStrategy,
    config: AnalysisConfig | None = None,
) -> list[SellerStats]:
    """Sort by profit (highest first) and fill in bonus and top products.

    ``sorted`` is stable, so sellers with equal profit keep their input order.
    The bonus is rounded as soon as the strategy returns it.
    """
    config = config or AnalysisConfig()
    ranked = sorted(stats, key=lambda s: s.profit, reverse=True)
    total = len(ranked)

    for index, seller in enumerate(ranked):
        seller.bonus = round_money(calculate_bonus(index, total, seller), config.money_places)
        seller.top_products = select_top_products(seller.products_sold, config.top_products_limit)

    if config.verbose and ranked:
        leader = ranked[0]
        console.print(f"  Ranked {total} sellers, top: {leader.name} ({leader.profit:,.2f} profit)")

    return ranked


def build_reports(ranked: Iterable[SellerStats], config: AnalysisConfig | None = None) -> list[SellerReport]:
    config = config or AnalysisConfig()
    places = config.money_places
    return [
        SellerReport(
            seller_id=seller.id,
            name=seller.name,
            revenue=round_money(seller.revenue, places),
            profit=round_money(seller.profit, places),
            sales_count=seller.sales_count,
            top_products=tuple(seller.top_products),
            bonus=round_money(seller.bonus, places),
        )
        for seller in ranked
    ]
