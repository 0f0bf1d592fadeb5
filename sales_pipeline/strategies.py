"""Pluggable revenue and bonus policies.

A strategy is any callable matching one of the protocols below. The defaults
implement the reference policies; callers may pass their own functions.
"""

from dataclasses import dataclass
from typing import Protocol

from sales_pipeline.config import BonusRates
from sales_pipeline.models import Product, PurchaseItem, SellerStats


class RevenueStrategy(Protocol):
    def __call__(self, item: PurchaseItem, product: Product) -> float: ...


class BonusStrategy(Protocol):
    def __call__(self, index: int, total: int, seller: SellerStats) -> float: ...


def default_revenue_strategy(item: PurchaseItem, product: Product) -> float:
    """Line revenue after the percentage discount. ``product`` is unused."""
    return item.sale_price * item.quantity * (1 - item.discount / 100)


@dataclass(frozen=True)
class RankBonusPolicy:
    """Bonus as a share of profit chosen by 0-based profit rank.

    Bands are checked first-match: rank 0, then the podium ranks, then the
    last rank, then everyone else. A lone seller is both first and last and
    gets the first-rank rate.
    """

    rates: BonusRates = BonusRates()

    def rate_for(self, index: int, total: int) -> float:
        match index:
            case 0:
                return self.rates.first
            case i if i <= self.rates.podium_ranks:
                return self.rates.podium
            case i if i == total - 1:
                return self.rates.last
            case _:
                return self.rates.default

    def __call__(self, index: int, total: int, seller: SellerStats) -> float:
        return seller.profit * self.rate_for(index, total)


DEFAULT_BONUS_POLICY = RankBonusPolicy()


def default_bonus_strategy(index: int, total: int, seller: SellerStats) -> float:
    """15% for rank 0, 10% for ranks 1-2, nothing for last place, 5% otherwise."""
    return DEFAULT_BONUS_POLICY(index, total, seller)
