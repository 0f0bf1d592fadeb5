import pytest

from sales_pipeline import (
    BonusRates,
    Product,
    PurchaseItem,
    RankBonusPolicy,
    SellerStats,
    default_bonus_strategy,
    default_revenue_strategy,
)


@pytest.mark.parametrize(
    "quantity, sale_price, discount, expected",
    [
        (2, 100.0, 0, 200.0),
        (2, 100.0, 25, 150.0),
        (1, 80.0, 100, 0.0),
        (3, 10.0, 10, 27.0),
    ],
)
def test_default_revenue_applies_percentage_discount(quantity, sale_price, discount, expected):
    item = PurchaseItem(sku="X", quantity=quantity, sale_price=sale_price, discount=discount)
    assert default_revenue_strategy(item, Product(sku="X", purchase_price=1.0)) == pytest.approx(expected)


@pytest.mark.parametrize(
    "total, expected",
    [
        (1, [0.15]),
        (2, [0.15, 0.10]),
        (3, [0.15, 0.10, 0.10]),
        (4, [0.15, 0.10, 0.10, 0.0]),
        (6, [0.15, 0.10, 0.10, 0.05, 0.05, 0.0]),
    ],
)
def test_rank_bands(total, expected):
    policy = RankBonusPolicy()
    assert [policy.rate_for(i, total) for i in range(total)] == expected


def test_default_bonus_is_a_share_of_profit():
    seller = SellerStats(id=1, name="A", profit=1000.0)
    assert default_bonus_strategy(0, 5, seller) == pytest.approx(150.0)
    assert default_bonus_strategy(2, 5, seller) == pytest.approx(100.0)
    assert default_bonus_strategy(3, 5, seller) == pytest.approx(50.0)
    assert default_bonus_strategy(4, 5, seller) == 0.0


def test_custom_rates():
    policy = RankBonusPolicy(BonusRates(first=0.5, podium=0.25, podium_ranks=1, last=0.01, default=0.02))
    seller = SellerStats(id=1, name="A", profit=100.0)

    assert [policy(i, 4, seller) for i in range(4)] == pytest.approx([50.0, 25.0, 2.0, 1.0])


def test_negative_profit_gives_negative_bonus():
    seller = SellerStats(id=1, name="A", profit=-200.0)
    assert default_bonus_strategy(0, 2, seller) == pytest.approx(-30.0)
