"""Input, accumulator and output models for the seller performance report."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from sales_pipeline.utils.types import SKU, RawRecord, SellerID


@dataclass(frozen=True)
class Seller:
    id: SellerID
    first_name: str
    last_name: str

    @classmethod
    def from_mapping(cls, raw: RawRecord) -> "Seller":
        return cls(
            id=raw.get("id"),
            first_name=raw.get("first_name", ""),
            last_name=raw.get("last_name", ""),
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class Product:
    sku: SKU
    purchase_price: float
    extra: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def from_mapping(cls, raw: RawRecord) -> "Product":
        extra = {k: v for k, v in raw.items() if k not in ("sku", "purchase_price")}
        return cls(
            sku=raw.get("sku"),
            purchase_price=raw.get("purchase_price", 0),
            extra=extra,
        )


@dataclass(frozen=True)
class PurchaseItem:
    """One line of a purchase record. ``discount`` is a percentage, 0-100."""

    sku: SKU
    quantity: float
    sale_price: float
    discount: float = 0

    @classmethod
    def from_mapping(cls, raw: RawRecord) -> "PurchaseItem":
        return cls(
            sku=raw.get("sku"),
            quantity=raw.get("quantity", 0),
            sale_price=raw.get("sale_price", 0),
            discount=raw.get("discount", 0),
        )


@dataclass(frozen=True)
class PurchaseRecord:
    """One transaction, attributed to exactly one seller.

    ``dropped_items`` counts entries of the raw ``items`` list that were not
    item mappings and so never became a ``PurchaseItem``.
    """

    seller_id: SellerID
    total_amount: float
    items: tuple[PurchaseItem, ...] = ()
    dropped_items: int = field(default=0, compare=False)

    @classmethod
    def from_mapping(cls, raw: RawRecord) -> "PurchaseRecord":
        items = []
        dropped = 0
        for item in raw.get("items") or ():
            match item:
                case PurchaseItem():
                    items.append(item)
                case Mapping():
                    items.append(PurchaseItem.from_mapping(item))
                case _:
                    dropped += 1
        return cls(
            seller_id=raw.get("seller_id"),
            total_amount=raw.get("total_amount", 0),
            items=tuple(items),
            dropped_items=dropped,
        )


@dataclass(frozen=True)
class TopProduct:
    sku: SKU
    quantity: float

    def to_dict(self) -> dict[str, Any]:
        return {"sku": self.sku, "quantity": self.quantity}


@dataclass
class SellerStats:
    """Running totals for one seller.

    Created by the indexer, mutated only by the aggregator, then read by the
    ranker which fills in ``bonus`` and ``top_products``.
    """

    id: SellerID
    name: str
    revenue: float = 0.0
    profit: float = 0.0
    sales_count: int = 0
    products_sold: dict[SKU, float] = field(default_factory=dict)
    bonus: float = 0.0
    top_products: list[TopProduct] = field(default_factory=list)

    @classmethod
    def from_seller(cls, seller: Seller) -> "SellerStats":
        return cls(id=seller.id, name=seller.full_name)


@dataclass(frozen=True)
class SellerReport:
    seller_id: SellerID
    name: str
    revenue: float
    profit: float
    sales_count: int
    top_products: tuple[TopProduct, ...]
    bonus: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "seller_id": self.seller_id,
            "name": self.name,
            "revenue": self.revenue,
            "profit": self.profit,
            "sales_count": self.sales_count,
            "top_products": [p.to_dict() for p in self.top_products],
            "bonus": self.bonus,
        }
