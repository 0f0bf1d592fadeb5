"""Lookup tables for sellers and products, keyed by identifier."""

from collections.abc import Iterable

from sales_pipeline.models import Product, Seller, SellerStats
from sales_pipeline.utils.types import SKU, RawRecord, SellerID


def _as_seller(raw: RawRecord | Seller) -> Seller:
    return raw if isinstance(raw, Seller) else Seller.from_mapping(raw)


def _as_product(raw: RawRecord | Product) -> Product:
    return raw if isinstance(raw, Product) else Product.from_mapping(raw)


def build_seller_stats(sellers: Iterable[RawRecord | Seller]) -> list[SellerStats]:
    """One zeroed accumulator per input seller, in input order."""
    return [SellerStats.from_seller(_as_seller(s)) for s in sellers]


def build_seller_index(stats: Iterable[SellerStats]) -> dict[SellerID, SellerStats]:
    # Later duplicates take the slot, earlier ones stay in the stats list untouched
    return {s.id: s for s in stats}


def build_product_index(products: Iterable[RawRecord | Product]) -> dict[SKU, Product]:
    return {p.sku: p for p in map(_as_product, products)}
