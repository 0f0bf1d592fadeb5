"""Pandera schemas for the tabular views of the input dataset and the report."""

from pandera.pandas import Check, Column, DataFrameSchema

# Seller ids may be strings or integers, so no dtype is enforced on keys
SELLERS_SCHEMA = DataFrameSchema(
    name="sellers",
    columns={
        "id": Column(nullable=False),
        "first_name": Column(str, nullable=True),
        "last_name": Column(str, nullable=True),
    },
    strict=False,
)

PRODUCTS_SCHEMA = DataFrameSchema(
    name="products",
    columns={
        "sku": Column(nullable=False),
        "purchase_price": Column(float, Check.greater_than_or_equal_to(0), coerce=True),
    },
    strict=False,
)

ITEMS_SCHEMA = DataFrameSchema(
    name="purchase_items",
    columns={
        "sku": Column(nullable=True),
        "quantity": Column(float, Check.greater_than_or_equal_to(0), coerce=True),
        "sale_price": Column(float, coerce=True),
        "discount": Column(float, Check.in_range(0, 100), coerce=True),
    },
    strict=False,
)

REPORT_SCHEMA = DataFrameSchema(
    name="seller_report",
    columns={
        "rank": Column(int, Check.greater_than(0), unique=True),
        "seller_id": Column(nullable=True),
        "name": Column(str),
        "revenue": Column(float),
        "profit": Column(float),
        "sales_count": Column(int, Check.greater_than_or_equal_to(0)),
        "bonus": Column(float),
        "top_product_count": Column(int, Check.greater_than_or_equal_to(0)),
    },
    strict=True,
    coerce=True,
)
