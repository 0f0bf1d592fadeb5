"""Tabular and console views of a finished seller report."""

from collections.abc import Sequence

import pandas as pd
from rich.console import Console
from rich.table import Table

from sales_pipeline.models import SellerReport
from sales_pipeline.schemas import REPORT_SCHEMA
from sales_pipeline.utils.rounding import round_money

type ReportSummary = dict[str, float | int | str | None]

REPORT_COLUMNS = [
    "rank", "seller_id", "name", "revenue", "profit",
    "sales_count", "bonus", "top_product_count",
]
TOP_PRODUCT_COLUMNS = ["seller_id", "position", "sku", "quantity"]

console = Console()


def report_to_frame(reports: Sequence[SellerReport]) -> pd.DataFrame:
    """One row per seller, in report (profit) order, with a 1-based rank."""
    rows = [
        {
            "rank": position,
            "seller_id": r.seller_id,
            "name": r.name,
            "revenue": r.revenue,
            "profit": r.profit,
            "sales_count": r.sales_count,
            "bonus": r.bonus,
            "top_product_count": len(r.top_products),
        }
        for position, r in enumerate(reports, start=1)
    ]
    frame = pd.DataFrame(rows, columns=REPORT_COLUMNS)
    return REPORT_SCHEMA.validate(frame)


def top_products_frame(reports: Sequence[SellerReport]) -> pd.DataFrame:
    """Long-format listing of every seller's top products."""
    rows = [
        {"seller_id": r.seller_id, "position": position, "sku": p.sku, "quantity": p.quantity}
        for r in reports
        for position, p in enumerate(r.top_products, start=1)
    ]
    return pd.DataFrame(rows, columns=TOP_PRODUCT_COLUMNS)


def summarize_report(reports: Sequence[SellerReport]) -> ReportSummary:
    """Company-wide totals across all sellers."""
    return {
        "seller_count": len(reports),
        "total_revenue": round_money(sum(r.revenue for r in reports)),
        "total_profit": round_money(sum(r.profit for r in reports)),
        "total_bonus": round_money(sum(r.bonus for r in reports)),
        "total_sales": sum(r.sales_count for r in reports),
        "top_seller_id": reports[0].seller_id if reports else None,
    }


def render_report(reports: Sequence[SellerReport], out: Console | None = None) -> Table:
    """Print the report as a rich table and return the table."""
    out = out or console
    table = Table(title="Seller Performance")
    table.add_column("Rank", justify="right")
    table.add_column("Seller")
    table.add_column("Revenue", justify="right")
    table.add_column("Profit", justify="right")
    table.add_column("Sales", justify="right")
    table.add_column("Bonus", justify="right")
    table.add_column("Top product")

    for position, r in enumerate(reports, start=1):
        profit_style = "red" if r.profit < 0 else "green"
        top = f"{r.top_products[0].sku} x{r.top_products[0].quantity}" if r.top_products else "-"
        table.add_row(
            str(position),
            r.name,
            f"{r.revenue:.2f}",
            f"[{profit_style}]{r.profit:.2f}[/{profit_style}]",
            str(r.sales_count),
            f"{r.bonus:.2f}",
            top,
        )

    out.print(table)
    return table
