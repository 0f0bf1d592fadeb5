from rich.console import Console

from sales_pipeline import (
    analyze,
    render_report,
    report_to_frame,
    summarize_report,
    top_products_frame,
)


def test_report_frame_has_one_ranked_row_per_seller(dataset, options, quiet_config):
    frame = report_to_frame(analyze(dataset, options, quiet_config))

    assert frame["rank"].tolist() == [1, 2, 3]
    assert frame["seller_id"].tolist() == ["seller_B", "seller_C", "seller_A"]
    assert frame["profit"].tolist() == [300.0, 200.0, 100.0]
    assert frame["top_product_count"].tolist() == [1, 2, 1]


def test_empty_report_frame_keeps_columns():
    frame = report_to_frame([])
    assert frame.empty
    assert "bonus" in frame.columns


def test_top_products_frame_is_long_format(dataset, options, quiet_config):
    frame = top_products_frame(analyze(dataset, options, quiet_config))

    assert list(frame.columns) == ["seller_id", "position", "sku", "quantity"]
    c_rows = frame[frame["seller_id"] == "seller_C"]
    assert c_rows["sku"].tolist() == ["SKU_001", "SKU_002"]
    assert c_rows["position"].tolist() == [1, 2]


def test_summary_totals(dataset, options, quiet_config):
    summary = summarize_report(analyze(dataset, options, quiet_config))

    assert summary == {
        "seller_count": 3,
        "total_revenue": 1100.0,
        "total_profit": 600.0,
        "total_bonus": 75.0,
        "total_sales": 4,
        "top_seller_id": "seller_B",
    }


def test_summary_of_nothing():
    assert summarize_report([])["top_seller_id"] is None


def test_render_report_prints_a_row_per_seller(dataset, options, quiet_config):
    out = Console(record=True, width=140)
    table = render_report(analyze(dataset, options, quiet_config), out)
    text = out.export_text()

    assert table.row_count == 3
    assert "Ivan Smirnov" in text
    assert "300.00" in text
    assert "SKU_001 x15" in text
