import pytest

from conftest import make_item, make_record
from sales_pipeline import InvalidInput, audit_dataset, reconcile_revenue


def test_clean_dataset_passes_audit(dataset):
    result = audit_dataset(dataset)

    assert result["valid"] is True
    assert result["status"] == "ok"
    assert result["errors"] == []
    assert result["record_count"] == 4
    assert result["item_count"] == 5
    assert result["orphan_records"] == 0
    assert result["orphan_items"] == 0


def test_audit_reports_what_analyze_would_skip(dataset):
    dataset["sellers"].append({"id": "seller_A", "first_name": "Dup", "last_name": "Licate"})
    dataset["products"].append({"sku": "SKU_003", "purchase_price": -5.0})
    dataset["purchase_records"] += [
        make_record("ghost", 10.0, [make_item("SKU_001", 1, 10.0)]),
        make_record("seller_B", 10.0, [make_item("SKU_404", 1, 10.0), make_item("SKU_001", 1, 10.0, 150)]),
    ]
    result = audit_dataset(dataset)

    assert result["valid"] is False
    assert result["status"] == "error"
    assert result["orphan_records"] == 1
    assert result["orphan_items"] == 1
    errors = "\n".join(result["errors"])
    assert "duplicate rows on columns ['id']" in errors
    assert "orphan seller_id" in errors
    assert "orphan sku" in errors
    assert "purchase_price" in errors
    assert "discount" in errors


def test_audit_rejects_bad_shape():
    with pytest.raises(InvalidInput):
        audit_dataset({"sellers": []})


def test_reconcile_flags_discount_gaps(dataset, options):
    dataset["purchase_records"].append(
        make_record("seller_A", 100.0, [make_item("SKU_001", 5, 20.0, discount=10)])
    )
    frame = reconcile_revenue(dataset, options)

    assert list(frame.columns) == [
        "seller_id", "billed_revenue", "modeled_revenue", "difference", "pct_diff", "flagged",
    ]
    assert frame["seller_id"].tolist() == ["seller_A", "seller_B", "seller_C"]

    a = frame.set_index("seller_id").loc["seller_A"]
    assert a["billed_revenue"] == pytest.approx(300.0)
    assert a["modeled_revenue"] == pytest.approx(290.0)
    assert a["pct_diff"] == pytest.approx(10 / 290)
    assert bool(a["flagged"]) is True
    # seller_C bills 200 for a record modeled at 170
    assert frame["flagged"].tolist() == [True, False, True]


def test_reconcile_includes_sellers_without_sales(dataset, options):
    dataset["sellers"].append({"id": "seller_D", "first_name": "Olga", "last_name": "K"})
    frame = reconcile_revenue(dataset, options, tolerance=0.5)
    d = frame.set_index("seller_id").loc["seller_D"]

    assert d["billed_revenue"] == 0.0
    assert d["modeled_revenue"] == 0.0
    assert bool(d["flagged"]) is False


def test_audit_reports_unhashable_keys_without_raising(dataset):
    dataset["purchase_records"] += [
        make_record("seller_B", 10.0, [make_item(["SKU_001"], 1, 10.0)]),
        make_record(["seller_A"], 10.0, []),
    ]
    result = audit_dataset(dataset)

    assert result["valid"] is False
    assert result["orphan_items"] == 1
    assert result["orphan_records"] == 1
    errors = "\n".join(result["errors"])
    assert "Found 1 unhashable sku values" in errors
    assert "Found 1 unhashable seller_id values" in errors
    assert "orphan sku" in errors


def test_audit_counts_malformed_records_and_items(dataset):
    dataset["purchase_records"] += [
        make_record("seller_A", 10.0, 5),
        make_record("seller_B", 10.0, [make_item("SKU_001", 1, 10.0), "junk"]),
    ]
    result = audit_dataset(dataset)

    assert result["valid"] is False
    assert result["record_count"] == 5
    assert result["item_count"] == 6
    assert "Found 1 malformed purchase records" in result["errors"]
    assert "Found 1 malformed purchase items" in result["errors"]
