import pytest

from sales_pipeline import AnalysisConfig, default_options


def make_item(sku, quantity, sale_price, discount=0):
    return {"sku": sku, "quantity": quantity, "sale_price": sale_price, "discount": discount}


def make_record(seller_id, total_amount, items):
    return {"seller_id": seller_id, "total_amount": total_amount, "items": items}


@pytest.fixture
def quiet_config():
    return AnalysisConfig(verbose=False)


@pytest.fixture
def options():
    return default_options()


@pytest.fixture
def dataset():
    """Three sellers whose profits end up 100, 300 and 200."""
    return {
        "sellers": [
            {"id": "seller_A", "first_name": "Alexey", "last_name": "Petrov"},
            {"id": "seller_B", "first_name": "Ivan", "last_name": "Smirnov"},
            {"id": "seller_C", "first_name": "Maria", "last_name": "Ivanova"},
        ],
        "products": [
            {"sku": "SKU_001", "purchase_price": 10.0, "name": "Kettle"},
            {"sku": "SKU_002", "purchase_price": 20.0, "name": "Toaster"},
        ],
        "purchase_records": [
            # A: 10 * 20 - 10 * 10 = 100
            make_record("seller_A", 200.0, [make_item("SKU_001", 10, 20.0)]),
            # B: 10 * 50 - 10 * 20 = 300
            make_record("seller_B", 500.0, [make_item("SKU_002", 10, 50.0)]),
            # C: two records, 100 profit each
            make_record("seller_C", 200.0, [make_item("SKU_001", 10, 20.0)]),
            make_record("seller_C", 200.0, [make_item("SKU_001", 5, 30.0), make_item("SKU_002", 1, 20.0)]),
        ],
    }
