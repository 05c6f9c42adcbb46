from datetime import datetime
from decimal import Decimal

import pytest

from inventory_tracker.models.category import Category
from inventory_tracker.models.product import Product
from inventory_tracker.models.reason import Reason
from inventory_tracker.models.stock import StockMovement
from inventory_tracker.services.analytics import AnalyticsAggregator, UNKNOWN_PRODUCT
from inventory_tracker.services.ledger import UNCATEGORIZED

from tests.conftest import FrozenClock

NOW = datetime(2024, 5, 15, 12, 0, 0)


def add_product(db, name, quantity, price="1.00", category_id=None):
    product = Product(
        name=name, quantity=quantity, price=Decimal(price), category_id=category_id,
        created_at=NOW, last_modified_at=NOW, is_active=True,
    )
    db.add(product)
    db.flush()
    return product


def move(db, product_id, change, when=NOW, reason=None):
    db.add(StockMovement(
        product_id=product_id, quantity_change=change, timestamp=when,
        reason_id=reason.id if reason is not None else None,
    ))


@pytest.fixture
def aggregator(db):
    return AnalyticsAggregator(db, clock=FrozenClock(NOW), low_stock_threshold=10, top_limit=2)


def test_empty_store(aggregator):
    snap = aggregator.snapshot()
    assert snap.total_products == 0
    assert snap.total_stock_out_this_month == 0
    assert snap.estimated_inventory_value == Decimal("0.00")
    assert snap.top_products == []
    assert snap.reason_breakdown == []


def test_stock_out_this_month(db, aggregator):
    p = add_product(db, "Cola", 20)
    move(db, p.id, -3, datetime(2024, 5, 1, 0, 0, 0))
    move(db, p.id, -4, datetime(2024, 5, 31, 23, 59, 59))
    move(db, p.id, -2, datetime(2024, 4, 30, 23, 59, 59))
    move(db, p.id, -6, datetime(2024, 6, 1, 0, 0, 0))
    move(db, p.id, 10, datetime(2024, 5, 10))
    db.commit()

    assert aggregator.snapshot().total_stock_out_this_month == 7


def test_counts_and_value(db, aggregator):
    drinks = Category(name="Drinks", created_at=NOW, last_modified_at=NOW, is_active=True)
    snacks = Category(name="Snacks", created_at=NOW, last_modified_at=NOW, is_active=True)
    db.add_all([drinks, snacks])
    db.flush()
    add_product(db, "Cola", 4, "2.50", category_id=drinks.id)
    add_product(db, "Tea", 8, "1.25", category_id=drinks.id)
    add_product(db, "Water", 10, "0.50")
    db.commit()

    snap = aggregator.snapshot()
    assert snap.total_products == 3
    assert snap.category_count == 2
    assert snap.categories_in_use == 1
    # threshold is exclusive
    assert snap.low_stock_count == 2
    assert snap.estimated_inventory_value == Decimal("25.00")


def test_top_products_only_count_sales(db, aggregator):
    sale = Reason(name="Sale", type="Out")
    stock_out = Reason(name="Stock Out", type="Out")
    damaged = Reason(name="Damaged", type="Out")
    db.add_all([sale, stock_out, damaged])
    db.flush()

    cola = add_product(db, "Cola", 50)
    tea = add_product(db, "Tea", 50)
    water = add_product(db, "Water", 50)
    move(db, cola.id, -2, reason=sale)
    move(db, tea.id, -5, reason=stock_out)
    move(db, cola.id, -3, reason=sale)
    move(db, water.id, -4, reason=sale)
    move(db, water.id, -40, reason=damaged)
    move(db, water.id, 30, reason=sale)
    db.commit()

    top = aggregator.snapshot().top_products
    # cola and tea tie at 5; cola was seen first
    assert top == [(cola.id, "Cola", 5), (tea.id, "Tea", 5)]


def test_top_product_that_no_longer_exists(db, aggregator):
    sale = Reason(name="sale")
    db.add(sale)
    db.flush()
    move(db, 777, -1, reason=sale)
    db.commit()

    assert aggregator.snapshot().top_products == [(777, UNKNOWN_PRODUCT, 1)]


def test_reason_breakdown_counts_occurrences(db, aggregator):
    sale = Reason(name="Sale", type="Out")
    expired = Reason(name="Expired", type="Out")
    db.add_all([sale, expired])
    db.flush()

    p = add_product(db, "Milk", 100)
    move(db, p.id, -50, reason=expired)
    move(db, p.id, -1, reason=sale)
    move(db, p.id, -1, reason=sale)
    move(db, p.id, -1)
    move(db, p.id, -1, reason=Reason(id=999, name="gone"))
    move(db, p.id, 5, reason=sale)
    db.commit()

    assert aggregator.snapshot().reason_breakdown == [
        ("Sale", 2),
        (UNCATEGORIZED, 2),
        ("Expired", 1),
    ]


def test_zero_limits_are_not_replaced_by_defaults(db):
    sale = Reason(name="Sale", type="Out")
    db.add(sale)
    db.flush()
    p = add_product(db, "Cola", 0)
    move(db, p.id, -1, reason=sale)
    db.commit()

    snap = AnalyticsAggregator(db, clock=FrozenClock(NOW), low_stock_threshold=0, top_limit=0).snapshot()
    assert snap.low_stock_threshold == 0
    assert snap.low_stock_count == 0
    assert snap.top_products == []
