"""Tests for MarketStore ids and JSON snapshots."""
import json

import pytest
from marketplace.catalog import register_product, register_vendor
from marketplace.models import OrderStatus, ReturnStatus
from marketplace.orders import place_order
from marketplace.payments import record_payment
from marketplace.deliveries import schedule_delivery
from marketplace.returns import request_return
from marketplace.store import MarketStore


@pytest.fixture
def store():
    return MarketStore()


def test_id_bases_per_kind(store):
    assert store.next_id("vendor") == 1000
    assert store.next_id("vendor") == 1001
    assert store.next_id("product") == 2000
    assert store.next_id("order") == 3000
    assert store.next_id("payment") == 4000
    assert store.next_id("delivery") == 5000
    assert store.next_id("return") == 6000


def test_save_without_file_is_noop(store, tmp_path):
    register_vendor(store, "Nobody")
    store.save()
    assert list(tmp_path.iterdir()) == []


def test_persistence(tmp_path):
    filepath = str(tmp_path / "market.json")
    store1 = MarketStore(filepath=filepath)
    vendor_id = register_vendor(store1, "Green Valley Produce")
    product_id = register_product(store1, "Tomato", 10.0, vendor_id, stock=20)
    order_id = place_order(store1, vendor_id, [(product_id, 3)])
    record_payment(store1, order_id, 30.0, "cash")
    schedule_delivery(store1, order_id, "2024-05-01")
    request_return(store1, order_id, product_id, 1)
    store1.save()

    store2 = MarketStore(filepath=filepath)
    assert store2.vendors[vendor_id].inventory == {product_id: 17}
    assert store2.products[product_id].name == "Tomato"
    order = store2.orders[order_id]
    assert order.status == OrderStatus.SCHEDULED_FOR_DELIVERY
    assert order.paid_amount == 30.0
    assert order.payments[0] is store2.payments[order.payments[0].payment_id]
    assert store2.returns[6000].status == ReturnStatus.PENDING_APPROVAL
    assert store2.deliveries[5000].scheduled_date == "2024-05-01"

    # counters resume where the first store stopped
    assert register_vendor(store2, "Sunny Farms") == vendor_id + 1


def test_snapshot_layout(tmp_path):
    filepath = tmp_path / "market.json"
    store = MarketStore(filepath=str(filepath))
    register_vendor(store, "Sunny Farms")
    store.save()

    data = json.loads(filepath.read_text())
    assert set(data) == {"counters", "vendors", "products", "orders",
                         "payments", "deliveries", "returns"}
    assert data["counters"]["vendor"] == 1001
    assert data["vendors"][0]["name"] == "Sunny Farms"
