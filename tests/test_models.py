"""Tests for model helpers."""
from marketplace.models import OrderItem


def test_order_item_starts_at_ordered_quantity():
    item = OrderItem(product_id=2000, product_name="Tomato", unit_price=30.0, ordered_quantity=4)
    assert item.quantity == 4
    assert item.subtotal == 120.0


def test_decrease_quantity_floors_at_zero():
    item = OrderItem(product_id=2000, product_name="Tomato", unit_price=30.0, ordered_quantity=2)
    item.decrease_quantity(5)
    assert item.quantity == 0


def test_order_item_round_trip_keeps_remaining_quantity():
    item = OrderItem(product_id=2000, product_name="Tomato", unit_price=30.0, ordered_quantity=3)
    item.decrease_quantity(2)
    restored = OrderItem.from_dict(item.to_dict())
    assert restored.quantity == 1
    assert restored.ordered_quantity == 3
