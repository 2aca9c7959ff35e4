"""Tests for stock ledger operations."""
import pytest
from marketplace.catalog import register_product, register_vendor
from marketplace.errors import InsufficientStockError, NotFoundError, ValidationError
from marketplace.inventory import (
    add_stock,
    check_availability,
    decrease_stock,
    get_low_stock,
    increase_stock,
    stock_of,
)
from marketplace.store import MarketStore


@pytest.fixture
def store():
    s = MarketStore()
    vendor_id = register_vendor(s, "Hardware Co")
    register_product(s, "Bolt", 0.50, vendor_id, stock=100)
    register_product(s, "Nut", 0.25, vendor_id, stock=3)
    return s


VENDOR, BOLT, NUT = 1000, 2000, 2001


def test_add_stock(store):
    assert add_stock(store, VENDOR, BOLT, 50) == 150
    assert stock_of(store, VENDOR, BOLT) == 150


def test_increase_stock_is_alias(store):
    increase_stock(store, VENDOR, NUT, 2)
    assert stock_of(store, VENDOR, NUT) == 5


def test_add_zero_creates_entry(store):
    vendor_id = register_vendor(store, "Other")
    product_id = register_product(store, "Washer", 0.1, vendor_id)
    assert store.vendors[vendor_id].inventory == {product_id: 0}


def test_add_negative_rejected(store):
    with pytest.raises(ValidationError):
        add_stock(store, VENDOR, BOLT, -1)
    assert stock_of(store, VENDOR, BOLT) == 100


def test_add_stock_wrong_vendor(store):
    other = register_vendor(store, "Other")
    with pytest.raises(NotFoundError, match="not sold by vendor"):
        add_stock(store, other, BOLT, 1)


def test_decrease_stock(store):
    assert decrease_stock(store, VENDOR, BOLT, 30) == 70


def test_decrease_stock_insufficient(store):
    with pytest.raises(InsufficientStockError, match="have 3, need 10") as exc:
        decrease_stock(store, VENDOR, NUT, 10)
    assert exc.value.available == 3
    assert stock_of(store, VENDOR, NUT) == 3


@pytest.mark.parametrize("qty", [0, -5])
def test_decrease_non_positive_is_noop(store, qty):
    assert decrease_stock(store, VENDOR, NUT, qty) == 3


def test_stock_never_negative(store):
    for qty in (1, 1, 1, 1):
        try:
            decrease_stock(store, VENDOR, NUT, qty)
        except InsufficientStockError:
            pass
    assert stock_of(store, VENDOR, NUT) == 0


def test_stock_of_unknown_is_zero(store):
    assert stock_of(store, 999, BOLT) == 0
    assert stock_of(store, VENDOR, 999) == 0


def test_check_availability(store):
    assert check_availability(store, VENDOR, NUT, 3)
    assert not check_availability(store, VENDOR, NUT, 4)


def test_low_stock(store):
    assert get_low_stock(store, threshold=5) == [(VENDOR, NUT, 3)]
