"""Per-vendor stock ledger operations.

Stock for a (vendor, product) pair never goes below zero. Only the functions
here write to ``Vendor.inventory``.
"""
import logging

from marketplace.errors import InsufficientStockError, NotFoundError, ValidationError
from marketplace.models import Vendor
from marketplace.store import MarketStore

log = logging.getLogger(__name__)


def _owned_ledger(store: MarketStore, vendor_id: int, product_id: int) -> Vendor:
    vendor = store.vendors.get(vendor_id)
    if vendor is None:
        raise NotFoundError("vendor", vendor_id)
    product = store.products.get(product_id)
    if product is None:
        raise NotFoundError("product", product_id)
    if product.vendor_id != vendor_id:
        raise NotFoundError("product", product_id, f"not sold by vendor {vendor_id}")
    return vendor


def add_stock(store: MarketStore, vendor_id: int, product_id: int, qty: int) -> int:
    """Add ``qty`` units to the vendor's ledger, creating the entry at 0.

    Returns the new stock level.
    """
    if qty < 0:
        raise ValidationError(f"Stock to add must be non-negative, got {qty}")
    vendor = _owned_ledger(store, vendor_id, product_id)
    vendor.inventory[product_id] = vendor.inventory.get(product_id, 0) + qty
    log.debug("Stock for product %d at vendor %d is now %d",
              product_id, vendor_id, vendor.inventory[product_id])
    return vendor.inventory[product_id]


increase_stock = add_stock


def decrease_stock(store: MarketStore, vendor_id: int, product_id: int, qty: int) -> int:
    """Remove ``qty`` units. A non-positive qty leaves stock untouched.

    Returns the new stock level.
    """
    vendor = _owned_ledger(store, vendor_id, product_id)
    current = vendor.inventory.get(product_id, 0)
    if qty <= 0:
        return current
    if qty > current:
        log.warning("Rejected removal of %d x product %d (have %d)", qty, product_id, current)
        raise InsufficientStockError(product_id, current, qty)
    vendor.inventory[product_id] = current - qty
    return vendor.inventory[product_id]


def stock_of(store: MarketStore, vendor_id: int, product_id: int) -> int:
    vendor = store.vendors.get(vendor_id)
    if vendor is None:
        return 0
    return vendor.inventory.get(product_id, 0)


def check_availability(store: MarketStore, vendor_id: int, product_id: int, needed: int) -> bool:
    """Check if enough stock is available."""
    return stock_of(store, vendor_id, product_id) >= needed


def get_low_stock(store: MarketStore, threshold: int = 5) -> list[tuple[int, int, int]]:
    """Return (vendor_id, product_id, stock) rows with stock below threshold."""
    low = []
    for vendor in store.vendors.values():
        for product_id, qty in sorted(vendor.inventory.items()):
            if qty < threshold:
                low.append((vendor.vendor_id, product_id, qty))
    return low
