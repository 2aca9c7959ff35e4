"""Vendor and product registration."""
import logging
import math

from marketplace.errors import NotFoundError, ValidationError
from marketplace.inventory import add_stock
from marketplace.models import Product, Vendor
from marketplace.store import MarketStore

log = logging.getLogger(__name__)


def register_vendor(store: MarketStore, name: str) -> int:
    """Create a vendor with an empty stock ledger. Returns the vendor id."""
    if not name or not name.strip():
        raise ValidationError("Vendor name must not be empty")
    vendor_id = store.next_id("vendor")
    store.vendors[vendor_id] = Vendor(vendor_id=vendor_id, name=name.strip())
    log.info("Registered vendor %d: %s", vendor_id, name.strip())
    return vendor_id


def register_product(store: MarketStore, name: str, price: float, vendor_id: int,
                     stock: int = 0) -> int:
    """Create a product owned by ``vendor_id``, optionally with initial stock.

    Returns the product id.
    """
    if vendor_id not in store.vendors:
        raise NotFoundError("vendor", vendor_id)
    if not name or not name.strip():
        raise ValidationError("Product name must not be empty")
    if not math.isfinite(price) or price <= 0:
        raise ValidationError(f"Price must be positive, got {price}")
    if stock < 0:
        raise ValidationError(f"Initial stock must be non-negative, got {stock}")

    product_id = store.next_id("product")
    store.products[product_id] = Product(
        product_id=product_id, name=name.strip(), price=price, vendor_id=vendor_id,
    )
    add_stock(store, vendor_id, product_id, stock)
    log.info("Registered product %d (%s @ %.2f) for vendor %d",
             product_id, name.strip(), price, vendor_id)
    return product_id


def get_vendor(store: MarketStore, vendor_id: int) -> Vendor:
    vendor = store.vendors.get(vendor_id)
    if vendor is None:
        raise NotFoundError("vendor", vendor_id)
    return vendor


def get_product(store: MarketStore, product_id: int) -> Product:
    product = store.products.get(product_id)
    if product is None:
        raise NotFoundError("product", product_id)
    return product


def products_for_vendor(store: MarketStore, vendor_id: int) -> list[Product]:
    get_vendor(store, vendor_id)
    return sorted(
        (p for p in store.products.values() if p.vendor_id == vendor_id),
        key=lambda p: p.product_id,
    )


def search_products(store: MarketStore, query: str) -> list[Product]:
    q = query.lower()
    return [p for p in store.products.values() if q in p.name.lower()]
