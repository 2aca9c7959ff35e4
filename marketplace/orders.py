"""Order placement and lookup.

Placement is all-or-nothing: every line is checked against live stock before
any stock is removed, so a rejected order leaves inventory untouched.
"""
import logging
from collections.abc import Iterable

from marketplace.errors import InsufficientStockError, NotFoundError, ValidationError
from marketplace.inventory import decrease_stock, stock_of
from marketplace.models import Order, OrderItem, OrderStatus
from marketplace.store import MarketStore

log = logging.getLogger(__name__)


def _merge_lines(items: Iterable[tuple[int, int]]) -> dict[int, int]:
    # Repeated product ids are summed so the stock check sees the full demand.
    merged: dict[int, int] = {}
    for product_id, quantity in items:
        if quantity <= 0:
            raise ValidationError(f"Quantity must be positive, got {quantity} for product {product_id}")
        merged[product_id] = merged.get(product_id, 0) + quantity
    return merged


def place_order(store: MarketStore, vendor_id: int, items: Iterable[tuple[int, int]]) -> int:
    """Place and confirm an order of (product_id, quantity) lines from one vendor.

    Returns the new order id.
    """
    if vendor_id not in store.vendors:
        raise NotFoundError("vendor", vendor_id)
    lines = _merge_lines(items)
    if not lines:
        raise ValidationError("An order needs at least one item")

    order_items = []
    for product_id, quantity in lines.items():
        product = store.products.get(product_id)
        if product is None:
            raise NotFoundError("product", product_id)
        if product.vendor_id != vendor_id:
            raise NotFoundError("product", product_id, f"not sold by vendor {vendor_id}")
        available = stock_of(store, vendor_id, product_id)
        if quantity > available:
            log.warning("Order rejected: product %d has %d, requested %d",
                        product_id, available, quantity)
            raise InsufficientStockError(product_id, available, quantity)
        order_items.append(OrderItem(
            product_id=product_id,
            product_name=product.name,
            unit_price=product.price,
            ordered_quantity=quantity,
        ))

    for item in order_items:
        decrease_stock(store, vendor_id, item.product_id, item.quantity)

    order_id = store.next_id("order")
    order = Order(order_id=order_id, vendor_id=vendor_id, items=order_items)
    order.status = OrderStatus.CONFIRMED
    store.orders[order_id] = order
    log.info("Order %d confirmed for vendor %d, total %.2f",
             order_id, vendor_id, order.total_amount)
    return order_id


def get_order(store: MarketStore, order_id: int) -> Order:
    order = store.orders.get(order_id)
    if order is None:
        raise NotFoundError("order", order_id)
    return order


def list_orders(store: MarketStore, status: OrderStatus | Iterable[OrderStatus] | None = None) -> list[Order]:
    """List orders in id order, optionally keeping only the given status(es)."""
    orders = sorted(store.orders.values(), key=lambda o: o.order_id)
    if status is None:
        return orders
    wanted = {status} if isinstance(status, OrderStatus) else set(status)
    return [o for o in orders if o.status in wanted]


def get_order_summary(order: Order) -> dict:
    return {
        "order_id": order.order_id,
        "vendor_id": order.vendor_id,
        "items": len(order.items),
        "total": order.total_amount,
        "paid": order.paid_amount,
        "refunded": order.refunded_amount,
        "status": order.status.value,
    }
