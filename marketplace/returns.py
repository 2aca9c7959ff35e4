"""Return requests and their approval.

Approval restocks the vendor, refunds at the price captured on the order line
and shrinks that line. All lookups and checks run before anything is written.
"""
import logging

from marketplace.errors import InvalidStateError, NotFoundError, ValidationError
from marketplace.inventory import increase_stock
from marketplace.models import RETURNABLE_STATUSES, ReturnRequest, ReturnStatus
from marketplace.orders import get_order
from marketplace.store import MarketStore

log = logging.getLogger(__name__)


def request_return(store: MarketStore, order_id: int, product_id: int, quantity: int) -> int:
    """Open a return request pending approval. Returns the request id."""
    order = get_order(store, order_id)
    item = order.find_item(product_id)
    if item is None:
        raise NotFoundError("product", product_id, f"not in order {order_id}")
    if order.status not in RETURNABLE_STATUSES:
        raise InvalidStateError("order", order_id, order.status, "request return")
    if quantity <= 0:
        raise ValidationError(f"Return quantity must be positive, got {quantity}")
    if quantity > item.quantity:
        raise ValidationError(
            f"Cannot return {quantity} x product {product_id}; only {item.quantity} on order {order_id}"
        )

    return_id = store.next_id("return")
    store.returns[return_id] = ReturnRequest(
        return_id=return_id, order_id=order_id, product_id=product_id, quantity=quantity,
    )
    log.info("Return %d requested: %d x product %d on order %d",
             return_id, quantity, product_id, order_id)
    return return_id


def get_return(store: MarketStore, return_id: int) -> ReturnRequest:
    request = store.returns.get(return_id)
    if request is None:
        raise NotFoundError("return request", return_id)
    return request


def approve_return(store: MarketStore, return_id: int) -> float:
    """Approve a pending return. Returns the refunded amount."""
    request = get_return(store, return_id)
    if request.status != ReturnStatus.PENDING_APPROVAL:
        raise InvalidStateError("return request", return_id, request.status, "approve")

    order = get_order(store, request.order_id)
    product = store.products.get(request.product_id)
    if product is None:
        raise NotFoundError("product", request.product_id)
    if product.vendor_id not in store.vendors:
        raise NotFoundError("vendor", product.vendor_id)
    item = order.find_item(request.product_id)
    if item is None:
        raise NotFoundError("product", request.product_id, f"not in order {order.order_id}")
    if request.quantity > item.quantity:
        # Another approval on the same line got there first.
        raise ValidationError(
            f"Return {return_id} asks for {request.quantity} but order line holds {item.quantity}"
        )

    refund = request.quantity * item.unit_price
    increase_stock(store, product.vendor_id, product.product_id, request.quantity)
    order.refunded_amount += refund
    item.decrease_quantity(request.quantity)
    request.refund_amount = refund
    request.status = ReturnStatus.APPROVED
    log.info("Return %d approved: restocked %d x %s, refund %.2f",
             return_id, request.quantity, product.name, refund)
    return refund


def pending_returns(store: MarketStore) -> list[ReturnRequest]:
    return sorted(
        (r for r in store.returns.values() if r.status == ReturnStatus.PENDING_APPROVAL),
        key=lambda r: r.return_id,
    )
