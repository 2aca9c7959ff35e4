"""Payment recording against orders."""
import logging
import math
from dataclasses import dataclass

from marketplace.errors import InvalidStateError, ValidationError
from marketplace.models import OrderStatus, Payment
from marketplace.orders import get_order
from marketplace.store import MarketStore

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentReceipt:
    payment_id: int
    amount: float
    change_due: float
    status: OrderStatus


def amount_due(store: MarketStore, order_id: int) -> float:
    """Total minus paid. Not clamped at zero."""
    return get_order(store, order_id).amount_due


def record_payment(store: MarketStore, order_id: int, amount: float, method: str) -> PaymentReceipt:
    """Record a payment, capped at the amount still due.

    Any excess over the amount due is returned as ``change_due`` on the
    receipt and is not stored.
    """
    order = get_order(store, order_id)
    if order.status == OrderStatus.DELIVERED:
        raise InvalidStateError("order", order_id, order.status, "record payment")
    due = order.amount_due
    if due <= 0:
        raise ValidationError(f"Order {order_id} is already fully paid")
    if not math.isfinite(amount) or amount <= 0:
        raise ValidationError(f"Payment amount must be positive, got {amount}")
    if not method or not method.strip():
        raise ValidationError("Payment method must not be empty")

    recorded = min(amount, due)
    payment_id = store.next_id("payment")
    payment = Payment(payment_id=payment_id, order_id=order_id, amount=recorded, method=method.strip())
    store.payments[payment_id] = payment
    order.payments.append(payment)

    if order.paid_amount >= order.total_amount:
        order.status = OrderStatus.PAID
    else:
        order.status = OrderStatus.PAYMENT_PENDING
    log.info("Payment %d of %.2f recorded for order %d (%s)",
             payment_id, recorded, order_id, order.status.value)
    return PaymentReceipt(
        payment_id=payment_id,
        amount=recorded,
        change_due=amount - recorded,
        status=order.status,
    )


def payments_for_order(store: MarketStore, order_id: int) -> list[Payment]:
    return list(get_order(store, order_id).payments)
