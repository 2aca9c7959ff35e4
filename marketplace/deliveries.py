"""Delivery scheduling for paid orders."""
import logging

from marketplace.errors import InvalidStateError, ValidationError
from marketplace.models import Delivery, OrderStatus
from marketplace.orders import get_order
from marketplace.store import MarketStore

log = logging.getLogger(__name__)


def schedule_delivery(store: MarketStore, order_id: int, date: str) -> int:
    """Schedule delivery of a fully paid order on ``date`` (opaque label).

    Returns the delivery id.
    """
    order = get_order(store, order_id)
    if order.status != OrderStatus.PAID:
        log.warning("Delivery refused for order %d in status %s", order_id, order.status.value)
        raise InvalidStateError("order", order_id, order.status, "schedule delivery")
    if not date or not date.strip():
        raise ValidationError("Delivery date must not be empty")

    delivery_id = store.next_id("delivery")
    store.deliveries[delivery_id] = Delivery(
        delivery_id=delivery_id, order_id=order_id, scheduled_date=date.strip(),
    )
    order.status = OrderStatus.SCHEDULED_FOR_DELIVERY
    log.info("Delivery %d scheduled for order %d on %s", delivery_id, order_id, date.strip())
    return delivery_id


def deliveries_for_order(store: MarketStore, order_id: int) -> list[Delivery]:
    get_order(store, order_id)
    return [d for d in store.deliveries.values() if d.order_id == order_id]
