"""Data models for the marketplace order lifecycle."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class OrderStatus(Enum):
    CREATED = "CREATED"
    CONFIRMED = "CONFIRMED"
    PAYMENT_PENDING = "PAYMENT_PENDING"
    PAID = "PAID"
    SCHEDULED_FOR_DELIVERY = "SCHEDULED_FOR_DELIVERY"
    # No operation produces these two yet.
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentStatus(Enum):
    RECEIVED = "RECEIVED"


class DeliveryStatus(Enum):
    SCHEDULED = "SCHEDULED"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"
    DELIVERED = "DELIVERED"


class ReturnStatus(Enum):
    PENDING_APPROVAL = "PENDING_APPROVAL"
    APPROVED = "APPROVED"
    DENIED = "DENIED"


# Orders that may have items sent back.
RETURNABLE_STATUSES = (OrderStatus.SCHEDULED_FOR_DELIVERY, OrderStatus.DELIVERED)


def _now() -> str:
    return datetime.now().isoformat()


@dataclass
class Vendor:
    vendor_id: int
    name: str
    inventory: dict[int, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "vendor_id": self.vendor_id,
            "name": self.name,
            # JSON object keys are strings
            "inventory": {str(pid): qty for pid, qty in self.inventory.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Vendor":
        return cls(
            vendor_id=data["vendor_id"],
            name=data["name"],
            inventory={int(pid): qty for pid, qty in data.get("inventory", {}).items()},
        )


@dataclass(frozen=True)
class Product:
    product_id: int
    name: str
    price: float
    vendor_id: int

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "name": self.name,
            "price": self.price,
            "vendor_id": self.vendor_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Product":
        return cls(
            product_id=data["product_id"],
            name=data["name"],
            price=data["price"],
            vendor_id=data["vendor_id"],
        )


@dataclass
class OrderItem:
    product_id: int
    product_name: str
    unit_price: float
    ordered_quantity: int
    quantity: int = field(init=False)

    def __post_init__(self):
        self.quantity = self.ordered_quantity

    @property
    def subtotal(self) -> float:
        return self.quantity * self.unit_price

    def decrease_quantity(self, qty: int) -> None:
        self.quantity = max(0, self.quantity - qty)

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "unit_price": self.unit_price,
            "ordered_quantity": self.ordered_quantity,
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "OrderItem":
        item = cls(
            product_id=data["product_id"],
            product_name=data["product_name"],
            unit_price=data["unit_price"],
            ordered_quantity=data["ordered_quantity"],
        )
        item.quantity = data.get("quantity", item.ordered_quantity)
        return item


@dataclass(frozen=True)
class Payment:
    payment_id: int
    order_id: int
    amount: float
    method: str
    timestamp: str = field(default_factory=_now)
    status: PaymentStatus = PaymentStatus.RECEIVED

    def to_dict(self) -> dict:
        return {
            "payment_id": self.payment_id,
            "order_id": self.order_id,
            "amount": self.amount,
            "method": self.method,
            "timestamp": self.timestamp,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Payment":
        return cls(
            payment_id=data["payment_id"],
            order_id=data["order_id"],
            amount=data["amount"],
            method=data["method"],
            timestamp=data.get("timestamp", _now()),
            status=PaymentStatus(data.get("status", PaymentStatus.RECEIVED.value)),
        )


@dataclass
class Order:
    order_id: int
    vendor_id: int
    items: list[OrderItem] = field(default_factory=list)
    status: OrderStatus = OrderStatus.CREATED
    payments: list[Payment] = field(default_factory=list)
    refunded_amount: float = 0.0
    created_at: str = field(default_factory=_now)

    @property
    def total_amount(self) -> float:
        return sum(item.subtotal for item in self.items)

    @property
    def paid_amount(self) -> float:
        return sum(p.amount for p in self.payments)

    @property
    def amount_due(self) -> float:
        return self.total_amount - self.paid_amount

    def find_item(self, product_id: int) -> OrderItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def to_dict(self) -> dict:
        return {
            "order_id": self.order_id,
            "vendor_id": self.vendor_id,
            "items": [i.to_dict() for i in self.items],
            "status": self.status.value,
            "payment_ids": [p.payment_id for p in self.payments],
            "refunded_amount": self.refunded_amount,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict, payments: dict[int, Payment]) -> "Order":
        """Rebuild an order, resolving its payment ids against ``payments``."""
        return cls(
            order_id=data["order_id"],
            vendor_id=data["vendor_id"],
            items=[OrderItem.from_dict(i) for i in data.get("items", [])],
            status=OrderStatus(data["status"]),
            payments=[payments[pid] for pid in data.get("payment_ids", [])],
            refunded_amount=data.get("refunded_amount", 0.0),
            created_at=data.get("created_at", _now()),
        )


@dataclass
class Delivery:
    delivery_id: int
    order_id: int
    scheduled_date: str
    status: DeliveryStatus = DeliveryStatus.SCHEDULED

    def to_dict(self) -> dict:
        return {
            "delivery_id": self.delivery_id,
            "order_id": self.order_id,
            "scheduled_date": self.scheduled_date,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Delivery":
        return cls(
            delivery_id=data["delivery_id"],
            order_id=data["order_id"],
            scheduled_date=data["scheduled_date"],
            status=DeliveryStatus(data.get("status", DeliveryStatus.SCHEDULED.value)),
        )


@dataclass
class ReturnRequest:
    return_id: int
    order_id: int
    product_id: int
    quantity: int
    status: ReturnStatus = ReturnStatus.PENDING_APPROVAL
    refund_amount: float = 0.0

    def to_dict(self) -> dict:
        return {
            "return_id": self.return_id,
            "order_id": self.order_id,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "status": self.status.value,
            "refund_amount": self.refund_amount,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ReturnRequest":
        return cls(
            return_id=data["return_id"],
            order_id=data["order_id"],
            product_id=data["product_id"],
            quantity=data["quantity"],
            status=ReturnStatus(data.get("status", ReturnStatus.PENDING_APPROVAL.value)),
            refund_amount=data.get("refund_amount", 0.0),
        )
