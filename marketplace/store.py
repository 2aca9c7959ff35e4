"""In-memory entity store with optional JSON snapshot.

Each entity kind lives in its own id-keyed map and is referenced elsewhere
only by id. Ids come from per-kind monotonic counters.
"""
import json
import logging
import os

from marketplace.models import (
    Delivery,
    Order,
    Payment,
    Product,
    ReturnRequest,
    Vendor,
)

log = logging.getLogger(__name__)

ID_BASES = {
    "vendor": 1000,
    "product": 2000,
    "order": 3000,
    "payment": 4000,
    "delivery": 5000,
    "return": 6000,
}


class MarketStore:
    def __init__(self, filepath: str | None = None):
        self._filepath = filepath
        self.vendors: dict[int, Vendor] = {}
        self.products: dict[int, Product] = {}
        self.orders: dict[int, Order] = {}
        self.payments: dict[int, Payment] = {}
        self.deliveries: dict[int, Delivery] = {}
        self.returns: dict[int, ReturnRequest] = {}
        self._counters: dict[str, int] = dict(ID_BASES)
        if filepath:
            self._load()

    def next_id(self, kind: str) -> int:
        """Hand out the next id for ``kind`` and advance its counter."""
        value = self._counters[kind]
        self._counters[kind] = value + 1
        return value

    def _load(self):
        if not os.path.exists(self._filepath):
            return
        with open(self._filepath) as f:
            data = json.load(f)
        self._counters.update(data.get("counters", {}))
        self.vendors = {v["vendor_id"]: Vendor.from_dict(v) for v in data.get("vendors", [])}
        self.products = {p["product_id"]: Product.from_dict(p) for p in data.get("products", [])}
        self.payments = {p["payment_id"]: Payment.from_dict(p) for p in data.get("payments", [])}
        self.orders = {
            o["order_id"]: Order.from_dict(o, self.payments) for o in data.get("orders", [])
        }
        self.deliveries = {
            d["delivery_id"]: Delivery.from_dict(d) for d in data.get("deliveries", [])
        }
        self.returns = {r["return_id"]: ReturnRequest.from_dict(r) for r in data.get("returns", [])}
        log.debug("Loaded %d vendors, %d orders from %s",
                  len(self.vendors), len(self.orders), self._filepath)

    def to_dict(self) -> dict:
        return {
            "counters": dict(self._counters),
            "vendors": [v.to_dict() for v in self.vendors.values()],
            "products": [p.to_dict() for p in self.products.values()],
            "orders": [o.to_dict() for o in self.orders.values()],
            "payments": [p.to_dict() for p in self.payments.values()],
            "deliveries": [d.to_dict() for d in self.deliveries.values()],
            "returns": [r.to_dict() for r in self.returns.values()],
        }

    def save(self):
        """Write a snapshot to the backing file. No-op for purely in-memory stores."""
        if not self._filepath:
            return
        with open(self._filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
