"""Reporting and CSV export."""
import csv
import io

from marketplace.models import OrderStatus
from marketplace.orders import list_orders
from marketplace.store import MarketStore


def inventory_summary(store: MarketStore) -> dict:
    """Generate a summary of current inventory across all vendors."""
    total_units = 0
    total_value = 0.0
    for vendor in store.vendors.values():
        for product_id, qty in vendor.inventory.items():
            product = store.products.get(product_id)
            if product is None:
                continue
            total_units += qty
            total_value += product.price * qty

    return {
        "vendors": len(store.vendors),
        "products": len(store.products),
        "total_units": total_units,
        "total_value": round(total_value, 2),
    }


def vendor_inventory(store: MarketStore) -> list[dict]:
    """One entry per vendor with its product rows and current stock."""
    report = []
    for vendor in sorted(store.vendors.values(), key=lambda v: v.vendor_id):
        rows = []
        for product_id in sorted(vendor.inventory):
            product = store.products.get(product_id)
            if product is None:
                continue
            rows.append({
                "product_id": product_id,
                "name": product.name,
                "price": product.price,
                "stock": vendor.inventory[product_id],
            })
        report.append({"vendor_id": vendor.vendor_id, "name": vendor.name, "products": rows})
    return report


def order_rows(store: MarketStore, status: OrderStatus | None = None) -> list[dict]:
    rows = []
    for order in list_orders(store, status):
        rows.append({
            "order_id": order.order_id,
            "vendor_id": order.vendor_id,
            "status": order.status.value,
            "total": order.total_amount,
            "paid": order.paid_amount,
            "refunded": order.refunded_amount,
            "due": order.amount_due,
            "items": [
                f"{i.product_name}[{i.product_id}] x{i.quantity} @{i.unit_price:.2f}"
                for i in order.items
            ],
        })
    return rows


def export_csv(store: MarketStore) -> str:
    """Export vendor stock to CSV format."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["Vendor", "Product ID", "Product", "Price", "Stock"])

    for entry in vendor_inventory(store):
        for row in entry["products"]:
            writer.writerow([
                entry["name"],
                row["product_id"],
                row["name"],
                f"{row['price']:.2f}",
                row["stock"],
            ])

    return output.getvalue()
