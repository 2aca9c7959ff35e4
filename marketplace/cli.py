"""CLI entry point for the marketplace.

Each invocation loads the store from the data file, runs one command and
saves the store back when the command changed it.
"""
import argparse
import math
import sys

from marketplace.catalog import register_product, register_vendor
from marketplace.config import load_config
from marketplace.deliveries import schedule_delivery
from marketplace.errors import MarketError
from marketplace.inventory import add_stock, decrease_stock, get_low_stock
from marketplace.log import setup_logger
from marketplace.models import OrderStatus
from marketplace.orders import get_order, place_order
from marketplace.payments import record_payment
from marketplace.reports import export_csv, inventory_summary, order_rows, vendor_inventory
from marketplace.returns import approve_return, request_return
from marketplace.store import MarketStore

DEMO_DATA = [
    ("Green Valley Produce", [("Tomato", 30.0, 100), ("Potato", 20.0, 200)]),
    ("Sunny Farms", [("Carrot", 25.0, 150)]),
]

READ_ONLY = {"inventory", "orders", "low-stock", "summary", "export"}


def parse_item(text: str) -> tuple[int, int]:
    """Parse a PRODUCT_ID:QTY order line."""
    product_id, sep, qty = text.partition(":")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected PRODUCT_ID:QTY, got {text!r}")
    try:
        return int(product_id), int(qty)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected integers in {text!r}") from None


def positive_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}") from None
    if not math.isfinite(value) or value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {text!r}")
    return value


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="marketplace", description="Marketplace order tracker")
    parser.add_argument("--config", help="Path to a KEY=VALUE config file")
    parser.add_argument("--data", help="JSON data file (overrides MARKET_DATA_FILE)")
    sub = parser.add_subparsers(dest="command")

    vendor_p = sub.add_parser("add-vendor", help="Register a vendor")
    vendor_p.add_argument("name")

    product_p = sub.add_parser("add-product", help="Register a product for a vendor")
    product_p.add_argument("vendor_id", type=int)
    product_p.add_argument("name")
    product_p.add_argument("price", type=positive_float)
    product_p.add_argument("--stock", type=int, default=0)

    stock_p = sub.add_parser("stock", help="Adjust stock (negative delta removes)")
    stock_p.add_argument("vendor_id", type=int)
    stock_p.add_argument("product_id", type=int)
    stock_p.add_argument("delta", type=int)

    order_p = sub.add_parser("order", help="Place an order")
    order_p.add_argument("vendor_id", type=int)
    order_p.add_argument("items", nargs="+", type=parse_item, metavar="PRODUCT_ID:QTY")

    pay_p = sub.add_parser("pay", help="Record a payment")
    pay_p.add_argument("order_id", type=int)
    pay_p.add_argument("amount", type=positive_float)
    pay_p.add_argument("--method", default="cash")

    deliver_p = sub.add_parser("deliver", help="Schedule delivery of a paid order")
    deliver_p.add_argument("order_id", type=int)
    deliver_p.add_argument("date")

    return_p = sub.add_parser("return", help="Request a return")
    return_p.add_argument("order_id", type=int)
    return_p.add_argument("product_id", type=int)
    return_p.add_argument("quantity", type=int)
    return_p.add_argument("--approve", action="store_true", help="Approve immediately")

    approve_p = sub.add_parser("approve", help="Approve a pending return")
    approve_p.add_argument("return_id", type=int)

    sub.add_parser("inventory", help="Show stock per vendor")

    orders_p = sub.add_parser("orders", help="List orders")
    orders_p.add_argument("--status", choices=[s.value for s in OrderStatus])

    low_p = sub.add_parser("low-stock", help="Show low stock items")
    low_p.add_argument("--threshold", type=int)

    sub.add_parser("summary", help="Inventory summary")
    sub.add_parser("export", help="Export stock as CSV")
    sub.add_parser("seed", help="Load demo vendors and products")

    return parser


def seed_demo(store: MarketStore) -> list[int]:
    vendor_ids = []
    for vendor_name, products in DEMO_DATA:
        vendor_id = register_vendor(store, vendor_name)
        for name, price, stock in products:
            register_product(store, name, price, vendor_id, stock=stock)
        vendor_ids.append(vendor_id)
    return vendor_ids


def print_inventory(store: MarketStore):
    report = vendor_inventory(store)
    if not report:
        print("No vendors.")
        return
    for entry in report:
        print(f"Vendor[{entry['vendor_id']}] {entry['name']}")
        for row in entry["products"]:
            print(f"  Product[{row['product_id']}] {row['name']} ({row['price']:.2f}) | Stock: {row['stock']}")


def print_orders(store: MarketStore, status: str | None):
    rows = order_rows(store, OrderStatus(status) if status else None)
    if not rows:
        print("No orders.")
        return
    for r in rows:
        print(f"Order[{r['order_id']}] Vendor={r['vendor_id']} Status={r['status']} "
              f"Total={r['total']:.2f} Paid={r['paid']:.2f} Refunded={r['refunded']:.2f}")
        for line in r["items"]:
            print(f"  {line}")


def run(store: MarketStore, args, config) -> None:
    if args.command == "add-vendor":
        vendor_id = register_vendor(store, args.name)
        print(f"Added vendor: {vendor_id}")

    elif args.command == "add-product":
        product_id = register_product(store, args.name, args.price, args.vendor_id, stock=args.stock)
        print(f"Added product: {product_id} with stock {args.stock}")

    elif args.command == "stock":
        if args.delta >= 0:
            level = add_stock(store, args.vendor_id, args.product_id, args.delta)
        else:
            level = decrease_stock(store, args.vendor_id, args.product_id, -args.delta)
        print(f"Stock for product {args.product_id}: {level}")

    elif args.command == "order":
        order_id = place_order(store, args.vendor_id, args.items)
        order = get_order(store, order_id)
        print(f"Order placed and confirmed. Order ID: {order_id}. Total: {order.total_amount:.2f}")

    elif args.command == "pay":
        receipt = record_payment(store, args.order_id, args.amount, args.method)
        print(f"Payment recorded: {receipt.payment_id} ({receipt.amount:.2f})")
        if receipt.change_due > 0:
            print(f"Change due: {receipt.change_due:.2f}")
        remaining = get_order(store, args.order_id).amount_due
        if receipt.status == OrderStatus.PAID:
            print("Order fully paid.")
        else:
            print(f"Order partially paid. Remaining: {remaining:.2f}")

    elif args.command == "deliver":
        delivery_id = schedule_delivery(store, args.order_id, args.date)
        print(f"Delivery scheduled: {delivery_id}")

    elif args.command == "return":
        return_id = request_return(store, args.order_id, args.product_id, args.quantity)
        print(f"Return request created with ID {return_id}.")
        if args.approve:
            refund = approve_return(store, return_id)
            print(f"Return approved. Refund: {refund:.2f}")

    elif args.command == "approve":
        refund = approve_return(store, args.return_id)
        print(f"Return approved. Refund: {refund:.2f}")

    elif args.command == "inventory":
        print_inventory(store)

    elif args.command == "orders":
        print_orders(store, args.status)

    elif args.command == "low-stock":
        threshold = args.threshold if args.threshold is not None else config.low_stock_threshold
        for vendor_id, product_id, qty in get_low_stock(store, threshold):
            print(f"  Vendor {vendor_id} product {product_id}: {qty}")

    elif args.command == "summary":
        s = inventory_summary(store)
        print(f"Vendors: {s['vendors']}, Products: {s['products']}, "
              f"Units: {s['total_units']}, Value: {s['total_value']:.2f}")

    elif args.command == "export":
        print(export_csv(store), end="")

    elif args.command == "seed":
        vendor_ids = seed_demo(store)
        print(f"Seeded vendors: {', '.join(str(v) for v in vendor_ids)}")


def main(argv=None):
    parser = create_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = load_config(args.config)
    setup_logger(config.log_level, config.log_file)
    store = MarketStore(filepath=args.data or config.data_file)

    try:
        run(store, args, config)
    except MarketError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.command not in READ_ONLY:
        store.save()


if __name__ == "__main__":
    main()
