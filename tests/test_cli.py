"""End-to-end tests for the CLI against a temporary data file."""
import argparse

import pytest
from marketplace.cli import main, parse_item, positive_float
from marketplace.models import OrderStatus
from marketplace.store import MarketStore


@pytest.fixture
def run(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("MARKET_LOG_LEVEL", "ERROR")
    data = str(tmp_path / "market.json")
    config = str(tmp_path / "market.config")

    def _run(*argv):
        main(["--config", config, "--data", data, *argv])
        return capsys.readouterr().out

    _run.data = data
    return _run


def test_seed_and_inventory(run):
    assert "Seeded vendors: 1000, 1001" in run("seed")
    out = run("inventory")
    assert "Vendor[1000] Green Valley Produce" in out
    assert "Product[2002] Carrot (25.00) | Stock: 150" in out


def test_full_lifecycle(run):
    run("seed")
    assert "Total: 90.00" in run("order", "1000", "2000:1", "2001:3")
    out = run("pay", "3000", "100", "--method", "card")
    assert "Change due: 10.00" in out
    assert "Order fully paid." in out
    assert "Delivery scheduled: 5000" in run("deliver", "3000", "2024-07-01")
    out = run("return", "3000", "2001", "2", "--approve")
    assert "Refund: 40.00" in out

    store = MarketStore(filepath=run.data)
    order = store.orders[3000]
    assert order.status == OrderStatus.SCHEDULED_FOR_DELIVERY
    assert order.refunded_amount == 40.0
    assert store.vendors[1000].inventory[2001] == 199


def test_partial_payment_and_approve_later(run):
    run("seed")
    run("order", "1001", "2002:2")
    assert "Remaining: 30.00" in run("pay", "3000", "20")
    run("pay", "3000", "30")
    run("deliver", "3000", "today")
    assert "ID 6000" in run("return", "3000", "2002", "1")
    assert "Refund: 25.00" in run("approve", "6000")
    assert "Status=SCHEDULED_FOR_DELIVERY" in run("orders")


def test_error_exits_nonzero(run, capsys):
    run("seed")
    with pytest.raises(SystemExit) as exc:
        run("order", "1000", "2000:500")
    assert exc.value.code == 1
    assert "Insufficient stock" in capsys.readouterr().err
    assert MarketStore(filepath=run.data).orders == {}


def test_stock_adjust_and_low_stock(run):
    run("add-vendor", "Hardware Co")
    run("add-product", "1000", "Nut", "0.25", "--stock", "3")
    assert "Stock for product 2000: 8" in run("stock", "1000", "2000", "5")
    assert "Stock for product 2000: 2" in run("stock", "1000", "2000", "-6")
    assert "Vendor 1000 product 2000: 2" in run("low-stock")


def test_export_and_summary(run):
    run("seed")
    assert run("export").splitlines()[1] == "Green Valley Produce,2000,Tomato,30.00,100"
    assert "Units: 450" in run("summary")


def test_no_command_prints_help(run):
    with pytest.raises(SystemExit):
        run()


def test_parse_item():
    assert parse_item("2000:3") == (2000, 3)
    with pytest.raises(argparse.ArgumentTypeError):
        parse_item("2000")


def test_positive_float():
    assert positive_float("2.5") == 2.5
    for text in ("0", "-1", "abc", "nan", "inf"):
        with pytest.raises(argparse.ArgumentTypeError):
            positive_float(text)


def test_pay_rejects_nan(run):
    run("seed")
    run("order", "1000", "2000:1")
    with pytest.raises(SystemExit):
        run("pay", "3000", "nan")
    assert "Order fully paid." in run("pay", "3000", "30")
    order = MarketStore(filepath=run.data).orders[3000]
    assert order.status == OrderStatus.PAID
    assert len(order.payments) == 1
