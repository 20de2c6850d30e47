import pandas as pd
import pytest

from core import helpers
from core.queries import ORDER_COLUMNS, get_devices, get_orders, get_products


class StubClient:
    """Stands in for PosApiClient in the query layer."""

    def __init__(self, **collections):
        self._collections = collections

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        return lambda: self._collections.get(name, [])


@pytest.fixture
def orders():
    return get_orders(StubClient(orders=[
        {
            "id": "ord-000001", "customId": "M1-01", "customer": "Juan", "waiterName": "Luis",
            "status": "PENDING", "total": 50, "totalAmount": 50, "paidAmount": 20,
            "createdAt": "2024-05-06T15:00:00Z",  # Monday in Lima
            "payments": [{"id": "p1", "method": "CASH", "amount": 20, "timestamp": "2024-05-06T15:10:00Z"}],
        },
        {
            "id": "ord-abcdef123456", "customId": None, "customer": None, "waiterName": None,
            "status": "Pending", "total": 30, "totalAmount": 30,
            "createdAt": "2024-05-07T15:00:00Z",
            "payments": [
                {"id": "p2", "method": "CARD", "amount": "10.5", "timestamp": "2024-05-07T16:00:00Z"},
                {"id": "p3", "method": "YAPE", "amount": 5, "timestamp": "2024-05-07T17:00:00Z"},
            ],
        },
        {
            "id": "ord-3", "waiterName": "Luis", "status": "COMPLETED", "total": 20,
            "totalAmount": 20, "paidAmount": 20, "createdAt": "2024-05-13T15:00:00Z",
        },
    ]))


def test_get_orders_guarantees_columns_on_empty_reply():
    df = get_orders(StubClient(orders=[]))
    assert df.empty
    assert set(ORDER_COLUMNS) <= set(df.columns)


def test_pending_orders_balance_and_labels(orders):
    pending = helpers.pending_orders(orders)
    rows = pending.to_dict("records")

    assert [r["label"] for r in rows] == ["#M1-01", "#123456"]
    assert [r["balance"] for r in rows] == [30.0, 30.0]  # missing paid amount counts as zero
    assert rows[1]["customer"] == "Cliente General"
    assert rows[1]["waiter"] == "N/A"


def test_recent_payments_newest_first(orders):
    payments = helpers.recent_payments(orders)
    assert list(payments["id"]) == ["p3", "p2", "p1"]
    assert payments.iloc[0]["customer"] == "Cliente"
    assert payments.iloc[1]["amount"] == 10.5


def test_recent_payments_limit(orders):
    assert len(helpers.recent_payments(orders, limit=2)) == 2


def test_orders_by_waiter_groups_in_first_seen_order(orders):
    groups = helpers.orders_by_waiter(orders, preview=1)
    assert [g["waiter"] for g in groups] == ["Luis", "Sin Asignar"]
    assert groups[0]["count"] == 2
    assert len(groups[0]["orders"]) == 1
    assert groups[0]["remaining"] == 1


def test_sales_by_weekday_in_local_time(orders):
    sales = helpers.sales_by_weekday(orders)
    assert sales.to_dict("records") == [{"name": "lun", "ventas": 70.0}, {"name": "mar", "ventas": 30.0}]


def test_dashboard_summary(orders):
    devices = get_devices(StubClient(devices=[
        {"id": "d1", "isAuthorized": True}, {"id": "d2", "isAuthorized": False}, {"id": "d3"},
    ]))
    summary = helpers.dashboard_summary(orders, devices)
    assert summary == {"totalSales": 100.0, "orderCount": 3, "averageTicket": 33.33, "activeDevices": 1}


def test_dashboard_summary_empty():
    empty = pd.DataFrame()
    assert helpers.dashboard_summary(empty, empty)["averageTicket"] == 0.0


@pytest.mark.parametrize("stock, level", [(11, "ok"), (10, "low"), (1, "low"), (0, "out"), (-2, "out")])
def test_stock_level(stock, level):
    assert helpers.stock_level(stock) == level


def test_get_products_coerces_stock():
    products = get_products(StubClient(products=[{"id": "p", "name": "Pisco", "price": "25.5", "stock": None}]))
    assert products.iloc[0]["stock"] == 0
    assert products.iloc[0]["price"] == 25.5


def test_order_status_label():
    assert helpers.order_status_label("COMPLETED") == "Completado"
    assert helpers.order_status_label("PENDING") == "PENDING"


def test_format_log_details():
    assert helpers.format_log_details('{"a": 1}') == '{\n  "a": 1\n}'
    assert helpers.format_log_details("texto plano") == "texto plano"
    assert helpers.format_log_details("") is None
    assert helpers.format_log_details(None) is None


def test_plan_tiers_marks_current():
    tiers = helpers.plan_tiers("BASIC")
    assert [t["name"] for t in tiers if t["is_current"]] == ["BASIC"]
    assert [t["name"] for t in helpers.plan_tiers(None) if t["is_current"]] == ["FREE"]


def test_format_datetime_uses_local_zone():
    assert helpers.format_datetime(pd.Timestamp("2024-05-06T15:00:00Z")) == "06/05/2024 10:00"
    assert helpers.format_datetime(pd.NaT) == ""

