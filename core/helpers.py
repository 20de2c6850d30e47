# core/helpers.py
import json

import pandas as pd
from django.conf import settings

from utils.validators import safe_float

# Short weekday names as the es-ES locale prints them (Monday first)
WEEKDAY_SHORT_ES = ["lun", "mar", "mié", "jue", "vie", "sáb", "dom"]

PENDING_STATUSES = {"PENDING", "Pending"}
ACTIVE_STAFF_STATUSES = {"ACTIVE", "Active"}
UNASSIGNED_WAITER = "Sin Asignar"
WAITER_PREVIEW = 5
RECENT_PAYMENTS_LIMIT = 10

PLAN_TIERS = [
    {"name": "FREE", "price": "S/ 0", "features": ["1 Dispositivo", "Soporte Básico", "Reportes Simples"]},
    {"name": "BASIC", "price": "S/ 99", "features": ["3 Dispositivos", "Soporte 24/7", "Reportes Avanzados", "Sincronización Cloud"]},
    {"name": "PREMIUM", "price": "S/ 199", "features": ["Dispositivos Ilimitados", "Soporte Prioritario", "IA Sales Insights", "Personalización Total"]},
]


# ---------------------------
# Formatting Helpers
# ---------------------------

def _local(ts):
    """Convert a UTC timestamp to the dashboard's local time (NaT passes through)."""
    if ts is None or pd.isna(ts):
        return None
    ts = pd.Timestamp(ts)
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return ts.tz_convert(settings.TIME_ZONE)


def format_datetime(ts, fmt="%d/%m/%Y %H:%M") -> str:
    local = _local(ts)
    return local.strftime(fmt) if local is not None else ""


def order_status_label(status) -> str:
    return "Completado" if status == "COMPLETED" else (status or "")


def stock_level(stock) -> str:
    """ok above 10 units, low while any remain, out at zero."""
    value = safe_float(stock) or 0
    if value > 10:
        return "ok"
    if value > 0:
        return "low"
    return "out"


def format_log_details(details):
    """Pretty-print the JSON details string of a license log; None when there are none."""
    if details is None or (isinstance(details, float) and pd.isna(details)) or details == "":
        return None
    if isinstance(details, (dict, list)):
        return json.dumps(details, indent=2, ensure_ascii=False)
    try:
        return json.dumps(json.loads(details), indent=2, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(details)


def plan_tiers(current_plan=None):
    current = current_plan or "FREE"
    return [dict(tier, is_current=(tier["name"] == current)) for tier in PLAN_TIERS]


# ---------------------------
# Order Table Helpers
# ---------------------------

def orders_table(orders: pd.DataFrame) -> pd.DataFrame:
    """Rows for the orders page: short id, local date, status label, total."""
    if orders.empty:
        return pd.DataFrame(columns=["id", "short_id", "created", "status", "status_label", "total"])
    df = orders.copy()
    df["short_id"] = df["id"].astype(str).str[:8]
    df["created"] = df["createdAt"].apply(format_datetime)
    df["status_label"] = df["status"].apply(order_status_label)
    df["total"] = df["total"].round(2)
    return df[["id", "short_id", "created", "status", "status_label", "total"]]


def pending_orders(orders: pd.DataFrame) -> pd.DataFrame:
    """Open accounts for the cashier screen with their outstanding balance."""
    cols = ["id", "label", "customer", "waiter", "balance"]
    if orders.empty:
        return pd.DataFrame(columns=cols)
    df = orders[orders["status"].isin(PENDING_STATUSES)].copy()
    if df.empty:
        return pd.DataFrame(columns=cols)
    df["label"] = [
        f"#{custom}" if isinstance(custom, str) and custom else f"#{str(oid)[-6:]}"
        for custom, oid in zip(df["customId"], df["id"])
    ]
    df["customer"] = df["customer"].fillna("").replace("", "Cliente General")
    df["waiter"] = df["waiterName"].fillna("").replace("", "N/A")
    df["balance"] = (df["totalAmount"] - df["paidAmount"]).round(2)
    return df[cols]


def recent_payments(orders: pd.DataFrame, limit=RECENT_PAYMENTS_LIMIT) -> pd.DataFrame:
    """Flatten every order's payments, newest first."""
    cols = ["id", "orderId", "customer", "method", "amount", "timestamp", "time"]
    rows = []
    for _, order in orders.iterrows():
        payments = order.get("payments")
        if not isinstance(payments, list):
            continue
        for payment in payments:
            rows.append({
                "id": payment.get("id"),
                "orderId": order.get("id"),
                "customer": order.get("customer") if isinstance(order.get("customer"), str) else "Cliente",
                "method": payment.get("method"),
                "amount": safe_float(payment.get("amount")) or 0.0,
                "timestamp": payment.get("timestamp"),
            })
    if not rows:
        return pd.DataFrame(columns=cols)
    df = pd.DataFrame(rows)
    df["timestamp"] = pd.to_datetime(df["timestamp"], errors="coerce", utc=True)
    df = df.sort_values("timestamp", ascending=False, na_position="last").head(limit)
    df["time"] = df["timestamp"].apply(lambda ts: format_datetime(ts, "%H:%M:%S"))
    return df[cols]


def active_recovery_staff(staff: pd.DataFrame) -> pd.DataFrame:
    if staff.empty:
        return staff
    return staff[staff["status"].isin(ACTIVE_STAFF_STATUSES)]


def orders_by_waiter(orders: pd.DataFrame, preview=WAITER_PREVIEW):
    """Group orders by waiter name in first-seen order."""
    if orders.empty:
        return []
    df = orders.copy()
    df["waiter"] = df["waiterName"].fillna("").replace("", UNASSIGNED_WAITER)
    groups = []
    for waiter, group in df.groupby("waiter", sort=False):
        shown = group.head(preview)
        groups.append({
            "waiter": waiter,
            "count": len(group),
            "orders": [
                {
                    "id": row["id"],
                    "short_id": str(row["id"])[:8],
                    "status": row["status"],
                    "total": round(float(row["total"]), 2),
                }
                for _, row in shown.iterrows()
            ],
            "remaining": max(len(group) - preview, 0),
        })
    return groups


# ---------------------------
# Aggregates
# ---------------------------

def sales_by_weekday(orders: pd.DataFrame) -> pd.DataFrame:
    """Sum order totals per Spanish short weekday, in first-seen order."""
    if orders.empty:
        return pd.DataFrame(columns=["name", "ventas"])
    df = orders.dropna(subset=["createdAt"]).copy()
    if df.empty:
        return pd.DataFrame(columns=["name", "ventas"])
    df["name"] = df["createdAt"].apply(lambda ts: WEEKDAY_SHORT_ES[_local(ts).weekday()])
    out = df.groupby("name", sort=False)["total"].sum().reset_index()
    out = out.rename(columns={"total": "ventas"})
    out["ventas"] = out["ventas"].round(2)
    return out


def dashboard_summary(orders: pd.DataFrame, devices: pd.DataFrame) -> dict:
    total_sales = float(orders["total"].sum()) if not orders.empty else 0.0
    order_count = int(len(orders))
    return {
        "totalSales": round(total_sales, 2),
        "orderCount": order_count,
        "averageTicket": round(total_sales / order_count, 2) if order_count else 0.0,
        "activeDevices": int(devices["isAuthorized"].sum()) if not devices.empty else 0,
    }


def latest_orders(orders: pd.DataFrame, limit=5) -> pd.DataFrame:
    if orders.empty:
        return orders_table(orders)
    return orders_table(orders.sort_values("createdAt", ascending=False, na_position="last").head(limit))
