# core/queries.py
import pandas as pd

from core.core_models import StaffAccount

# --- Expected columns per collection (kept even when the API returns nothing) ---
ORDER_COLUMNS = [
    "id", "customId", "customer", "waiterName", "status",
    "total", "totalAmount", "paidAmount", "createdAt", "items", "payments",
]
PRODUCT_COLUMNS = ["id", "name", "price", "stock", "category", "updatedAt"]
DEVICE_COLUMNS = ["id", "name", "fingerprint", "isAuthorized", "role", "lastSeen", "createdAt"]
LOG_COLUMNS = ["id", "timestamp", "action", "details"]
STAFF_USER_COLUMNS = ["id", "name", "role", "status", "createdAt"]

NUMERIC_COLS = ["total", "totalAmount", "paidAmount", "price", "stock"]


# --- Utility: frame with guaranteed columns ---
def _frame(rows, columns) -> pd.DataFrame:
    df = pd.DataFrame(list(rows or []))
    for col in columns:
        if col not in df.columns:
            df[col] = None
    return df


def _coerce_numeric(df: pd.DataFrame, cols=None) -> pd.DataFrame:
    for col in cols or NUMERIC_COLS:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0)
    return df


# -------------------------
# Staff directory
# -------------------------
def get_staff_accounts(client):
    """Return the business's staff accounts as StaffAccount objects (PIN included)."""
    return [StaffAccount.from_api(raw) for raw in client.staff_users() if isinstance(raw, dict)]


def get_staff_users(client) -> pd.DataFrame:
    """Staff users for display; the PIN column is never exposed to templates."""
    df = _frame(client.staff_users(), STAFF_USER_COLUMNS)
    return df.drop(columns=["pin"], errors="ignore")


def get_recovery_staff(client) -> pd.DataFrame:
    recovery = client.recovery() or {}
    df = _frame(recovery.get("staffUsers") or [], ["id", "name", "role", "status"])
    return df.drop(columns=["pin"], errors="ignore")


def get_business_users(client) -> pd.DataFrame:
    """GET /business/{id}/users returns membership rows; flatten to one row per user."""
    rows = []
    for item in client.business_users():
        user = item.get("user") or {}
        rows.append({
            "id": user.get("id"),
            "name": user.get("name"),
            "email": user.get("email"),
            "role": item.get("role"),
        })
    return _frame(rows, ["id", "name", "email", "role"])


# -------------------------
# Orders
# -------------------------
def get_orders(client) -> pd.DataFrame:
    df = _frame(client.orders(), ORDER_COLUMNS)
    df = _coerce_numeric(df, ["total", "totalAmount", "paidAmount"])
    df["id"] = df["id"].astype(str)
    df["createdAt"] = pd.to_datetime(df["createdAt"], errors="coerce", utc=True)
    return df


def get_order_stats(client) -> dict:
    stats = {"totalUsers": 0, "activeUsers": 0, "totalOrders": 0, "todayRevenue": 0}
    stats.update(client.order_stats() or {})
    return stats


# -------------------------
# Products
# -------------------------
def get_products(client) -> pd.DataFrame:
    df = _frame(client.products(), PRODUCT_COLUMNS)
    df = _coerce_numeric(df, ["price", "stock"])
    df["stock"] = df["stock"].astype(int)
    df["updatedAt"] = pd.to_datetime(df["updatedAt"], errors="coerce", utc=True)
    return df


# -------------------------
# Devices
# -------------------------
def get_devices(client) -> pd.DataFrame:
    df = _frame(client.devices(), DEVICE_COLUMNS)
    df["isAuthorized"] = df["isAuthorized"].fillna(False).astype(bool)
    df["lastSeen"] = pd.to_datetime(df["lastSeen"], errors="coerce", utc=True)
    return df


def set_device_authorization(client, device_id, authorize: bool):
    return client.authorize_device(device_id, authorize)


# -------------------------
# Business / license
# -------------------------
def get_business(client) -> dict:
    return client.business() or {}


def get_license_logs(client) -> pd.DataFrame:
    df = _frame(client.license_logs(), LOG_COLUMNS)
    df["timestamp"] = pd.to_datetime(df["timestamp"], errors="coerce", utc=True)
    return df
