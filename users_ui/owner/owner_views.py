# users_ui/owner/owner_views.py
import logging

import pandas as pd
from django.http import HttpResponse
from django.shortcuts import redirect
from django.views.decorators.http import require_http_methods, require_POST

from accounts.session import DashboardSession
from core import helpers, queries
from core.api_client import ApiError
from core.queries import DEVICE_COLUMNS, LOG_COLUMNS, ORDER_COLUMNS, PRODUCT_COLUMNS
from utils.export_utils import export_sales_report_excel

from .base_views import load_or_error, owner_view

logger = logging.getLogger(__name__)


def _empty(columns):
    return pd.DataFrame(columns=columns)


# -------------------------
# Dashboard
# -------------------------
@owner_view("owner/dashboard.html")
def dashboard(request, client):
    context = {}
    orders = load_or_error(context, "orders", queries.get_orders, _empty(ORDER_COLUMNS), client)
    devices = load_or_error(context, "devices", queries.get_devices, _empty(DEVICE_COLUMNS), client)

    context["stats"] = helpers.dashboard_summary(orders, devices)
    context["sales_by_day"] = helpers.sales_by_weekday(orders)
    context["latest_orders"] = helpers.latest_orders(orders)
    # raw frames are not rendered
    del context["orders"], context["devices"]
    return context


# -------------------------
# Devices
# -------------------------
@owner_view("owner/devices.html")
def devices(request, client):
    context = {}
    df = load_or_error(context, "devices", queries.get_devices, _empty(DEVICE_COLUMNS), client)
    if not df.empty:
        df = df.copy()
        df["last_seen"] = df["lastSeen"].apply(helpers.format_datetime)
        context["devices"] = df
    return context


@require_POST
@owner_view()
def toggle_device(request, client, device_id):
    """Flip one device's authorization; the current value comes from the form."""
    currently_authorized = request.POST.get("authorized") == "true"
    try:
        queries.set_device_authorization(client, device_id, not currently_authorized)
        request.session["success_message"] = (
            "Dispositivo desautorizado" if currently_authorized else "Dispositivo autorizado"
        )
    except ApiError as e:
        logger.error("Device %s authorization failed: %s", device_id, e.message)
        request.session["error_message"] = e.message
    return redirect("owner:devices")


# -------------------------
# Orders
# -------------------------
@owner_view("owner/orders.html")
def orders(request, client):
    context = {}
    df = load_or_error(context, "orders", queries.get_orders, _empty(ORDER_COLUMNS), client)
    context["orders"] = helpers.orders_table(df.sort_values("createdAt", ascending=False, na_position="last"))
    return context


# -------------------------
# Inventory / Catalog
# -------------------------
@owner_view("owner/inventory.html")
def inventory(request, client):
    context = {}
    df = load_or_error(context, "products", queries.get_products, _empty(PRODUCT_COLUMNS), client)
    if not df.empty:
        df = df.copy()
        df["level"] = df["stock"].apply(helpers.stock_level)
        df["updated"] = df["updatedAt"].apply(helpers.format_datetime)
        context["products"] = df
    return context


@owner_view("owner/catalog.html")
def catalog(request, client):
    context = {}
    df = load_or_error(context, "products", queries.get_products, _empty(PRODUCT_COLUMNS), client)
    if not df.empty:
        context["categories"] = sorted(c for c in df["category"].dropna().unique() if c)
        context["products"] = df.sort_values("name", na_position="last")
    return context


# -------------------------
# Staff
# -------------------------
@owner_view("owner/staff.html")
def staff(request, client):
    context = {}
    load_or_error(context, "users", queries.get_business_users, _empty(["id", "name", "email", "role"]), client)
    load_or_error(context, "staff_users", queries.get_staff_users, _empty(queries.STAFF_USER_COLUMNS), client)
    return context


# -------------------------
# Reports
# -------------------------
@owner_view("owner/reports.html")
def reports(request, client):
    context = {}
    df = load_or_error(context, "orders", queries.get_orders, _empty(ORDER_COLUMNS), client)
    sales = helpers.sales_by_weekday(df)
    context["sales_by_day"] = sales
    context["total_sales"] = round(float(sales["ventas"].sum()), 2) if not sales.empty else 0.0
    del context["orders"]
    return context


@require_http_methods(["GET"])
@owner_view()
def export_report(request, client):
    try:
        orders = queries.get_orders(client)
    except ApiError as e:
        logger.error("Report export failed: %s", e.message)
        request.session["error_message"] = e.message
        return redirect("owner:reports")

    session = DashboardSession(request.session)
    content = export_sales_report_excel(helpers.sales_by_weekday(orders), session.business_name)
    response = HttpResponse(
        content,
        content_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
    response["Content-Disposition"] = 'attachment; filename="reporte_ventas.xlsx"'
    return response


# -------------------------
# License logs
# -------------------------
@owner_view("owner/logs.html")
def logs(request, client):
    context = {}
    df = load_or_error(context, "logs", queries.get_license_logs, _empty(LOG_COLUMNS), client)
    if not df.empty:
        df = df.sort_values("timestamp", ascending=False, na_position="last").copy()
        df["when"] = df["timestamp"].apply(helpers.format_datetime)
        df["details_text"] = df["details"].apply(helpers.format_log_details)
        context["logs"] = df
    return context


# -------------------------
# Plans
# -------------------------
@owner_view("owner/plans.html")
def plans(request, client):
    context = {}
    business = load_or_error(context, "business", queries.get_business, {}, client)
    context["current_plan"] = business.get("plan") or "FREE"
    context["tiers"] = helpers.plan_tiers(business.get("plan"))
    return context
