# users_ui/staff/staff_views.py
"""
Destination screens reached through the role panel. They run on the owner's
session token; the query string only carries who is at the terminal.
"""
import pandas as pd
from django.conf import settings

from core import helpers, queries
from core.queries import ORDER_COLUMNS, PRODUCT_COLUMNS
from users_ui.owner.base_views import load_or_error, owner_view


def _operator(request, default_role):
    return {
        "operator_name": request.GET.get("name", ""),
        "operator_id": request.GET.get("id", ""),
        "operator_role": request.GET.get("role", default_role),
    }


@owner_view("staff/waiter.html")
def waiter(request, client):
    context = _operator(request, "mozo")
    orders = load_or_error(context, "orders", queries.get_orders, pd.DataFrame(columns=ORDER_COLUMNS), client)
    context["groups"] = helpers.orders_by_waiter(orders)
    context["order_count"] = len(orders)
    del context["orders"]
    return context


@owner_view("staff/cashier.html")
def cashier(request, client):
    context = _operator(request, "cajero")
    orders = load_or_error(context, "orders", queries.get_orders, pd.DataFrame(columns=ORDER_COLUMNS), client)
    staff = load_or_error(context, "staff", queries.get_recovery_staff,
                          pd.DataFrame(columns=["id", "name", "role", "status"]), client)

    pending = helpers.pending_orders(orders)
    context["pending_orders"] = pending
    context["pending_total"] = round(float(pending["balance"].sum()), 2) if not pending.empty else 0.0
    context["active_staff"] = helpers.active_recovery_staff(staff)
    context["recent_payments"] = helpers.recent_payments(orders)
    context["refresh_seconds"] = settings.CASHIER_REFRESH_SECONDS
    del context["orders"], context["staff"]
    return context


@owner_view("staff/bar.html")
def bar(request, client):
    context = _operator(request, "barman")
    orders = load_or_error(context, "orders", queries.get_orders, pd.DataFrame(columns=ORDER_COLUMNS), client)
    load_or_error(context, "products", queries.get_products, pd.DataFrame(columns=PRODUCT_COLUMNS), client)
    context["pending_orders"] = helpers.pending_orders(orders)
    del context["orders"]
    return context


@owner_view("staff/admin_dashboard.html")
def admin_dashboard(request, client):
    context = _operator(request, "boss")
    context["display_role"] = request.GET.get("displayRole") or context["operator_role"]
    load_or_error(context, "staff_users", queries.get_staff_users,
                  pd.DataFrame(columns=queries.STAFF_USER_COLUMNS), client)
    load_or_error(context, "stats", queries.get_order_stats,
                  {"totalUsers": 0, "activeUsers": 0, "totalOrders": 0, "todayRevenue": 0}, client)
    return context
