# users_ui/owner/owner_urls.py
from django.urls import path
from . import owner_views

app_name = "owner"

urlpatterns = [
    path("", owner_views.dashboard, name="dashboard"),

    path("devices/", owner_views.devices, name="devices"),
    path("devices/<str:device_id>/toggle/", owner_views.toggle_device, name="toggle_device"),

    path("orders/", owner_views.orders, name="orders"),
    path("inventory/", owner_views.inventory, name="inventory"),
    path("catalog/", owner_views.catalog, name="catalog"),
    path("staff/", owner_views.staff, name="staff"),

    path("reports/", owner_views.reports, name="reports"),
    path("reports/export/", owner_views.export_report, name="export_report"),

    path("logs/", owner_views.logs, name="logs"),
    path("plans/", owner_views.plans, name="plans"),
]
