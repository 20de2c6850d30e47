# users_ui/staff/staff_urls.py
from django.urls import path
from . import staff_views

app_name = "staff"

urlpatterns = [
    path("waiter/", staff_views.waiter, name="waiter"),
    path("cashier/", staff_views.cashier, name="cashier"),
    path("bar/", staff_views.bar, name="bar"),
    path("admin-dashboard/", staff_views.admin_dashboard, name="admin_dashboard"),
]
