# ubox_dashboard/main_urls.py
from django.urls import path, include

# --- URL patterns ---
urlpatterns = [
    # Authentication routes (login / register / logout)
    path("accounts/", include("accounts.auth_urls")),

    # Role selection panel (PIN gate)
    path("admin-panel/", include("users_ui.panel.panel_urls")),

    # Staff destinations reached through the PIN gate
    path("", include("users_ui.staff.staff_urls")),

    # Owner dashboard pages (root, devices, orders, ...)
    path("", include("users_ui.owner.owner_urls")),
]
