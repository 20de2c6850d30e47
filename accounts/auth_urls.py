# accounts/auth_urls.py
from django.urls import path
from . import views

app_name = "accounts"

urlpatterns = [
    path("login/", views.login_view, name="login"),
    path("register/", views.register_view, name="register"),
    path("license/", views.license_view, name="license"),
    path("logout/", views.logout_view, name="logout"),
]
