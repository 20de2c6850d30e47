# users_ui/panel/panel_urls.py
from django.urls import path
from . import panel_views

app_name = "panel"

urlpatterns = [
    path("", panel_views.index, name="index"),
    path("<str:category>/open/", panel_views.open_gate, name="open"),
    path("<str:category>/select/", panel_views.select_account, name="select"),
    path("<str:category>/key/", panel_views.press_key, name="key"),
    path("<str:category>/close/", panel_views.close_gate, name="close"),
]
