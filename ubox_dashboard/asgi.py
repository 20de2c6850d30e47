# ubox_dashboard/asgi.py
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "ubox_dashboard.settings")

application = get_asgi_application()
