# ubox_dashboard/wsgi.py
import os

from django.core.wsgi import get_wsgi_application

# WSGI entry point (Render / Railway)
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "ubox_dashboard.settings")

application = get_wsgi_application()
