"""WSGI config for the Tentling server."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "tentling.settings")

application = get_wsgi_application()
