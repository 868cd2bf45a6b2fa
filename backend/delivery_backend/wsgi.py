"""WSGI entrypoint for HTTP-only deployments."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "delivery_backend.settings")

application = get_wsgi_application()
