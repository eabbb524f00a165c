"""WSGI config for the interaction harness project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "harness_site.settings")

application = get_wsgi_application()
