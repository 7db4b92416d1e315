"""
WSGI config for the Masjid backend.

Exposes the WSGI callable as a module-level variable named ``application``
(used by gunicorn: `gunicorn masjid_backend.wsgi`).
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'masjid_backend.settings')

application = get_wsgi_application()
