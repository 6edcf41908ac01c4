"""
WSGI config for the GoldFinch order desk.

Served by gunicorn, see gunicorn.conf.py.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'goldfinch_backend.settings')

application = get_wsgi_application()
