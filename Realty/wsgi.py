"""
WSGI config for Realty project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'Realty.settings')

application = get_wsgi_application()
