"""
WSGI config for doctar project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'doctar.settings')

application = get_wsgi_application()
