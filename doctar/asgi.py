"""
ASGI config for doctar project.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'doctar.settings')

application = get_asgi_application()
