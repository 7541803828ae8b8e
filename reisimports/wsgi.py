# reisimports/wsgi.py
"""
WSGI config do projeto ReisImports.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'reisimports.settings')

application = get_wsgi_application()
