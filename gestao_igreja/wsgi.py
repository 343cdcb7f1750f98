"""
WSGI config for gestao_igreja project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "gestao_igreja.settings")

application = get_wsgi_application()
