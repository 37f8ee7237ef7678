"""
ASGI config for Taskboard project.

Exposes the ASGI callable as a module-level variable named ``application``
for ASGI servers (Daphne, Uvicorn).
"""
import os

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

from django.core.asgi import get_asgi_application

application = get_asgi_application()
