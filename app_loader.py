# app_loader.py – WSGI entry point (gunicorn app_loader:app)
from terminalscreener.app import create_app
from terminalscreener.config import settings
from terminalscreener.logging_config import setup_logging

setup_logging(settings.LOG_LEVEL)

app = create_app(settings)
