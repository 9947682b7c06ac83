"""
Gunicorn configuration for PromoDesk.
"""
import os

bind = f"0.0.0.0:{os.getenv('PORT', '8080')}"

# Worker configuration
workers = int(os.getenv('GUNICORN_WORKERS', '2'))
worker_class = 'sync'
worker_connections = 1000
timeout = 60
keepalive = 5

# Logging
accesslog = '-'  # stdout
errorlog = '-'   # stderr
loglevel = os.getenv('LOG_LEVEL', 'info')
capture_output = True

proc_name = 'promodesk'

preload_app = True

graceful_timeout = 30

wsgi_app = 'run:app'


def on_starting(server):
    print("[Gunicorn] Starting PromoDesk server...")


def on_exit(server):
    print("[Gunicorn] PromoDesk server shutting down...")
