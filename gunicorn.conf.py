"""
Gunicorn configuration for production deployment (uvicorn workers).
"""
import multiprocessing
import os
from pathlib import Path

# LOG_DIR, APP_NAME etc. come from .env via framework.config
from framework.config import settings

LOG_DIR = Path(settings.LOG_DIR)
LOG_DIR.mkdir(parents=True, exist_ok=True)

# Server
bind = os.getenv("BIND", "0.0.0.0:8000")
backlog = 2048

# Workers: each request is served independently; no shared auth state between them
workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"
worker_connections = 1000
max_requests = 1000
max_requests_jitter = 50
timeout = 60
keepalive = 5
graceful_timeout = 30

proc_name = (settings.GUNICORN_PROC_NAME or settings.APP_NAME.lower().replace(" ", "-"))[:32]

# Logging
accesslog = str(LOG_DIR / "gunicorn_access.log")
errorlog = str(LOG_DIR / "gunicorn_error.log")
loglevel = "info"
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

daemon = False
pidfile = str(LOG_DIR / "gunicorn.pid")
umask = 0o007

# Import the app once in the master before forking workers
preload_app = True
worker_tmp_dir = "/dev/shm"

# Request limits; bearer tokens travel in a header
limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190

def when_ready(server):
    server.log.info("%s is ready. Listening on %s", settings.APP_NAME, server.address)

def on_exit(server):
    server.log.info("%s is shutting down.", settings.APP_NAME)

def post_fork(server, worker):
    server.log.info("Worker spawned (pid: %s)", worker.pid)
