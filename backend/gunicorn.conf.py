"""
Gunicorn settings for the GoldFinch order desk.

    gunicorn -c gunicorn.conf.py

Every value can be overridden from the environment (GUNICORN_*), which is
how the container image tunes workers per host.
"""

import multiprocessing
import os

wsgi_app = "goldfinch_backend.wsgi:application"
chdir = os.getenv("GUNICORN_CHDIR", os.path.dirname(os.path.abspath(__file__)))
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
proc_name = "goldfinch"

# Workers
workers = int(os.getenv("GUNICORN_WORKERS", multiprocessing.cpu_count() * 2 + 1))
worker_class = os.getenv("GUNICORN_WORKER_CLASS", "sync")
max_requests = int(os.getenv("GUNICORN_MAX_REQUESTS", 1000))
max_requests_jitter = 100

# Order API calls are small JSON bodies; images live on the image host
timeout = int(os.getenv("GUNICORN_TIMEOUT", 30))
graceful_timeout = 30
keepalive = 5

# Request limits
limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190

# Logs go to stdout/stderr and are collected by the container runtime
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("GUNICORN_LOG_LEVEL", "info")
access_log_format = '%(h)s "%(r)s" %(s)s %(b)s %(D)sus "%(a)s"'
capture_output = True


def post_fork(server, worker):
    server.log.info("Worker spawned (pid: %s)", worker.pid)


def worker_abort(worker):
    worker.log.warning("Worker timed out (pid: %s)", worker.pid)
