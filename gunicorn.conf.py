"""
Gunicorn WSGI server configuration for the request validation service.

The validation core holds no mutable shared state, so both sync and threaded
workers are safe.
"""

import multiprocessing
import os

bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
backlog = 2048

workers = int(os.getenv("GUNICORN_WORKERS", max(2, min(8, (2 * multiprocessing.cpu_count()) + 1))))
worker_class = os.getenv("GUNICORN_WORKER_CLASS", "sync")
threads = int(os.getenv("GUNICORN_THREADS", "1"))
max_requests = 1000
max_requests_jitter = 500
timeout = 30
keepalive = 5
graceful_timeout = 30

access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("GUNICORN_LOG_LEVEL", "info")
capture_output = True

# Validation patterns compile at import; a bad pattern fails the master before forking
preload_app = True


def on_starting(server):
    server.log.info("Gunicorn master process starting with %d workers", workers)


def worker_int(worker):
    worker.log.info("Worker %s interrupted", worker.pid)


def worker_abort(worker):
    worker.log.warning("Worker %s aborted", worker.pid)
