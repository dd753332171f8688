"""Gunicorn configuration with Uvicorn worker settings"""
import multiprocessing
import os
from pathlib import Path

# Create logs directory in the project
log_dir = Path(__file__).parent / "logs"
log_dir.mkdir(exist_ok=True)

# Gunicorn settings
workers = int(os.getenv("WEB_CONCURRENCY", min(multiprocessing.cpu_count(), 4)))
worker_class = "uvicorn.workers.UvicornWorker"

# Server socket
bind = os.getenv("BIND", "0.0.0.0:8000")
backlog = 2048

# Worker processes
worker_connections = 1000
# Three provider calls plus one fallback round can take several minutes
timeout = 300
graceful_timeout = 15
keepalive = 5
max_requests = 500
max_requests_jitter = 50

# Logging
accesslog = str(log_dir / "access.log")
errorlog = str(log_dir / "error.log")
loglevel = os.getenv("GUNICORN_LOG_LEVEL", "info")
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s"'

preload_app = False
reload = os.getenv("ENVIRONMENT", "development") == "development"

def when_ready(server):
    """Server ready handler"""
    server.log.info("Server is ready.")

def post_worker_init(worker):
    """Post worker initialization"""
    worker.log.info(f"Worker {worker.pid} initialized")

def worker_abort(worker):
    """Worker abort handler"""
    worker.log.warning(f"Worker {worker.pid} was aborted!")

def worker_exit(server, worker):
    """Worker exit handler"""
    server.log.info(f"Worker {worker.pid} exited")
