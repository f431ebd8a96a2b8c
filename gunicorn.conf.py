"""Gunicorn production configuration."""
import multiprocessing
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"
chdir = "backend"
wsgi_app = "app.main:app"
worker_class = "uvicorn.workers.UvicornWorker"
# Each worker owns its own Neo4j driver pool (created in the app lifespan)
workers = int(os.environ.get("WEB_CONCURRENCY", multiprocessing.cpu_count() + 1))
# Large uploads are imported row by row inside the request
timeout = int(os.environ.get("GUNICORN_TIMEOUT", "300"))
graceful_timeout = 30
keepalive = 5
max_requests = 1000
max_requests_jitter = 100
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
