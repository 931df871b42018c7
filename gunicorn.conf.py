# gunicorn.conf.py
import os

bind = f"0.0.0.0:{os.getenv('PORT', '3001')}"
workers = int(os.getenv("WEB_CONCURRENCY", "2"))  # schaalbaar via env
worker_class = "uvicorn.workers.UvicornWorker"
preload_app = False
# een inzending uploadt alles sequentieel; grote formulieren duren even
timeout = int(os.getenv("WEB_TIMEOUT", "300"))
graceful_timeout = 30
keepalive = 5
accesslog = "-"
errorlog = "-"
loglevel = "info"
