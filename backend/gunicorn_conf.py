# backend/gunicorn_conf.py

# Gunicorn config file for the intake service.
# Run from backend/: gunicorn -c gunicorn_conf.py

import os

wsgi_app = "intake.main:app"

# Basic configuration
bind = os.getenv("BIND", "0.0.0.0:8000")
workers = int(os.getenv("WORKERS", "2"))
worker_class = "uvicorn.workers.UvicornWorker"

# Flows live in the session store; with SESSION_TYPE=memory every worker has its
# own registry, so more than one worker requires SESSION_TYPE=redis.
if os.getenv("SESSION_TYPE", "memory") == "memory":
    workers = 1

# Settings for running behind a reverse proxy like Nginx
forwarded_allow_ips = "*"
proxy_protocol = True
proxy_allow_ips = "*"

# --- Logging ---
# Send access and error logs to stdout and stderr
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info")
