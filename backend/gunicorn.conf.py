# Run with: gunicorn -c gunicorn.conf.py "storefront:create_app()"
import os

# Bind & workers
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = 1
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs go to stdout/stderr; app records are already JSON
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Trust proxy headers (ProxyFix handles them in-app)
forwarded_allow_ips = "*"
proxy_protocol = False
