# Gunicorn configuration file for the NU Schedule API

# Server socket
bind = "0.0.0.0:8080"
backlog = 2048

# Worker processes
# Every worker runs the startup seed guard; seeding only upserts, so
# overlapping runs never duplicate rows.
workers = 4
worker_class = "uvicorn.workers.UvicornWorker"
worker_connections = 1000
max_requests = 1000
max_requests_jitter = 50

# Timeout settings
timeout = 60
keepalive = 2
graceful_timeout = 30

# Logging
accesslog = "-"  # Log to stdout
errorlog = "-"  # Log to stderr
loglevel = "info"
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# Process naming
proc_name = "nuschedule-api"

# Server mechanics
daemon = False
pidfile = "/tmp/gunicorn.pid"
user = None
group = None
tmp_upload_dir = None

# Application-specific
wsgi_app = "nuschedule.api.main:app"
