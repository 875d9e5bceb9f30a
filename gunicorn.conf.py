# gunicorn.conf.py
import os
import logging
import sys
import multiprocessing

# Configure logging to stdout
accesslog = '-'
errorlog = '-'
loglevel = 'info'

# Get PORT from environment or use default
port = os.getenv('PORT', '8080')
bind = f"0.0.0.0:{port}"

# Chapter requests mostly wait on the ESV API, so favour threads
cores = multiprocessing.cpu_count()
workers = min(cores * 2 + 1, 6)
threads = 4

wsgi_app = "app:app"

def on_starting(server):
    logger = logging.getLogger('gunicorn.error')
    logger.setLevel(logging.INFO)
    logger.addHandler(logging.StreamHandler(sys.stdout))
    logger.info(f"Starting gunicorn with {workers} workers on port {port}")
    logger.info(f"Worker timeout set to {timeout} seconds")

timeout = 60
keepalive = 120
worker_class = "gthread"

# Process naming
proc_name = "scripture_reader"
default_proc_name = "scripture_reader"

graceful_timeout = 30
