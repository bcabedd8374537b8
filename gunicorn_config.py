import os

workers = int(os.environ.get('GUNICORN_WORKERS', '2'))
threads = int(os.environ.get('GUNICORN_THREADS', '4'))
bind = os.environ.get('GUNICORN_BIND', '0.0.0.0:' + os.environ.get('PORT', '3000'))
# Finite request timeout, well above the 5s LINE push timeout
timeout = int(os.environ.get('GUNICORN_TIMEOUT', '30'))
# Let in-flight submissions finish persisting/notifying on shutdown
graceful_timeout = 30
worker_class = 'gthread'
accesslog = '-'
errorlog = '-'
loglevel = os.environ.get('LOG_LEVEL', 'info').lower()
