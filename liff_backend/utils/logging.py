import logging
import sys
from pythonjsonlogger.json import JsonFormatter
from flask import request, has_request_context


class RequestFormatter(JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        if has_request_context():
            log_record['ip'] = request.remote_addr
            log_record['method'] = request.method
            log_record['path'] = request.path
            log_record['user_agent'] = request.headers.get('User-Agent')
        else:
            log_record['ip'] = None
            log_record['method'] = None
            log_record['path'] = None
            log_record['user_agent'] = None


def configure_logging(app):
    log_level = app.config.get('LOG_LEVEL', 'INFO').upper()
    handler = logging.StreamHandler(sys.stdout)

    if not app.debug:
        formatter = RequestFormatter('%(asctime)s %(levelname)s %(name)s %(message)s %(ip)s %(method)s %(path)s %(user_agent)s')
        handler.setFormatter(formatter)
    else:
        # Simple text logging for debug
        handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s'))

    app.logger.handlers.clear()
    app.logger.addHandler(handler)
    app.logger.setLevel(log_level)
