from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from liff_backend.config import Config
from liff_backend.db import init_store
from liff_backend.errors import ConfigurationError, RateLimitError, SubmissionError
from liff_backend.monitoring import init_monitoring, report_exception
from liff_backend.services.submission import build_submission_service
from liff_backend.utils.logging import configure_logging


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app)

    # Fail fast: the service is useless without a LINE channel token
    if not app.config.get('CHANNEL_ACCESS_TOKEN'):
        app.logger.critical('CHANNEL_ACCESS_TOKEN is not set')
        raise ConfigurationError('CHANNEL_ACCESS_TOKEN is not set')

    if app.config.get('PROXY_FIX_X_FOR'):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=app.config['PROXY_FIX_X_FOR'])

    # Process-wide collaborators, built once
    app.extensions['monitoring_enabled'] = init_monitoring(app)
    store = init_store(app)
    app.extensions['inquiry_store'] = store
    app.extensions['submission_service'] = build_submission_service(app, store=store)

    @app.after_request
    def set_response_headers(response):
        # LIFF pages are served from another origin
        origin = request.headers.get('Origin')
        if origin:
            response.headers['Access-Control-Allow-Origin'] = origin
            response.headers['Access-Control-Allow-Credentials'] = 'true'
            response.headers['Vary'] = 'Origin'
        response.headers['Access-Control-Allow-Methods'] = 'GET, POST, OPTIONS'
        response.headers['Access-Control-Allow-Headers'] = 'Content-Type'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['Referrer-Policy'] = 'no-referrer-when-downgrade'
        return response

    # Blueprints
    from liff_backend.routes.main import main_bp

    app.register_blueprint(main_bp)

    @app.errorhandler(SubmissionError)
    def handle_submission_error(e):
        if e.status_code >= 500:
            app.logger.error('Submission failed: %s', e.message)
        else:
            app.logger.warning('Submission rejected (%s): %s', e.status_code, e.message)
        response = jsonify({'ok': False, 'message': e.message})
        if isinstance(e, RateLimitError) and e.retry_after:
            response.headers['Retry-After'] = str(e.retry_after)
        return response, e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({'ok': False, 'message': e.name}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        app.logger.exception('Unhandled error')
        report_exception(app, e)
        return jsonify({'ok': False, 'message': 'An unexpected error occurred'}), 500

    app.logger.info('GMF LIFF backend startup')
    return app
