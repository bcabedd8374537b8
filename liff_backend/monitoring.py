import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration


def init_monitoring(app) -> bool:
    """Start Sentry when SENTRY_DSN is configured. Returns whether it is enabled."""
    dsn = app.config.get('SENTRY_DSN')
    if not dsn:
        app.logger.info('SENTRY_DSN not configured; error monitoring disabled')
        return False

    sentry_sdk.init(
        dsn=dsn,
        integrations=[FlaskIntegration()],
        traces_sample_rate=app.config.get('SENTRY_TRACES_SAMPLE_RATE', 0.0),
        environment=app.config.get('SENTRY_ENVIRONMENT', 'production'),
        send_default_pii=False,
    )
    app.logger.info('Sentry error monitoring enabled')
    return True


def report_exception(app, error):
    if app.extensions.get('monitoring_enabled'):
        sentry_sdk.capture_exception(error)
