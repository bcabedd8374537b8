import json
import logging
from unittest import mock

from liff_backend import create_app
from liff_backend.config import TestingConfig
from liff_backend.monitoring import init_monitoring, report_exception
from liff_backend.utils.logging import RequestFormatter


def test_request_formatter_adds_request_fields(app):
    formatter = RequestFormatter('%(message)s')
    record = logging.LogRecord('liff_backend', logging.INFO, __file__, 1, 'hello', None, None)

    with app.test_request_context('/liff-submit', method='POST', environ_base={'REMOTE_ADDR': '203.0.113.9'}, headers={'User-Agent': 'Line/13.0'}):
        output = json.loads(formatter.format(record))

    assert output['message'] == 'hello'
    assert output['ip'] == '203.0.113.9'
    assert output['method'] == 'POST'
    assert output['path'] == '/liff-submit'
    assert output['user_agent'] == 'Line/13.0'


def test_request_formatter_outside_request():
    formatter = RequestFormatter('%(message)s')
    record = logging.LogRecord('liff_backend', logging.INFO, __file__, 1, 'startup', None, None)
    output = json.loads(formatter.format(record))
    assert output['ip'] is None
    assert output['user_agent'] is None


def test_monitoring_disabled_without_dsn(app):
    assert init_monitoring(app) is False
    assert app.extensions['monitoring_enabled'] is False


@mock.patch('liff_backend.monitoring.sentry_sdk')
def test_monitoring_enabled_with_dsn(sentry_sdk):
    class SentryConfig(TestingConfig):
        SENTRY_DSN = 'https://public@sentry.example.com/1'

    app = create_app(SentryConfig)

    assert app.extensions['monitoring_enabled'] is True
    assert sentry_sdk.init.call_args.kwargs['dsn'] == 'https://public@sentry.example.com/1'
    assert app.test_client().get('/').get_json()['monitoringEnabled'] is True

    error = RuntimeError('boom')
    report_exception(app, error)
    sentry_sdk.capture_exception.assert_called_once_with(error)


@mock.patch('liff_backend.monitoring.sentry_sdk')
def test_report_exception_noop_when_disabled(sentry_sdk, app):
    report_exception(app, RuntimeError('boom'))
    sentry_sdk.capture_exception.assert_not_called()


def test_proxy_fix_uses_forwarded_address():
    class ProxiedConfig(TestingConfig):
        PROXY_FIX_X_FOR = 1

    app = create_app(ProxiedConfig)
    seen = {}

    @app.route('/whoami')
    def whoami():
        from flask import request
        seen['ip'] = request.remote_addr
        return 'ok'

    app.test_client().get('/whoami', headers={'X-Forwarded-For': '198.51.100.7'})
    assert seen['ip'] == '198.51.100.7'
