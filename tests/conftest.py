from datetime import date, datetime, timedelta, timezone
from unittest import mock

import bson
import pytest

from liff_backend import create_app
from liff_backend.config import TestingConfig
from liff_backend.errors import PersistenceError
from liff_backend.services.submission import SubmissionService
from liff_backend.utils.formatter import InquiryMessageFormatter
from liff_backend.utils.rate_limit import SlidingWindowRateLimiter

# 14:05 on October 19, 2026 in Asia/Bangkok
SUBMITTED_AT = datetime(2026, 10, 19, 7, 5, tzinfo=timezone.utc)
TODAY = date(2026, 10, 19)


class FakeNotifier:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def push_text(self, to, text):
        self.calls.append((to, text))
        if self.error is not None:
            raise self.error


class FakeStore:
    def __init__(self, inquiry_id='652f1c0ab3e4d1a2c3b4d5e6', error=None):
        self.inquiry_id = inquiry_id
        self.error = error
        self.calls = []

    def create(self, inquiry, metadata):
        self.calls.append((inquiry, metadata))
        if self.error is not None:
            raise PersistenceError(self.error)
        return self.inquiry_id


class EncodingCollection:
    """Collection stand-in that BSON-encodes documents like the real driver."""

    def __init__(self, inquiry_id='652f1c0ab3e4d1a2c3b4d5e6'):
        self.inquiry_id = inquiry_id
        self.documents = []

    def insert_one(self, document):
        self.documents.append(bson.encode(document))
        return mock.Mock(inserted_id=self.inquiry_id)


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def make_payload(today=TODAY, **overrides):
    payload = {
        'company': 'Acme Co',
        'contact': 'Jane',
        'phone': '081-234-5678',
        'product': 'Widgets',
        'quantity': '500',
        'budget': '$10k',
        'deadline': (today + timedelta(days=10)).isoformat(),
        'notes': '',
        'userId': 'U123',
    }
    payload.update(overrides)
    return payload


def make_service(notifier=None, store=None, limit=5, window_seconds=900, clock=None):
    return SubmissionService(
        notifier=notifier or FakeNotifier(),
        rate_limiter=SlidingWindowRateLimiter(limit=limit, window_seconds=window_seconds, clock=clock or FakeClock()),
        formatter=InquiryMessageFormatter('Asia/Bangkok'),
        store=store,
    )


@pytest.fixture
def app():
    return create_app(TestingConfig)


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def client(app, notifier):
    app.extensions['submission_service'] = make_service(notifier=notifier)
    return app.test_client()
