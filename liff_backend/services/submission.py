"""Submission pipeline for LIFF inquiry forms.

One call to :meth:`SubmissionService.submit` runs a single inquiry through
rate check, validation, sanitization, optional persistence and the LINE push,
then reconciles the outcomes into one :class:`SubmissionResult`.

Failure policy:

- rate limit or validation failures raise before anything is stored or sent;
- a persistence failure is logged and the push is still attempted;
- if the push fails, the response is "degraded" (500 with the inquiry id)
  when the inquiry was saved, and a plain failure otherwise.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging
from typing import Any

from liff_backend.errors import NotificationError, PersistenceError, RateLimitError
from liff_backend.models.validation import sanitize_inquiry, validate_inquiry
from liff_backend.utils.formatter import InquiryMessageFormatter
from liff_backend.utils.line import LineMessagingClient
from liff_backend.utils.rate_limit import SlidingWindowRateLimiter

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = 'Form submitted successfully'
DEGRADED_MESSAGE = 'Your inquiry was saved but the notification failed. Our sales team will still contact you.'
FAILURE_MESSAGE = 'Failed to send message via LINE API'


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class RequestMetadata:
    ip_address: str | None
    user_agent: str | None = None
    submitted_at: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class SubmissionResult:
    ok: bool
    status_code: int
    message: str
    inquiry_id: str | None = None
    persistence: str = 'skipped'

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {'ok': self.ok, 'message': self.message}
        if self.inquiry_id is not None:
            payload['inquiryId'] = self.inquiry_id
        return payload


class SubmissionService:
    def __init__(
        self,
        *,
        notifier,
        rate_limiter,
        formatter: InquiryMessageFormatter,
        store=None,
    ) -> None:
        self.notifier = notifier
        self.rate_limiter = rate_limiter
        self.formatter = formatter
        self.store = store

    @property
    def persistence_enabled(self) -> bool:
        return self.store is not None

    def submit(self, payload: Any, metadata: RequestMetadata) -> SubmissionResult:
        if not self.rate_limiter.hit(metadata.ip_address):
            logger.warning('Rate limit exceeded for %s', metadata.ip_address)
            raise RateLimitError(retry_after=self.rate_limiter.retry_after(metadata.ip_address))

        today = self.formatter.local_date(metadata.submitted_at)
        inquiry = sanitize_inquiry(validate_inquiry(payload, today=today))

        inquiry_id, persistence = self._persist(inquiry, metadata)

        message = self.formatter.format(inquiry, metadata.submitted_at)
        try:
            self.notifier.push_text(inquiry.user_id, message)
        except NotificationError as e:
            logger.error('Notification failed (%s) for inquiry from %s: %s', e.category, inquiry.company, e)
            if inquiry_id is not None:
                return SubmissionResult(False, 500, DEGRADED_MESSAGE, inquiry_id=inquiry_id, persistence=persistence)
            return SubmissionResult(False, 500, FAILURE_MESSAGE, persistence=persistence)

        logger.info('Inquiry from %s delivered to LINE user %s', inquiry.company, inquiry.user_id)
        return SubmissionResult(True, 200, SUCCESS_MESSAGE, inquiry_id=inquiry_id, persistence=persistence)

    def _persist(self, inquiry, metadata: RequestMetadata):
        if self.store is None:
            return None, 'skipped'
        try:
            inquiry_id = self.store.create(inquiry, metadata)
        except PersistenceError as e:
            logger.error('Persisting inquiry failed, continuing with notification: %s', e)
            return None, 'failed'
        logger.info('New inquiry saved: %s', inquiry_id)
        return inquiry_id, 'saved'


def build_submission_service(app, store=None) -> SubmissionService:
    """Wire the pipeline from app.config; called once from create_app."""
    config = app.config
    return SubmissionService(
        notifier=LineMessagingClient(
            config['CHANNEL_ACCESS_TOKEN'],
            api_url=config['LINE_PUSH_API_URL'],
            timeout=config['LINE_TIMEOUT_SECONDS'],
        ),
        rate_limiter=SlidingWindowRateLimiter(
            limit=config['RATE_LIMIT_MAX'],
            window_seconds=config['RATE_LIMIT_WINDOW_SECONDS'],
        ),
        formatter=InquiryMessageFormatter(config['BUSINESS_TIMEZONE']),
        store=store,
    )
