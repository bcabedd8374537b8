"""Error types raised along the submission pipeline.

``SubmissionError`` subclasses carry the HTTP status and a message that is
safe to show to the person filling in the form. Everything else is internal
and only ever reaches the logs.
"""


class SubmissionError(Exception):
    status_code = 500
    message = 'An unexpected error occurred'

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InquiryValidationError(SubmissionError):
    status_code = 400

    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field


class RateLimitError(SubmissionError):
    status_code = 429
    message = 'Too many submissions. Please try again in 15 minutes.'

    def __init__(self, retry_after=None, message=None):
        super().__init__(message)
        self.retry_after = retry_after


class ConfigurationError(RuntimeError):
    """Raised at startup when a mandatory setting is missing."""


class PersistenceError(Exception):
    pass


class NotificationError(Exception):
    category = 'error'


class NotificationTimeoutError(NotificationError):
    category = 'timeout'


class NotificationNetworkError(NotificationError):
    category = 'network'


class NotificationRejectedError(NotificationError):
    category = 'rejected'

    def __init__(self, status_code, body=None):
        super().__init__(f'LINE API rejected push message with status {status_code}')
        self.status_code = status_code
        self.body = body
