import logging

import requests

from liff_backend.errors import NotificationNetworkError, NotificationRejectedError, NotificationTimeoutError

logger = logging.getLogger(__name__)

# LINE rejects text messages longer than this
MAX_TEXT_LENGTH = 5000


def _truncate_for_log(value, limit=500):
    text = value if isinstance(value, str) else repr(value)
    return text if len(text) <= limit else text[:limit] + '...'


class LineMessagingClient:
    """Single-attempt client for the LINE Messaging API push endpoint."""

    def __init__(self, access_token, api_url='https://api.line.me/v2/bot/message/push', timeout=5.0):
        self.access_token = access_token
        self.api_url = api_url
        self.timeout = timeout

    def push_text(self, to, text):
        payload = {
            'to': to,
            'messages': [
                {
                    'type': 'text',
                    'text': text[:MAX_TEXT_LENGTH],
                }
            ],
        }
        headers = {
            'Authorization': f'Bearer {self.access_token}',
            'Content-Type': 'application/json',
        }

        logger.info('Sending LINE push message to %s', to)
        try:
            response = requests.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.error('LINE push timed out after %ss: %s', self.timeout, e)
            raise NotificationTimeoutError(str(e)) from e
        except requests.exceptions.RequestException as e:
            logger.error('LINE push request failed: %s', e)
            raise NotificationNetworkError(str(e)) from e

        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            logger.error('LINE API error status=%s body=%s', response.status_code, _truncate_for_log(body))
            raise NotificationRejectedError(response.status_code, body)

        logger.info('LINE push accepted status=%s', response.status_code)
