from datetime import date, datetime
from zoneinfo import ZoneInfo

# Pinned so output never depends on the host locale
MONTH_NAMES = (
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
)

RULE = '━━━━━━━━━━━━━'


def format_calendar_date(value: date) -> str:
    return f'{MONTH_NAMES[value.month - 1]} {value.day}, {value.year}'


def describe_deadline(deadline: date, today: date) -> str:
    """Render a deadline as ``October 29, 2026 (10 days)``, ``(Today)`` or ``(3 days ago)``."""
    diff_days = (deadline - today).days
    label = format_calendar_date(deadline)
    if diff_days > 0:
        return f'{label} ({diff_days} days)'
    if diff_days == 0:
        return f'{label} (Today)'
    return f'{label} ({abs(diff_days)} days ago)'


class InquiryMessageFormatter:
    """Builds the LINE text message for a sanitized inquiry.

    Timestamps are converted into the vendor's business timezone, and the
    "days until deadline" count uses the submission date in that same
    timezone, so the result depends only on the inquiry and ``submitted_at``.
    """

    def __init__(self, timezone='Asia/Bangkok'):
        self.timezone = timezone if isinstance(timezone, ZoneInfo) else ZoneInfo(timezone)

    def local_date(self, moment: datetime) -> date:
        return moment.astimezone(self.timezone).date()

    def format_submitted_at(self, moment: datetime) -> str:
        local = moment.astimezone(self.timezone)
        return f'{format_calendar_date(local.date())}, {local.hour:02d}:{local.minute:02d}'

    def format(self, inquiry, submitted_at: datetime) -> str:
        deadline = describe_deadline(inquiry.deadline, self.local_date(submitted_at))
        lines = [
            '📌 Client Inquiry',
            RULE,
            f'⏰ Submitted: {self.format_submitted_at(submitted_at)}',
            '',
            RULE,
            f'🏢 {inquiry.company}',
            f'👤 {inquiry.contact}',
            f'📞 {inquiry.phone}',
            '',
            RULE,
            f'📦 Product: {inquiry.product}',
            f'🔢 Quantity: {inquiry.quantity}',
            f'💰 Budget: {inquiry.budget}',
            f'📅 Target Date: {deadline}',
            '',
            RULE,
            '📝 NOTES',
            inquiry.notes or '-',
        ]
        return '\n'.join(lines)
