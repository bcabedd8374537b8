from datetime import date, datetime
import re

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator, model_validator
from pydantic_core import PydanticCustomError

from liff_backend.errors import InquiryValidationError

REQUIRED_FIELDS = ('company', 'contact', 'phone', 'product', 'quantity', 'budget', 'deadline', 'userId')
TEXT_FIELDS = ('company', 'contact', 'phone', 'product', 'budget', 'notes', 'user_id')

MIN_QUANTITY = 100
MAX_QUANTITY = 1_000_000
MIN_PHONE_DIGITS = 9
MAX_PHONE_DIGITS = 15

PHONE_SEPARATORS = re.compile(r'[\s\-().]')
PHONE_PATTERN = re.compile(r'^\+?[0-9]+$')
QUANTITY_PATTERN = re.compile(r'^[0-9]+$')

MISSING_FIELDS_MESSAGE = 'Missing required fields'
INVALID_PHONE_MESSAGE = 'Invalid phone number. Please enter 9-15 digits.'
INVALID_QUANTITY_MESSAGE = 'Invalid quantity. Please enter a number between 100 and 1,000,000.'
INVALID_DEADLINE_MESSAGE = 'Invalid delivery date.'
PAST_DEADLINE_MESSAGE = 'Target delivery date cannot be in the past.'

# Error types whose message is written for the end user
USER_FACING_ERRORS = {'missing_fields', 'invalid_phone', 'invalid_quantity', 'invalid_deadline', 'past_deadline'}


def _is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


class InquiryModel(BaseModel):
    """Inquiry as submitted from the LIFF form, after validation.

    Field order matters: pydantic reports errors in declaration order, and
    the first one is what the client sees (phone, then quantity, then
    deadline).
    """
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    company: str
    contact: str
    phone: str
    product: str
    quantity: int
    budget: str
    deadline: date
    notes: str | None = None
    user_id: str = Field(alias='userId')

    @model_validator(mode='before')
    @classmethod
    def require_fields(cls, data):
        if not isinstance(data, dict):
            raise PydanticCustomError('missing_fields', MISSING_FIELDS_MESSAGE)
        if any(_is_blank(data.get(name)) for name in REQUIRED_FIELDS):
            raise PydanticCustomError('missing_fields', MISSING_FIELDS_MESSAGE)
        return data

    @field_validator('phone', mode='before')
    @classmethod
    def validate_phone(cls, v) -> str:
        stripped = PHONE_SEPARATORS.sub('', str(v))
        if not PHONE_PATTERN.match(stripped):
            raise PydanticCustomError('invalid_phone', INVALID_PHONE_MESSAGE)
        if not MIN_PHONE_DIGITS <= len(stripped.lstrip('+')) <= MAX_PHONE_DIGITS:
            raise PydanticCustomError('invalid_phone', INVALID_PHONE_MESSAGE)
        return stripped

    @field_validator('quantity', mode='before')
    @classmethod
    def validate_quantity(cls, v) -> int:
        if isinstance(v, bool):
            raise PydanticCustomError('invalid_quantity', INVALID_QUANTITY_MESSAGE)
        if isinstance(v, int):
            quantity = v
        elif isinstance(v, float) and v.is_integer():
            quantity = int(v)
        elif isinstance(v, str) and QUANTITY_PATTERN.match(v.strip()):
            # Anything longer is out of range; also keeps int() under its digit limit
            digits = v.strip().lstrip('0') or '0'
            if len(digits) > len(str(MAX_QUANTITY)):
                raise PydanticCustomError('invalid_quantity', INVALID_QUANTITY_MESSAGE)
            quantity = int(digits)
        else:
            raise PydanticCustomError('invalid_quantity', INVALID_QUANTITY_MESSAGE)
        if not MIN_QUANTITY <= quantity <= MAX_QUANTITY:
            raise PydanticCustomError('invalid_quantity', INVALID_QUANTITY_MESSAGE)
        return quantity

    @field_validator('deadline', mode='before')
    @classmethod
    def validate_deadline(cls, v, info: ValidationInfo) -> date:
        if isinstance(v, datetime):
            parsed = v.date()
        elif isinstance(v, date):
            parsed = v
        else:
            text = str(v).strip()
            try:
                parsed = date.fromisoformat(text)
            except ValueError:
                try:
                    parsed = datetime.fromisoformat(text).date()
                except ValueError:
                    raise PydanticCustomError('invalid_deadline', INVALID_DEADLINE_MESSAGE)

        today = (info.context or {}).get('today')
        if today is not None and parsed < today:
            raise PydanticCustomError('past_deadline', PAST_DEADLINE_MESSAGE)
        return parsed


class SanitizedInquiry(BaseModel):
    """Validated inquiry with trimmed text, safe to format and persist.

    Text is not HTML-escaped: it only ever ends up in a plain-text chat
    message or a database document.
    """
    model_config = ConfigDict(frozen=True)

    company: str
    contact: str
    phone: str
    product: str
    quantity: int
    budget: str
    deadline: date
    notes: str = ''
    user_id: str


def validate_inquiry(payload, today: date | None = None) -> InquiryModel:
    """Validate a raw submission, raising InquiryValidationError on the first failure.

    ``today`` is the current date in the business timezone; a deadline before
    it is rejected.
    """
    if not isinstance(payload, dict):
        payload = {}
    try:
        return InquiryModel.model_validate(payload, context={'today': today})
    except ValidationError as e:
        error = e.errors()[0]
        field = error['loc'][0] if error['loc'] else None
        if error['type'] in USER_FACING_ERRORS:
            message = error['msg']
        else:
            message = f'Invalid value for {field}'
        raise InquiryValidationError(message, field=field) from e


def sanitize_inquiry(inquiry: InquiryModel) -> SanitizedInquiry:
    data = inquiry.model_dump()
    for name in TEXT_FIELDS:
        value = data.get(name)
        if isinstance(value, str):
            data[name] = value.strip()
    if data.get('notes') is None:
        data['notes'] = ''
    return SanitizedInquiry(**data)
