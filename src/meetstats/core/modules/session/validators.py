import re
from datetime import datetime
from uuid import UUID

from meetstats.errors import ValidationError
from meetstats.utils import parse_uuid

UUID_VERSION = 4
UUID_RE = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}")
NUMERIC_RE = re.compile(r"[+-]?\d+(\.\d*)?")


def validate_time_range(start_time: datetime, end_time: datetime) -> None:
    """Ensure a session never ends before it starts.

    Raises:
        ValidationError: If end_time is earlier than start_time
    """
    if end_time < start_time:
        raise ValidationError("end_time must be greater than or equal to start_time")


def validate_user_id(value: str) -> str:
    """Check that value is a version 4 UUID and return its canonical lowercase form.

    Raises:
        ValueError: If value is not a UUID v4 string (used inside pydantic validators)
    """
    parsed = parse_uuid(value) if UUID_RE.fullmatch(value) else None
    if parsed is None or parsed.version != UUID_VERSION:
        raise ValueError("user_id must be a UUID v4")
    return str(parsed)


def canonical_user_id(value: str) -> str:
    """Normalize a user id for lookups; values that are not UUIDs are kept as given."""
    parsed = parse_uuid(value)
    return str(parsed) if parsed is not None else value


def parse_session_id(value: str | UUID) -> UUID | None:
    if isinstance(value, UUID):
        return value
    return parse_uuid(value)


def require_iso_string(value: object) -> object:
    """Only accept timestamps written as strings, so Unix numbers are not read as dates.

    Raises:
        ValueError: If value is not a string (used inside pydantic validators)
    """
    if not isinstance(value, str) or NUMERIC_RE.fullmatch(value.strip()):
        raise ValueError("must be an ISO-8601 string")
    return value
