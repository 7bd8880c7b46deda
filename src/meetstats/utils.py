from datetime import UTC, datetime
from uuid import UUID


def now() -> datetime:
    return datetime.now(UTC)


def to_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime cut to milliseconds, the precision MongoDB stores.

    Naive values are taken as UTC.
    """
    value = value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def parse_uuid(value: str) -> UUID | None:
    """Parse a UUID string, returning None if it is not one."""
    try:
        return UUID(value)
    except ValueError:
        return None


def duration_ms(start: datetime, end: datetime) -> int:
    """Milliseconds between two datetimes."""
    delta = end - start
    return delta.days * 86_400_000 + delta.seconds * 1000 + delta.microseconds // 1000
