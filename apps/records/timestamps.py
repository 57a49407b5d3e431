"""
Timestamp helpers shared by the Record Store and the ledger client.

Record dates travel as ISO-8601 strings. Whatever shape a date was stored
in, it is read back as UTC with millisecond precision, e.g.
``2024-03-01T08:30:00.000Z``.
"""
from datetime import datetime, timezone as dt_timezone

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime


def parse_timestamp(value):
    """
    Parse an ISO-8601 date or datetime into an aware UTC datetime.

    Naive values are interpreted in the project time zone. Returns None
    when the value cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        try:
            parsed = parse_datetime(text)
            if parsed is None:
                day = parse_date(text)
                if day is None:
                    return None
                parsed = datetime(day.year, day.month, day.day)
        except ValueError:
            # Well formed but not a real date (e.g. 2023-02-30)
            return None
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, timezone.get_default_timezone())
    return parsed.astimezone(dt_timezone.utc)


def format_timestamp(moment):
    """Render an aware datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    moment = moment.astimezone(dt_timezone.utc)
    return f"{moment:%Y-%m-%dT%H:%M:%S}.{moment.microsecond // 1000:03d}Z"


def normalize_timestamp(value):
    """Return the canonical form of a stored date, or the raw value if unparseable."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return value
    return format_timestamp(parsed)


def now_timestamp():
    return format_timestamp(timezone.now())
