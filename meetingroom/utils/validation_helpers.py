from datetime import datetime, timedelta, date, time
from zoneinfo import ZoneInfo
from meetingroom.config import BOOKING_TIMEZONE


def booking_zone():
    return ZoneInfo(BOOKING_TIMEZONE)


def booking_now():
    """Current wall-clock time in the booking timezone, without tzinfo."""
    return datetime.now(booking_zone()).replace(tzinfo=None)


def to_booking_time(value):
    """Convert an aware datetime to naive booking-timezone time; naive values pass through."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(booking_zone()).replace(tzinfo=None)
    return value


def day_bounds(day: date):
    """Half-open [00:00, next day 00:00) window covering ``day``."""
    start = datetime.combine(day, time.min)
    if day == date.max:
        return start, datetime.max
    return start, start + timedelta(days=1)


def parse_comma_list(value):
    """Split a comma separated string into trimmed, non-empty items.

    Lists are cleaned the same way, so both "Kim, Lee" and ["Kim", " Lee "]
    give ["Kim", "Lee"].
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(item).strip() for item in value if str(item).strip()]


def parse_comma_field(value):
    """``parse_comma_list`` for request fields; other JSON types are a validation error."""
    if value is not None and not isinstance(value, (str, list, tuple)):
        raise ValueError("must be a list or a comma separated string")
    return parse_comma_list(value)
