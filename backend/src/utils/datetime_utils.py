"""
Datetime utilities for consistent timezone handling across the application.

All business logic runs in the clinic's civil timezone, a fixed UTC-6 offset
(Monterrey, no daylight saving). Nothing here consults the host timezone:
naive datetimes are assumed to already be clinic local time, and every
instant handed to the database is timezone-aware.
"""

import logging
import re
from datetime import datetime, timezone, timedelta, date, time
from typing import Optional

from core.exceptions import InvalidDateError, InvalidTimeError

logger = logging.getLogger(__name__)

# Clinic timezone constant (UTC-6)
MEXICO_TZ = timezone(timedelta(hours=-6))

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

# Last representable millisecond of a local day
END_OF_DAY_TIME = time(23, 59, 59, 999000)

# The end of date.max in UTC-6 falls past datetime.max once stored as UTC
LAST_SUPPORTED_DATE = date.max - timedelta(days=1)

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def mexico_now() -> datetime:
    """
    Get current clinic datetime (UTC-6).

    Returns:
        Current datetime with clinic timezone (UTC-6)
    """
    return datetime.now(MEXICO_TZ)


def ensure_mexico(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure a datetime is timezone-aware with clinic timezone.

    Args:
        dt: Datetime to ensure is clinic timezone-aware

    Returns:
        Timezone-aware datetime in clinic timezone, or None if input is None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # If naive, assume it's already in clinic time and localize it
        return dt.replace(tzinfo=MEXICO_TZ)
    else:
        # If already timezone-aware, convert to clinic timezone
        return dt.astimezone(MEXICO_TZ)


def parse_date_string(date_str: str) -> date:
    """
    Parse a date string in YYYY-MM-DD or YYYY/MM/DD format.

    Single-digit months/days are accepted and normalized.

    Args:
        date_str: Date string in YYYY-MM-DD or YYYY/MM/DD format

    Returns:
        Date object

    Raises:
        InvalidDateError: If the string is empty, malformed, not a calendar date,
            or later than LAST_SUPPORTED_DATE
    """
    if not date_str or not date_str.strip():
        raise InvalidDateError("La fecha es requerida")

    date_str = date_str.strip()

    # Detect separator (either - or /)
    if '/' in date_str:
        parts = date_str.split('/')
    elif '-' in date_str:
        parts = date_str.split('-')
    else:
        raise InvalidDateError(f"Fecha inválida (se espera AAAA-MM-DD): {date_str}")

    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        raise InvalidDateError(f"Fecha inválida (se espera AAAA-MM-DD): {date_str}")

    normalized = f"{parts[0].zfill(4)}-{parts[1].zfill(2)}-{parts[2].zfill(2)}"

    try:
        parsed = datetime.strptime(normalized, DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidDateError(f"Fecha inválida (se espera AAAA-MM-DD): {date_str}") from e

    if parsed > LAST_SUPPORTED_DATE:
        raise InvalidDateError(f"Fecha fuera de rango: {date_str}")
    return parsed


def parse_time_string(time_str: str) -> time:
    """
    Parse a 24-hour wall-clock string (H:MM or HH:MM) between 00:00 and 23:59.

    Raises:
        InvalidTimeError: If the string is malformed or out of range
    """
    match = _TIME_PATTERN.match((time_str or "").strip())
    if not match:
        raise InvalidTimeError(f"Hora inválida (se espera HH:MM): {time_str}")

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise InvalidTimeError(f"Hora inválida (se espera HH:MM): {time_str}")
    return time(hour, minute)


def local_date_string(instant: datetime) -> str:
    """Calendar date (YYYY-MM-DD) of an instant in clinic time."""
    local_datetime = ensure_mexico(instant)
    if local_datetime is None:
        raise ValueError("Cannot format None datetime")
    # isoformat always zero-pads the year; strftime does not on every platform
    return local_datetime.date().isoformat()


def local_time_string(instant: datetime) -> str:
    """Wall-clock time (HH:MM, 24-hour) of an instant in clinic time."""
    local_datetime = ensure_mexico(instant)
    if local_datetime is None:
        raise ValueError("Cannot format None datetime")
    return local_datetime.strftime(TIME_FORMAT)


def compose_local_instant(date_str: str, time_str: str = "00:00") -> datetime:
    """
    Build the absolute instant for a clinic-local date and wall-clock time.

    ``compose_local_instant(local_date_string(x), local_time_string(x))``
    reproduces ``x`` truncated to the minute.

    Args:
        date_str: Local calendar date (YYYY-MM-DD)
        time_str: Local wall-clock time (HH:MM), midnight by default

    Returns:
        Timezone-aware datetime in clinic timezone

    Raises:
        InvalidDateError: If date_str is not a calendar date
        InvalidTimeError: If time_str is not a valid time
    """
    return datetime.combine(parse_date_string(date_str), parse_time_string(time_str), tzinfo=MEXICO_TZ)


def start_of_local_day(date_str: str) -> datetime:
    """Instant of 00:00:00.000 clinic time on the given date."""
    return datetime.combine(parse_date_string(date_str), time.min, tzinfo=MEXICO_TZ)


def end_of_local_day(date_str: str) -> datetime:
    """
    Instant of 23:59:59.999 clinic time on the given date.

    Always exactly 86399999 ms after start_of_local_day for the same date,
    so ``[start, end]`` works as an inclusive range.
    """
    return datetime.combine(parse_date_string(date_str), END_OF_DAY_TIME, tzinfo=MEXICO_TZ)


def today_local_date_string() -> str:
    """Today's date (YYYY-MM-DD) in clinic time."""
    return local_date_string(mexico_now())


def format_datetime(dt: datetime) -> str:
    """
    Format datetime for user-facing display in clinic time.

    Formats datetime as "DD/MM/YYYY HH:MM" (24-hour), the es-MX convention.

    Args:
        dt: Datetime to format (naive values are assumed to be clinic time)

    Returns:
        Formatted datetime string
    """
    local_datetime = ensure_mexico(dt)
    if local_datetime is None:
        raise ValueError("Cannot format None datetime")
    return f"{local_datetime.day:02d}/{local_datetime.month:02d}/{local_datetime.year:04d} {local_datetime:%H:%M}"


def parse_datetime_string_to_mexico(dt_str: str) -> datetime:
    """
    Parse an ISO format datetime string and convert to clinic timezone.

    Handles various datetime string formats:
    - ISO format with offset (e.g., "2024-03-10T09:00:00-06:00")
    - ISO format with Z (UTC) (e.g., "2024-03-10T15:00:00.000Z")
    - ISO format without timezone (assumes clinic time)

    Args:
        dt_str: ISO format datetime string

    Returns:
        Datetime object in clinic timezone

    Raises:
        InvalidDateError: If datetime string cannot be parsed or falls outside the
            supported date range
    """
    if not dt_str or not dt_str.strip():
        raise InvalidDateError("La fecha y hora son requeridas")

    try:
        # Replace Z with +00:00 for UTC
        dt = datetime.fromisoformat(dt_str.strip().replace('Z', '+00:00'))
    except ValueError as e:
        logger.debug(f"Failed to parse ISO datetime string '{dt_str}': {e}")
        raise InvalidDateError(f"Fecha y hora inválidas: {dt_str}") from e

    try:
        result = ensure_mexico(dt)
        assert result is not None
        result.astimezone(timezone.utc)
    except OverflowError as e:
        raise InvalidDateError(f"Fecha fuera de rango: {dt_str}") from e

    if result.date() > LAST_SUPPORTED_DATE:
        raise InvalidDateError(f"Fecha fuera de rango: {dt_str}")
    return result
