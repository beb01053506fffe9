"""Clock-time and calendar helpers shared by the timesheet engines."""
from datetime import date, timedelta


def to_minutes(hhmm: str) -> int:
    """
    Convert a 24-hour ``HH:mm`` string to minutes since midnight.

    Args:
        hhmm: Clock time such as "09:30"

    Returns:
        Minutes since midnight

    Raises:
        ValueError: If the string is not a valid HH:mm time

    Examples:
        >>> to_minutes("09:30")
        570
        >>> to_minutes("00:00")
        0
    """
    try:
        hours_str, minutes_str = hhmm.split(":")
        hours, minutes = int(hours_str), int(minutes_str)
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid time '{hhmm}', expected HH:mm")

    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ValueError(f"Invalid time '{hhmm}', expected HH:mm")

    return hours * 60 + minutes


def duration_hours(start_time: str, end_time: str) -> float:
    """
    Hours between two clock times on the same day, clamped at zero.

    Examples:
        >>> duration_hours("09:00", "11:30")
        2.5
        >>> duration_hours("17:00", "09:00")
        0.0
    """
    diff = to_minutes(end_time) - to_minutes(start_time)
    return max(diff, 0) / 60


def exceeds_hours(hours: float, limit: float) -> bool:
    """
    True when ``hours`` is over ``limit``, compared in whole minutes.

    Fractional durations summed as floats drift (17 x 2h20m + 20m is
    40.00000000000001); landing exactly on the limit is not over it.

    Examples:
        >>> exceeds_hours(17 * (140 / 60) + 20 / 60, 40)
        False
        >>> exceeds_hours(40 + 1 / 60, 40)
        True
    """
    return round(hours * 60) > round(limit * 60)


def week_start(day: date) -> date:
    """
    Monday of the ISO week containing ``day`` (Sunday belongs to the week
    that started six days earlier).

    Examples:
        >>> week_start(date(2025, 12, 4))
        datetime.date(2025, 12, 1)
        >>> week_start(date(2025, 12, 7))
        datetime.date(2025, 12, 1)
    """
    return day - timedelta(days=day.weekday())


def week_range(day: date) -> tuple[date, date]:
    """Monday and Sunday of the week containing ``day``."""
    start = week_start(day)
    return start, start + timedelta(days=6)


def month_range(day: date) -> tuple[date, date]:
    """First and last calendar day of the month containing ``day``."""
    first = day.replace(day=1)
    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)
    return first, next_first - timedelta(days=1)


def parse_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string."""
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD")
