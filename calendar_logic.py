"""Pure calendar calculations — no UI dependencies."""

import calendar
from datetime import date

SUNDAY = calendar.SUNDAY
MONDAY = calendar.MONDAY

# Indexed by datetime.weekday() (Monday == 0)
DAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

DAY_NAMES = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

_WEEKDAY_NAMES = {name: i for i, name in enumerate(DAY_NAMES)}
_WEEKDAY_NAMES.update({abbr.lower(): i for i, abbr in enumerate(DAY_ABBR)})


def normalize_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) with any month number rolled into 1–12.

    Month 13 is January of the next year, month 0 is December of the
    previous one.
    """
    carry, month_index = divmod(month - 1, 12)
    return year + carry, month_index + 1


def month_dates(year: int, month: int, week_start: int = SUNDAY) -> list[date]:
    """Return every date of the full weeks covering the given month.

    The first date falls on ``week_start`` and the list length is always
    a multiple of 7. Leading and trailing days belong to the adjacent
    months.
    """
    year, month = normalize_month(year, month)
    cal = calendar.Calendar(firstweekday=week_start)
    return list(cal.itermonthdates(year, month))


def weekday_headers(week_start: int = SUNDAY) -> list[str]:
    """Return the seven weekday abbreviations starting at ``week_start``."""
    return [DAY_ABBR[(week_start + i) % 7] for i in range(7)]


def parse_weekday(name: str) -> int:
    """Map a weekday name ("sunday", "Mon", ...) to its calendar constant."""
    try:
        return _WEEKDAY_NAMES[name.strip().lower()]
    except (KeyError, AttributeError):
        raise ValueError(f"Unknown weekday: {name!r}") from None


def weekday_name(weekday: int) -> str:
    return DAY_NAMES[weekday % 7]


def days_between(start: date, end: date) -> int:
    """Return the whole-day difference ``end - start``."""
    return (end - start).days


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    return normalize_month(year, month - 1)


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    return normalize_month(year, month + 1)
