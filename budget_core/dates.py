import calendar
from datetime import date
from typing import Tuple

# Months are 0-based everywhere in this module (0 = January).


def pad2(n: int) -> str:
    return f"{n:02d}"


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month + 1)[1]


def first_weekday(year: int, month: int) -> int:
    """Weekday of the 1st, 0 = Sunday .. 6 = Saturday."""
    return (date(year, month + 1, 1).weekday() + 1) % 7


def monday_start_offset(year: int, month: int) -> int:
    """Leading blank cells of a Monday-first grid (0 = month starts on Monday)."""
    return (first_weekday(year, month) + 6) % 7


def week_count(year: int, month: int) -> int:
    cells = monday_start_offset(year, month) + days_in_month(year, month)
    return -(-cells // 7)


def week_index_of(year: int, month: int, day: int) -> int:
    return (monday_start_offset(year, month) + day - 1) // 7


def week_day_range(year: int, month: int, week_index: int) -> Tuple[int, int]:
    """First and last day of the month that fall inside a week row."""
    start = week_index * 7 - monday_start_offset(year, month) + 1
    end = min(days_in_month(year, month), start + 6)
    return max(1, start), end


def week_label(year: int, month: int, week_index: int) -> str:
    start, end = week_day_range(year, month, week_index)
    return f"Week {week_index + 1} ({start}-{end})"


def format_iso_date(d: date) -> str:
    return f"{d.year:04d}-{pad2(d.month)}-{pad2(d.day)}"


def format_month_key(year: int, month: int) -> str:
    return f"{year:04d}-{pad2(month + 1)}"


def iso_date_for(year: int, month: int, day: int) -> str:
    return f"{format_month_key(year, month)}-{pad2(day)}"


def parse_month_key(key: str) -> Tuple[int, int]:
    """Inverse of format_month_key: "2025-09" -> (2025, 8)."""
    parts = key.split("-")
    if len(parts) != 2 or len(parts[0]) != 4 or len(parts[1]) != 2:
        raise ValueError(f"Invalid month key: {key!r}")
    try:
        year, month = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValueError(f"Invalid month key: {key!r}") from None
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month key: {key!r}")
    return year, month - 1


def parse_iso_date(text: str) -> date:
    if len(text) != 10:
        raise ValueError(f"Invalid ISO date: {text!r}")
    return date.fromisoformat(text)


def week_index_of_date(text: str) -> int:
    d = parse_iso_date(text)
    return week_index_of(d.year, d.month - 1, d.day)


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    total = year * 12 + month + delta
    return total // 12, total % 12
