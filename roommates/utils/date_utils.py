"""Date manipulation utilities"""

from datetime import date, datetime

from roommates.domain.exceptions import InvalidDate


def parse_date(value: str, fmt: str) -> date:
    """Parse a date string, raising InvalidDate instead of ValueError"""
    try:
        return datetime.strptime(value.strip(), fmt).date()
    except (ValueError, AttributeError) as exc:
        raise InvalidDate(f"Error parsing date {value!r} with format {fmt!r}") from exc


def inclusive_days(start: date, end: date) -> int:
    """Number of days from start to end counting both ends; 0 if end < start"""
    return max(0, (end - start).days + 1)
