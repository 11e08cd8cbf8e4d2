"""Utility functions for schedule generation."""

import re
from datetime import date, timedelta

WEEKEND = (5, 6)


def parse_grade_rank(grade_level: str) -> int | None:
    """Extract the ordinal rank from a grade level.

    Grade levels come in forms like:
    - "3" -> 3
    - "3rd" -> 3
    - "Grade 10" -> 10

    Args:
        grade_level: Grade level label

    Returns:
        Integer rank, or None if the label has no digits
    """
    match = re.search(r"\d+", grade_level)
    if not match:
        return None
    return int(match.group(0))


def week_start(day: date) -> date:
    """Monday of the week containing day."""
    return day - timedelta(days=day.weekday())


def date_range(start: date, num_days: int, weekdays_only: bool = False) -> list[date]:
    """Build the candidate dates of a search window.

    Args:
        start: First calendar day
        num_days: Number of calendar days in the window
        weekdays_only: If True, Saturdays and Sundays are dropped

    Returns:
        Dates in calendar order
    """
    days = [start + timedelta(days=i) for i in range(num_days)]
    if weekdays_only:
        days = [d for d in days if d.weekday() not in WEEKEND]
    return days
