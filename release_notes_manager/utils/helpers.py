"""General utility functions and helper classes."""

from datetime import date


def ordinal_suffix(day: int) -> str:
    """Return the English ordinal suffix of a day of the month (1 -> 'st')."""
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def format_release_date(value: date) -> str:
    """Format a release date like 'October 17th, 2026'."""
    return f"{value.strftime('%B')} {value.day}{ordinal_suffix(value.day)}, {value.year}"
