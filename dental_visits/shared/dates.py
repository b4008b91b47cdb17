"""Calendar helpers shared by visit record queries and reports"""

from datetime import date


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return [first day of month, first day of next month)"""
    start = date(year, month, 1)
    if month == 12:
        end = date(year + 1, 1, 1)
    else:
        end = date(year, month + 1, 1)
    return start, end


def format_display_date(value: date) -> str:
    """Japanese locale short date without zero padding: 2024/1/15"""
    return f"{value.year}/{value.month}/{value.day}"
