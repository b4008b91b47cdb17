"""Shared validation utilities"""

import re
from typing import Optional

PHONE_PATTERN = re.compile(r"^[0-9\-\+\(\)\s]+$")
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
TIME_OF_DAY_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")
POSITIVE_INT_PATTERN = re.compile(r"^\s*\+?[0-9]+\s*$", re.ASCII)
INT_PATTERN = re.compile(r"^\s*[-+]?[0-9]+\s*$", re.ASCII)

# Ids are stored in 32-bit INTEGER columns
MAX_DB_INT = 2**31 - 1

MIN_REPORT_YEAR = 2000
MAX_REPORT_YEAR = 2100


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate a phone number (digits, spaces, and + - ( ) only).

    Raises:
        ValueError: If the phone number contains other characters
    """
    if not phone:
        return phone

    phone = phone.strip()
    if not PHONE_PATTERN.match(phone):
        raise ValueError("Invalid phone number format")

    return phone


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    if not EMAIL_PATTERN.match(email):
        raise ValueError("Invalid email format")

    return email


def validate_time_of_day(value: Optional[str]) -> Optional[str]:
    """
    Validate a 24h clock time and normalise it to zero-padded HH:MM.

    "9:05" -> "09:05". Zero padding keeps stored values sortable as text.

    Raises:
        ValueError: If the value is not H:MM or HH:MM
    """
    if value is None:
        return value

    match = TIME_OF_DAY_PATTERN.match(value.strip())
    if not match:
        raise ValueError("Time must be in HH:MM format")

    hours, minutes = match.groups()
    return f"{int(hours):02d}:{minutes}"


def minutes_since_midnight(value: str) -> int:
    """Convert "HH:MM" (or "HH:MM:SS") to minutes after midnight; seconds are ignored"""
    parts = value.strip().split(":")
    return int(parts[0]) * 60 + int(parts[1])


def parse_positive_int(value: Optional[str]) -> Optional[int]:
    """Parse a path/query value as a positive integer; None when it is not one"""
    if value is None or not POSITIVE_INT_PATTERN.match(value):
        return None
    number = int(value)
    return number if 0 < number <= MAX_DB_INT else None


def parse_int(value: Optional[str]) -> Optional[int]:
    """Parse a query value as an ASCII integer (sign allowed); None when it is not one"""
    if value is None or not INT_PATTERN.match(value):
        return None
    return int(value)


def is_valid_month(month: int) -> bool:
    return 1 <= month <= 12


def is_valid_report_year(year: int) -> bool:
    return MIN_REPORT_YEAR <= year <= MAX_REPORT_YEAR
