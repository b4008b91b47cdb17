"""Path/query parameter parsing that reports failures in the API error envelope"""

from typing import NamedTuple, Optional

from .errors import ErrorCode, bad_request
from .validators import is_valid_month, is_valid_report_year, parse_int, parse_positive_int


class ReportPeriod(NamedTuple):
    year: int
    month: Optional[int]


def parse_entity_id(value: Optional[str], code: str = ErrorCode.INVALID_ID) -> int:
    """Parse a positive integer id or raise 400 with the given code"""
    entity_id = parse_positive_int(value)
    if entity_id is None:
        raise bad_request(code, "ID must be a positive integer")
    return entity_id


def parse_report_params(
    subject_id: Optional[str],
    year: Optional[str],
    month: Optional[str],
    require_month: bool = True,
    require_subject: bool = True,
) -> tuple[Optional[int], ReportPeriod]:
    """
    Validate report parameters before anything touches the store.

    Order of checks:
        1. any required value missing or not an integer -> INVALID_PARAMETERS
        2. month outside 1-12 -> INVALID_MONTH
        3. year outside 2000-2100 -> INVALID_YEAR

    Returns:
        (subject id or None, ReportPeriod)
    """
    parsed_id = parse_positive_int(subject_id) if require_subject else None
    parsed_year = parse_int(year)
    parsed_month = parse_int(month) if require_month else None

    if (
        (require_subject and parsed_id is None)
        or parsed_year is None
        or (require_month and parsed_month is None)
    ):
        raise bad_request(ErrorCode.INVALID_PARAMETERS, "Invalid or missing parameters")

    if require_month and not is_valid_month(parsed_month):
        raise bad_request(ErrorCode.INVALID_MONTH, "Month must be between 1 and 12")

    if not is_valid_report_year(parsed_year):
        raise bad_request(ErrorCode.INVALID_YEAR, "Year must be between 2000 and 2100")

    return parsed_id, ReportPeriod(parsed_year, parsed_month)
