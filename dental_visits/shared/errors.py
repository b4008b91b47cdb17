"""Application error type and the error codes returned in the response envelope"""

from typing import Any, Optional


class ErrorCode:
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_PARAMETERS = "INVALID_PARAMETERS"
    INVALID_MONTH = "INVALID_MONTH"
    INVALID_YEAR = "INVALID_YEAR"
    INVALID_ID = "INVALID_ID"
    INVALID_INPUT = "INVALID_INPUT"

    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    USER_NOT_FOUND = "USER_NOT_FOUND"

    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    PATIENT_NOT_FOUND = "PATIENT_NOT_FOUND"
    HYGIENIST_NOT_FOUND = "HYGIENIST_NOT_FOUND"
    VISIT_RECORD_NOT_FOUND = "VISIT_RECORD_NOT_FOUND"

    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    HAS_DEPENDENCIES = "HAS_DEPENDENCIES"

    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class AppError(Exception):
    """
    Raised anywhere below the router layer; rendered by the registered
    exception handler as {"success": false, "error": {...}}.
    """

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Optional[Any] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        error = {"code": self.code, "message": self.message}
        if self.details is not None:
            error["details"] = self.details
        return {"success": False, "error": error}


def not_found(code: str, message: str) -> AppError:
    return AppError(404, code, message)


def bad_request(code: str, message: str, details: Optional[Any] = None) -> AppError:
    return AppError(400, code, message, details)
