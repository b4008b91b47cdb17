import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .domain.users.schemas import TokenUser
from .security_utils import verify_jwt_token
from .shared.errors import AppError, ErrorCode

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is reported in the API's own error envelope
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenUser:
    """
    Authenticate the request from its Bearer JWT.

    The token is trusted as-is (no database round trip); /api/auth/verify is
    the endpoint that re-reads the account.
    """
    if credentials is None or not credentials.credentials:
        raise AppError(401, ErrorCode.UNAUTHORIZED, "Authentication required")

    payload = verify_jwt_token(credentials.credentials)
    if payload is None:
        logger.warning("⚠️ Rejected request with invalid or expired token")
        raise AppError(401, ErrorCode.INVALID_TOKEN, "Invalid or expired token")

    try:
        return TokenUser(
            id=int(payload["sub"]),
            username=payload["username"],
            role=payload.get("role", "user"),
            hygienistId=payload.get("hygienistId"),
        )
    except (KeyError, TypeError, ValueError):
        logger.warning("⚠️ Rejected token with malformed claims")
        raise AppError(401, ErrorCode.INVALID_TOKEN, "Invalid or expired token")
