"""Auth router - login, logout and token verification"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...shared.responses import ApiResponse, MessageData, ok
from .schemas import LoginRequest, LoginResponse, TokenUser, UserResponse
from .service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency injection for UserService"""
    return UserService(db)


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(data: LoginRequest, service: UserService = Depends(get_user_service)):
    """Exchange username/password for a JWT"""
    return ok(service.login(data))


@router.post("/logout", response_model=ApiResponse[MessageData])
async def logout():
    """Tokens are stateless; the client discards its copy"""
    return ok(MessageData(message="Logged out successfully"))


@router.get("/verify", response_model=ApiResponse[UserResponse])
async def verify(
    current_user: TokenUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Confirm the token still maps to an existing account"""
    return ok(service.verify(current_user))
