"""User service - Login, token issuance and account verification"""

import logging

from sqlalchemy.orm import Session

from ...models import User
from ...security_utils import create_jwt_token, hash_password_bcrypt, verify_password_bcrypt
from ...shared.errors import AppError, ErrorCode
from .repository import UserRepository
from .schemas import LoginRequest, LoginResponse, TokenUser, UserCreate, UserResponse

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for authentication"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def login(self, data: LoginRequest) -> LoginResponse:
        """Check credentials and issue a JWT"""
        user = self.repo.get_user_by_username(self.db, data.username)

        # Same error for unknown user and wrong password
        if not user or not verify_password_bcrypt(data.password, user.password_hash):
            logger.warning(f"⚠️ Failed login attempt for username: {data.username}")
            raise AppError(401, ErrorCode.INVALID_CREDENTIALS, "Invalid username or password")

        claims = {"sub": str(user.id), "username": user.username, "role": user.role}
        if user.hygienist_id is not None:
            claims["hygienistId"] = user.hygienist_id

        token = create_jwt_token(claims)
        logger.info(f"✅ User logged in: {user.username} (id={user.id})")
        return LoginResponse(token=token, user=UserResponse.from_model(user))

    def verify(self, current_user: TokenUser) -> UserResponse:
        """Re-read the account behind a valid token"""
        user = self.repo.get_user_by_id(self.db, current_user.id)
        if not user:
            raise AppError(401, ErrorCode.USER_NOT_FOUND, "User no longer exists")
        return UserResponse.from_model(user)

    def create_user(self, data: UserCreate) -> User:
        """Create an account with a bcrypt-hashed password"""
        if self.repo.get_user_by_username(self.db, data.username):
            raise AppError(409, ErrorCode.DUPLICATE_ENTRY, "Username already exists")

        return self.repo.create_user(
            self.db,
            username=data.username,
            password_hash=hash_password_bcrypt(data.password),
            role=data.role,
            hygienist_id=data.hygienistId,
        )
