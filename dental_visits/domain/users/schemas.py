"""User/auth domain schemas - Pydantic models for validation"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Schema for POST /auth/login"""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenUser(BaseModel):
    """Identity carried by a verified JWT"""

    id: int
    username: str
    role: str
    hygienistId: Optional[int] = None


class UserResponse(BaseModel):
    """Schema for user response (never carries the password hash)"""

    id: int
    username: str
    role: str
    hygienistId: Optional[int] = None

    @classmethod
    def from_model(cls, user) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            role=user.role,
            hygienistId=user.hygienist_id,
        )


class LoginResponse(BaseModel):
    token: str
    user: UserResponse


class UserCreate(BaseModel):
    """Schema for creating a user account"""

    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[a-zA-Z0-9]+$")
    password: str = Field(..., min_length=6, max_length=100)
    role: Literal["admin", "user"] = "user"
    hygienistId: Optional[int] = Field(None, gt=0)
