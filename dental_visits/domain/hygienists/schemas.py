"""Hygienist domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_email, validate_phone


class HygienistCreate(BaseModel):
    """Schema for creating a new hygienist"""

    staffId: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    licenseNumber: Optional[str] = Field(None, max_length=50)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=100)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        return validate_phone(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)


class HygienistUpdate(BaseModel):
    """Schema for updating an existing hygienist"""

    staffId: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    licenseNumber: Optional[str] = Field(None, max_length=50)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=100)

    @field_validator("staffId", "name")
    @classmethod
    def required_when_present(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        return validate_phone(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)


class HygienistResponse(BaseModel):
    """Schema for hygienist response"""

    id: int
    staffId: str
    name: str
    licenseNumber: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, hygienist) -> "HygienistResponse":
        return cls(
            id=hygienist.id,
            staffId=hygienist.staff_code,
            name=hygienist.name,
            licenseNumber=hygienist.license_number,
            phone=hygienist.phone,
            email=hygienist.email,
            createdAt=hygienist.created_at,
            updatedAt=hygienist.updated_at,
        )


HYGIENIST_FIELD_MAP = {
    "staffId": "staff_code",
    "name": "name",
    "licenseNumber": "license_number",
    "phone": "phone",
    "email": "email",
}
