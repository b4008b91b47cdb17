"""Patient domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_email, validate_phone


class PatientCreate(BaseModel):
    """Schema for creating a new patient"""

    patientId: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=100)
    address: Optional[str] = Field(None, max_length=500)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        return validate_phone(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)


class PatientUpdate(BaseModel):
    """Schema for updating an existing patient (only supplied fields change)"""

    patientId: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=100)
    address: Optional[str] = Field(None, max_length=500)

    @field_validator("patientId", "name")
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


class PatientResponse(BaseModel):
    """Schema for patient response"""

    id: int
    patientId: str
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, patient) -> "PatientResponse":
        return cls(
            id=patient.id,
            patientId=patient.patient_code,
            name=patient.name,
            phone=patient.phone,
            email=patient.email,
            address=patient.address,
            createdAt=patient.created_at,
            updatedAt=patient.updated_at,
        )


# API field name -> column name
PATIENT_FIELD_MAP = {
    "patientId": "patient_code",
    "name": "name",
    "phone": "phone",
    "email": "email",
    "address": "address",
}
