"""Visit record domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import MAX_DB_INT, validate_time_of_day

VisitStatus = Literal["scheduled", "completed", "cancelled"]


class VisitRecordCreate(BaseModel):
    """Schema for creating a visit record"""

    patientId: int = Field(..., gt=0, le=MAX_DB_INT)
    hygienistId: int = Field(..., gt=0, le=MAX_DB_INT)
    visitDate: date
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    status: VisitStatus = "completed"
    cancellationReason: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("startTime", "endTime")
    @classmethod
    def check_time(cls, v):
        return validate_time_of_day(v)


class VisitRecordUpdate(BaseModel):
    """
    Schema for a partial update.

    Omitted fields keep their stored value; an explicit null clears one of
    the optional fields (times, cancellation reason, notes).
    """

    patientId: Optional[int] = Field(None, gt=0, le=MAX_DB_INT)
    hygienistId: Optional[int] = Field(None, gt=0, le=MAX_DB_INT)
    visitDate: Optional[date] = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    status: Optional[VisitStatus] = None
    cancellationReason: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("patientId", "hygienistId", "visitDate", "status")
    @classmethod
    def required_when_present(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("startTime", "endTime")
    @classmethod
    def check_time(cls, v):
        return validate_time_of_day(v)


class PatientSummary(BaseModel):
    id: int
    patientId: str
    name: str


class HygienistSummary(BaseModel):
    id: int
    staffId: str
    name: str


class VisitRecordResponse(BaseModel):
    """Schema for visit record response"""

    id: int
    patientId: int
    hygienistId: int
    visitDate: date
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    status: str
    cancellationReason: Optional[str] = None
    notes: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    patient: Optional[PatientSummary] = None
    hygienist: Optional[HygienistSummary] = None

    @classmethod
    def from_model(cls, record) -> "VisitRecordResponse":
        patient = record.patient
        hygienist = record.hygienist
        return cls(
            id=record.id,
            patientId=record.patient_id,
            hygienistId=record.hygienist_id,
            visitDate=record.visit_date,
            startTime=record.start_time,
            endTime=record.end_time,
            status=record.status,
            cancellationReason=record.cancellation_reason,
            notes=record.notes,
            createdAt=record.created_at,
            updatedAt=record.updated_at,
            patient=(
                PatientSummary(id=patient.id, patientId=patient.patient_code, name=patient.name)
                if patient
                else None
            ),
            hygienist=(
                HygienistSummary(id=hygienist.id, staffId=hygienist.staff_code, name=hygienist.name)
                if hygienist
                else None
            ),
        )


class PatientVisitCount(BaseModel):
    patientId: int
    patientName: str
    visitCount: int


class HygienistVisitCount(BaseModel):
    hygienistId: int
    hygienistName: str
    visitCount: int


class MonthlyVisitOverview(BaseModel):
    """Month overview of completed visits across all patients and hygienists"""

    year: int
    month: int
    totalCompletedVisits: int
    patientStats: list[PatientVisitCount]
    hygienistStats: list[HygienistVisitCount]
    records: list[VisitRecordResponse]


VISIT_RECORD_FIELD_MAP = {
    "patientId": "patient_id",
    "hygienistId": "hygienist_id",
    "visitDate": "visit_date",
    "startTime": "start_time",
    "endTime": "end_time",
    "status": "status",
    "cancellationReason": "cancellation_reason",
    "notes": "notes",
}
