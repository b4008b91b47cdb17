"""Report domain schemas - monthly, yearly and comparison statistics"""

from datetime import date
from typing import Optional

from pydantic import BaseModel

from .stats import VisitTotals


class VisitCounts(BaseModel):
    """Counts and durations shared by every monthly stats payload"""

    year: int
    month: int
    totalVisits: int
    completedVisits: int
    cancelledVisits: int
    scheduledVisits: int
    totalHours: float
    averageVisitDuration: float

    @staticmethod
    def fields_from(totals: VisitTotals, year: int, month: int) -> dict:
        return {
            "year": year,
            "month": month,
            "totalVisits": totals.total_visits,
            "completedVisits": totals.completed_visits,
            "cancelledVisits": totals.cancelled_visits,
            "scheduledVisits": totals.scheduled_visits,
            "totalHours": totals.total_hours,
            "averageVisitDuration": totals.average_visit_duration,
        }


class VisitDetail(BaseModel):
    id: int
    visitDate: date
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    status: str
    cancellationReason: Optional[str] = None
    notes: Optional[str] = None
    duration: Optional[int] = None  # minutes; completed visits with both times only


class PatientVisitDetail(VisitDetail):
    hygienistName: str
    hygienistStaffId: Optional[str] = None


class HygienistVisitDetail(VisitDetail):
    patientName: str
    patientCode: Optional[str] = None


class PatientMonthlyStats(VisitCounts):
    patientId: int
    patientCode: str
    patientName: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    visitDetails: list[PatientVisitDetail]


class HygienistMonthlyStats(VisitCounts):
    hygienistId: int
    hygienistName: str
    staffId: str
    licenseNumber: Optional[str] = None
    visitDetails: list[HygienistVisitDetail]


class PatientComparisonReport(BaseModel):
    year: int
    month: int
    patients: list[PatientMonthlyStats]
    totalPatients: int
    averageVisitsPerPatient: float


class HygienistComparisonReport(BaseModel):
    year: int
    month: int
    hygienists: list[HygienistMonthlyStats]
    totalHygienists: int
    averageVisitsPerHygienist: float
