"""
Report service - monthly, yearly and comparison statistics.

ReportService holds the aggregation; PatientReportService and
HygienistReportService only say which side of the visit record is the
subject and how the payloads are shaped.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Hygienist, Patient, VisitRecord
from ...shared.dates import month_bounds
from .repository import ReportRepository
from .schemas import (
    HygienistComparisonReport,
    HygienistMonthlyStats,
    HygienistVisitDetail,
    PatientComparisonReport,
    PatientMonthlyStats,
    PatientVisitDetail,
    VisitCounts,
)
from .stats import ratio_half_up, tally, visit_duration

logger = logging.getLogger(__name__)

UNASSIGNED_NAME = "未設定"


class StatsRetrievalError(Exception):
    """The store failed while computing statistics"""


class ReportService(ABC):
    """Aggregates visit records for one subject kind"""

    subject_model = None
    subject_fk_name = None  # VisitRecord column pointing at the subject
    subject_label = "subject"

    def __init__(self, db: Session):
        self.db = db
        self.repo = ReportRepository()

    @property
    def subject_fk(self):
        return getattr(VisitRecord, self.subject_fk_name)

    @abstractmethod
    def _detail(self, record: VisitRecord, duration: Optional[int]):
        """Per-visit detail payload"""

    @abstractmethod
    def _monthly_stats(self, subject, counts: dict, details: list):
        """Monthly stats payload for one subject"""

    @abstractmethod
    def _comparison(self, year: int, month: int, stats: list, average: float):
        """Comparison payload across subjects"""

    def get_monthly_stats(self, subject_id: int, year: int, month: int):
        """
        Monthly stats for one subject.

        Returns None when the subject does not exist. A subject with no
        visits in the month gets stats with every count at zero.

        Raises:
            StatsRetrievalError: If the store query fails
        """
        try:
            subject = self.repo.get_subject(self.db, self.subject_model, subject_id)
            if subject is None:
                return None

            start, end = month_bounds(year, month)
            records = self.repo.get_visits_for_subject(
                self.db, self.subject_fk, subject_id, start, end
            )
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to load {self.subject_label} {subject_id} visits for {year}-{month}: {e}")
            raise StatsRetrievalError(f"{self.subject_label} stats retrieval failed") from e

        durations = [visit_duration(r.status, r.start_time, r.end_time) for r in records]
        totals = tally(zip((r.status for r in records), durations))
        details = [self._detail(r, d) for r, d in zip(records, durations)]

        return self._monthly_stats(subject, VisitCounts.fields_from(totals, year, month), details)

    def get_yearly_stats(self, subject_id: int, year: int) -> list:
        """Months 1-12 of a year, keeping only months with at least one visit"""
        months = []
        for month in range(1, 13):
            stats = self.get_monthly_stats(subject_id, year, month)
            if stats is not None and stats.totalVisits > 0:
                months.append(stats)
        return months

    def get_comparison_report(self, year: int, month: int):
        """Monthly stats for every subject with a visit that month, ordered by name"""
        start, end = month_bounds(year, month)
        try:
            subject_ids = self.repo.get_active_subject_ids(
                self.db, self.subject_model, self.subject_fk, start, end
            )
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to list active {self.subject_label}s for {year}-{month}: {e}")
            raise StatsRetrievalError(f"{self.subject_label} comparison retrieval failed") from e

        stats = []
        for subject_id in subject_ids:
            subject_stats = self.get_monthly_stats(subject_id, year, month)
            # Subject deleted between the two queries
            if subject_stats is not None:
                stats.append(subject_stats)

        average = ratio_half_up(sum(s.totalVisits for s in stats), len(stats))
        return self._comparison(year, month, stats, average)


class PatientReportService(ReportService):
    subject_model = Patient
    subject_fk_name = "patient_id"
    subject_label = "patient"

    def _detail(self, record: VisitRecord, duration: Optional[int]) -> PatientVisitDetail:
        hygienist = record.hygienist
        return PatientVisitDetail(
            id=record.id,
            visitDate=record.visit_date,
            startTime=record.start_time,
            endTime=record.end_time,
            status=record.status,
            hygienistName=(hygienist.name if hygienist and hygienist.name else UNASSIGNED_NAME),
            hygienistStaffId=hygienist.staff_code if hygienist else None,
            cancellationReason=record.cancellation_reason,
            notes=record.notes,
            duration=duration,
        )

    def _monthly_stats(self, subject: Patient, counts: dict, details: list) -> PatientMonthlyStats:
        return PatientMonthlyStats(
            patientId=subject.id,
            patientCode=subject.patient_code,
            patientName=subject.name,
            phone=subject.phone,
            email=subject.email,
            address=subject.address,
            visitDetails=details,
            **counts,
        )

    def _comparison(self, year, month, stats, average) -> PatientComparisonReport:
        return PatientComparisonReport(
            year=year,
            month=month,
            patients=stats,
            totalPatients=len(stats),
            averageVisitsPerPatient=average,
        )


class HygienistReportService(ReportService):
    subject_model = Hygienist
    subject_fk_name = "hygienist_id"
    subject_label = "hygienist"

    def _detail(self, record: VisitRecord, duration: Optional[int]) -> HygienistVisitDetail:
        patient = record.patient
        return HygienistVisitDetail(
            id=record.id,
            visitDate=record.visit_date,
            startTime=record.start_time,
            endTime=record.end_time,
            status=record.status,
            patientName=(patient.name if patient and patient.name else UNASSIGNED_NAME),
            patientCode=patient.patient_code if patient else None,
            cancellationReason=record.cancellation_reason,
            notes=record.notes,
            duration=duration,
        )

    def _monthly_stats(self, subject: Hygienist, counts: dict, details: list) -> HygienistMonthlyStats:
        return HygienistMonthlyStats(
            hygienistId=subject.id,
            hygienistName=subject.name,
            staffId=subject.staff_code,
            licenseNumber=subject.license_number,
            visitDetails=details,
            **counts,
        )

    def _comparison(self, year, month, stats, average) -> HygienistComparisonReport:
        return HygienistComparisonReport(
            year=year,
            month=month,
            hygienists=stats,
            totalHygienists=len(stats),
            averageVisitsPerHygienist=average,
        )
