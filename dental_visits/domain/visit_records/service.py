"""Visit record service - Business logic for visit record operations"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...models import VISIT_STATUS_COMPLETED, VisitRecord
from ...shared.dates import month_bounds
from ...shared.errors import ErrorCode, bad_request, not_found
from ...shared.params import ReportPeriod
from ...shared.validators import minutes_since_midnight
from .repository import VisitRecordRepository
from .schemas import (
    VISIT_RECORD_FIELD_MAP,
    HygienistVisitCount,
    MonthlyVisitOverview,
    PatientVisitCount,
    VisitRecordCreate,
    VisitRecordResponse,
    VisitRecordUpdate,
)

logger = logging.getLogger(__name__)


class VisitRecordService:
    """Service layer for visit record business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = VisitRecordRepository()

    def get_visit_records(
        self,
        patient_id: Optional[int] = None,
        hygienist_id: Optional[int] = None,
        period: Optional[ReportPeriod] = None,
    ) -> list[VisitRecord]:
        date_range = month_bounds(period.year, period.month) if period else None
        return self.repo.get_visit_records(self.db, patient_id, hygienist_id, date_range)

    def get_visit_record(self, record_id: int) -> VisitRecord:
        record = self.repo.get_visit_record_by_id(self.db, record_id)
        if not record:
            raise not_found(ErrorCode.VISIT_RECORD_NOT_FOUND, "Visit record not found")
        return record

    def _check_references(self, patient_id: Optional[int], hygienist_id: Optional[int]) -> None:
        if patient_id is not None and not self.repo.patient_exists(self.db, patient_id):
            raise bad_request(ErrorCode.INVALID_INPUT, "Patient does not exist")
        if hygienist_id is not None and not self.repo.hygienist_exists(self.db, hygienist_id):
            raise bad_request(ErrorCode.INVALID_INPUT, "Hygienist does not exist")

    @staticmethod
    def _check_time_order(start_time: Optional[str], end_time: Optional[str]) -> None:
        if start_time and end_time:
            if minutes_since_midnight(end_time) <= minutes_since_midnight(start_time):
                raise bad_request(ErrorCode.INVALID_INPUT, "End time must be after start time")

    def create_visit_record(self, data: VisitRecordCreate) -> VisitRecord:
        """Create a visit record after checking references and time order"""
        self._check_references(data.patientId, data.hygienistId)
        self._check_time_order(data.startTime, data.endTime)

        record = self.repo.create_visit_record(
            self.db,
            **{VISIT_RECORD_FIELD_MAP[key]: value for key, value in data.model_dump().items()},
        )
        logger.info(
            f"✅ Visit record created: id={record.id} patient={record.patient_id} "
            f"hygienist={record.hygienist_id} date={record.visit_date}"
        )
        return self.get_visit_record(record.id)

    def update_visit_record(self, record_id: int, data: VisitRecordUpdate) -> VisitRecord:
        """Partial update; time order is checked against the merged row"""
        record = self.get_visit_record(record_id)
        supplied = data.model_dump(exclude_unset=True)

        self._check_references(supplied.get("patientId"), supplied.get("hygienistId"))
        self._check_time_order(
            supplied.get("startTime", record.start_time),
            supplied.get("endTime", record.end_time),
        )

        updates = {VISIT_RECORD_FIELD_MAP[key]: value for key, value in supplied.items()}
        self.repo.update_visit_record(self.db, record, **updates)
        return self.get_visit_record(record_id)

    def delete_visit_record(self, record_id: int) -> dict:
        record = self.get_visit_record(record_id)
        self.repo.delete_visit_record(self.db, record)
        logger.info(f"🗑️ Visit record deleted: id={record_id}")
        return {"message": "Visit record deleted successfully"}

    def get_monthly_overview(self, period: ReportPeriod) -> MonthlyVisitOverview:
        """Completed-visit counts per patient and per hygienist for one month"""
        start, end = month_bounds(period.year, period.month)
        records = self.repo.get_visit_records(self.db, date_range=(start, end))

        return MonthlyVisitOverview(
            year=period.year,
            month=period.month,
            totalCompletedVisits=sum(1 for r in records if r.status == VISIT_STATUS_COMPLETED),
            patientStats=[
                PatientVisitCount(patientId=pid, patientName=name, visitCount=count)
                for pid, name, count in self.repo.completed_counts_by_patient(self.db, start, end)
            ],
            hygienistStats=[
                HygienistVisitCount(hygienistId=hid, hygienistName=name, visitCount=count)
                for hid, name, count in self.repo.completed_counts_by_hygienist(self.db, start, end)
            ],
            records=[VisitRecordResponse.from_model(r) for r in records],
        )
