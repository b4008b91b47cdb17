"""Visit record repository - Database operations for visit records"""

from datetime import date
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Query, Session, joinedload

from ...models import VISIT_STATUS_COMPLETED, Hygienist, Patient, VisitRecord


class VisitRecordRepository:
    """Repository for visit record database operations"""

    @staticmethod
    def _base_query(db: Session) -> Query:
        return db.query(VisitRecord).options(
            joinedload(VisitRecord.patient),
            joinedload(VisitRecord.hygienist),
        )

    @staticmethod
    def get_visit_records(
        db: Session,
        patient_id: Optional[int] = None,
        hygienist_id: Optional[int] = None,
        date_range: Optional[tuple[date, date]] = None,
    ) -> list[VisitRecord]:
        """
        Get visit records with optional filters.

        A month-only filter lists the month chronologically (date, start time);
        every other combination lists newest first.
        """
        query = VisitRecordRepository._base_query(db)

        if patient_id is not None:
            query = query.filter(VisitRecord.patient_id == patient_id)
        if hygienist_id is not None:
            query = query.filter(VisitRecord.hygienist_id == hygienist_id)
        if date_range is not None:
            start, end = date_range
            query = query.filter(VisitRecord.visit_date >= start, VisitRecord.visit_date < end)

        if date_range is not None and patient_id is None and hygienist_id is None:
            query = query.order_by(VisitRecord.visit_date.asc(), VisitRecord.start_time.asc())
        else:
            query = query.order_by(VisitRecord.visit_date.desc(), VisitRecord.start_time.desc())

        return query.all()

    @staticmethod
    def get_visit_record_by_id(db: Session, record_id: int) -> Optional[VisitRecord]:
        return VisitRecordRepository._base_query(db).filter(VisitRecord.id == record_id).first()

    @staticmethod
    def create_visit_record(db: Session, **record_data) -> VisitRecord:
        """Create a new visit record"""
        record = VisitRecord(**record_data)
        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    @staticmethod
    def update_visit_record(db: Session, record: VisitRecord, **updates) -> VisitRecord:
        """Apply updates; None clears optional columns"""
        for key, value in updates.items():
            if hasattr(record, key):
                setattr(record, key, value)

        db.commit()
        db.refresh(record)
        return record

    @staticmethod
    def delete_visit_record(db: Session, record: VisitRecord) -> None:
        db.delete(record)
        db.commit()

    @staticmethod
    def patient_exists(db: Session, patient_id: int) -> bool:
        return db.query(Patient.id).filter(Patient.id == patient_id).first() is not None

    @staticmethod
    def hygienist_exists(db: Session, hygienist_id: int) -> bool:
        return db.query(Hygienist.id).filter(Hygienist.id == hygienist_id).first() is not None

    @staticmethod
    def completed_counts_by_patient(db: Session, start: date, end: date) -> list[tuple]:
        """(patient id, patient name, completed visits) for the period, busiest first"""
        return (
            db.query(Patient.id, Patient.name, func.count(VisitRecord.id))
            .join(VisitRecord, VisitRecord.patient_id == Patient.id)
            .filter(
                VisitRecord.visit_date >= start,
                VisitRecord.visit_date < end,
                VisitRecord.status == VISIT_STATUS_COMPLETED,
            )
            .group_by(Patient.id, Patient.name)
            .order_by(func.count(VisitRecord.id).desc(), Patient.name.asc())
            .all()
        )

    @staticmethod
    def completed_counts_by_hygienist(db: Session, start: date, end: date) -> list[tuple]:
        """(hygienist id, hygienist name, completed visits) for the period, busiest first"""
        return (
            db.query(Hygienist.id, Hygienist.name, func.count(VisitRecord.id))
            .join(VisitRecord, VisitRecord.hygienist_id == Hygienist.id)
            .filter(
                VisitRecord.visit_date >= start,
                VisitRecord.visit_date < end,
                VisitRecord.status == VISIT_STATUS_COMPLETED,
            )
            .group_by(Hygienist.id, Hygienist.name)
            .order_by(func.count(VisitRecord.id).desc(), Hygienist.name.asc())
            .all()
        )
