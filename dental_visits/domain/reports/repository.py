"""Report repository - read-only queries behind the statistics"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...database import Base
from ...models import VisitRecord


class ReportRepository:
    """Queries parameterised by subject model (Patient or Hygienist) and its visit FK column"""

    @staticmethod
    def get_subject(db: Session, model: type[Base], subject_id: int) -> Optional[Base]:
        return db.query(model).filter(model.id == subject_id).first()

    @staticmethod
    def get_visits_for_subject(
        db: Session, fk_column, subject_id: int, start: date, end: date
    ) -> list[VisitRecord]:
        """Visits in [start, end) for one subject, by date then start time (untimed visits last)"""
        return (
            db.query(VisitRecord)
            .options(joinedload(VisitRecord.patient), joinedload(VisitRecord.hygienist))
            .filter(
                fk_column == subject_id,
                VisitRecord.visit_date >= start,
                VisitRecord.visit_date < end,
            )
            .order_by(VisitRecord.visit_date.asc(), VisitRecord.start_time.asc().nulls_last(), VisitRecord.id.asc())
            .all()
        )

    @staticmethod
    def get_active_subject_ids(
        db: Session, model: type[Base], fk_column, start: date, end: date
    ) -> list[int]:
        """Distinct subjects with at least one visit in [start, end), ordered by name"""
        rows = (
            db.query(model.id, model.name)
            .join(VisitRecord, fk_column == model.id)
            .filter(VisitRecord.visit_date >= start, VisitRecord.visit_date < end)
            .distinct()
            .order_by(model.name.asc(), model.id.asc())
            .all()
        )
        return [row[0] for row in rows]
