"""Hygienist repository - Database operations for hygienists"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Hygienist, User, VisitRecord


class HygienistRepository:
    """Repository for hygienist database operations"""

    @staticmethod
    def get_hygienists(db: Session) -> list[Hygienist]:
        return db.query(Hygienist).order_by(Hygienist.created_at.desc(), Hygienist.id.desc()).all()

    @staticmethod
    def get_hygienist_by_id(db: Session, hygienist_id: int) -> Optional[Hygienist]:
        return db.query(Hygienist).filter(Hygienist.id == hygienist_id).first()

    @staticmethod
    def get_hygienist_by_code(db: Session, staff_code: str) -> Optional[Hygienist]:
        return db.query(Hygienist).filter(Hygienist.staff_code == staff_code).first()

    @staticmethod
    def create_hygienist(db: Session, **hygienist_data) -> Hygienist:
        """Create a new hygienist"""
        hygienist = Hygienist(**hygienist_data)
        db.add(hygienist)
        db.commit()
        db.refresh(hygienist)
        return hygienist

    @staticmethod
    def update_hygienist(db: Session, hygienist: Hygienist, **updates) -> Hygienist:
        for key, value in updates.items():
            if hasattr(hygienist, key):
                setattr(hygienist, key, value)

        db.commit()
        db.refresh(hygienist)
        return hygienist

    @staticmethod
    def count_dependencies(db: Session, hygienist_id: int) -> tuple[int, int]:
        """Return (visit record count, user account count) referencing the hygienist"""
        visits = db.query(VisitRecord).filter(VisitRecord.hygienist_id == hygienist_id).count()
        users = db.query(User).filter(User.hygienist_id == hygienist_id).count()
        return visits, users

    @staticmethod
    def delete_hygienist(db: Session, hygienist: Hygienist) -> None:
        db.delete(hygienist)
        db.commit()
