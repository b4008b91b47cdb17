"""Patient repository - Database operations for patients"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Patient, VisitRecord


class PatientRepository:
    """Repository for patient database operations"""

    @staticmethod
    def get_patients(db: Session) -> list[Patient]:
        """Get all patients, newest first"""
        return db.query(Patient).order_by(Patient.created_at.desc(), Patient.id.desc()).all()

    @staticmethod
    def get_patient_by_id(db: Session, patient_id: int) -> Optional[Patient]:
        return db.query(Patient).filter(Patient.id == patient_id).first()

    @staticmethod
    def get_patient_by_code(db: Session, patient_code: str) -> Optional[Patient]:
        return db.query(Patient).filter(Patient.patient_code == patient_code).first()

    @staticmethod
    def create_patient(db: Session, **patient_data) -> Patient:
        """Create a new patient"""
        patient = Patient(**patient_data)
        db.add(patient)
        db.commit()
        db.refresh(patient)
        return patient

    @staticmethod
    def update_patient(db: Session, patient: Patient, **updates) -> Patient:
        """Update a patient with the provided fields (None clears optional columns)"""
        for key, value in updates.items():
            if hasattr(patient, key):
                setattr(patient, key, value)

        db.commit()
        db.refresh(patient)
        return patient

    @staticmethod
    def count_visit_records(db: Session, patient_id: int) -> int:
        return db.query(VisitRecord).filter(VisitRecord.patient_id == patient_id).count()

    @staticmethod
    def delete_patient(db: Session, patient: Patient) -> None:
        """Delete a patient"""
        db.delete(patient)
        db.commit()
