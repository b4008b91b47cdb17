"""Patient service - Business logic for patient operations"""

import logging

from sqlalchemy.orm import Session

from ...models import Patient
from ...shared.errors import AppError, ErrorCode, not_found
from .repository import PatientRepository
from .schemas import PATIENT_FIELD_MAP, PatientCreate, PatientUpdate

logger = logging.getLogger(__name__)


class PatientService:
    """Service layer for patient business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PatientRepository()

    def get_patients(self) -> list[Patient]:
        return self.repo.get_patients(self.db)

    def get_patient(self, patient_id: int) -> Patient:
        """Get a specific patient"""
        patient = self.repo.get_patient_by_id(self.db, patient_id)
        if not patient:
            raise not_found(ErrorCode.PATIENT_NOT_FOUND, "Patient not found")
        return patient

    def create_patient(self, data: PatientCreate) -> Patient:
        """Create a new patient, rejecting duplicate patient codes"""
        if self.repo.get_patient_by_code(self.db, data.patientId):
            raise AppError(409, ErrorCode.DUPLICATE_ENTRY, "Patient ID already exists")

        patient = self.repo.create_patient(
            self.db,
            patient_code=data.patientId,
            name=data.name,
            phone=data.phone,
            email=data.email,
            address=data.address,
        )
        logger.info(f"✅ Patient created: {patient.patient_code} (id={patient.id})")
        return patient

    def update_patient(self, patient_id: int, data: PatientUpdate) -> Patient:
        """Update only the fields present in the request body"""
        patient = self.get_patient(patient_id)

        supplied = data.model_dump(exclude_unset=True)
        new_code = supplied.get("patientId")
        if new_code and new_code != patient.patient_code:
            if self.repo.get_patient_by_code(self.db, new_code):
                raise AppError(409, ErrorCode.DUPLICATE_ENTRY, "Patient ID already exists")

        updates = {PATIENT_FIELD_MAP[key]: value for key, value in supplied.items()}
        return self.repo.update_patient(self.db, patient, **updates)

    def delete_patient(self, patient_id: int) -> dict:
        """Delete a patient that no visit record references"""
        patient = self.get_patient(patient_id)

        if self.repo.count_visit_records(self.db, patient_id) > 0:
            raise AppError(
                409,
                ErrorCode.HAS_DEPENDENCIES,
                "Cannot delete patient with existing visit records",
            )

        self.repo.delete_patient(self.db, patient)
        logger.info(f"🗑️ Patient deleted: id={patient_id}")
        return {"message": "Patient deleted successfully"}
