"""Patient router - FastAPI endpoints for patient operations"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...shared.params import parse_entity_id
from ...shared.responses import ApiResponse, MessageData, ok
from .schemas import PatientCreate, PatientResponse, PatientUpdate
from .service import PatientService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/patients",
    tags=["Patients"],
    dependencies=[Depends(get_current_user)],
)


def get_patient_service(db: Session = Depends(get_db)) -> PatientService:
    """Dependency injection for PatientService"""
    return PatientService(db)


@router.get("", response_model=ApiResponse[list[PatientResponse]])
async def get_patients(service: PatientService = Depends(get_patient_service)):
    """Get all patients"""
    return ok([PatientResponse.from_model(p) for p in service.get_patients()])


@router.get("/{patient_id}", response_model=ApiResponse[PatientResponse])
async def get_patient(patient_id: str, service: PatientService = Depends(get_patient_service)):
    """Get a specific patient"""
    patient = service.get_patient(parse_entity_id(patient_id))
    return ok(PatientResponse.from_model(patient))


@router.post("", status_code=201, response_model=ApiResponse[PatientResponse])
async def create_patient(
    data: PatientCreate,
    service: PatientService = Depends(get_patient_service),
):
    """Create a new patient"""
    return ok(PatientResponse.from_model(service.create_patient(data)))


@router.put("/{patient_id}", response_model=ApiResponse[PatientResponse])
async def update_patient(
    patient_id: str,
    data: PatientUpdate,
    service: PatientService = Depends(get_patient_service),
):
    """Update a patient"""
    patient = service.update_patient(parse_entity_id(patient_id), data)
    return ok(PatientResponse.from_model(patient))


@router.delete("/{patient_id}", response_model=ApiResponse[MessageData])
async def delete_patient(patient_id: str, service: PatientService = Depends(get_patient_service)):
    """Delete a patient"""
    return ok(service.delete_patient(parse_entity_id(patient_id)))
