"""Visit record router - FastAPI endpoints for visit record operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...shared.errors import ErrorCode
from ...shared.params import parse_entity_id, parse_report_params
from ...shared.responses import ApiResponse, MessageData, ok
from .schemas import MonthlyVisitOverview, VisitRecordCreate, VisitRecordResponse, VisitRecordUpdate
from .service import VisitRecordService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/visit-records",
    tags=["Visit Records"],
    dependencies=[Depends(get_current_user)],
)


def get_visit_record_service(db: Session = Depends(get_db)) -> VisitRecordService:
    """Dependency injection for VisitRecordService"""
    return VisitRecordService(db)


@router.get("", response_model=ApiResponse[list[VisitRecordResponse]])
async def get_visit_records(
    year: Optional[str] = Query(None),
    month: Optional[str] = Query(None),
    patientId: Optional[str] = Query(None),
    hygienistId: Optional[str] = Query(None),
    service: VisitRecordService = Depends(get_visit_record_service),
):
    """List visit records, optionally filtered by month, patient or hygienist"""
    period = None
    if year is not None or month is not None:
        _, period = parse_report_params(None, year, month, require_subject=False)

    patient_id = (
        parse_entity_id(patientId, ErrorCode.INVALID_PARAMETERS) if patientId is not None else None
    )
    hygienist_id = (
        parse_entity_id(hygienistId, ErrorCode.INVALID_PARAMETERS)
        if hygienistId is not None
        else None
    )

    records = service.get_visit_records(patient_id, hygienist_id, period)
    return ok([VisitRecordResponse.from_model(r) for r in records])


@router.get("/stats/monthly", response_model=ApiResponse[MonthlyVisitOverview])
async def get_monthly_overview(
    year: Optional[str] = Query(None),
    month: Optional[str] = Query(None),
    service: VisitRecordService = Depends(get_visit_record_service),
):
    """Completed-visit counts per patient and hygienist for a month"""
    _, period = parse_report_params(None, year, month, require_subject=False)
    return ok(service.get_monthly_overview(period))


@router.get("/{record_id}", response_model=ApiResponse[VisitRecordResponse])
async def get_visit_record(
    record_id: str,
    service: VisitRecordService = Depends(get_visit_record_service),
):
    """Get a specific visit record"""
    record = service.get_visit_record(parse_entity_id(record_id))
    return ok(VisitRecordResponse.from_model(record))


@router.post("", status_code=201, response_model=ApiResponse[VisitRecordResponse])
async def create_visit_record(
    data: VisitRecordCreate,
    service: VisitRecordService = Depends(get_visit_record_service),
):
    """Create a visit record"""
    return ok(VisitRecordResponse.from_model(service.create_visit_record(data)))


@router.put("/{record_id}", response_model=ApiResponse[VisitRecordResponse])
async def update_visit_record(
    record_id: str,
    data: VisitRecordUpdate,
    service: VisitRecordService = Depends(get_visit_record_service),
):
    """Update a visit record"""
    record = service.update_visit_record(parse_entity_id(record_id), data)
    return ok(VisitRecordResponse.from_model(record))


@router.delete("/{record_id}", response_model=ApiResponse[MessageData])
async def delete_visit_record(
    record_id: str,
    service: VisitRecordService = Depends(get_visit_record_service),
):
    """Delete a visit record"""
    return ok(service.delete_visit_record(parse_entity_id(record_id)))
