"""Hygienist router - FastAPI endpoints for hygienist operations"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...shared.params import parse_entity_id
from ...shared.responses import ApiResponse, MessageData, ok
from .schemas import HygienistCreate, HygienistResponse, HygienistUpdate
from .service import HygienistService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/hygienists",
    tags=["Hygienists"],
    dependencies=[Depends(get_current_user)],
)


def get_hygienist_service(db: Session = Depends(get_db)) -> HygienistService:
    """Dependency injection for HygienistService"""
    return HygienistService(db)


@router.get("", response_model=ApiResponse[list[HygienistResponse]])
async def get_hygienists(service: HygienistService = Depends(get_hygienist_service)):
    """Get all hygienists"""
    return ok([HygienistResponse.from_model(h) for h in service.get_hygienists()])


@router.get("/{hygienist_id}", response_model=ApiResponse[HygienistResponse])
async def get_hygienist(hygienist_id: str, service: HygienistService = Depends(get_hygienist_service)):
    """Get a specific hygienist"""
    hygienist = service.get_hygienist(parse_entity_id(hygienist_id))
    return ok(HygienistResponse.from_model(hygienist))


@router.post("", status_code=201, response_model=ApiResponse[HygienistResponse])
async def create_hygienist(
    data: HygienistCreate,
    service: HygienistService = Depends(get_hygienist_service),
):
    """Create a new hygienist"""
    return ok(HygienistResponse.from_model(service.create_hygienist(data)))


@router.put("/{hygienist_id}", response_model=ApiResponse[HygienistResponse])
async def update_hygienist(
    hygienist_id: str,
    data: HygienistUpdate,
    service: HygienistService = Depends(get_hygienist_service),
):
    """Update a hygienist"""
    hygienist = service.update_hygienist(parse_entity_id(hygienist_id), data)
    return ok(HygienistResponse.from_model(hygienist))


@router.delete("/{hygienist_id}", response_model=ApiResponse[MessageData])
async def delete_hygienist(hygienist_id: str, service: HygienistService = Depends(get_hygienist_service)):
    """Delete a hygienist"""
    return ok(service.delete_hygienist(parse_entity_id(hygienist_id)))
