"""Hygienist service - Business logic for hygienist operations"""

import logging

from sqlalchemy.orm import Session

from ...models import Hygienist
from ...shared.errors import AppError, ErrorCode, not_found
from .repository import HygienistRepository
from .schemas import HYGIENIST_FIELD_MAP, HygienistCreate, HygienistUpdate

logger = logging.getLogger(__name__)


class HygienistService:
    """Service layer for hygienist business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = HygienistRepository()

    def get_hygienists(self) -> list[Hygienist]:
        return self.repo.get_hygienists(self.db)

    def get_hygienist(self, hygienist_id: int) -> Hygienist:
        hygienist = self.repo.get_hygienist_by_id(self.db, hygienist_id)
        if not hygienist:
            raise not_found(ErrorCode.HYGIENIST_NOT_FOUND, "Hygienist not found")
        return hygienist

    def create_hygienist(self, data: HygienistCreate) -> Hygienist:
        """Create a new hygienist, rejecting duplicate staff codes"""
        if self.repo.get_hygienist_by_code(self.db, data.staffId):
            raise AppError(409, ErrorCode.DUPLICATE_ENTRY, "Staff ID already exists")

        hygienist = self.repo.create_hygienist(
            self.db,
            staff_code=data.staffId,
            name=data.name,
            license_number=data.licenseNumber,
            phone=data.phone,
            email=data.email,
        )
        logger.info(f"✅ Hygienist created: {hygienist.staff_code} (id={hygienist.id})")
        return hygienist

    def update_hygienist(self, hygienist_id: int, data: HygienistUpdate) -> Hygienist:
        hygienist = self.get_hygienist(hygienist_id)

        supplied = data.model_dump(exclude_unset=True)
        new_code = supplied.get("staffId")
        if new_code and new_code != hygienist.staff_code:
            if self.repo.get_hygienist_by_code(self.db, new_code):
                raise AppError(409, ErrorCode.DUPLICATE_ENTRY, "Staff ID already exists")

        updates = {HYGIENIST_FIELD_MAP[key]: value for key, value in supplied.items()}
        return self.repo.update_hygienist(self.db, hygienist, **updates)

    def delete_hygienist(self, hygienist_id: int) -> dict:
        """Delete a hygienist no visit record or user account references"""
        hygienist = self.get_hygienist(hygienist_id)

        visits, users = self.repo.count_dependencies(self.db, hygienist_id)
        if visits or users:
            raise AppError(
                409,
                ErrorCode.HAS_DEPENDENCIES,
                "Cannot delete hygienist with existing visit records or user accounts",
                details={"visitRecords": visits, "users": users},
            )

        self.repo.delete_hygienist(self.db, hygienist)
        logger.info(f"🗑️ Hygienist deleted: id={hygienist_id}")
        return {"message": "Hygienist deleted successfully"}
