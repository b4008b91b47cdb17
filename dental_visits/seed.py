"""
Sample data loader
Usage: python -m dental_visits.seed
"""

import logging
import sys
from datetime import date

from sqlalchemy.orm import Session

from . import database
from .domain.hygienists.repository import HygienistRepository
from .domain.patients.repository import PatientRepository
from .domain.users.repository import UserRepository
from .domain.users.schemas import UserCreate
from .domain.users.service import UserService
from .models import VisitRecord

logger = logging.getLogger(__name__)

SAMPLE_PATIENTS = [
    {
        "patient_code": "P001",
        "name": "田中太郎",
        "phone": "090-1234-5678",
        "email": "tanaka@example.com",
        "address": "東京都渋谷区1-1-1",
    },
    {
        "patient_code": "P002",
        "name": "佐藤花子",
        "phone": "090-2345-6789",
        "email": "sato@example.com",
        "address": "東京都新宿区2-2-2",
    },
    {
        "patient_code": "P003",
        "name": "鈴木一郎",
        "phone": "090-3456-7890",
        "email": "suzuki@example.com",
        "address": "東京都品川区3-3-3",
    },
]

SAMPLE_HYGIENISTS = [
    {
        "staff_code": "H001",
        "name": "山田美咲",
        "license_number": "DH-12345",
        "phone": "080-1111-2222",
        "email": "yamada@clinic.com",
    },
    {
        "staff_code": "H002",
        "name": "高橋由美",
        "license_number": "DH-23456",
        "phone": "080-2222-3333",
        "email": "takahashi@clinic.com",
    },
    {
        "staff_code": "H003",
        "name": "伊藤健太",
        "license_number": "DH-34567",
        "phone": "080-3333-4444",
        "email": "ito@clinic.com",
    },
]

# (username, role, staff code of the linked hygienist)
SAMPLE_USERS = [
    ("admin", "admin", None),
    ("yamada", "user", "H001"),
    ("takahashi", "user", "H002"),
]
SAMPLE_PASSWORD = "password123"  # noqa: S105 - sample accounts only

# (patient code, staff code, date, start, end, status)
SAMPLE_VISITS = [
    ("P001", "H001", date(2024, 1, 15), "09:00", "10:00", "completed"),
    ("P002", "H001", date(2024, 1, 15), "10:30", "11:30", "completed"),
    ("P003", "H002", date(2024, 1, 16), "14:00", "15:00", "completed"),
    ("P001", "H002", date(2024, 1, 17), "09:00", "10:00", "scheduled"),
    ("P002", "H003", date(2024, 1, 18), "11:00", "12:00", "cancelled"),
]


def seed_database(db: Session) -> dict[str, int]:
    """
    Insert the sample rows, skipping any whose unique code already exists.
    Visits are only inserted into an empty visit_records table.

    Returns:
        Number of rows inserted per table
    """
    inserted = {"patients": 0, "hygienists": 0, "users": 0, "visit_records": 0}

    patients = {}
    for data in SAMPLE_PATIENTS:
        patient = PatientRepository.get_patient_by_code(db, data["patient_code"])
        if patient is None:
            patient = PatientRepository.create_patient(db, **data)
            inserted["patients"] += 1
        patients[patient.patient_code] = patient

    hygienists = {}
    for data in SAMPLE_HYGIENISTS:
        hygienist = HygienistRepository.get_hygienist_by_code(db, data["staff_code"])
        if hygienist is None:
            hygienist = HygienistRepository.create_hygienist(db, **data)
            inserted["hygienists"] += 1
        hygienists[hygienist.staff_code] = hygienist

    user_service = UserService(db)
    for username, role, staff_code in SAMPLE_USERS:
        if UserRepository.get_user_by_username(db, username):
            continue
        user_service.create_user(
            UserCreate(
                username=username,
                password=SAMPLE_PASSWORD,
                role=role,
                hygienistId=hygienists[staff_code].id if staff_code else None,
            )
        )
        inserted["users"] += 1

    if db.query(VisitRecord).count() == 0:
        for patient_code, staff_code, visit_date, start, end, status in SAMPLE_VISITS:
            db.add(
                VisitRecord(
                    patient_id=patients[patient_code].id,
                    hygienist_id=hygienists[staff_code].id,
                    visit_date=visit_date,
                    start_time=start,
                    end_time=end,
                    status=status,
                )
            )
            inserted["visit_records"] += 1
        db.commit()

    return inserted


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    database.init_engine()
    database.Base.metadata.create_all(bind=database.engine, checkfirst=True)

    db = database.SessionLocal()
    try:
        inserted = seed_database(db)
        logger.info(f"✅ Seed completed: {inserted}")
    except Exception as e:
        db.rollback()
        logger.error(f"❌ Seed failed: {e}")
        sys.exit(1)
    finally:
        db.close()
        database.dispose_engine()


if __name__ == "__main__":
    main()
