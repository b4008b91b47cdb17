from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

# Visit status values: scheduled → completed | cancelled
VISIT_STATUS_SCHEDULED = "scheduled"
VISIT_STATUS_COMPLETED = "completed"
VISIT_STATUS_CANCELLED = "cancelled"
VISIT_STATUSES = (VISIT_STATUS_SCHEDULED, VISIT_STATUS_COMPLETED, VISIT_STATUS_CANCELLED)

USER_ROLES = ("admin", "user")


class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    patient_code = Column(String(50), unique=True, index=True, nullable=False)  # e.g. P001
    name = Column(String(100), nullable=False, index=True)
    phone = Column(String(20), nullable=True)
    email = Column(String(100), nullable=True)
    address = Column(String(500), nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    visit_records = relationship("VisitRecord", back_populates="patient")


class Hygienist(Base):
    __tablename__ = "hygienists"

    id = Column(Integer, primary_key=True, index=True)
    staff_code = Column(String(50), unique=True, index=True, nullable=False)  # e.g. H001
    name = Column(String(100), nullable=False, index=True)
    license_number = Column(String(50), nullable=True)
    phone = Column(String(20), nullable=True)
    email = Column(String(100), nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    visit_records = relationship("VisitRecord", back_populates="hygienist")
    users = relationship("User", back_populates="hygienist")


class VisitRecord(Base):
    """One home visit by a hygienist to a patient on a calendar date"""

    __tablename__ = "visit_records"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    hygienist_id = Column(Integer, ForeignKey("hygienists.id"), nullable=False, index=True)

    visit_date = Column(Date, nullable=False, index=True)
    start_time = Column(String(5), nullable=True)  # HH:MM format
    end_time = Column(String(5), nullable=True)  # HH:MM format, after start_time when both set

    status = Column(String(20), default=VISIT_STATUS_COMPLETED, nullable=False, index=True)
    cancellation_reason = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    patient = relationship("Patient", back_populates="visit_records")
    hygienist = relationship("Hygienist", back_populates="visit_records")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), default="user", nullable=False)  # admin, user
    hygienist_id = Column(Integer, ForeignKey("hygienists.id"), nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    hygienist = relationship("Hygienist", back_populates="users")
