import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("ENVIRONMENT", "test")

from datetime import date  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from dental_visits.database import Base, get_db  # noqa: E402
from dental_visits.main import app  # noqa: E402
from dental_visits.models import Hygienist, Patient, User, VisitRecord  # noqa: E402
from dental_visits.security_utils import create_jwt_token, hash_password_bcrypt  # noqa: E402

TEST_PASSWORD = "password123"


@pytest.fixture
def engine():
    # One in-memory database per test, shared by every session through StaticPool
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def make_patient(db_session):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "patient_code": f"P{counter['n']:03d}",
            "name": f"患者{counter['n']}",
        }
        data.update(overrides)
        patient = Patient(**data)
        db_session.add(patient)
        db_session.commit()
        db_session.refresh(patient)
        return patient

    return _make


@pytest.fixture
def make_hygienist(db_session):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "staff_code": f"H{counter['n']:03d}",
            "name": f"衛生士{counter['n']}",
        }
        data.update(overrides)
        hygienist = Hygienist(**data)
        db_session.add(hygienist)
        db_session.commit()
        db_session.refresh(hygienist)
        return hygienist

    return _make


@pytest.fixture
def make_visit(db_session):
    def _make(patient, hygienist, visit_date=date(2024, 1, 15), start_time="09:00",
              end_time="10:00", status="completed", **extra):
        visit = VisitRecord(
            patient_id=patient.id,
            hygienist_id=hygienist.id,
            visit_date=visit_date,
            start_time=start_time,
            end_time=end_time,
            status=status,
            **extra,
        )
        db_session.add(visit)
        db_session.commit()
        db_session.refresh(visit)
        return visit

    return _make


@pytest.fixture
def user(db_session):
    account = User(username="admin", password_hash=hash_password_bcrypt(TEST_PASSWORD), role="admin")
    db_session.add(account)
    db_session.commit()
    db_session.refresh(account)
    return account


@pytest.fixture
def auth_headers(user):
    token = create_jwt_token({"sub": str(user.id), "username": user.username, "role": user.role})
    return {"Authorization": f"Bearer {token}"}
