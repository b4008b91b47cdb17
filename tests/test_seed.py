from dental_visits.domain.reports.service import PatientReportService
from dental_visits.models import Patient, User, VisitRecord
from dental_visits.security_utils import verify_password_bcrypt
from dental_visits.seed import SAMPLE_PASSWORD, seed_database


def test_seed_inserts_sample_data_once(db_session):
    first = seed_database(db_session)
    second = seed_database(db_session)

    assert first == {"patients": 3, "hygienists": 3, "users": 3, "visit_records": 5}
    assert second == {"patients": 0, "hygienists": 0, "users": 0, "visit_records": 0}
    assert db_session.query(VisitRecord).count() == 5


def test_seeded_accounts_and_january_report(db_session):
    seed_database(db_session)

    yamada = db_session.query(User).filter(User.username == "yamada").one()
    assert verify_password_bcrypt(SAMPLE_PASSWORD, yamada.password_hash)
    assert yamada.hygienist.staff_code == "H001"

    tanaka = db_session.query(Patient).filter(Patient.patient_code == "P001").one()
    stats = PatientReportService(db_session).get_monthly_stats(tanaka.id, 2024, 1)
    assert (stats.totalVisits, stats.completedVisits, stats.scheduledVisits) == (2, 1, 1)
    assert stats.totalHours == 1
