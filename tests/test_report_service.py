from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from dental_visits.domain.reports.repository import ReportRepository
from dental_visits.domain.reports.service import (
    HygienistReportService,
    PatientReportService,
    ReportService,
    StatsRetrievalError,
)
from dental_visits.domain.reports.stats import ratio_half_up, tally, visit_duration


# --- arithmetic ---


def test_visit_duration_only_for_completed_visits_with_both_times():
    assert visit_duration("completed", "09:00", "10:30") == 90
    assert visit_duration("completed", "09:00", None) is None
    assert visit_duration("completed", None, "10:00") is None
    assert visit_duration("scheduled", "09:00", "10:00") is None
    assert visit_duration("cancelled", "09:00", "10:00") is None


def test_ratio_rounds_half_up():
    assert ratio_half_up(1, 8) == 0.13  # 0.125
    assert ratio_half_up(35, 3) == 11.67
    assert ratio_half_up(5, 60) == 0.08
    assert ratio_half_up(2, 3, places=0) == 1


def test_ratio_with_zero_denominator_is_zero():
    assert ratio_half_up(120, 0) == 0


def test_tally_counts_statuses_and_sums_durations():
    totals = tally([("completed", 60), ("completed", None), ("cancelled", None), ("scheduled", None)])

    assert (totals.completed_visits, totals.cancelled_visits, totals.scheduled_visits) == (2, 1, 1)
    assert totals.total_visits == 4
    assert totals.total_minutes == 60
    assert totals.average_visit_duration == 30.0


# --- monthly aggregation ---


def test_monthly_scenario_two_completed_one_cancelled(db_session, make_patient, make_hygienist, make_visit):
    patient = make_patient()
    hygienist = make_hygienist()
    make_visit(patient, hygienist, date(2024, 1, 10), "09:00", "10:00", "completed")
    make_visit(patient, hygienist, date(2024, 1, 20), "14:00", "15:30", "completed")
    make_visit(patient, hygienist, date(2024, 1, 25), "09:00", "10:00", "cancelled")

    stats = PatientReportService(db_session).get_monthly_stats(patient.id, 2024, 1)

    assert stats.totalVisits == 3
    assert stats.completedVisits == 2
    assert stats.cancelledVisits == 1
    assert stats.scheduledVisits == 0
    assert stats.totalHours == 2.5
    assert stats.averageVisitDuration == 75


def test_total_visits_is_sum_of_status_buckets(db_session, make_patient, make_hygienist, make_visit):
    patient = make_patient()
    hygienist = make_hygienist()
    for status in ["completed", "scheduled", "scheduled", "cancelled", "completed"]:
        make_visit(patient, hygienist, status=status)

    stats = PatientReportService(db_session).get_monthly_stats(patient.id, 2024, 1)

    assert stats.totalVisits == stats.completedVisits + stats.cancelledVisits + stats.scheduledVisits
    assert (stats.completedVisits, stats.cancelledVisits, stats.scheduledVisits) == (2, 1, 2)


def test_average_is_zero_without_completed_visits(db_session, make_patient, make_hygienist, make_visit):
    patient = make_patient()
    hygienist = make_hygienist()
    make_visit(patient, hygienist, status="scheduled")
    make_visit(patient, hygienist, status="cancelled")

    stats = PatientReportService(db_session).get_monthly_stats(patient.id, 2024, 1)

    assert stats.averageVisitDuration == 0
    assert stats.totalHours == 0
    assert all(detail.duration is None for detail in stats.visitDetails)


def test_total_hours_counts_completed_visits_with_both_times(
    db_session, make_patient, make_hygienist, make_visit
):
    patient = make_patient()
    hygienist = make_hygienist()
    make_visit(patient, hygienist, start_time="09:00", end_time="09:50")
    make_visit(patient, hygienist, start_time="10:00", end_time="10:35")
    make_visit(patient, hygienist, start_time="11:00", end_time=None)
    make_visit(patient, hygienist, start_time="13:00", end_time="14:00", status="scheduled")

    stats = PatientReportService(db_session).get_monthly_stats(patient.id, 2024, 1)

    assert stats.totalHours == round(85 / 60, 2)
    # Missing end time still counts as a completed visit
    assert stats.completedVisits == 3
    assert stats.averageVisitDuration == 28.33


def test_subject_without_visits_gets_zeroed_stats(db_session, make_patient):
    patient = make_patient()

    stats = PatientReportService(db_session).get_monthly_stats(patient.id, 2024, 1)

    assert stats.totalVisits == 0
    assert stats.visitDetails == []
    assert stats.patientCode == patient.patient_code


def test_unknown_subject_returns_none(db_session):
    assert PatientReportService(db_session).get_monthly_stats(999999, 2024, 1) is None
    assert HygienistReportService(db_session).get_monthly_stats(999999, 2024, 1) is None


def test_only_requested_month_is_counted(db_session, make_patient, make_hygienist, make_visit):
    patient = make_patient()
    hygienist = make_hygienist()
    make_visit(patient, hygienist, date(2023, 12, 31))
    make_visit(patient, hygienist, date(2024, 1, 1))
    make_visit(patient, hygienist, date(2024, 1, 31))
    make_visit(patient, hygienist, date(2024, 2, 1))

    stats = PatientReportService(db_session).get_monthly_stats(patient.id, 2024, 1)

    assert stats.totalVisits == 2
    assert [d.visitDate for d in stats.visitDetails] == [date(2024, 1, 1), date(2024, 1, 31)]


def test_details_ordered_by_date_then_start_time(db_session, make_patient, make_hygienist, make_visit):
    patient = make_patient()
    hygienist = make_hygienist(name="山田美咲", staff_code="H100")
    late = make_visit(patient, hygienist, date(2024, 1, 15), "14:00", "15:00")
    early = make_visit(patient, hygienist, date(2024, 1, 15), "09:00", "10:00")
    first_day = make_visit(patient, hygienist, date(2024, 1, 3), "16:00", "17:00")

    stats = PatientReportService(db_session).get_monthly_stats(patient.id, 2024, 1)

    assert [d.id for d in stats.visitDetails] == [first_day.id, early.id, late.id]
    assert stats.visitDetails[0].hygienistName == "山田美咲"
    assert stats.visitDetails[0].hygienistStaffId == "H100"
    assert stats.visitDetails[0].duration == 60


def test_untimed_visits_follow_timed_ones_on_the_same_day(db_session, make_patient, make_hygienist, make_visit):
    patient, hygienist = make_patient(), make_hygienist()
    untimed = make_visit(patient, hygienist, date(2024, 1, 15), None, None, status="scheduled")
    afternoon = make_visit(patient, hygienist, date(2024, 1, 15), "14:00", "15:00")
    morning = make_visit(patient, hygienist, date(2024, 1, 15), "09:00", "10:00")

    stats = PatientReportService(db_session).get_monthly_stats(patient.id, 2024, 1)

    assert [d.id for d in stats.visitDetails] == [morning.id, afternoon.id, untimed.id]


def test_report_service_needs_subject_hooks(db_session):
    with pytest.raises(TypeError):
        ReportService(db_session)


def test_blank_counterpart_name_is_reported_as_unset(db_session, make_patient, make_hygienist, make_visit):
    patient = make_patient()
    hygienist = make_hygienist(name="")
    make_visit(patient, hygienist)

    stats = PatientReportService(db_session).get_monthly_stats(patient.id, 2024, 1)

    assert stats.visitDetails[0].hygienistName == "未設定"


def test_hygienist_stats_carry_patient_details(db_session, make_patient, make_hygienist, make_visit):
    patient = make_patient(name="田中太郎", patient_code="P001")
    hygienist = make_hygienist(license_number="DH-12345")
    make_visit(patient, hygienist, start_time="09:00", end_time="10:00")

    stats = HygienistReportService(db_session).get_monthly_stats(hygienist.id, 2024, 1)

    assert stats.hygienistId == hygienist.id
    assert stats.staffId == hygienist.staff_code
    assert stats.licenseNumber == "DH-12345"
    assert stats.visitDetails[0].patientName == "田中太郎"
    assert stats.visitDetails[0].patientCode == "P001"
    assert stats.totalHours == 1


def test_aggregation_is_idempotent(db_session, make_patient, make_hygienist, make_visit):
    patient = make_patient()
    hygienist = make_hygienist()
    make_visit(patient, hygienist, start_time="09:00", end_time="09:45")
    make_visit(patient, hygienist, status="cancelled", cancellation_reason="体調不良")

    service = PatientReportService(db_session)
    first = service.get_monthly_stats(patient.id, 2024, 1)
    second = service.get_monthly_stats(patient.id, 2024, 1)

    assert first == second


# --- comparison / yearly ---


def test_comparison_for_empty_month(db_session):
    report = PatientReportService(db_session).get_comparison_report(2024, 3)

    assert report.totalPatients == 0
    assert report.patients == []
    assert report.averageVisitsPerPatient == 0


def test_comparison_lists_active_subjects_by_name(db_session, make_patient, make_hygienist, make_visit):
    hygienist = make_hygienist()
    busy = make_patient(name="B患者")
    quiet = make_patient(name="A患者")
    make_patient(name="C患者")  # no visits
    for _ in range(3):
        make_visit(busy, hygienist)
    make_visit(quiet, hygienist)
    make_visit(quiet, hygienist, date(2024, 2, 1))

    report = PatientReportService(db_session).get_comparison_report(2024, 1)

    assert [p.patientName for p in report.patients] == ["A患者", "B患者"]
    assert report.totalPatients == 2
    assert report.averageVisitsPerPatient == 2


def test_hygienist_comparison_average(db_session, make_patient, make_hygienist, make_visit):
    patient = make_patient()
    first = make_hygienist()
    second = make_hygienist()
    third = make_hygienist()
    make_visit(patient, first)
    make_visit(patient, second)
    make_visit(patient, second)
    make_visit(patient, third)
    make_visit(patient, third)

    report = HygienistReportService(db_session).get_comparison_report(2024, 1)

    assert report.totalHygienists == 3
    assert report.averageVisitsPerHygienist == 1.67


def test_yearly_keeps_months_with_visits(db_session, make_patient, make_hygienist, make_visit):
    patient = make_patient()
    hygienist = make_hygienist()
    make_visit(patient, hygienist, date(2024, 1, 15))
    make_visit(patient, hygienist, date(2024, 5, 2), status="scheduled")
    make_visit(patient, hygienist, date(2025, 1, 15))

    months = PatientReportService(db_session).get_yearly_stats(patient.id, 2024)

    assert [m.month for m in months] == [1, 5]
    assert all(m.year == 2024 for m in months)


def test_yearly_for_unknown_subject_is_empty(db_session):
    assert PatientReportService(db_session).get_yearly_stats(999999, 2024) == []


def test_store_failure_is_wrapped(db_session, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection lost"))

    monkeypatch.setattr(ReportRepository, "get_subject", staticmethod(broken))

    with pytest.raises(StatsRetrievalError):
        PatientReportService(db_session).get_monthly_stats(1, 2024, 1)
