import csv
from datetime import date
from io import StringIO

from dental_visits.domain.reports.csv_export import (
    HYGIENIST_DETAIL_HEADER,
    PATIENT_DETAIL_HEADER,
    PATIENT_SUMMARY_HEADER,
    completion_rate,
    render_hygienist_report_csv,
    render_patient_report_csv,
)
from dental_visits.domain.reports.schemas import (
    HygienistMonthlyStats,
    HygienistVisitDetail,
    PatientMonthlyStats,
    PatientVisitDetail,
)


def patient_stats(**overrides):
    data = {
        "patientId": 1,
        "patientCode": "P001",
        "patientName": "田中太郎",
        "phone": "090-1234-5678",
        "email": None,
        "address": None,
        "year": 2024,
        "month": 1,
        "totalVisits": 3,
        "completedVisits": 2,
        "cancelledVisits": 1,
        "scheduledVisits": 0,
        "totalHours": 2.5,
        "averageVisitDuration": 75.0,
        "visitDetails": [
            PatientVisitDetail(
                id=1,
                visitDate=date(2024, 1, 5),
                startTime="09:00",
                endTime="10:00",
                status="completed",
                hygienistName="山田美咲",
                hygienistStaffId="H001",
                duration=60,
            ),
            PatientVisitDetail(
                id=2,
                visitDate=date(2024, 1, 15),
                startTime="14:00",
                endTime="15:30",
                status="completed",
                hygienistName="山田美咲",
                hygienistStaffId="H001",
                notes='玄関の鍵は "1234", 左側',
                duration=90,
            ),
            PatientVisitDetail(
                id=3,
                visitDate=date(2024, 1, 22),
                status="cancelled",
                hygienistName="高橋由美",
                cancellationReason="体調不良",
            ),
        ],
    }
    data.update(overrides)
    return PatientMonthlyStats(**data)


def parse(text):
    return list(csv.reader(StringIO(text)))


def test_patient_csv_layout():
    rows = parse(render_patient_report_csv(patient_stats()))

    assert rows[0] == ["患者名", "田中太郎"]
    assert rows[1] == ["患者ID", "P001"]
    assert rows[2] == ["電話番号", "090-1234-5678"]
    assert rows[3] == ["メールアドレス", ""]
    assert rows[4] == ["住所", ""]
    assert rows[5] == []
    assert rows[6] == PATIENT_SUMMARY_HEADER
    assert rows[8] == []
    assert rows[9] == PATIENT_DETAIL_HEADER
    assert len(rows) == 13


def test_patient_summary_row_round_trips_counts_and_hours():
    stats = patient_stats()
    summary = parse(render_patient_report_csv(stats))[7]

    assert summary[0] == "2024年1月"
    assert [int(v) for v in summary[1:5]] == [
        stats.totalVisits,
        stats.completedVisits,
        stats.cancelledVisits,
        stats.scheduledVisits,
    ]
    assert float(summary[5]) == stats.totalHours
    assert summary[6] == "75"
    assert summary[7] == "67%"


def test_detail_rows_use_display_dates_and_status_labels():
    rows = parse(render_patient_report_csv(patient_stats()))

    assert rows[10] == ["2024/1/5", "09:00", "10:00", "60", "完了", "山田美咲", "H001", "", ""]
    assert rows[12] == ["2024/1/22", "", "", "", "キャンセル", "高橋由美", "", "体調不良", ""]


def test_every_cell_is_quoted_and_quotes_are_doubled():
    text = render_patient_report_csv(patient_stats())
    lines = text.split("\n")

    assert lines[0] == '"患者名","田中太郎"'
    assert '"玄関の鍵は ""1234"", 左側"' in lines[11]
    for line in lines:
        if line:
            assert line.startswith('"') and line.endswith('"')


def test_empty_details_render_headers_and_summary_only():
    stats = patient_stats(
        totalVisits=0,
        completedVisits=0,
        cancelledVisits=0,
        totalHours=0,
        averageVisitDuration=0,
        phone=None,
        visitDetails=[],
    )
    text = render_patient_report_csv(stats)
    rows = parse(text)

    assert rows[-1] == PATIENT_DETAIL_HEADER
    assert rows[7] == ["2024年1月", "0", "0", "0", "0", "0", "0", "0%"]
    assert "undefined" not in text
    assert "None" not in text
    assert "null" not in text


def test_completion_rate_rounds_to_whole_percent():
    assert completion_rate(2, 3) == 67
    assert completion_rate(1, 8) == 13
    assert completion_rate(0, 0) == 0


def test_hygienist_csv_layout():
    stats = HygienistMonthlyStats(
        hygienistId=1,
        hygienistName="山田美咲",
        staffId="H001",
        year=2024,
        month=1,
        totalVisits=1,
        completedVisits=1,
        cancelledVisits=0,
        scheduledVisits=0,
        totalHours=1.25,
        averageVisitDuration=75,
        visitDetails=[
            HygienistVisitDetail(
                id=1,
                visitDate=date(2024, 1, 15),
                startTime="09:00",
                endTime="10:15",
                status="completed",
                patientName="田中太郎",
                patientCode="P001",
                duration=75,
            )
        ],
    )
    rows = parse(render_hygienist_report_csv(stats))

    assert rows[1] == ["山田美咲", "H001", "2024年1月", "1", "1", "0", "0", "1.25", "75"]
    assert rows[2] == []
    assert rows[3] == HYGIENIST_DETAIL_HEADER
    assert rows[4] == ["2024/1/15", "田中太郎", "P001", "09:00", "10:15", "75", "完了", "", ""]
