"""CSV rendering of monthly report stats (every cell quoted, LF line endings)"""

import csv
from io import StringIO
from typing import Any, Optional

from ...shared.dates import format_display_date
from .schemas import HygienistMonthlyStats, PatientMonthlyStats
from .stats import ratio_half_up

STATUS_LABELS = {
    "completed": "完了",
    "cancelled": "キャンセル",
    "scheduled": "予定",
}

PATIENT_SUMMARY_HEADER = [
    "対象年月",
    "総訪問回数",
    "完了回数",
    "キャンセル回数",
    "予定回数",
    "総時間（時間）",
    "平均訪問時間（分）",
    "完了率（%）",
]

PATIENT_DETAIL_HEADER = [
    "訪問日",
    "開始時間",
    "終了時間",
    "時間（分）",
    "ステータス",
    "担当歯科衛生士",
    "スタッフID",
    "キャンセル理由",
    "備考",
]

HYGIENIST_SUMMARY_HEADER = [
    "歯科衛生士名",
    "スタッフID",
    "対象年月",
    "総訪問回数",
    "完了回数",
    "キャンセル回数",
    "予定回数",
    "総勤務時間（時間）",
    "平均訪問時間（分）",
]

HYGIENIST_DETAIL_HEADER = [
    "訪問日",
    "患者名",
    "患者ID",
    "開始時間",
    "終了時間",
    "時間（分）",
    "ステータス",
    "キャンセル理由",
    "備考",
]


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def format_cell(value: Any) -> str:
    """None -> "", integral floats without the trailing .0"""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def period_label(year: int, month: int) -> str:
    return f"{year}年{month}月"


def completion_rate(completed: int, total: int) -> int:
    """Whole-percent share of completed visits; 0 without visits"""
    return int(ratio_half_up(completed * 100, total, places=0))


def _write(rows: list[list[Optional[Any]]]) -> str:
    output = StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for row in rows:
        writer.writerow([format_cell(cell) for cell in row])
    # No trailing newline after the last row
    return output.getvalue().removesuffix("\n")


def render_patient_report_csv(stats: PatientMonthlyStats) -> str:
    """Patient info block, summary block, then one row per visit"""
    rows = [
        ["患者名", stats.patientName],
        ["患者ID", stats.patientCode],
        ["電話番号", stats.phone],
        ["メールアドレス", stats.email],
        ["住所", stats.address],
        [],
        PATIENT_SUMMARY_HEADER,
        [
            period_label(stats.year, stats.month),
            stats.totalVisits,
            stats.completedVisits,
            stats.cancelledVisits,
            stats.scheduledVisits,
            stats.totalHours,
            stats.averageVisitDuration,
            f"{completion_rate(stats.completedVisits, stats.totalVisits)}%",
        ],
        [],
        PATIENT_DETAIL_HEADER,
    ]
    for visit in stats.visitDetails:
        rows.append(
            [
                format_display_date(visit.visitDate),
                visit.startTime,
                visit.endTime,
                visit.duration,
                status_label(visit.status),
                visit.hygienistName,
                visit.hygienistStaffId,
                visit.cancellationReason,
                visit.notes,
            ]
        )
    return _write(rows)


def render_hygienist_report_csv(stats: HygienistMonthlyStats) -> str:
    """Summary block (identity inline), then one row per visit"""
    rows = [
        HYGIENIST_SUMMARY_HEADER,
        [
            stats.hygienistName,
            stats.staffId,
            period_label(stats.year, stats.month),
            stats.totalVisits,
            stats.completedVisits,
            stats.cancelledVisits,
            stats.scheduledVisits,
            stats.totalHours,
            stats.averageVisitDuration,
        ],
        [],
        HYGIENIST_DETAIL_HEADER,
    ]
    for visit in stats.visitDetails:
        rows.append(
            [
                format_display_date(visit.visitDate),
                visit.patientName,
                visit.patientCode,
                visit.startTime,
                visit.endTime,
                visit.duration,
                status_label(visit.status),
                visit.cancellationReason,
                visit.notes,
            ]
        )
    return _write(rows)
