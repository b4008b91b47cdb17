"""Report routers - patient and hygienist monthly/yearly/comparison stats and CSV export"""

import logging
from typing import Callable, Optional, TypeVar

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...shared.errors import AppError, ErrorCode, not_found
from ...shared.params import parse_report_params
from ...shared.responses import ApiResponse, csv_attachment, ok
from .csv_export import render_hygienist_report_csv, render_patient_report_csv
from .schemas import (
    HygienistComparisonReport,
    HygienistMonthlyStats,
    PatientComparisonReport,
    PatientMonthlyStats,
)
from .service import HygienistReportService, PatientReportService, StatsRetrievalError

logger = logging.getLogger(__name__)

R = TypeVar("R")

patient_router = APIRouter(
    prefix="/patient-reports",
    tags=["Patient Reports"],
    dependencies=[Depends(get_current_user)],
)
hygienist_router = APIRouter(
    prefix="/hygienist-reports",
    tags=["Hygienist Reports"],
    dependencies=[Depends(get_current_user)],
)


def get_patient_report_service(db: Session = Depends(get_db)) -> PatientReportService:
    """Dependency injection for PatientReportService"""
    return PatientReportService(db)


def get_hygienist_report_service(db: Session = Depends(get_db)) -> HygienistReportService:
    """Dependency injection for HygienistReportService"""
    return HygienistReportService(db)


def run_report(action: Callable[[], R]) -> R:
    """Map store failures to a 500 whose message never carries driver text"""
    try:
        return action()
    except StatsRetrievalError as e:
        logger.exception(f"❌ Report generation failed: {e}")
        raise AppError(500, ErrorCode.INTERNAL_SERVER_ERROR, "Failed to retrieve report data")


# ============================================================================
# PATIENT REPORTS
# ============================================================================


def patient_monthly_or_404(
    service: PatientReportService, patient_id, year, month
) -> PatientMonthlyStats:
    subject_id, period = parse_report_params(patient_id, year, month)
    stats = run_report(lambda: service.get_monthly_stats(subject_id, period.year, period.month))
    if stats is None:
        raise not_found(ErrorCode.PATIENT_NOT_FOUND, "Patient not found")
    return stats


def patient_csv(service: PatientReportService, patient_id, year, month):
    stats = patient_monthly_or_404(service, patient_id, year, month)
    filename = f"患者別レポート_{stats.patientName}_{stats.year}年{stats.month}月.csv"
    logger.info(f"📊 Patient report CSV exported: patient={stats.patientId} {stats.year}-{stats.month}")
    return csv_attachment(render_patient_report_csv(stats), filename)


@patient_router.get(
    "/comparison",
    response_model=ApiResponse[PatientComparisonReport],
    response_model_exclude_none=True,
)
async def get_patient_comparison(
    year: Optional[str] = Query(None),
    month: Optional[str] = Query(None),
    service: PatientReportService = Depends(get_patient_report_service),
):
    """Monthly stats for every patient visited in the month"""
    _, period = parse_report_params(None, year, month, require_subject=False)
    return ok(run_report(lambda: service.get_comparison_report(period.year, period.month)))


@patient_router.get("/export/csv")
async def export_patient_csv(
    patientId: Optional[str] = Query(None),
    year: Optional[str] = Query(None),
    month: Optional[str] = Query(None),
    service: PatientReportService = Depends(get_patient_report_service),
):
    """CSV export addressed by query string"""
    return patient_csv(service, patientId, year, month)


@patient_router.get(
    "/{patient_id}/monthly",
    response_model=ApiResponse[PatientMonthlyStats],
    response_model_exclude_none=True,
)
async def get_patient_monthly(
    patient_id: str,
    year: Optional[str] = Query(None),
    month: Optional[str] = Query(None),
    service: PatientReportService = Depends(get_patient_report_service),
):
    """Monthly stats for one patient"""
    return ok(patient_monthly_or_404(service, patient_id, year, month))


@patient_router.get(
    "/{patient_id}/yearly",
    response_model=ApiResponse[list[PatientMonthlyStats]],
    response_model_exclude_none=True,
)
async def get_patient_yearly(
    patient_id: str,
    year: Optional[str] = Query(None),
    service: PatientReportService = Depends(get_patient_report_service),
):
    """Months of a year with at least one visit; unknown patients yield []"""
    subject_id, period = parse_report_params(patient_id, year, None, require_month=False)
    return ok(run_report(lambda: service.get_yearly_stats(subject_id, period.year)))


@patient_router.get("/{patient_id}/csv")
async def get_patient_csv(
    patient_id: str,
    year: Optional[str] = Query(None),
    month: Optional[str] = Query(None),
    service: PatientReportService = Depends(get_patient_report_service),
):
    """Monthly stats for one patient as a CSV download"""
    return patient_csv(service, patient_id, year, month)


# ============================================================================
# HYGIENIST REPORTS
# ============================================================================


def hygienist_monthly_or_404(
    service: HygienistReportService, hygienist_id, year, month
) -> HygienistMonthlyStats:
    subject_id, period = parse_report_params(hygienist_id, year, month)
    stats = run_report(lambda: service.get_monthly_stats(subject_id, period.year, period.month))
    if stats is None:
        raise not_found(ErrorCode.HYGIENIST_NOT_FOUND, "Hygienist not found")
    return stats


def hygienist_csv(service: HygienistReportService, hygienist_id, year, month):
    stats = hygienist_monthly_or_404(service, hygienist_id, year, month)
    filename = f"歯科衛生士別レポート_{stats.hygienistName}_{stats.year}年{stats.month}月.csv"
    logger.info(
        f"📊 Hygienist report CSV exported: hygienist={stats.hygienistId} {stats.year}-{stats.month}"
    )
    return csv_attachment(render_hygienist_report_csv(stats), filename)


@hygienist_router.get(
    "/comparison",
    response_model=ApiResponse[HygienistComparisonReport],
    response_model_exclude_none=True,
)
@hygienist_router.get(
    "/hygienist-comparison",
    response_model=ApiResponse[HygienistComparisonReport],
    response_model_exclude_none=True,
    include_in_schema=False,
)
async def get_hygienist_comparison(
    year: Optional[str] = Query(None),
    month: Optional[str] = Query(None),
    service: HygienistReportService = Depends(get_hygienist_report_service),
):
    """Monthly stats for every hygienist with a visit in the month"""
    _, period = parse_report_params(None, year, month, require_subject=False)
    return ok(run_report(lambda: service.get_comparison_report(period.year, period.month)))


@hygienist_router.get("/export/csv")
async def export_hygienist_csv(
    hygienistId: Optional[str] = Query(None),
    year: Optional[str] = Query(None),
    month: Optional[str] = Query(None),
    service: HygienistReportService = Depends(get_hygienist_report_service),
):
    """CSV export addressed by query string"""
    return hygienist_csv(service, hygienistId, year, month)


@hygienist_router.get(
    "/{hygienist_id}/monthly",
    response_model=ApiResponse[HygienistMonthlyStats],
    response_model_exclude_none=True,
)
@hygienist_router.get(
    "/hygienist/{hygienist_id}/monthly",
    response_model=ApiResponse[HygienistMonthlyStats],
    response_model_exclude_none=True,
    include_in_schema=False,
)
async def get_hygienist_monthly(
    hygienist_id: str,
    year: Optional[str] = Query(None),
    month: Optional[str] = Query(None),
    service: HygienistReportService = Depends(get_hygienist_report_service),
):
    """Monthly stats for one hygienist"""
    return ok(hygienist_monthly_or_404(service, hygienist_id, year, month))


@hygienist_router.get(
    "/{hygienist_id}/yearly",
    response_model=ApiResponse[list[HygienistMonthlyStats]],
    response_model_exclude_none=True,
)
@hygienist_router.get(
    "/hygienist/{hygienist_id}/yearly",
    response_model=ApiResponse[list[HygienistMonthlyStats]],
    response_model_exclude_none=True,
    include_in_schema=False,
)
async def get_hygienist_yearly(
    hygienist_id: str,
    year: Optional[str] = Query(None),
    service: HygienistReportService = Depends(get_hygienist_report_service),
):
    """Months of a year with at least one visit; unknown hygienists yield []"""
    subject_id, period = parse_report_params(hygienist_id, year, None, require_month=False)
    return ok(run_report(lambda: service.get_yearly_stats(subject_id, period.year)))


@hygienist_router.get("/{hygienist_id}/csv")
@hygienist_router.get("/hygienist/{hygienist_id}/csv", include_in_schema=False)
async def get_hygienist_csv(
    hygienist_id: str,
    year: Optional[str] = Query(None),
    month: Optional[str] = Query(None),
    service: HygienistReportService = Depends(get_hygienist_report_service),
):
    """Monthly stats for one hygienist as a CSV download"""
    return hygienist_csv(service, hygienist_id, year, month)
