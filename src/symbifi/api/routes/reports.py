"""Payroll report endpoints and CSV downloads."""

from datetime import date
from typing import Annotated, Any, Mapping, Sequence
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from symbifi.api.dependencies import AppSettings, TenantSnapshot
from symbifi.api.schemas import (
    ContractorSummaryResponse,
    PaymentSummaryResponse,
    PayrollReportResponse,
    ProjectSummaryResponse,
)
from symbifi.calculators.balance import ZERO
from symbifi.calculators.reports import (
    PayrollReport,
    PayrollReportFilter,
    build_payroll_report,
    contractor_payment_summary,
)
from symbifi.calculators.types import Snapshot
from symbifi.services.csv_export import CSV_MEDIA_TYPE, csv_filename, rows_to_csv
from symbifi.services.report_exports import (
    expense_headers,
    expense_rows,
    payment_headers,
    payment_rows,
    payroll_report_headers,
    payroll_report_rows,
    project_report_headers,
    project_report_rows,
)

router = APIRouter(prefix="/reports", tags=["reports"])


def csv_download(
    rows: Sequence[Mapping[str, Any]],
    filename: str,
    headers: Mapping[str, str] | None = None,
) -> Response:
    """Serve rows as a CSV attachment; 204 when there is nothing to export."""
    content = rows_to_csv(rows, headers)
    if content is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return Response(
        content=content,
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{csv_filename(filename)}"'},
    )


def get_report_filter(
    date_from: Annotated[date, Query()],
    date_to: Annotated[date, Query()],
    project_id: UUID | None = None,
    contractor_id: UUID | None = None,
) -> PayrollReportFilter:
    """Build the report filter from query parameters."""
    try:
        return PayrollReportFilter(
            date_from=date_from,
            date_to=date_to,
            project_id=str(project_id) if project_id else None,
            contractor_id=str(contractor_id) if contractor_id else None,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


ReportFilter = Annotated[PayrollReportFilter, Depends(get_report_filter)]


def _report(snapshot: Snapshot, report_filter: PayrollReportFilter) -> PayrollReport:
    return build_payroll_report(snapshot, report_filter)


@router.get("/payment-summary", response_model=PaymentSummaryResponse)
async def get_payment_summary(snapshot: TenantSnapshot) -> PaymentSummaryResponse:
    """Agreed pay, payments and balance per contractor across all projects."""
    items = contractor_payment_summary(snapshot)
    return PaymentSummaryResponse(
        items=[ContractorSummaryResponse.model_validate(s) for s in items],
        total_agreed=sum((s.total_agreed for s in items), ZERO),
        total_paid=sum((s.total_paid for s in items), ZERO),
        total_balance=sum((s.balance_due for s in items), ZERO),
    )


@router.get("/payroll", response_model=PayrollReportResponse)
async def get_payroll_report(
    snapshot: TenantSnapshot,
    report_filter: ReportFilter,
) -> PayrollReportResponse:
    """Payroll and project financials for a date range."""
    report = _report(snapshot, report_filter)
    return PayrollReportResponse(
        date_from=report_filter.date_from,
        date_to=report_filter.date_to,
        project_id=report_filter.project_id,
        contractor_id=report_filter.contractor_id,
        total_payments=report.total_payments,
        total_expenses=report.total_expenses,
        total_budget=report.total_budget,
        total_agreed_to_contractors=report.total_agreed_to_contractors,
        agency_profit=report.agency_profit,
        outstanding_to_contractors=report.outstanding_to_contractors,
        contractors=[ContractorSummaryResponse.model_validate(c) for c in report.contractors],
        projects=[ProjectSummaryResponse.model_validate(p) for p in report.projects],
    )


@router.get("/payroll.csv", response_class=Response)
async def export_payroll_report(
    snapshot: TenantSnapshot,
    report_filter: ReportFilter,
    settings: AppSettings,
) -> Response:
    """Download the per-contractor payroll report."""
    report = _report(snapshot, report_filter)
    return csv_download(
        payroll_report_rows(report),
        f"payroll-report-{report_filter.date_from}-to-{report_filter.date_to}",
        payroll_report_headers(settings.currency_code),
    )


@router.get("/projects.csv", response_class=Response)
async def export_project_report(
    snapshot: TenantSnapshot,
    report_filter: ReportFilter,
    settings: AppSettings,
) -> Response:
    """Download the per-project financial report."""
    report = _report(snapshot, report_filter)
    return csv_download(
        project_report_rows(report),
        f"project-financial-report-{report_filter.date_from}-to-{report_filter.date_to}",
        project_report_headers(settings.currency_code),
    )


@router.get("/payments.csv", response_class=Response)
async def export_payments(snapshot: TenantSnapshot, settings: AppSettings) -> Response:
    """Download every payment."""
    return csv_download(
        payment_rows(snapshot),
        f"payments-export-{date.today().isoformat()}",
        payment_headers(settings.currency_code),
    )


@router.get("/expenses.csv", response_class=Response)
async def export_expenses(snapshot: TenantSnapshot, settings: AppSettings) -> Response:
    """Download every expense."""
    return csv_download(
        expense_rows(snapshot),
        f"expenses-export-{date.today().isoformat()}",
        expense_headers(settings.currency_code),
    )
