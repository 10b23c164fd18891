"""Super admin endpoints over all tenants."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Query, Response

from symbifi.api.dependencies import AppSettings, GlobalSnapshot
from symbifi.api.routes.reports import csv_download
from symbifi.api.schemas import (
    AdminOverviewResponse,
    ClientSummaryResponse,
    ContractorDirectoryResponse,
    PaymentListingResponse,
    ProjectSummaryResponse,
)
from symbifi.calculators.aggregator import (
    DashboardAggregator,
    client_summaries,
    contractor_directory,
    list_payments,
)
from symbifi.calculators.reports import project_summaries
from symbifi.services.report_exports import (
    super_admin_payment_headers,
    super_admin_payment_rows,
)

router = APIRouter(prefix="/admin", tags=["super-admin"])


@router.get("/overview", response_model=AdminOverviewResponse)
async def get_overview(snapshot: GlobalSnapshot, settings: AppSettings) -> AdminOverviewResponse:
    """Totals across every tenant."""
    aggregator = DashboardAggregator(recent_limit=settings.recent_payments_limit)
    return AdminOverviewResponse.model_validate(aggregator.admin_overview(snapshot))


@router.get("/clients", response_model=list[ClientSummaryResponse])
async def list_clients(snapshot: GlobalSnapshot) -> list[ClientSummaryResponse]:
    """Project, contractor and payment totals per tenant."""
    return [ClientSummaryResponse.model_validate(c) for c in client_summaries(snapshot)]


@router.get("/contractors", response_model=ContractorDirectoryResponse)
async def list_all_contractors(
    snapshot: GlobalSnapshot,
    search: str | None = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
) -> ContractorDirectoryResponse:
    """Every contractor, searchable by name, email or role, with status counts."""
    directory = contractor_directory(snapshot, search=search, status=status_filter)
    return ContractorDirectoryResponse.model_validate(directory)


@router.get("/payments", response_model=list[PaymentListingResponse])
async def list_all_payments(snapshot: GlobalSnapshot) -> list[PaymentListingResponse]:
    """Every payment across tenants, newest first."""
    ordered = sorted(snapshot.payments, key=lambda p: (p.payment_date, p.id), reverse=True)
    return [PaymentListingResponse.model_validate(p) for p in list_payments(snapshot, ordered)]


@router.get("/projects", response_model=list[ProjectSummaryResponse])
async def list_all_projects(snapshot: GlobalSnapshot) -> list[ProjectSummaryResponse]:
    """Every project with committed pay, payments and expenses to date."""
    return [ProjectSummaryResponse.model_validate(p) for p in project_summaries(snapshot)]


@router.get("/payments.csv", response_class=Response)
async def export_all_payments(snapshot: GlobalSnapshot) -> Response:
    """Download the payment history across tenants."""
    return csv_download(
        super_admin_payment_rows(snapshot),
        f"super-admin-payments-{date.today().isoformat()}",
        super_admin_payment_headers(),
    )
