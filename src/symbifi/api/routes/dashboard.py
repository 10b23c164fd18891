"""Tenant dashboard endpoint."""

from fastapi import APIRouter

from symbifi.api.dependencies import AppSettings, TenantId, TenantSnapshot
from symbifi.api.schemas import DashboardResponse
from symbifi.calculators.aggregator import DashboardAggregator

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    tenant_id: TenantId,
    snapshot: TenantSnapshot,
    settings: AppSettings,
) -> DashboardResponse:
    """Dashboard statistics for the calling tenant."""
    aggregator = DashboardAggregator(recent_limit=settings.recent_payments_limit)
    stats = aggregator.summarize(snapshot, tenant_id=tenant_id)
    return DashboardResponse.model_validate(stats)
