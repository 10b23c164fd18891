"""API routes."""

from symbifi.api.routes.admin import router as admin_router
from symbifi.api.routes.dashboard import router as dashboard_router
from symbifi.api.routes.health import router as health_router
from symbifi.api.routes.records import router as records_router
from symbifi.api.routes.reports import router as reports_router

__all__ = [
    "admin_router",
    "dashboard_router",
    "health_router",
    "records_router",
    "reports_router",
]
