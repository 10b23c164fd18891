"""SQLAlchemy ORM models."""

from symbifi.models.base import Base, TenantOwnedMixin, TimestampMixin
from symbifi.models.records import (
    Contractor,
    Expense,
    Payment,
    Project,
    ProjectTeam,
    UserRole,
)

__all__ = [
    "Base",
    "TenantOwnedMixin",
    "TimestampMixin",
    "Contractor",
    "Expense",
    "Payment",
    "Project",
    "ProjectTeam",
    "UserRole",
]
