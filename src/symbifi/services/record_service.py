"""Tenant-scoped create/read/update for payroll records."""

from __future__ import annotations

import logging
from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from symbifi.exceptions import InvalidReferenceError, RecordNotFoundError
from symbifi.models import Contractor, Expense, Payment, Project, ProjectTeam, UserRole
from symbifi.models.base import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

# Foreign keys that must point at rows owned by the same tenant
REFERENCES: dict[type[Base], tuple[tuple[str, type[Base]], ...]] = {
    ProjectTeam: (("project_id", Project), ("contractor_id", Contractor)),
    Payment: (("project_id", Project), ("contractor_id", Contractor)),
    Expense: (("project_id", Project),),
}


class RecordService:
    """CRUD over tenant-owned rows.

    Every read filters on owner_id, so a row owned by another tenant looks
    exactly like a missing one.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, model: type[ModelT], tenant_id: UUID, record_id: UUID) -> ModelT:
        """Load one row owned by tenant_id, raising RecordNotFoundError otherwise."""
        row = await self.session.get(model, record_id)
        if row is None or row.owner_id != tenant_id:
            raise RecordNotFoundError(model.__name__, record_id)
        return row

    async def list(
        self,
        model: type[ModelT],
        tenant_id: UUID,
        filters: dict[str, Any] | None = None,
    ) -> list[ModelT]:
        """List rows owned by tenant_id, newest first, with optional equality filters."""
        query = select(model).where(model.owner_id == tenant_id)
        for column, value in (filters or {}).items():
            if value is not None:
                query = query.where(getattr(model, column) == value)
        query = query.order_by(model.created_at.desc())
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def create(self, model: type[ModelT], tenant_id: UUID, data: dict[str, Any]) -> ModelT:
        """Insert a row for tenant_id after checking its references."""
        await self._check_references(model, tenant_id, data)
        row = model(owner_id=tenant_id, **data)
        self.session.add(row)
        await self.session.flush()
        await self.session.refresh(row)
        logger.info("Created %s %s for tenant %s", model.__name__, row.id, tenant_id)
        return row

    async def update(
        self,
        model: type[ModelT],
        tenant_id: UUID,
        record_id: UUID,
        changes: dict[str, Any],
    ) -> ModelT:
        """Apply a partial update to a row owned by tenant_id."""
        row = await self.get(model, tenant_id, record_id)
        await self._check_references(model, tenant_id, changes)
        for column, value in changes.items():
            setattr(row, column, value)
        await self.session.flush()
        await self.session.refresh(row)
        logger.info("Updated %s %s fields=%s", model.__name__, record_id, sorted(changes))
        return row

    async def _check_references(
        self,
        model: type[Base],
        tenant_id: UUID,
        data: dict[str, Any],
    ) -> None:
        for column, target in REFERENCES.get(model, ()):
            if column not in data:
                continue
            target_row = await self.session.get(target, data[column])
            if target_row is None or target_row.owner_id != tenant_id:
                raise InvalidReferenceError(target.__name__, data[column])

    async def has_role(self, user_id: UUID, role: str) -> bool:
        """Check whether user_id holds role."""
        result = await self.session.execute(
            select(UserRole.id).where(UserRole.user_id == user_id, UserRole.role == role)
        )
        return result.first() is not None

    async def grant_role(self, user_id: UUID, role: str) -> UserRole:
        """Grant role to user_id (idempotent)."""
        result = await self.session.execute(
            select(UserRole).where(UserRole.user_id == user_id, UserRole.role == role)
        )
        existing = result.scalar_one_or_none()
        if existing is not None:
            return existing
        grant = UserRole(user_id=user_id, role=role)
        self.session.add(grant)
        await self.session.flush()
        logger.info("Granted role %s to user %s", role, user_id)
        return grant
