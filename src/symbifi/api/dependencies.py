"""FastAPI dependencies for dependency injection."""

from collections.abc import AsyncGenerator
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from symbifi.calculators.types import Snapshot
from symbifi.config import Settings, get_settings
from symbifi.database import init_db
from symbifi.exceptions import PermissionDeniedError
from symbifi.services.record_service import RecordService
from symbifi.services.snapshot_service import SnapshotService


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency. Commits on success."""
    _, factory = init_db()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_tenant_id(
    x_tenant_id: Annotated[str | None, Header()] = None
) -> UUID:
    """Extract tenant ID from header."""
    if not x_tenant_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-Tenant-ID header is required",
        )
    try:
        return UUID(x_tenant_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid X-Tenant-ID format",
        )


DbSession = Annotated[AsyncSession, Depends(get_db_session)]
TenantId = Annotated[UUID, Depends(get_tenant_id)]
AppSettings = Annotated[Settings, Depends(get_settings)]


def get_record_service(db: DbSession) -> RecordService:
    return RecordService(db)


Records = Annotated[RecordService, Depends(get_record_service)]


def get_snapshot_service(db: DbSession) -> SnapshotService:
    return SnapshotService(db)


Snapshots = Annotated[SnapshotService, Depends(get_snapshot_service)]


async def get_tenant_snapshot(snapshots: Snapshots, tenant_id: TenantId) -> Snapshot:
    """Snapshot scoped to the calling tenant."""
    return await snapshots.fetch_snapshot(tenant_id)


async def require_super_admin(records: Records, tenant_id: TenantId) -> UUID:
    """Allow only users holding the admin role."""
    if not await records.has_role(tenant_id, "admin"):
        raise PermissionDeniedError(tenant_id)
    return tenant_id


async def get_global_snapshot(
    snapshots: Snapshots,
    admin_id: Annotated[UUID, Depends(require_super_admin)],
) -> Snapshot:
    """Cross-tenant snapshot for super admins."""
    return await snapshots.fetch_snapshot(None)


TenantSnapshot = Annotated[Snapshot, Depends(get_tenant_snapshot)]
GlobalSnapshot = Annotated[Snapshot, Depends(get_global_snapshot)]
