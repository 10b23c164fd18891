"""Loads immutable snapshots from the record store."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from symbifi.calculators.types import (
    ContractorRecord,
    ExpenseRecord,
    PaymentRecord,
    ProjectRecord,
    Snapshot,
    TeamAssignment,
    record_id,
)
from symbifi.models import Contractor, Expense, Payment, Project, ProjectTeam

logger = logging.getLogger(__name__)


def project_record(row: Project) -> ProjectRecord:
    return ProjectRecord(
        id=str(row.id),
        name=row.name,
        client_name=row.client_name,
        total_budget=row.total_budget,
        status=row.status,
        start_date=row.start_date,
        end_date=row.end_date,
        owner_id=record_id(row.owner_id),
        created_at=row.created_at,
    )


def contractor_record(row: Contractor) -> ContractorRecord:
    return ContractorRecord(
        id=str(row.id),
        full_name=row.full_name,
        status=row.status,
        contractor_type=row.contractor_type,
        role=row.role,
        email=row.email,
        owner_id=record_id(row.owner_id),
    )


def team_assignment(row: ProjectTeam) -> TeamAssignment:
    return TeamAssignment(
        id=str(row.id),
        project_id=str(row.project_id),
        contractor_id=str(row.contractor_id),
        payment_type=row.payment_type,
        agreed_amount=row.agreed_amount,
        percentage_share=row.percentage_share,
        payment_status=row.payment_status,
        owner_id=record_id(row.owner_id),
    )


def payment_record(row: Payment) -> PaymentRecord:
    return PaymentRecord(
        id=str(row.id),
        project_id=str(row.project_id),
        contractor_id=str(row.contractor_id),
        amount_paid=row.amount_paid,
        payment_date=row.payment_date,
        payment_method=row.payment_method,
        reference=row.reference,
        recorded_by=row.recorded_by,
        owner_id=record_id(row.owner_id),
    )


def expense_record(row: Expense) -> ExpenseRecord:
    return ExpenseRecord(
        id=str(row.id),
        project_id=str(row.project_id),
        description=row.description,
        amount=row.amount,
        expense_date=row.expense_date,
        category=row.category,
        receipt_reference=row.receipt_reference,
        recorded_by=row.recorded_by,
        notes=row.notes,
        owner_id=record_id(row.owner_id),
    )


class SnapshotService:
    """Pulls every collection the calculators need in one call.

    A tenant_id restricts each collection to that tenant's rows; None is the
    cross-tenant view used by super admins.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _fetch(self, model, tenant_id: UUID | None, order_by=None) -> list:
        query = select(model)
        if tenant_id is not None:
            query = query.where(model.owner_id == tenant_id)
        if order_by is not None:
            query = query.order_by(order_by)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def fetch_snapshot(self, tenant_id: UUID | None = None) -> Snapshot:
        """Load projects, contractors, teams, payments and expenses."""
        projects = await self._fetch(Project, tenant_id, Project.created_at)
        contractors = await self._fetch(Contractor, tenant_id, Contractor.created_at)
        teams = await self._fetch(ProjectTeam, tenant_id, ProjectTeam.created_at)
        payments = await self._fetch(Payment, tenant_id, Payment.payment_date.desc())
        expenses = await self._fetch(Expense, tenant_id, Expense.expense_date.desc())

        snapshot = Snapshot(
            projects=tuple(project_record(r) for r in projects),
            contractors=tuple(contractor_record(r) for r in contractors),
            teams=tuple(team_assignment(r) for r in teams),
            payments=tuple(payment_record(r) for r in payments),
            expenses=tuple(expense_record(r) for r in expenses),
            fetched_at=datetime.now(timezone.utc),
        )
        logger.debug(
            "Fetched snapshot tenant=%s projects=%d contractors=%d teams=%d payments=%d expenses=%d",
            tenant_id or "*",
            len(snapshot.projects),
            len(snapshot.contractors),
            len(snapshot.teams),
            len(snapshot.payments),
            len(snapshot.expenses),
        )
        return snapshot
