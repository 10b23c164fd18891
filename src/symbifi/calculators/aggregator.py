"""Dashboard statistics folded from an in-memory snapshot.

One aggregator serves both the tenant dashboard and the super admin
overview; the only difference is the optional tenant scope applied to the
snapshot before any statistic is computed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from symbifi.calculators.balance import ZERO, compute_agreed_pay, paid_by_pair
from symbifi.calculators.types import (
    ContractorRecord,
    ContractorStatus,
    PaymentRecord,
    PaymentStatus,
    ProjectStatus,
    Snapshot,
)

UNKNOWN_CONTRACTOR = "Unknown"
UNKNOWN_PROJECT = "Unknown Project"
DEFAULT_RECENT_LIMIT = 5


@dataclass(frozen=True)
class PaymentListing:
    """Payment with resolved display names."""

    payment_id: str
    project_id: str
    contractor_id: str
    contractor_name: str
    project_name: str
    amount_paid: Decimal
    payment_date: date
    payment_method: str


@dataclass(frozen=True)
class DashboardStats:
    """Tenant dashboard figures."""

    active_projects_count: int
    completed_projects_count: int
    active_contractors_count: int
    total_paid: Decimal
    total_budget: Decimal
    remaining_budget: Decimal
    outstanding_balance_count: int
    unpaid_assignments_count: int
    this_month_payment_count: int
    this_month_payments: tuple[PaymentListing, ...]


@dataclass(frozen=True)
class AdminOverview:
    """Cross-tenant operational figures."""

    tenant_count: int
    project_count: int
    contractor_count: int
    assignment_count: int
    payment_count: int
    active_projects_count: int
    active_contractors_count: int
    total_paid: Decimal
    total_committed: Decimal
    outstanding: Decimal
    assignments_with_payments: int
    recent_payments: tuple[PaymentListing, ...]


@dataclass(frozen=True)
class ClientSummary:
    """Per-tenant rollup for the super admin client list."""

    owner_id: str
    project_count: int
    contractor_count: int
    assignment_count: int
    payment_count: int
    total_budget: Decimal
    total_paid: Decimal
    total_committed: Decimal
    outstanding: Decimal


@dataclass(frozen=True)
class ContractorDirectory:
    """Cross-tenant contractor list with status counts.

    Counts cover every contractor; only the listing is filtered.
    """

    total_count: int
    active_count: int
    inactive_count: int
    contractors: tuple[ContractorRecord, ...]


def is_same_month(value: date, today: date) -> bool:
    """Check whether value falls in today's calendar month."""
    return value.year == today.year and value.month == today.month


class DashboardAggregator:
    """Computes dashboard statistics over a snapshot.

    All statistics are sums and counts, so results do not depend on the
    order of the input collections. Recent payment listings are sorted by
    payment date (newest first) with the payment id as tie breaker.
    """

    def __init__(self, recent_limit: int = DEFAULT_RECENT_LIMIT) -> None:
        self.recent_limit = recent_limit

    def summarize(
        self,
        snapshot: Snapshot,
        tenant_id: UUID | str | None = None,
        today: date | None = None,
    ) -> DashboardStats:
        """Compute the tenant dashboard.

        Args:
            snapshot: Rows to aggregate
            tenant_id: Restrict to rows owned by this tenant; None keeps all rows
            today: Reference date for "this month" (defaults to local today)
        """
        snap = snapshot.scoped(tenant_id)
        today = today or date.today()

        projects = snap.projects_by_id()
        paid = paid_by_pair(snap.payments)

        active_projects = sum(1 for p in snap.projects if p.status == ProjectStatus.ACTIVE)
        completed_projects = sum(1 for p in snap.projects if p.status == ProjectStatus.COMPLETED)
        active_contractors = sum(1 for c in snap.contractors if c.status == ContractorStatus.ACTIVE)
        total_budget = sum((p.total_budget for p in snap.projects), ZERO)
        total_paid = sum((p.amount_paid for p in snap.payments), ZERO)

        outstanding = 0
        unpaid = 0
        for team in snap.teams:
            agreed = compute_agreed_pay(team, projects.get(team.project_id))
            if agreed > paid.get((team.project_id, team.contractor_id), ZERO):
                outstanding += 1
            # Stored flag, deliberately not reconciled with the computed balance
            if team.payment_status == PaymentStatus.UNPAID:
                unpaid += 1

        this_month = [p for p in snap.payments if is_same_month(p.payment_date, today)]

        return DashboardStats(
            active_projects_count=active_projects,
            completed_projects_count=completed_projects,
            active_contractors_count=active_contractors,
            total_paid=total_paid,
            total_budget=total_budget,
            remaining_budget=total_budget - total_paid,
            outstanding_balance_count=outstanding,
            unpaid_assignments_count=unpaid,
            this_month_payment_count=len(this_month),
            this_month_payments=self.list_recent(snap, this_month),
        )

    def admin_overview(
        self,
        snapshot: Snapshot,
        tenant_id: UUID | str | None = None,
    ) -> AdminOverview:
        """Compute the super admin overview (cross-tenant unless tenant_id is given)."""
        snap = snapshot.scoped(tenant_id)
        total_paid = sum((p.amount_paid for p in snap.payments), ZERO)
        total_committed, with_payments = _commitments(snap)

        owners = {
            r.owner_id
            for rows in (snap.projects, snap.contractors, snap.teams, snap.payments)
            for r in rows
            if r.owner_id is not None
        }

        return AdminOverview(
            tenant_count=len(owners),
            project_count=len(snap.projects),
            contractor_count=len(snap.contractors),
            assignment_count=len(snap.teams),
            payment_count=len(snap.payments),
            active_projects_count=sum(
                1 for p in snap.projects if p.status == ProjectStatus.ACTIVE
            ),
            active_contractors_count=sum(
                1 for c in snap.contractors if c.status == ContractorStatus.ACTIVE
            ),
            total_paid=total_paid,
            total_committed=total_committed,
            outstanding=max(total_committed - total_paid, ZERO),
            assignments_with_payments=with_payments,
            recent_payments=self.list_recent(snap, snap.payments),
        )

    def list_recent(
        self,
        snapshot: Snapshot,
        payments: tuple[PaymentRecord, ...] | list[PaymentRecord],
    ) -> tuple[PaymentListing, ...]:
        """Newest payments first, limited to recent_limit, with display names resolved."""
        ordered = sorted(payments, key=lambda p: (p.payment_date, p.id), reverse=True)
        return tuple(list_payments(snapshot, ordered[: self.recent_limit]))


def list_payments(snapshot: Snapshot, payments) -> list[PaymentListing]:
    """Resolve contractor and project names, falling back to placeholders."""
    projects = snapshot.projects_by_id()
    contractors = snapshot.contractors_by_id()
    listings = []
    for p in payments:
        contractor = contractors.get(p.contractor_id)
        project = projects.get(p.project_id)
        listings.append(
            PaymentListing(
                payment_id=p.id,
                project_id=p.project_id,
                contractor_id=p.contractor_id,
                contractor_name=contractor.full_name if contractor else UNKNOWN_CONTRACTOR,
                project_name=project.name if project else UNKNOWN_PROJECT,
                amount_paid=p.amount_paid,
                payment_date=p.payment_date,
                payment_method=p.payment_method,
            )
        )
    return listings


def _commitments(snapshot: Snapshot) -> tuple[Decimal, int]:
    """Total agreed pay and the number of assignments with any payment.

    Assignments whose project is missing are skipped from the total.
    """
    projects = snapshot.projects_by_id()
    paid = paid_by_pair(snapshot.payments)
    committed = ZERO
    with_payments = 0
    for team in snapshot.teams:
        project = projects.get(team.project_id)
        if project is not None:
            committed += compute_agreed_pay(team, project)
        if paid.get((team.project_id, team.contractor_id), ZERO) > ZERO:
            with_payments += 1
    return committed, with_payments


def client_summaries(snapshot: Snapshot) -> list[ClientSummary]:
    """Group every collection by owner_id and total each tenant, ordered by owner_id."""
    summaries = []
    for owner, snap in sorted(snapshot.by_owner().items()):
        total_paid = sum((p.amount_paid for p in snap.payments), ZERO)
        committed, _ = _commitments(snap)
        summaries.append(
            ClientSummary(
                owner_id=owner,
                project_count=len(snap.projects),
                contractor_count=len(snap.contractors),
                assignment_count=len(snap.teams),
                payment_count=len(snap.payments),
                total_budget=sum((p.total_budget for p in snap.projects), ZERO),
                total_paid=total_paid,
                total_committed=committed,
                outstanding=max(committed - total_paid, ZERO),
            )
        )
    return summaries


def contractor_directory(
    snapshot: Snapshot,
    search: str | None = None,
    status: str | None = None,
) -> ContractorDirectory:
    """List contractors matching a case-insensitive search on name, email or role.

    status filters case-insensitively; None or "all" keeps every status.
    """
    term = (search or "").lower()
    wanted = (status or "all").lower()
    matches = tuple(
        c
        for c in snapshot.contractors
        if (term in c.full_name.lower() or term in c.email.lower() or term in c.role.lower())
        and (wanted == "all" or c.status.lower() == wanted)
    )
    active = sum(1 for c in snapshot.contractors if c.status.lower() == "active")
    return ContractorDirectory(
        total_count=len(snapshot.contractors),
        active_count=active,
        inactive_count=len(snapshot.contractors) - active,
        contractors=matches,
    )
