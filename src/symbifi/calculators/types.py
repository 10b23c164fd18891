"""Immutable snapshot records consumed by the calculators."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Iterable
from uuid import UUID


class ProjectStatus(str, Enum):
    """Project lifecycle status."""

    ACTIVE = "Active"
    COMPLETED = "Completed"
    ON_HOLD = "On Hold"


class ProjectPaymentStructure(str, Enum):
    """How a project bills its client."""

    SINGLE_PAYMENT = "Single payment"
    MILESTONES = "Milestones"


class ContractorStatus(str, Enum):
    """Contractor status."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"


class ContractorType(str, Enum):
    """Contractor type."""

    INDIVIDUAL = "Individual"
    AGENCY = "Agency"


class PaymentType(str, Enum):
    """How a team assignment's pay is agreed."""

    FIXED_AMOUNT = "Fixed Amount"
    PERCENTAGE = "Percentage"


class PaymentStatus(str, Enum):
    """Stored payment status flag on a team assignment.

    Maintained by users, independently of the computed balance.
    """

    UNPAID = "Unpaid"
    PARTIALLY_PAID = "Partially Paid"
    PAID = "Paid"


class PaymentMethod(str, Enum):
    """Payment disbursement method."""

    BANK_TRANSFER = "Bank Transfer"
    CASH = "Cash"
    USSD = "USSD"
    WALLET = "Wallet"
    OTHER = "Other"


def record_id(value: UUID | str | None) -> str | None:
    """Normalize an identifier to the opaque string form used for matching."""
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class ProjectRecord:
    """Project as read from the record store."""

    id: str
    name: str
    total_budget: Decimal
    status: str = ProjectStatus.ACTIVE.value
    client_name: str = ""
    start_date: date | None = None
    end_date: date | None = None
    owner_id: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class ContractorRecord:
    """Contractor as read from the record store."""

    id: str
    full_name: str
    status: str = ContractorStatus.ACTIVE.value
    contractor_type: str = ContractorType.INDIVIDUAL.value
    role: str = ""
    email: str = ""
    owner_id: str | None = None


@dataclass(frozen=True)
class TeamAssignment:
    """Contractor assignment on a project (a project_team row).

    Only one of agreed_amount / percentage_share is meaningful, selected by
    payment_type.
    """

    id: str
    project_id: str
    contractor_id: str
    payment_type: str
    agreed_amount: Decimal = Decimal("0")
    percentage_share: Decimal = Decimal("0")
    payment_status: str = PaymentStatus.UNPAID.value
    owner_id: str | None = None


@dataclass(frozen=True)
class PaymentRecord:
    """Single payment (installment) to a contractor for a project."""

    id: str
    project_id: str
    contractor_id: str
    amount_paid: Decimal
    payment_date: date
    payment_method: str = PaymentMethod.BANK_TRANSFER.value
    reference: str | None = None
    recorded_by: str | None = None
    owner_id: str | None = None


@dataclass(frozen=True)
class ExpenseRecord:
    """Project expense."""

    id: str
    project_id: str
    description: str
    amount: Decimal
    expense_date: date
    category: str = "Other"
    receipt_reference: str | None = None
    recorded_by: str | None = None
    notes: str | None = None
    owner_id: str | None = None


def _owned_by(records: Iterable, owner_id: str) -> tuple:
    return tuple(r for r in records if r.owner_id == owner_id)


@dataclass(frozen=True)
class Snapshot:
    """Point-in-time copy of every collection the calculators read."""

    projects: tuple[ProjectRecord, ...] = ()
    contractors: tuple[ContractorRecord, ...] = ()
    teams: tuple[TeamAssignment, ...] = ()
    payments: tuple[PaymentRecord, ...] = ()
    expenses: tuple[ExpenseRecord, ...] = ()
    fetched_at: datetime | None = field(default=None, compare=False)

    def scoped(self, tenant_id: UUID | str | None) -> Snapshot:
        """Return the rows owned by tenant_id, or self for the cross-tenant view."""
        if tenant_id is None:
            return self
        owner = str(tenant_id)
        return replace(
            self,
            projects=_owned_by(self.projects, owner),
            contractors=_owned_by(self.contractors, owner),
            teams=_owned_by(self.teams, owner),
            payments=_owned_by(self.payments, owner),
            expenses=_owned_by(self.expenses, owner),
        )

    def projects_by_id(self) -> dict[str, ProjectRecord]:
        return {p.id: p for p in self.projects}

    def contractors_by_id(self) -> dict[str, ContractorRecord]:
        return {c.id: c for c in self.contractors}

    def by_owner(self) -> dict[str, Snapshot]:
        """Split into one snapshot per owner_id in a single pass. Unowned rows are dropped."""
        groups: dict[str, dict[str, list]] = defaultdict(
            lambda: {name: [] for name in _COLLECTIONS}
        )
        for name in _COLLECTIONS:
            for row in getattr(self, name):
                if row.owner_id is not None:
                    groups[row.owner_id][name].append(row)
        return {
            owner: replace(self, **{name: tuple(rows) for name, rows in collections.items()})
            for owner, collections in groups.items()
        }


_COLLECTIONS = ("projects", "contractors", "teams", "payments", "expenses")
