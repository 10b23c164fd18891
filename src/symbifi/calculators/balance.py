"""Agreed pay and outstanding balance for project team assignments.

Agreed pay for an assignment depends only on its payment type:

- Fixed Amount: the assignment's agreed_amount, whatever the project budget
- Percentage: percentage_share / 100 of the project's total_budget

An assignment whose project cannot be resolved has zero agreed pay. Amounts
are never rounded here; callers format for display.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Mapping

from symbifi.calculators.types import PaymentRecord, PaymentType, ProjectRecord, TeamAssignment

ZERO = Decimal("0")
HUNDRED = Decimal("100")

PairKey = tuple[str, str]


def compute_agreed_pay(team: TeamAssignment, project: ProjectRecord | None) -> Decimal:
    """Return the contractually owed amount for an assignment."""
    if project is None:
        return ZERO
    if team.payment_type == PaymentType.FIXED_AMOUNT:
        return team.agreed_amount
    return project.total_budget * team.percentage_share / HUNDRED


def total_paid(
    payments: Iterable[PaymentRecord],
    project_id: str,
    contractor_id: str,
) -> Decimal:
    """Sum amount_paid over payments for exactly this (project, contractor) pair."""
    return sum(
        (
            p.amount_paid
            for p in payments
            if p.project_id == project_id and p.contractor_id == contractor_id
        ),
        ZERO,
    )


def has_outstanding_balance(
    team: TeamAssignment,
    project: ProjectRecord | None,
    payments: Iterable[PaymentRecord],
) -> bool:
    """True when agreed pay exceeds what has been paid. Paid in full or overpaid is False."""
    agreed = compute_agreed_pay(team, project)
    return agreed > total_paid(payments, team.project_id, team.contractor_id)


def balance_due(
    teams: Iterable[TeamAssignment],
    projects: Mapping[str, ProjectRecord],
    payments: Iterable[PaymentRecord],
    project_id: str,
    contractor_id: str,
) -> Decimal:
    """Agreed pay minus payments for the pair's assignment.

    Negative when overpaid. Zero when the pair has no assignment.
    """
    team = next(
        (t for t in teams if t.project_id == project_id and t.contractor_id == contractor_id),
        None,
    )
    if team is None:
        return ZERO
    agreed = compute_agreed_pay(team, projects.get(project_id))
    return agreed - total_paid(payments, project_id, contractor_id)


def paid_by_pair(payments: Iterable[PaymentRecord]) -> dict[PairKey, Decimal]:
    """Index payment totals by (project_id, contractor_id) in a single pass."""
    totals: dict[PairKey, Decimal] = defaultdict(lambda: ZERO)
    for p in payments:
        totals[(p.project_id, p.contractor_id)] += p.amount_paid
    return dict(totals)
