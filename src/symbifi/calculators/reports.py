"""Payroll and project financial reports."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable

from symbifi.calculators.balance import ZERO, compute_agreed_pay
from symbifi.calculators.types import (
    ExpenseRecord,
    PaymentRecord,
    ProjectRecord,
    Snapshot,
    TeamAssignment,
)

UNKNOWN_NAME = "Unknown"


@dataclass(frozen=True)
class ContractorSummary:
    """Agreed versus paid totals for one contractor."""

    contractor_id: str
    contractor_name: str
    total_agreed: Decimal
    total_paid: Decimal
    balance_due: Decimal
    payment_count: int = 0


@dataclass(frozen=True)
class ProjectSummary:
    """Financial position of one project."""

    project_id: str
    project_name: str
    budget: Decimal
    agreed_to_contractors: Decimal
    paid_to_contractors: Decimal
    expenses: Decimal
    profit: Decimal


@dataclass(frozen=True)
class PayrollReportFilter:
    """Report filters. Date bounds are inclusive."""

    date_from: date
    date_to: date
    project_id: str | None = None
    contractor_id: str | None = None

    def __post_init__(self) -> None:
        if self.date_to < self.date_from:
            raise ValueError(
                f"date_to ({self.date_to}) is before date_from ({self.date_from})"
            )

    def in_range(self, value: date) -> bool:
        return self.date_from <= value <= self.date_to

    def matches_project(self, project_id: str) -> bool:
        return self.project_id is None or project_id == self.project_id

    def matches_contractor(self, contractor_id: str) -> bool:
        return self.contractor_id is None or contractor_id == self.contractor_id


@dataclass(frozen=True)
class PayrollReport:
    """Filtered payroll report with totals and breakdowns."""

    filter: PayrollReportFilter
    total_payments: Decimal
    total_expenses: Decimal
    total_budget: Decimal
    total_agreed_to_contractors: Decimal
    agency_profit: Decimal
    outstanding_to_contractors: Decimal
    contractors: tuple[ContractorSummary, ...]
    projects: tuple[ProjectSummary, ...]


def _agreed_total(snapshot: Snapshot, teams: list[TeamAssignment]) -> Decimal:
    projects = snapshot.projects_by_id()
    return sum(
        (compute_agreed_pay(t, projects.get(t.project_id)) for t in teams),
        ZERO,
    )


def contractor_payment_summary(snapshot: Snapshot) -> list[ContractorSummary]:
    """Per-contractor agreed pay, payments and balance across all projects.

    Assignments whose project is missing contribute nothing. Contractors with
    neither agreed pay nor payments are left out.
    """
    projects = snapshot.projects_by_id()
    agreed: dict[str, Decimal] = {c.id: ZERO for c in snapshot.contractors}
    paid: dict[str, Decimal] = {c.id: ZERO for c in snapshot.contractors}
    counts: dict[str, int] = {c.id: 0 for c in snapshot.contractors}

    for team in snapshot.teams:
        project = projects.get(team.project_id)
        if project is None or team.contractor_id not in agreed:
            continue
        agreed[team.contractor_id] += compute_agreed_pay(team, project)

    for payment in snapshot.payments:
        if payment.contractor_id in paid:
            paid[payment.contractor_id] += payment.amount_paid
            counts[payment.contractor_id] += 1

    summaries = []
    for contractor in snapshot.contractors:
        total_agreed = agreed[contractor.id]
        total_paid = paid[contractor.id]
        if total_agreed > 0 or total_paid > 0:
            summaries.append(
                ContractorSummary(
                    contractor_id=contractor.id,
                    contractor_name=contractor.full_name,
                    total_agreed=total_agreed,
                    total_paid=total_paid,
                    balance_due=total_agreed - total_paid,
                    payment_count=counts[contractor.id],
                )
            )
    return summaries


def build_payroll_report(snapshot: Snapshot, report_filter: PayrollReportFilter) -> PayrollReport:
    """Build the payroll report for a date range and optional project/contractor.

    Payments and expenses are limited to the date range. Budgets and agreed
    pay are not dated, so they follow only the project/contractor filters.
    """
    f = report_filter
    payments = [
        p
        for p in snapshot.payments
        if f.in_range(p.payment_date)
        and f.matches_project(p.project_id)
        and f.matches_contractor(p.contractor_id)
    ]
    expenses = [
        e
        for e in snapshot.expenses
        if f.in_range(e.expense_date) and f.matches_project(e.project_id)
    ]
    relevant_projects = [p for p in snapshot.projects if f.matches_project(p.id)]
    relevant_teams = [
        t
        for t in snapshot.teams
        if f.matches_project(t.project_id) and f.matches_contractor(t.contractor_id)
    ]

    total_payments = sum((p.amount_paid for p in payments), ZERO)
    total_expenses = sum((e.amount for e in expenses), ZERO)
    total_budget = sum((p.total_budget for p in relevant_projects), ZERO)
    total_agreed = _agreed_total(snapshot, relevant_teams)

    contractor_rows = []
    for contractor in snapshot.contractors:
        c_payments = [p for p in payments if p.contractor_id == contractor.id]
        c_teams = [t for t in relevant_teams if t.contractor_id == contractor.id]
        c_agreed = _agreed_total(snapshot, c_teams)
        c_paid = sum((p.amount_paid for p in c_payments), ZERO)
        if c_agreed > 0 or c_paid > 0:
            contractor_rows.append(
                ContractorSummary(
                    contractor_id=contractor.id,
                    contractor_name=contractor.full_name,
                    total_agreed=c_agreed,
                    total_paid=c_paid,
                    balance_due=c_agreed - c_paid,
                    payment_count=len(c_payments),
                )
            )

    project_rows = _project_rows(snapshot, relevant_projects, payments, expenses)

    return PayrollReport(
        filter=f,
        total_payments=total_payments,
        total_expenses=total_expenses,
        total_budget=total_budget,
        total_agreed_to_contractors=total_agreed,
        agency_profit=total_budget - total_agreed - total_expenses,
        outstanding_to_contractors=total_agreed - total_payments,
        contractors=tuple(contractor_rows),
        projects=tuple(project_rows),
    )


def _project_rows(
    snapshot: Snapshot,
    projects: Iterable[ProjectRecord],
    payments: Iterable[PaymentRecord],
    expenses: Iterable[ExpenseRecord],
) -> list[ProjectSummary]:
    """One ProjectSummary per project. Agreed pay covers every assignment on the project."""
    agreed: dict[str, Decimal] = defaultdict(lambda: ZERO)
    by_id = snapshot.projects_by_id()
    for team in snapshot.teams:
        agreed[team.project_id] += compute_agreed_pay(team, by_id.get(team.project_id))
    paid: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for payment in payments:
        paid[payment.project_id] += payment.amount_paid
    spent: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for expense in expenses:
        spent[expense.project_id] += expense.amount

    return [
        ProjectSummary(
            project_id=p.id,
            project_name=p.name,
            budget=p.total_budget,
            agreed_to_contractors=agreed[p.id],
            paid_to_contractors=paid[p.id],
            expenses=spent[p.id],
            profit=p.total_budget - agreed[p.id] - spent[p.id],
        )
        for p in projects
    ]


def project_summaries(snapshot: Snapshot) -> list[ProjectSummary]:
    """Every project with its committed pay, payments and expenses to date."""
    return _project_rows(snapshot, snapshot.projects, snapshot.payments, snapshot.expenses)
