"""Payroll calculators over immutable snapshots."""

from symbifi.calculators.aggregator import AdminOverview, DashboardAggregator, DashboardStats
from symbifi.calculators.balance import (
    balance_due,
    compute_agreed_pay,
    has_outstanding_balance,
    total_paid,
)
from symbifi.calculators.reports import (
    PayrollReport,
    PayrollReportFilter,
    build_payroll_report,
    contractor_payment_summary,
)
from symbifi.calculators.types import Snapshot

__all__ = [
    "AdminOverview",
    "DashboardAggregator",
    "DashboardStats",
    "PayrollReport",
    "PayrollReportFilter",
    "Snapshot",
    "balance_due",
    "build_payroll_report",
    "compute_agreed_pay",
    "contractor_payment_summary",
    "has_outstanding_balance",
    "total_paid",
]
