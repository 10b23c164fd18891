"""Row shapes and column labels for the CSV exports."""

from __future__ import annotations

from typing import Any

from symbifi.calculators.reports import UNKNOWN_NAME, PayrollReport
from symbifi.calculators.types import Snapshot
from symbifi.services.csv_export import format_currency_for_csv, format_date_for_csv


def payroll_report_headers(currency: str) -> dict[str, str]:
    return {
        "contractor": "Contractor",
        "total_agreed": f"Total Agreed ({currency})",
        "total_paid": f"Total Paid ({currency})",
        "balance_due": f"Balance Due ({currency})",
        "payment_count": "Payment Count",
    }


def project_report_headers(currency: str) -> dict[str, str]:
    return {
        "project": "Project",
        "budget": f"Budget ({currency})",
        "agreed_to_contractors": f"Agreed to Contractors ({currency})",
        "paid_to_contractors": f"Paid to Contractors ({currency})",
        "expenses": f"Expenses ({currency})",
        "profit": f"Profit ({currency})",
    }


def payment_headers(currency: str) -> dict[str, str]:
    return {
        "date": "Payment Date",
        "contractor": "Contractor",
        "project": "Project",
        "amount": f"Amount ({currency})",
        "method": "Payment Method",
        "reference": "Reference",
        "recorded_by": "Recorded By",
    }


def expense_headers(currency: str) -> dict[str, str]:
    return {
        "date": "Expense Date",
        "project": "Project",
        "description": "Description",
        "category": "Category",
        "amount": f"Amount ({currency})",
        "receipt": "Receipt Reference",
        "recorded_by": "Recorded By",
        "notes": "Notes",
    }


def super_admin_payment_headers() -> dict[str, str]:
    return {
        "payment_date": "Payment Date",
        "amount_paid": "Amount Paid",
        "payment_method": "Method",
        "project": "Project",
        "contractor": "Contractor",
    }


def payroll_report_rows(report: PayrollReport) -> list[dict[str, Any]]:
    return [
        {
            "contractor": c.contractor_name,
            "total_agreed": format_currency_for_csv(c.total_agreed),
            "total_paid": format_currency_for_csv(c.total_paid),
            "balance_due": format_currency_for_csv(c.balance_due),
            "payment_count": str(c.payment_count),
        }
        for c in report.contractors
    ]


def project_report_rows(report: PayrollReport) -> list[dict[str, Any]]:
    return [
        {
            "project": p.project_name,
            "budget": format_currency_for_csv(p.budget),
            "agreed_to_contractors": format_currency_for_csv(p.agreed_to_contractors),
            "paid_to_contractors": format_currency_for_csv(p.paid_to_contractors),
            "expenses": format_currency_for_csv(p.expenses),
            "profit": format_currency_for_csv(p.profit),
        }
        for p in report.projects
    ]


def payment_rows(snapshot: Snapshot) -> list[dict[str, Any]]:
    """One row per payment; unresolved names become "Unknown"."""
    projects = snapshot.projects_by_id()
    contractors = snapshot.contractors_by_id()
    rows = []
    for p in snapshot.payments:
        project = projects.get(p.project_id)
        contractor = contractors.get(p.contractor_id)
        rows.append(
            {
                "date": format_date_for_csv(p.payment_date),
                "contractor": contractor.full_name if contractor else UNKNOWN_NAME,
                "project": project.name if project else UNKNOWN_NAME,
                "amount": format_currency_for_csv(p.amount_paid),
                "method": p.payment_method,
                "reference": p.reference or "",
                "recorded_by": p.recorded_by or "",
            }
        )
    return rows


def super_admin_payment_rows(snapshot: Snapshot) -> list[dict[str, Any]]:
    """Cross-tenant payment history, newest first; unresolved names fall back to the raw id."""
    projects = snapshot.projects_by_id()
    contractors = snapshot.contractors_by_id()
    ordered = sorted(snapshot.payments, key=lambda p: (p.payment_date, p.id), reverse=True)
    rows = []
    for p in ordered:
        project = projects.get(p.project_id)
        contractor = contractors.get(p.contractor_id)
        rows.append(
            {
                "payment_date": format_date_for_csv(p.payment_date),
                "amount_paid": format_currency_for_csv(p.amount_paid),
                "payment_method": p.payment_method,
                "project": project.name if project else p.project_id,
                "contractor": contractor.full_name if contractor else p.contractor_id,
            }
        )
    return rows


def expense_rows(snapshot: Snapshot) -> list[dict[str, Any]]:
    projects = snapshot.projects_by_id()
    rows = []
    for e in snapshot.expenses:
        project = projects.get(e.project_id)
        rows.append(
            {
                "date": format_date_for_csv(e.expense_date),
                "project": project.name if project else UNKNOWN_NAME,
                "description": e.description,
                "category": e.category,
                "amount": format_currency_for_csv(e.amount),
                "receipt": e.receipt_reference or "",
                "recorded_by": e.recorded_by or "",
                "notes": e.notes or "",
            }
        )
    return rows
