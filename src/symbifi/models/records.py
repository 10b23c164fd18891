"""Tenant-owned payroll records: projects, contractors, assignments, payments, expenses."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import (
    CheckConstraint,
    Date,
    ForeignKey,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from symbifi.models.base import Base, TenantOwnedMixin, TimestampMixin


class Project(Base, TenantOwnedMixin, TimestampMixin):
    """Client project with a total budget."""

    __tablename__ = "project"

    name: Mapped[str] = mapped_column(String, nullable=False)
    client_name: Mapped[str] = mapped_column(String, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    total_budget: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False, default=Decimal("0"))
    payment_structure: Mapped[str] = mapped_column(String, nullable=False, default="Single payment")
    status: Mapped[str] = mapped_column(String, nullable=False, default="Active")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint("status IN ('Active', 'Completed', 'On Hold')", name="project_status_check"),
        CheckConstraint(
            "payment_structure IN ('Single payment', 'Milestones')",
            name="project_payment_structure_check",
        ),
        CheckConstraint("total_budget >= 0", name="project_budget_non_negative"),
        CheckConstraint("end_date IS NULL OR end_date >= start_date", name="project_dates_check"),
    )

    # Relationships
    teams: Mapped[list[ProjectTeam]] = relationship(
        back_populates="project", cascade="all, delete-orphan"
    )


class Contractor(Base, TenantOwnedMixin, TimestampMixin):
    """Individual or agency paid per project."""

    __tablename__ = "contractor"

    full_name: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    phone: Mapped[str | None] = mapped_column(String, nullable=True)
    bank_wallet_details: Mapped[str | None] = mapped_column(String, nullable=True)
    contractor_type: Mapped[str] = mapped_column(String, nullable=False, default="Individual")
    status: Mapped[str] = mapped_column(String, nullable=False, default="Active")

    __table_args__ = (
        CheckConstraint("status IN ('Active', 'Inactive')", name="contractor_status_check"),
        CheckConstraint(
            "contractor_type IN ('Individual', 'Agency')",
            name="contractor_type_check",
        ),
    )

    teams: Mapped[list[ProjectTeam]] = relationship(
        back_populates="contractor", cascade="all, delete-orphan"
    )


class ProjectTeam(Base, TenantOwnedMixin, TimestampMixin):
    """Assignment of a contractor to a project with a pay agreement."""

    __tablename__ = "project_team"

    project_id: Mapped[UUID] = mapped_column(
        ForeignKey("project.id", ondelete="CASCADE"),
        nullable=False,
    )
    contractor_id: Mapped[UUID] = mapped_column(
        ForeignKey("contractor.id", ondelete="CASCADE"),
        nullable=False,
    )
    responsibility: Mapped[str] = mapped_column(String, nullable=False)
    payment_type: Mapped[str] = mapped_column(String, nullable=False, default="Fixed Amount")
    agreed_amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False, default=Decimal("0"))
    percentage_share: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False, default=Decimal("0"))
    payment_status: Mapped[str] = mapped_column(String, nullable=False, default="Unpaid")

    __table_args__ = (
        CheckConstraint(
            "payment_type IN ('Fixed Amount', 'Percentage')",
            name="project_team_payment_type_check",
        ),
        CheckConstraint(
            "payment_status IN ('Unpaid', 'Partially Paid', 'Paid')",
            name="project_team_payment_status_check",
        ),
        CheckConstraint(
            "percentage_share >= 0 AND percentage_share <= 100",
            name="project_team_percentage_range",
        ),
    )

    project: Mapped[Project] = relationship(back_populates="teams")
    contractor: Mapped[Contractor] = relationship(back_populates="teams")


class Payment(Base, TenantOwnedMixin, TimestampMixin):
    """Disbursement to a contractor for a project. Several rows per pair are installments."""

    __tablename__ = "payment"

    project_id: Mapped[UUID] = mapped_column(
        ForeignKey("project.id", ondelete="CASCADE"),
        nullable=False,
    )
    contractor_id: Mapped[UUID] = mapped_column(
        ForeignKey("contractor.id", ondelete="CASCADE"),
        nullable=False,
    )
    amount_paid: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False, default=Decimal("0"))
    payment_method: Mapped[str] = mapped_column(String, nullable=False, default="Bank Transfer")
    payment_date: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
    reference: Mapped[str | None] = mapped_column(String, nullable=True)
    recorded_by: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "payment_method IN ('Bank Transfer', 'Cash', 'USSD', 'Wallet', 'Other')",
            name="payment_method_check",
        ),
        CheckConstraint("amount_paid >= 0", name="payment_amount_non_negative"),
    )


class Expense(Base, TenantOwnedMixin, TimestampMixin):
    """Non-payroll project expense, counted against project profit."""

    __tablename__ = "expense"

    project_id: Mapped[UUID] = mapped_column(
        ForeignKey("project.id", ondelete="CASCADE"),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(String, nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False, default="Other")
    amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False, default=Decimal("0"))
    expense_date: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
    receipt_reference: Mapped[str | None] = mapped_column(String, nullable=True)
    recorded_by: Mapped[str | None] = mapped_column(String, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (CheckConstraint("amount >= 0", name="expense_amount_non_negative"),)


class UserRole(Base, TimestampMixin):
    """Role grant for a user. Only 'admin' unlocks the cross-tenant views."""

    __tablename__ = "user_role"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(nullable=False, index=True)
    role: Mapped[str] = mapped_column(String, nullable=False, default="user")

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'user')", name="user_role_check"),
        UniqueConstraint("user_id", "role", name="user_role_user_role_unique"),
    )
