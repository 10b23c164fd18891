"""Pydantic schemas for API request/response models."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from symbifi.calculators.types import (
    ContractorStatus,
    ContractorType,
    PaymentMethod,
    PaymentStatus,
    PaymentType,
    ProjectPaymentStructure,
    ProjectStatus,
)


class ErrorResponse(BaseModel):
    """Error payload."""

    detail: str
    code: str | None = None


# ============================================================================
# Project schemas
# ============================================================================


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    name: str = Field(min_length=1)
    client_name: str = Field(min_length=1)
    start_date: date
    end_date: date | None = None
    total_budget: Decimal = Field(default=Decimal("0"), ge=0)
    payment_structure: ProjectPaymentStructure = ProjectPaymentStructure.SINGLE_PAYMENT
    status: ProjectStatus = ProjectStatus.ACTIVE
    notes: str | None = None

    @model_validator(mode="after")
    def check_dates(self) -> "ProjectCreate":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ProjectResponse(BaseModel):
    """Schema for project response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    name: str
    client_name: str
    start_date: date
    end_date: date | None = None
    total_budget: Decimal
    payment_structure: str
    status: str
    notes: str | None = None
    created_at: datetime


# ============================================================================
# Contractor schemas
# ============================================================================


class ContractorCreate(BaseModel):
    """Schema for creating a contractor."""

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    full_name: str = Field(min_length=1)
    role: str = Field(min_length=1)
    email: str = Field(min_length=3)
    phone: str | None = None
    bank_wallet_details: str | None = None
    contractor_type: ContractorType = ContractorType.INDIVIDUAL
    status: ContractorStatus = ContractorStatus.ACTIVE


class ContractorResponse(BaseModel):
    """Schema for contractor response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    full_name: str
    role: str
    email: str
    phone: str | None = None
    bank_wallet_details: str | None = None
    contractor_type: str
    status: str
    created_at: datetime


# ============================================================================
# Project team schemas
# ============================================================================


class ProjectTeamCreate(BaseModel):
    """Schema for assigning a contractor to a project."""

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    project_id: UUID
    contractor_id: UUID
    responsibility: str = Field(min_length=1)
    payment_type: PaymentType = PaymentType.FIXED_AMOUNT
    agreed_amount: Decimal = Field(default=Decimal("0"), ge=0)
    percentage_share: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    payment_status: PaymentStatus = PaymentStatus.UNPAID


class ProjectTeamUpdate(BaseModel):
    """Schema for a partial assignment update."""

    model_config = ConfigDict(use_enum_values=True)

    responsibility: str | None = Field(default=None, min_length=1)
    payment_type: PaymentType | None = None
    agreed_amount: Decimal | None = Field(default=None, ge=0)
    percentage_share: Decimal | None = Field(default=None, ge=0, le=100)
    payment_status: PaymentStatus | None = None

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value):
        # Omit a field to leave it unchanged; every column is NOT NULL
        if value is None:
            raise ValueError("must not be null")
        return value


class ProjectTeamResponse(BaseModel):
    """Schema for project team response, with computed pay figures."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    project_id: UUID
    contractor_id: UUID
    responsibility: str
    payment_type: str
    agreed_amount: Decimal
    percentage_share: Decimal
    payment_status: str
    created_at: datetime
    calculated_pay: Decimal | None = None
    total_paid: Decimal | None = None
    balance_due: Decimal | None = None


# ============================================================================
# Payment schemas
# ============================================================================


class PaymentCreate(BaseModel):
    """Schema for recording a payment."""

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    project_id: UUID
    contractor_id: UUID
    amount_paid: Decimal = Field(ge=0)
    payment_method: PaymentMethod = PaymentMethod.BANK_TRANSFER
    payment_date: date
    reference: str | None = None
    recorded_by: str | None = None


class PaymentResponse(BaseModel):
    """Schema for payment response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    project_id: UUID
    contractor_id: UUID
    amount_paid: Decimal
    payment_method: str
    payment_date: date
    reference: str | None = None
    recorded_by: str | None = None
    created_at: datetime


# ============================================================================
# Expense schemas
# ============================================================================


class ExpenseCreate(BaseModel):
    """Schema for recording a project expense."""

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    project_id: UUID
    description: str = Field(min_length=1)
    category: str = "Other"
    amount: Decimal = Field(ge=0)
    expense_date: date
    receipt_reference: str | None = None
    recorded_by: str | None = None
    notes: str | None = None


class ExpenseResponse(BaseModel):
    """Schema for expense response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    project_id: UUID
    description: str
    category: str
    amount: Decimal
    expense_date: date
    receipt_reference: str | None = None
    recorded_by: str | None = None
    notes: str | None = None
    created_at: datetime


# ============================================================================
# Dashboard and report schemas
# ============================================================================


class PaymentListingResponse(BaseModel):
    """Payment with resolved display names."""

    model_config = ConfigDict(from_attributes=True)

    payment_id: str
    project_id: str
    contractor_id: str
    contractor_name: str
    project_name: str
    amount_paid: Decimal
    payment_date: date
    payment_method: str


class DashboardResponse(BaseModel):
    """Tenant dashboard statistics."""

    model_config = ConfigDict(from_attributes=True)

    active_projects_count: int
    completed_projects_count: int
    active_contractors_count: int
    total_paid: Decimal
    total_budget: Decimal
    remaining_budget: Decimal
    outstanding_balance_count: int
    unpaid_assignments_count: int
    this_month_payment_count: int
    this_month_payments: list[PaymentListingResponse]


class ContractorSummaryResponse(BaseModel):
    """Per-contractor totals."""

    model_config = ConfigDict(from_attributes=True)

    contractor_id: str
    contractor_name: str
    total_agreed: Decimal
    total_paid: Decimal
    balance_due: Decimal
    payment_count: int


class PaymentSummaryResponse(BaseModel):
    """Payment summary across all projects."""

    items: list[ContractorSummaryResponse]
    total_agreed: Decimal
    total_paid: Decimal
    total_balance: Decimal


class ProjectSummaryResponse(BaseModel):
    """Per-project financials."""

    model_config = ConfigDict(from_attributes=True)

    project_id: str
    project_name: str
    budget: Decimal
    agreed_to_contractors: Decimal
    paid_to_contractors: Decimal
    expenses: Decimal
    profit: Decimal


class PayrollReportResponse(BaseModel):
    """Filtered payroll report."""

    date_from: date
    date_to: date
    project_id: str | None = None
    contractor_id: str | None = None
    total_payments: Decimal
    total_expenses: Decimal
    total_budget: Decimal
    total_agreed_to_contractors: Decimal
    agency_profit: Decimal
    outstanding_to_contractors: Decimal
    contractors: list[ContractorSummaryResponse]
    projects: list[ProjectSummaryResponse]


class AdminOverviewResponse(BaseModel):
    """Cross-tenant overview."""

    model_config = ConfigDict(from_attributes=True)

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
    recent_payments: list[PaymentListingResponse]


class ContractorListingResponse(BaseModel):
    """Contractor row in the cross-tenant directory."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str | None = None
    full_name: str
    role: str
    email: str
    contractor_type: str
    status: str


class ContractorDirectoryResponse(BaseModel):
    """Cross-tenant contractor list with status counts."""

    model_config = ConfigDict(from_attributes=True)

    total_count: int
    active_count: int
    inactive_count: int
    contractors: list[ContractorListingResponse]


class ClientSummaryResponse(BaseModel):
    """Per-tenant totals."""

    model_config = ConfigDict(from_attributes=True)

    owner_id: str
    project_count: int
    contractor_count: int
    assignment_count: int
    payment_count: int
    total_budget: Decimal
    total_paid: Decimal
    total_committed: Decimal
    outstanding: Decimal
