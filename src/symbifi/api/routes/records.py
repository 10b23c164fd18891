"""Tenant CRUD endpoints for projects, contractors, assignments, payments and expenses."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query, status

from symbifi.api.dependencies import Records, Snapshots, TenantId, TenantSnapshot
from symbifi.api.schemas import (
    ContractorCreate,
    ContractorResponse,
    ErrorResponse,
    ExpenseCreate,
    ExpenseResponse,
    PaymentCreate,
    PaymentResponse,
    ProjectCreate,
    ProjectResponse,
    ProjectTeamCreate,
    ProjectTeamResponse,
    ProjectTeamUpdate,
)
from symbifi.calculators.balance import ZERO, compute_agreed_pay, paid_by_pair
from symbifi.calculators.types import Snapshot
from symbifi.models import Contractor, Expense, Payment, Project, ProjectTeam

router = APIRouter(tags=["records"])

NOT_FOUND = {404: {"model": ErrorResponse}}
BAD_REFERENCE = {400: {"model": ErrorResponse}}


# ============================================================================
# Projects
# ============================================================================


@router.post(
    "/projects",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_project(
    records: Records,
    tenant_id: TenantId,
    payload: ProjectCreate,
) -> ProjectResponse:
    """Create a project."""
    project = await records.create(Project, tenant_id, payload.model_dump())
    return ProjectResponse.model_validate(project)


@router.get("/projects", response_model=list[ProjectResponse])
async def list_projects(
    records: Records,
    tenant_id: TenantId,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
) -> list[ProjectResponse]:
    """List the tenant's projects, optionally by status."""
    rows = await records.list(Project, tenant_id, {"status": status_filter})
    return [ProjectResponse.model_validate(r) for r in rows]


@router.get("/projects/{project_id}", response_model=ProjectResponse, responses=NOT_FOUND)
async def get_project(
    records: Records,
    tenant_id: TenantId,
    project_id: Annotated[UUID, Path()],
) -> ProjectResponse:
    """Get a project by ID."""
    return ProjectResponse.model_validate(await records.get(Project, tenant_id, project_id))


# ============================================================================
# Contractors
# ============================================================================


@router.post(
    "/contractors",
    response_model=ContractorResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_contractor(
    records: Records,
    tenant_id: TenantId,
    payload: ContractorCreate,
) -> ContractorResponse:
    """Create a contractor."""
    contractor = await records.create(Contractor, tenant_id, payload.model_dump())
    return ContractorResponse.model_validate(contractor)


@router.get("/contractors", response_model=list[ContractorResponse])
async def list_contractors(
    records: Records,
    tenant_id: TenantId,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
) -> list[ContractorResponse]:
    """List the tenant's contractors, optionally by status."""
    rows = await records.list(Contractor, tenant_id, {"status": status_filter})
    return [ContractorResponse.model_validate(r) for r in rows]


@router.get("/contractors/{contractor_id}", response_model=ContractorResponse, responses=NOT_FOUND)
async def get_contractor(
    records: Records,
    tenant_id: TenantId,
    contractor_id: Annotated[UUID, Path()],
) -> ContractorResponse:
    """Get a contractor by ID."""
    return ContractorResponse.model_validate(
        await records.get(Contractor, tenant_id, contractor_id)
    )


# ============================================================================
# Project teams
# ============================================================================


def _team_responses(rows: list[ProjectTeam], snapshot: Snapshot) -> list[ProjectTeamResponse]:
    """Attach calculated pay, amount paid and balance due to assignments."""
    projects = snapshot.projects_by_id()
    assignments = {t.id: t for t in snapshot.teams}
    paid = paid_by_pair(snapshot.payments)

    responses = []
    for team in rows:
        resp = ProjectTeamResponse.model_validate(team)
        assignment = assignments.get(str(team.id))
        if assignment is not None:
            resp.calculated_pay = compute_agreed_pay(assignment, projects.get(assignment.project_id))
            resp.total_paid = paid.get((assignment.project_id, assignment.contractor_id), ZERO)
            resp.balance_due = resp.calculated_pay - resp.total_paid
        responses.append(resp)
    return responses


@router.post(
    "/project-teams",
    response_model=ProjectTeamResponse,
    status_code=status.HTTP_201_CREATED,
    responses=BAD_REFERENCE,
)
async def create_project_team(
    records: Records,
    snapshots: Snapshots,
    tenant_id: TenantId,
    payload: ProjectTeamCreate,
) -> ProjectTeamResponse:
    """Assign a contractor to a project."""
    team = await records.create(ProjectTeam, tenant_id, payload.model_dump())
    snapshot = await snapshots.fetch_snapshot(tenant_id)
    return _team_responses([team], snapshot)[0]


@router.get("/project-teams", response_model=list[ProjectTeamResponse])
async def list_project_teams(
    records: Records,
    tenant_id: TenantId,
    snapshot: TenantSnapshot,
    project_id: UUID | None = None,
    contractor_id: UUID | None = None,
) -> list[ProjectTeamResponse]:
    """List assignments with their calculated pay and balance."""
    rows = await records.list(
        ProjectTeam,
        tenant_id,
        {"project_id": project_id, "contractor_id": contractor_id},
    )
    return _team_responses(rows, snapshot)


@router.get(
    "/project-teams/{team_id}",
    response_model=ProjectTeamResponse,
    responses=NOT_FOUND,
)
async def get_project_team(
    records: Records,
    tenant_id: TenantId,
    snapshot: TenantSnapshot,
    team_id: Annotated[UUID, Path()],
) -> ProjectTeamResponse:
    """Get one assignment with its calculated pay and balance."""
    team = await records.get(ProjectTeam, tenant_id, team_id)
    return _team_responses([team], snapshot)[0]


@router.patch(
    "/project-teams/{team_id}",
    response_model=ProjectTeamResponse,
    responses=NOT_FOUND,
)
async def update_project_team(
    records: Records,
    snapshots: Snapshots,
    tenant_id: TenantId,
    team_id: Annotated[UUID, Path()],
    payload: ProjectTeamUpdate,
) -> ProjectTeamResponse:
    """Update an assignment's agreement or stored payment status."""
    team = await records.update(
        ProjectTeam, tenant_id, team_id, payload.model_dump(exclude_unset=True)
    )
    snapshot = await snapshots.fetch_snapshot(tenant_id)
    return _team_responses([team], snapshot)[0]


# ============================================================================
# Payments
# ============================================================================


@router.post(
    "/payments",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
    responses=BAD_REFERENCE,
)
async def create_payment(
    records: Records,
    tenant_id: TenantId,
    payload: PaymentCreate,
) -> PaymentResponse:
    """Record a payment (one installment) to a contractor."""
    payment = await records.create(Payment, tenant_id, payload.model_dump())
    return PaymentResponse.model_validate(payment)


@router.get("/payments", response_model=list[PaymentResponse])
async def list_payments(
    records: Records,
    tenant_id: TenantId,
    project_id: UUID | None = None,
    contractor_id: UUID | None = None,
) -> list[PaymentResponse]:
    """List payments, optionally for one project and/or contractor."""
    rows = await records.list(
        Payment,
        tenant_id,
        {"project_id": project_id, "contractor_id": contractor_id},
    )
    return [PaymentResponse.model_validate(r) for r in rows]


@router.get("/payments/{payment_id}", response_model=PaymentResponse, responses=NOT_FOUND)
async def get_payment(
    records: Records,
    tenant_id: TenantId,
    payment_id: Annotated[UUID, Path()],
) -> PaymentResponse:
    """Get a payment by ID."""
    return PaymentResponse.model_validate(await records.get(Payment, tenant_id, payment_id))


# ============================================================================
# Expenses
# ============================================================================


@router.post(
    "/expenses",
    response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED,
    responses=BAD_REFERENCE,
)
async def create_expense(
    records: Records,
    tenant_id: TenantId,
    payload: ExpenseCreate,
) -> ExpenseResponse:
    """Record a project expense."""
    expense = await records.create(Expense, tenant_id, payload.model_dump())
    return ExpenseResponse.model_validate(expense)


@router.get("/expenses", response_model=list[ExpenseResponse])
async def list_expenses(
    records: Records,
    tenant_id: TenantId,
    project_id: UUID | None = None,
) -> list[ExpenseResponse]:
    """List expenses, optionally for one project."""
    rows = await records.list(Expense, tenant_id, {"project_id": project_id})
    return [ExpenseResponse.model_validate(r) for r in rows]
