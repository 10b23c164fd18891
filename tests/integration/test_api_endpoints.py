"""API endpoint integration tests.

Tests the FastAPI endpoints for records, dashboard, reports and the
super admin views.
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest
from httpx import AsyncClient

from .conftest import TENANT_A_ID, TENANT_B_ID, tenant_headers


async def create_project(client: AsyncClient, tenant=TENANT_A_ID, **overrides) -> dict:
    payload = {
        "name": "Website redesign",
        "client_name": "Acme",
        "start_date": "2026-09-01",
        "total_budget": "100000",
    }
    payload.update(overrides)
    response = await client.post("/api/v1/projects", headers=tenant_headers(tenant), json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def create_contractor(client: AsyncClient, tenant=TENANT_A_ID, name="Ada Obi") -> dict:
    response = await client.post(
        "/api/v1/contractors",
        headers=tenant_headers(tenant),
        json={"full_name": name, "role": "Designer", "email": "ada@example.com"},
    )
    assert response.status_code == 201, response.text
    return response.json()


async def assign(client: AsyncClient, project: dict, contractor: dict, **terms) -> dict:
    payload = {
        "project_id": project["id"],
        "contractor_id": contractor["id"],
        "responsibility": "UI design",
    }
    payload.update(terms)
    response = await client.post(
        "/api/v1/project-teams", headers=tenant_headers(project["owner_id"]), json=payload
    )
    assert response.status_code == 201, response.text
    return response.json()


async def pay(client: AsyncClient, project: dict, contractor: dict, amount: str, on: date) -> dict:
    response = await client.post(
        "/api/v1/payments",
        headers=tenant_headers(project["owner_id"]),
        json={
            "project_id": project["id"],
            "contractor_id": contractor["id"],
            "amount_paid": amount,
            "payment_date": on.isoformat(),
            "reference": "TRX-1",
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def today() -> date:
    return date.today()


class TestHealthEndpoints:
    """Test health check endpoints."""

    async def test_health_check(self, client: AsyncClient):
        """Health endpoint should report the database."""
        response = await client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"

    async def test_readiness_check(self, client: AsyncClient):
        response = await client.get("/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    async def test_liveness_check(self, client: AsyncClient):
        response = await client.get("/live")
        assert response.status_code == 200
        assert response.json()["status"] == "alive"


class TestTenantHeader:
    """Test X-Tenant-ID handling."""

    async def test_missing_header(self, client: AsyncClient):
        response = await client.get("/api/v1/projects")

        assert response.status_code == 400
        assert "X-Tenant-ID" in response.json()["detail"]

    async def test_malformed_header(self, client: AsyncClient):
        response = await client.get("/api/v1/projects", headers={"X-Tenant-ID": "not-a-uuid"})

        assert response.status_code == 400


class TestRecords:
    """Test record CRUD endpoints."""

    async def test_create_and_get_project(self, client: AsyncClient):
        project = await create_project(client)

        assert project["owner_id"] == str(TENANT_A_ID)
        assert project["status"] == "Active"

        response = await client.get(f"/api/v1/projects/{project['id']}", headers=tenant_headers())
        assert response.status_code == 200
        assert Decimal(response.json()["total_budget"]) == Decimal("100000")

    async def test_list_projects_by_status(self, client: AsyncClient):
        await create_project(client, name="Live")
        await create_project(client, name="Done", status="Completed")

        response = await client.get(
            "/api/v1/projects", headers=tenant_headers(), params={"status": "Completed"}
        )

        assert [p["name"] for p in response.json()] == ["Done"]

    async def test_invalid_project_dates(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/projects",
            headers=tenant_headers(),
            json={
                "name": "Backwards",
                "client_name": "Acme",
                "start_date": "2026-09-01",
                "end_date": "2026-08-01",
            },
        )

        assert response.status_code == 422

    async def test_other_tenant_project_is_not_found(self, client: AsyncClient):
        project = await create_project(client)

        response = await client.get(
            f"/api/v1/projects/{project['id']}", headers=tenant_headers(TENANT_B_ID)
        )

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    async def test_payment_with_unknown_project(self, client: AsyncClient, today: date):
        contractor = await create_contractor(client)

        response = await client.post(
            "/api/v1/payments",
            headers=tenant_headers(),
            json={
                "project_id": str(uuid4()),
                "contractor_id": contractor["id"],
                "amount_paid": "100",
                "payment_date": today.isoformat(),
            },
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_REFERENCE"

    async def test_assignment_with_other_tenant_contractor(self, client: AsyncClient):
        project = await create_project(client)
        foreign = await create_contractor(client, tenant=TENANT_B_ID)

        response = await client.post(
            "/api/v1/project-teams",
            headers=tenant_headers(),
            json={
                "project_id": project["id"],
                "contractor_id": foreign["id"],
                "responsibility": "UI",
            },
        )

        assert response.status_code == 400

    async def test_percentage_share_out_of_range(self, client: AsyncClient):
        project = await create_project(client)
        contractor = await create_contractor(client)

        response = await client.post(
            "/api/v1/project-teams",
            headers=tenant_headers(),
            json={
                "project_id": project["id"],
                "contractor_id": contractor["id"],
                "responsibility": "UI",
                "payment_type": "Percentage",
                "percentage_share": "150",
            },
        )

        assert response.status_code == 422

    async def test_team_figures(self, client: AsyncClient, today: date):
        project = await create_project(client)
        contractor = await create_contractor(client)
        team = await assign(
            client, project, contractor, payment_type="Percentage", percentage_share="10"
        )
        await pay(client, project, contractor, "4000", today)
        await pay(client, project, contractor, "1000", today)

        response = await client.get(f"/api/v1/project-teams/{team['id']}", headers=tenant_headers())

        data = response.json()
        assert Decimal(data["calculated_pay"]) == Decimal("10000")
        assert Decimal(data["total_paid"]) == Decimal("5000")
        assert Decimal(data["balance_due"]) == Decimal("5000")

    async def test_invalid_payment_structure(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/projects",
            headers=tenant_headers(),
            json={
                "name": "Retainer",
                "client_name": "Acme",
                "start_date": "2026-09-01",
                "payment_structure": "Weekly",
            },
        )

        assert response.status_code == 422

    async def test_milestone_payment_structure(self, client: AsyncClient):
        project = await create_project(client, payment_structure="Milestones")

        assert project["payment_structure"] == "Milestones"

    async def test_create_team_returns_figures(self, client: AsyncClient, today: date):
        project = await create_project(client)
        contractor = await create_contractor(client)
        await pay(client, project, contractor, "1500", today)

        team = await assign(client, project, contractor, agreed_amount="5000")

        assert Decimal(team["calculated_pay"]) == Decimal("5000")
        assert Decimal(team["total_paid"]) == Decimal("1500")
        assert Decimal(team["balance_due"]) == Decimal("3500")

    async def test_update_agreement_returns_new_figures(self, client: AsyncClient):
        project = await create_project(client)
        contractor = await create_contractor(client)
        team = await assign(client, project, contractor, agreed_amount="5000")

        response = await client.patch(
            f"/api/v1/project-teams/{team['id']}",
            headers=tenant_headers(),
            json={"payment_type": "Percentage", "percentage_share": "7.5"},
        )

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["calculated_pay"]) == Decimal("7500")
        assert Decimal(data["balance_due"]) == Decimal("7500")

    @pytest.mark.parametrize(
        "field", ["agreed_amount", "percentage_share", "payment_type", "payment_status", "responsibility"]
    )
    async def test_update_rejects_null(self, client: AsyncClient, field: str):
        project = await create_project(client)
        contractor = await create_contractor(client)
        team = await assign(client, project, contractor, agreed_amount="5000")

        response = await client.patch(
            f"/api/v1/project-teams/{team['id']}",
            headers=tenant_headers(),
            json={field: None},
        )

        assert response.status_code == 422
        unchanged = await client.get(
            f"/api/v1/project-teams/{team['id']}", headers=tenant_headers()
        )
        assert Decimal(unchanged.json()["agreed_amount"]) == Decimal("5000")

    async def test_list_teams_with_figures(self, client: AsyncClient, today: date):
        project = await create_project(client)
        ada = await create_contractor(client)
        tunde = await create_contractor(client, name="Tunde")
        await assign(client, project, ada, agreed_amount="1000")
        await assign(client, project, tunde, payment_type="Percentage", percentage_share="2")
        await pay(client, project, tunde, "500", today)

        response = await client.get("/api/v1/project-teams", headers=tenant_headers())

        figures = {
            t["contractor_id"]: (Decimal(t["calculated_pay"]), Decimal(t["balance_due"]))
            for t in response.json()
        }
        assert figures == {
            ada["id"]: (Decimal("1000"), Decimal("1000")),
            tunde["id"]: (Decimal("2000"), Decimal("1500")),
        }

    async def test_update_payment_status(self, client: AsyncClient):
        project = await create_project(client)
        contractor = await create_contractor(client)
        team = await assign(client, project, contractor, agreed_amount="2500")

        response = await client.patch(
            f"/api/v1/project-teams/{team['id']}",
            headers=tenant_headers(),
            json={"payment_status": "Paid"},
        )

        assert response.status_code == 200
        assert response.json()["payment_status"] == "Paid"
        assert Decimal(response.json()["agreed_amount"]) == Decimal("2500")

    async def test_list_payments_for_contractor(self, client: AsyncClient, today: date):
        project = await create_project(client)
        ada = await create_contractor(client)
        tunde = await create_contractor(client, name="Tunde")
        await pay(client, project, ada, "100", today)
        await pay(client, project, tunde, "200", today)

        response = await client.get(
            "/api/v1/payments", headers=tenant_headers(), params={"contractor_id": tunde["id"]}
        )

        assert [Decimal(p["amount_paid"]) for p in response.json()] == [Decimal("200")]

    async def test_expenses(self, client: AsyncClient, today: date):
        project = await create_project(client)

        response = await client.post(
            "/api/v1/expenses",
            headers=tenant_headers(),
            json={
                "project_id": project["id"],
                "description": "Hosting",
                "amount": "75.50",
                "expense_date": today.isoformat(),
            },
        )
        assert response.status_code == 201

        listed = await client.get("/api/v1/expenses", headers=tenant_headers())
        assert [e["description"] for e in listed.json()] == ["Hosting"]


class TestDashboard:
    """Test the tenant dashboard endpoint."""

    async def test_dashboard(self, client: AsyncClient, today: date):
        project = await create_project(client)
        contractor = await create_contractor(client)
        await assign(client, project, contractor, agreed_amount="8000")
        await pay(client, project, contractor, "3000", today)
        other = await create_project(client, tenant=TENANT_B_ID, total_budget="999")
        other_contractor = await create_contractor(client, tenant=TENANT_B_ID)
        await pay(client, other, other_contractor, "50", today)

        response = await client.get("/api/v1/dashboard", headers=tenant_headers())

        assert response.status_code == 200
        data = response.json()
        assert data["active_projects_count"] == 1
        assert data["active_contractors_count"] == 1
        assert Decimal(data["total_paid"]) == Decimal("3000")
        assert Decimal(data["remaining_budget"]) == Decimal("97000")
        assert data["outstanding_balance_count"] == 1
        assert data["unpaid_assignments_count"] == 1
        assert data["this_month_payment_count"] == 1
        assert data["this_month_payments"][0]["contractor_name"] == "Ada Obi"
        assert data["this_month_payments"][0]["project_name"] == "Website redesign"

    async def test_empty_dashboard(self, client: AsyncClient):
        response = await client.get("/api/v1/dashboard", headers=tenant_headers())

        data = response.json()
        assert data["active_projects_count"] == 0
        assert Decimal(data["total_paid"]) == Decimal("0")
        assert data["this_month_payments"] == []


class TestReports:
    """Test report and CSV endpoints."""

    async def test_payment_summary(self, client: AsyncClient, today: date):
        project = await create_project(client)
        contractor = await create_contractor(client)
        await assign(client, project, contractor, agreed_amount="1000")
        await pay(client, project, contractor, "400", today)

        response = await client.get("/api/v1/reports/payment-summary", headers=tenant_headers())

        data = response.json()
        assert len(data["items"]) == 1
        assert Decimal(data["total_balance"]) == Decimal("600")

    async def test_payroll_report(self, client: AsyncClient):
        project = await create_project(client)
        contractor = await create_contractor(client)
        await assign(client, project, contractor, agreed_amount="30000")
        await pay(client, project, contractor, "10000", date(2026, 3, 15))
        await pay(client, project, contractor, "5000", date(2026, 4, 1))

        response = await client.get(
            "/api/v1/reports/payroll",
            headers=tenant_headers(),
            params={"date_from": "2026-03-01", "date_to": "2026-03-31"},
        )

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["total_payments"]) == Decimal("10000")
        assert Decimal(data["agency_profit"]) == Decimal("70000")
        assert Decimal(data["outstanding_to_contractors"]) == Decimal("20000")

    async def test_inverted_date_range(self, client: AsyncClient):
        response = await client.get(
            "/api/v1/reports/payroll",
            headers=tenant_headers(),
            params={"date_from": "2026-03-31", "date_to": "2026-03-01"},
        )

        assert response.status_code == 400

    async def test_payroll_csv(self, client: AsyncClient):
        project = await create_project(client)
        contractor = await create_contractor(client, name="Obi, Ada")
        await assign(client, project, contractor, agreed_amount="1500")
        await pay(client, project, contractor, "500", date(2026, 3, 15))

        response = await client.get(
            "/api/v1/reports/payroll.csv",
            headers=tenant_headers(),
            params={"date_from": "2026-03-01", "date_to": "2026-03-31"},
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert (
            'filename="payroll-report-2026-03-01-to-2026-03-31.csv"'
            in response.headers["content-disposition"]
        )
        assert response.text == (
            "Contractor,Total Agreed (NGN),Total Paid (NGN),Balance Due (NGN),Payment Count\n"
            '"Obi, Ada",1500.00,500.00,1000.00,1'
        )

    async def test_payments_csv(self, client: AsyncClient):
        project = await create_project(client)
        contractor = await create_contractor(client)
        await pay(client, project, contractor, "250", date(2026, 5, 2))

        response = await client.get("/api/v1/reports/payments.csv", headers=tenant_headers())

        lines = response.text.split("\n")
        assert lines[0].startswith("Payment Date,Contractor,Project,Amount (NGN)")
        assert lines[1] == "2026-05-02,Ada Obi,Website redesign,250.00,Bank Transfer,TRX-1,"

    async def test_empty_export_returns_no_content(self, client: AsyncClient):
        response = await client.get("/api/v1/reports/expenses.csv", headers=tenant_headers())

        assert response.status_code == 204
        assert response.content == b""


class TestSuperAdmin:
    """Test the cross-tenant super admin endpoints."""

    async def test_non_admin_forbidden(self, client: AsyncClient):
        response = await client.get("/api/v1/admin/overview", headers=tenant_headers())

        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"

    async def test_overview_spans_tenants(self, client: AsyncClient, admin_id, today: date):
        for tenant in (TENANT_A_ID, TENANT_B_ID):
            project = await create_project(client, tenant=tenant)
            contractor = await create_contractor(client, tenant=tenant)
            await assign(client, project, contractor, agreed_amount="1000")
            await pay(client, project, contractor, "250", today)

        response = await client.get("/api/v1/admin/overview", headers=tenant_headers(admin_id))

        assert response.status_code == 200
        data = response.json()
        assert data["tenant_count"] == 2
        assert data["project_count"] == 2
        assert Decimal(data["total_paid"]) == Decimal("500")
        assert Decimal(data["total_committed"]) == Decimal("2000")
        assert Decimal(data["outstanding"]) == Decimal("1500")
        assert len(data["recent_payments"]) == 2

    async def test_all_projects(self, client: AsyncClient, admin_id, today: date):
        project = await create_project(client)
        contractor = await create_contractor(client)
        await assign(client, project, contractor, agreed_amount="40000")
        await client.post(
            "/api/v1/expenses",
            headers=tenant_headers(),
            json={
                "project_id": project["id"],
                "description": "Hosting",
                "amount": "5000",
                "expense_date": today.isoformat(),
            },
        )

        response = await client.get("/api/v1/admin/projects", headers=tenant_headers(admin_id))

        (row,) = response.json()
        assert Decimal(row["expenses"]) == Decimal("5000")
        assert Decimal(row["profit"]) == Decimal("55000")

    async def test_all_payments_csv(self, client: AsyncClient, admin_id):
        project = await create_project(client)
        contractor = await create_contractor(client)
        await pay(client, project, contractor, "10", date(2026, 6, 1))

        response = await client.get("/api/v1/admin/payments.csv", headers=tenant_headers(admin_id))

        assert response.status_code == 200
        assert 'filename="super-admin-payments-' in response.headers["content-disposition"]
        assert response.text == (
            "Payment Date,Amount Paid,Method,Project,Contractor\n"
            "2026-06-01,10.00,Bank Transfer,Website redesign,Ada Obi"
        )

    async def test_clients(self, client: AsyncClient, admin_id, today: date):
        a_project = await create_project(client)
        a_contractor = await create_contractor(client)
        await assign(client, a_project, a_contractor, agreed_amount="3000")
        await pay(client, a_project, a_contractor, "1000", today)
        await create_project(client, tenant=TENANT_B_ID, total_budget="500")

        response = await client.get("/api/v1/admin/clients", headers=tenant_headers(admin_id))

        assert response.status_code == 200
        rows = {r["owner_id"]: r for r in response.json()}
        a = rows[str(TENANT_A_ID)]
        assert (a["project_count"], a["contractor_count"], a["payment_count"]) == (1, 1, 1)
        assert Decimal(a["total_committed"]) == Decimal("3000")
        assert Decimal(a["outstanding"]) == Decimal("2000")
        b = rows[str(TENANT_B_ID)]
        assert b["project_count"] == 1
        assert Decimal(b["total_paid"]) == Decimal("0")

    async def test_contractors(self, client: AsyncClient, admin_id):
        await create_contractor(client)
        await create_contractor(client, tenant=TENANT_B_ID, name="Tunde Bello")
        await client.post(
            "/api/v1/contractors",
            headers=tenant_headers(TENANT_B_ID),
            json={
                "full_name": "Dormant Studio",
                "role": "QA",
                "email": "qa@studio.example",
                "status": "Inactive",
            },
        )

        everyone = await client.get("/api/v1/admin/contractors", headers=tenant_headers(admin_id))
        searched = await client.get(
            "/api/v1/admin/contractors",
            headers=tenant_headers(admin_id),
            params={"search": "tunde"},
        )
        inactive = await client.get(
            "/api/v1/admin/contractors",
            headers=tenant_headers(admin_id),
            params={"status": "inactive"},
        )

        data = everyone.json()
        assert (data["total_count"], data["active_count"], data["inactive_count"]) == (3, 2, 1)
        assert [c["full_name"] for c in searched.json()["contractors"]] == ["Tunde Bello"]
        assert searched.json()["total_count"] == 3
        assert [c["full_name"] for c in inactive.json()["contractors"]] == ["Dormant Studio"]

    async def test_contractors_forbidden_for_tenant(self, client: AsyncClient):
        response = await client.get("/api/v1/admin/contractors", headers=tenant_headers())

        assert response.status_code == 403
