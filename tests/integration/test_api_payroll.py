"""
Integration Tests for the Payroll and Labor API

Exercises the HTTP surface end to end against the in-process app.
"""

import csv
import io

import pytest
from httpx import AsyncClient

EMPLOYEES = [
    {
        "id": "emp-1",
        "name": "Alex Server",
        "compensation_type": "hourly",
        "hourly_rate": 1000,
    },
    {
        "id": "mgr-1",
        "name": "Morgan Manager",
        "compensation_type": "salary",
        "salary_amount": 70000,
        "pay_period_type": "weekly",
    },
]


def punch(punch_id: str, punch_type: str, when: str, employee_id: str = "emp-1") -> dict:
    return {
        "id": punch_id,
        "employee_id": employee_id,
        "punch_type": punch_type,
        "punch_time": when,
    }


PUNCHES = [
    punch("p1", "clock_in", "2024-01-15T09:00:00Z"),
    punch("p2", "clock_out", "2024-01-15T17:00:00Z"),
    punch("p3", "clock_in", "2024-01-16T09:00:00Z"),
]


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_health(client: AsyncClient) -> None:
    """GET /health returns 200 with the service name."""
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "laborledger-api"}


@pytest.mark.asyncio
async def test_readiness(client: AsyncClient) -> None:
    response = await client.get("/health/ready")

    assert response.status_code == 200
    assert response.json()["status"] == "ready"


# ---------------------------------------------------------------------------
# Punches
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_parse_punches_reports_incomplete(client: AsyncClient) -> None:
    """POST /api/v1/punches/parse pairs punches and flags the open clock-in."""
    response = await client.post("/api/v1/punches/parse", json={"punches": PUNCHES})

    assert response.status_code == 200
    body = response.json()
    assert body["total_hours"] == pytest.approx(8.0)
    assert len(body["periods"]) == 1
    assert [s["type"] for s in body["incomplete_shifts"]] == ["missing_clock_out"]


@pytest.mark.asyncio
async def test_parse_punches_rejects_unknown_type(client: AsyncClient) -> None:
    bad = [punch("p1", "lunch", "2024-01-15T09:00:00Z")]

    response = await client.post("/api/v1/punches/parse", json={"punches": bad})

    assert response.status_code == 422


# ---------------------------------------------------------------------------
# Payroll
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_employee_pay(client: AsyncClient) -> None:
    """POST /api/v1/payroll/employee-pay computes one employee's pay."""
    response = await client.post(
        "/api/v1/payroll/employee-pay",
        json={
            "employee": EMPLOYEES[0],
            "punches": PUNCHES,
            "tips_cents": 4000,
            "tips_paid_out_cents": 1000,
            "period_start": "2024-01-15",
            "period_end": "2024-01-21",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["regular_pay"] == 8000
    assert body["tips_owed"] == 3000
    assert body["total_pay"] == 11000
    assert len(body["incomplete_shifts"]) == 1


@pytest.mark.asyncio
async def test_employee_pay_rejects_reversed_window(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/payroll/employee-pay",
        json={
            "employee": EMPLOYEES[0],
            "period_start": "2024-01-21",
            "period_end": "2024-01-15",
        },
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_payroll_period(client: AsyncClient) -> None:
    """POST /api/v1/payroll/period pays every employee and totals the run."""
    response = await client.post(
        "/api/v1/payroll/period",
        json={
            "period_start": "2024-01-15",
            "period_end": "2024-01-21",
            "employees": EMPLOYEES,
            "punches": PUNCHES,
            "tips_per_employee": {"emp-1": 2500},
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert [e["employee_id"] for e in body["employees"]] == ["emp-1", "mgr-1"]
    assert body["total_gross_pay"] == 8000 + 70000
    assert body["total_pay"] == 8000 + 70000 + 2500
    assert body["incomplete_shift_count"] == 1


@pytest.mark.asyncio
async def test_payroll_period_bad_range(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/payroll/period",
        json={"period_start": "2024-01-21", "period_end": "2024-01-15"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Period end must be after period start"


@pytest.mark.asyncio
async def test_payroll_period_custom_overtime_rules(client: AsyncClient) -> None:
    """Request rules override the configured federal baseline."""
    long_day = [
        punch("p1", "clock_in", "2024-01-15T08:00:00Z"),
        punch("p2", "clock_out", "2024-01-15T18:00:00Z"),
    ]

    response = await client.post(
        "/api/v1/payroll/period",
        json={
            "period_start": "2024-01-15",
            "period_end": "2024-01-21",
            "employees": EMPLOYEES[:1],
            "punches": long_day,
            "overtime_rules": {"daily_threshold_hours": 8},
        },
    )

    assert response.status_code == 200
    employee = response.json()["employees"][0]
    assert employee["overtime_hours"] == pytest.approx(2.0)
    assert employee["overtime_pay"] == 3000


@pytest.mark.asyncio
async def test_payroll_csv_export(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/payroll/period/csv",
        params={"restaurant_name": "Main Street Grill"},
        json={
            "period_start": "2024-01-15",
            "period_end": "2024-01-21",
            "employees": EMPLOYEES,
            "punches": PUNCHES,
        },
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "payroll-main-street-grill-2024-01-15" in response.headers["content-disposition"]
    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[-1][0] == "TOTAL"
    assert len(rows) == 4


# ---------------------------------------------------------------------------
# Labor cost
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_actual_labor_cost_matches_payroll(client: AsyncClient) -> None:
    """Dashboard labor cost equals payroll labor cost for the same inputs."""
    labor = await client.post(
        "/api/v1/labor/actual",
        json={
            "start_date": "2024-01-15",
            "end_date": "2024-01-21",
            "employees": EMPLOYEES,
            "punches": PUNCHES,
        },
    )
    payroll = await client.post(
        "/api/v1/payroll/period",
        json={
            "period_start": "2024-01-15",
            "period_end": "2024-01-21",
            "employees": EMPLOYEES,
            "punches": PUNCHES,
        },
    )

    assert labor.status_code == 200
    body = labor.json()
    assert len(body["daily_costs"]) == 7
    assert body["breakdown"]["total"] == payroll.json()["total_gross_pay"]
    assert body["breakdown"]["total_dollars"] == pytest.approx(780.0)


@pytest.mark.asyncio
async def test_scheduled_labor_cost(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/labor/scheduled",
        json={
            "start_date": "2024-01-15",
            "end_date": "2024-01-15",
            "employees": EMPLOYEES[:1],
            "shifts": [
                {
                    "id": "s1",
                    "employee_id": "emp-1",
                    "start_time": "2024-01-15T09:00:00Z",
                    "end_time": "2024-01-15T17:00:00Z",
                    "break_duration": 30,
                }
            ],
        },
    )

    assert response.status_code == 200
    assert response.json()["breakdown"]["hourly"]["cost"] == 7500


@pytest.mark.asyncio
async def test_labor_cost_bad_range(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/labor/actual",
        json={"start_date": "2024-01-21", "end_date": "2024-01-15"},
    )

    assert response.status_code == 400


# ---------------------------------------------------------------------------
# Tips
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_split_tips_by_hours(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/tips/split",
        json={
            "total_cents": 10000,
            "method": "hours",
            "participants": [
                {"employee_id": "a", "hours": 1},
                {"employee_id": "b", "hours": 1},
                {"employee_id": "c", "hours": 1},
            ],
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert [s["amount_cents"] for s in body["shares"]] == [3333, 3333, 3334]
    assert body["total_formatted"] == "$100.00"


@pytest.mark.asyncio
async def test_split_tips_requires_participants(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/tips/split", json={"total_cents": 100, "participants": []}
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_rebalance_tips(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/tips/rebalance",
        json={
            "total_cents": 10000,
            "shares": [
                {"employee_id": "a", "amount_cents": 5000},
                {"employee_id": "b", "amount_cents": 3000},
                {"employee_id": "c", "amount_cents": 2000},
            ],
            "employee_id": "a",
            "new_amount_cents": 6000,
        },
    )

    assert response.status_code == 200
    assert [s["amount_cents"] for s in response.json()] == [6000, 2400, 1600]


@pytest.mark.asyncio
async def test_validate_tip_split(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/tips/validate",
        json={"status": "approved", "shares": [{"employee_id": "a", "amount_cents": 0}]},
    )

    assert response.status_code == 200
    assert response.json() == {
        "valid": False,
        "error": "Cannot approve tips with $0 total allocation",
    }


@pytest.mark.asyncio
async def test_tip_eligible_employees(client: AsyncClient) -> None:
    response = await client.post("/api/v1/tips/eligible", json={"employees": EMPLOYEES})

    assert response.status_code == 200
    assert [e["id"] for e in response.json()] == ["emp-1"]


@pytest.mark.asyncio
async def test_percentage_pools(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/tips/percentage-pools",
        json={
            "servers": [{"employee_id": "s1", "earned_amount_cents": 10000}],
            "pools": [
                {
                    "id": "dish",
                    "name": "Dish",
                    "contribution_percentage": 5,
                    "eligible_employee_ids": ["d1"],
                }
            ],
            "workers": [{"employee_id": "d1", "hours_worked": 6}],
        },
    )

    assert response.status_code == 200
    items = {s["employee_id"]: s["amount_cents"] for s in response.json()["split_items"]}
    assert items == {"s1": 9500, "d1": 500}


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_print_checks(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/checks/pdf",
        json={
            "settings": {"business_name": "Main Street Grill"},
            "checks": [
                {
                    "check_number": 1001,
                    "payee_name": "Jane Doe",
                    "amount_cents": 50000,
                    "issue_date": "2024-01-22",
                }
            ],
        },
    )

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")
    assert "check-main-street-grill-1001" in response.headers["content-disposition"]


@pytest.mark.asyncio
async def test_print_checks_requires_business_name(client: AsyncClient) -> None:
    """Without request settings or a configured business name the request is rejected."""
    response = await client.post(
        "/api/v1/checks/pdf",
        json={
            "checks": [
                {
                    "check_number": 1001,
                    "payee_name": "Jane Doe",
                    "amount_cents": 50000,
                    "issue_date": "2024-01-22",
                }
            ],
        },
    )

    assert response.status_code == 400
