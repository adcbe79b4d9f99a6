"""Integration tests for API endpoints"""

import logging

import pytest
from fastapi.testclient import TestClient

pytestmark = pytest.mark.integration

TODAY = "2025-01-06"

SALARY = {
    "name": "Salary",
    "amount_cents": 200000,
    "frequency": "fortnightly",
    "next_occurrence_date": "2025-01-09",
}
RENT = {"name": "Rent", "amount_cents": 50000, "frequency": "monthly", "next_due_date": "2025-01-16"}
SHOES = {
    "item_name": "Shoes",
    "provider_name": "Afterpay",
    "instalment_amount_cents": 2500,
    "instalment_frequency": "fortnightly",
    "instalments_remaining": 2,
    "next_payment_date": "2025-01-07",
}


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/projection", json={"starting_balance_cents": 0, "today": TODAY})

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "household_projection_total" in response.text


def test_projection_endpoint(client: TestClient):
    """Test POST /v1/projection over the default eight weeks"""
    response = client.post(
        "/v1/projection",
        json={
            "starting_balance_cents": 100000,
            "incomes": [SALARY],
            "expenses": [RENT],
            "bnpl_plans": [SHOES],
            "today": TODAY,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert len(data["daily_balances"]) == 57
    assert data["daily_balances"][0]["date"] == TODAY
    assert data["daily_balances"][1]["balance_cents"] == 97500
    assert data["daily_balances"][1]["events"][0]["description"] == "Afterpay - Shoes"
    assert data["minimum_balance_cents"] == 97500


def test_projection_with_hypothetical_purchase(client: TestClient):
    response = client.post(
        "/v1/projection",
        json={
            "starting_balance_cents": 10000,
            "weeks_ahead": 1,
            "extra_events": [{"date": TODAY, "description": "New TV", "signed_amount_cents": -30000}],
            "today": TODAY,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert len(data["daily_balances"]) == 8
    assert data["minimum_balance_cents"] == -20000


def test_safe_to_spend_endpoint(client: TestClient):
    """Rent due after pay day does not reduce what is safe to spend"""
    response = client.post(
        "/v1/safe-to-spend",
        json={"current_balance_cents": 100000, "incomes": [SALARY], "expenses": [RENT], "today": TODAY},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["safe_to_spend_cents"] == 100000
    assert data["next_pay_date"] == "2025-01-09"
    assert data["days_until_pay"] == 3
    assert data["upcoming_obligations"] == []


def test_safe_to_spend_can_be_negative(client: TestClient):
    response = client.post(
        "/v1/safe-to-spend",
        json={"current_balance_cents": 0, "incomes": [SALARY], "bnpl_plans": [SHOES], "today": TODAY},
    )

    assert response.status_code == 200
    assert response.json()["safe_to_spend_cents"] == -2500


def test_upcoming_payments_endpoint(client: TestClient):
    response = client.post(
        "/v1/upcoming-payments",
        json={
            "expenses": [RENT],
            "bnpl_plans": [SHOES],
            "credit_cards": [{"name": "Visa", "balance_cents": 100000, "due_day_of_month": 20}],
            "bank_balance_cents": 150000,
            "today": TODAY,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert [p["name"] for p in data["payments"]] == ["Afterpay - Shoes", "Rent", "Visa payment"]
    assert data["total_cents"] == 2500 + 50000 + 2500
    assert data["net_position_cents"] == 150000 - 100000 - 5000
    # Rent + fortnightly instalment x 2.17 + card minimum
    assert data["monthly_commitments_cents"] == 50000 + 5425 + 2500


def test_strategies_endpoint(client: TestClient):
    """Test POST /v1/strategies ranks cash ahead of Afterpay"""
    response = client.post(
        "/v1/strategies",
        json={
            "item": "Headphones",
            "price_cents": 40000,
            "starting_balance_cents": 100000,
            "bnpl_accounts": [
                {"provider": "afterpay", "available_limit_cents": 50000},
                {"provider": "zip_money", "available_limit_cents": 500000},
            ],
            "today": TODAY,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["item"] == "Headphones"
    assert len(data["baseline_projection"]) == 57

    strategies = data["strategies"]
    assert [s["name"] for s in strategies] == ["Cash / Debit", "Afterpay", "Zip Money"]
    assert [s["score"] for s in strategies] == [100, 91, 0]
    assert strategies[0]["payment_schedule"][0]["label"] == "Buy Headphones (cash)"
    assert len(strategies[1]["payment_schedule"]) == 4
    assert strategies[2]["is_available"] is False
    assert strategies[2]["unavailable_reason"] == "Amount outside range ($1000.00 - $5000.00)"


def test_strategies_rejects_non_positive_price(client: TestClient):
    response = client.post(
        "/v1/strategies", json={"price_cents": 0, "starting_balance_cents": 100000, "today": TODAY}
    )
    assert response.status_code == 422


def test_unknown_frequency_rejected(client: TestClient):
    expense = dict(RENT, frequency="daily")
    response = client.post(
        "/v1/safe-to-spend", json={"current_balance_cents": 0, "expenses": [expense], "today": TODAY}
    )
    assert response.status_code == 422


def test_quarterly_income_rejected(client: TestClient):
    income = dict(SALARY, frequency="quarterly")
    response = client.post(
        "/v1/safe-to-spend", json={"current_balance_cents": 0, "incomes": [income], "today": TODAY}
    )

    assert response.status_code == 422
    assert "quarterly" in response.json()["detail"]


def test_income_process_endpoint(client: TestClient):
    income = dict(SALARY, next_occurrence_date="2024-12-09")
    response = client.post("/v1/income/process", json={"incomes": [income], "today": TODAY})

    assert response.status_code == 200
    data = response.json()
    assert [p["date"] for p in data["payments"]] == ["2024-12-09", "2024-12-23", "2025-01-06"]
    assert data["total_credited_cents"] == 600000
    assert data["incomes"][0]["next_occurrence_date"] == "2025-01-20"
    assert data["incomes"][0]["frequency"] == "fortnightly"


def test_unexpected_error_returns_500_and_logs_request_id(client: TestClient, monkeypatch, caplog):
    def broken(*args, **kwargs):
        raise RuntimeError("projection store unavailable")

    monkeypatch.setattr("household_cashflow.api.v1.safe_to_spend.compute_safe_to_spend", broken)

    with caplog.at_level(logging.ERROR):
        response = client.post(
            "/v1/safe-to-spend",
            json={"current_balance_cents": 0, "today": TODAY},
            headers={"X-Request-ID": "req-500"},
        )

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error"
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert any(getattr(r, "request_id", None) == "req-500" for r in errors)
    assert any("projection store unavailable" in r.getMessage() for r in errors)


def test_request_id_header(client: TestClient):
    """Test X-Request-ID is echoed back or generated"""
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"

    assert client.get("/health").headers["X-Request-ID"]
