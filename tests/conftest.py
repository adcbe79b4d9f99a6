"""Pytest fixtures for testing"""

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from household_cashflow.api.main import create_app
from household_cashflow.domain.models import (
    BnplInstalmentPlan,
    CreditCardObligation,
    FixedExpense,
    Frequency,
    IncomeSource,
)


@pytest.fixture
def today() -> date:
    """Fixed evaluation date (a Monday) so projections are deterministic"""
    return date(2025, 1, 6)


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def salary(today: date) -> IncomeSource:
    """$2000 fortnightly salary landing in 3 days"""
    return IncomeSource("Salary", 200_000, Frequency.FORTNIGHTLY, today + timedelta(days=3))


@pytest.fixture
def rent(today: date) -> FixedExpense:
    """$500 monthly rent due in 10 days"""
    return FixedExpense("Rent", 50_000, Frequency.MONTHLY, today + timedelta(days=10))


@pytest.fixture
def shoes_plan(today: date) -> BnplInstalmentPlan:
    """Afterpay plan with 2 of 4 $25 instalments left, next one tomorrow"""
    return BnplInstalmentPlan(
        item_name="Shoes",
        provider_name="Afterpay",
        instalment_amount_cents=2_500,
        instalment_frequency=Frequency.FORTNIGHTLY,
        instalments_remaining=2,
        next_payment_date=today + timedelta(days=1),
    )


@pytest.fixture
def visa() -> CreditCardObligation:
    """Card with $1000 owing (minimum $25), due on the 20th, $5000 limit"""
    return CreditCardObligation.from_balance(
        "Visa", 100_000, due_day_of_month=20, credit_limit_cents=500_000, annual_interest_rate=19.99
    )
