"""Unit tests for event collection"""

from datetime import date, timedelta

from household_cashflow.domain.events import collect_events, credit_card_due_dates
from household_cashflow.domain.models import (
    BnplInstalmentPlan,
    CashEvent,
    CreditCardObligation,
    EventKind,
    Frequency,
)


def test_bnpl_plan_never_exceeds_instalments_remaining(today, shoes_plan):
    """2 instalments left over a 52-week window produces exactly 2 events"""
    events = collect_events(today, today + timedelta(weeks=52), bnpl_plans=[shoes_plan])

    assert len(events) == 2
    assert [e.date for e in events] == [date(2025, 1, 7), date(2025, 1, 21)]
    assert all(e.signed_amount_cents == -2_500 for e in events)
    assert all(e.kind == EventKind.BNPL for e in events)
    assert events[0].description == "Afterpay - Shoes"


def test_bnpl_plan_shorter_window_truncates_by_window(today):
    plan = BnplInstalmentPlan("TV", "Zip", 10_000, Frequency.MONTHLY, 6, today)
    events = collect_events(today, today + timedelta(weeks=10), bnpl_plans=[plan])

    assert [e.date for e in events] == [date(2025, 1, 6), date(2025, 2, 6), date(2025, 3, 6)]


def test_paid_off_bnpl_plan_generates_nothing(today):
    plan = BnplInstalmentPlan("Lamp", "Afterpay", 1_000, Frequency.WEEKLY, 0, today)
    assert collect_events(today, today + timedelta(weeks=8), bnpl_plans=[plan]) == []


def test_income_positive_expense_negative(today, salary, rent):
    events = collect_events(today, today + timedelta(days=20), incomes=[salary], expenses=[rent])

    incomes = [e for e in events if e.kind == EventKind.INCOME]
    expenses = [e for e in events if e.kind == EventKind.EXPENSE]
    assert [(e.date, e.signed_amount_cents) for e in incomes] == [
        (date(2025, 1, 9), 200_000),
        (date(2025, 1, 23), 200_000),
    ]
    assert [(e.date, e.signed_amount_cents) for e in expenses] == [(date(2025, 1, 16), -50_000)]


def test_credit_card_due_day_still_ahead_this_month(today, visa):
    events = collect_events(today, today + timedelta(weeks=8), credit_cards=[visa])

    assert [e.date for e in events] == [date(2025, 1, 20), date(2025, 2, 20)]
    assert all(e.signed_amount_cents == -2_500 for e in events)
    assert events[0].description == "Visa minimum payment"


def test_credit_card_due_day_already_passed_rolls_to_next_month():
    dates = credit_card_due_dates(5, date(2025, 1, 6), date(2025, 3, 31))
    assert dates == [date(2025, 2, 5), date(2025, 3, 5)]


def test_credit_card_due_day_clamped_in_short_months():
    dates = credit_card_due_dates(31, date(2025, 1, 6), date(2025, 4, 30))
    assert dates == [date(2025, 1, 31), date(2025, 2, 28), date(2025, 3, 31), date(2025, 4, 30)]


def test_credit_card_due_dates_roll_over_year_end():
    dates = credit_card_due_dates(15, date(2024, 12, 20), date(2025, 2, 28))
    assert dates == [date(2025, 1, 15), date(2025, 2, 15)]


def test_credit_card_without_balance_generates_nothing(today):
    card = CreditCardObligation.from_balance("Amex", 0, due_day_of_month=10)
    assert card.minimum_payment_cents == 0
    assert collect_events(today, today + timedelta(weeks=8), credit_cards=[card]) == []


def test_minimum_payment_policy():
    assert CreditCardObligation.from_balance("a", 100_000).minimum_payment_cents == 2_500
    assert CreditCardObligation.from_balance("b", 300_000).minimum_payment_cents == 6_000
    assert CreditCardObligation.from_balance("c", 300_001).minimum_payment_cents == 6_001


def test_extra_events_pass_through_first(today, salary):
    purchase = CashEvent(today, "Buy TV (cash)", -80_000, EventKind.PURCHASE)
    events = collect_events(today, today + timedelta(days=3), incomes=[salary], extra_events=[purchase])

    assert events[0] is purchase
    assert len(events) == 2
