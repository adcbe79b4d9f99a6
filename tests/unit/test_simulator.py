"""Unit tests for the daily balance simulator"""

from datetime import date, timedelta

from household_cashflow.domain.events import collect_events
from household_cashflow.domain.models import CashEvent, EventKind
from household_cashflow.domain.simulator import minimum_balance, project_cashflow, simulate


def test_one_entry_per_day_inclusive(today):
    daily = simulate(10_000, [], today, today + timedelta(weeks=8))

    assert len(daily) == 57
    assert daily[0].date == today
    assert daily[-1].date == today + timedelta(weeks=8)
    assert all(d.balance_cents == 10_000 and d.events == [] for d in daily)


def test_balance_conservation(today, salary, rent, shoes_plan, visa):
    """Each day's balance is the previous balance plus that day's events"""
    window_end = today + timedelta(weeks=8)
    events = collect_events(today, window_end, [salary], [rent], [shoes_plan], [visa])
    daily = simulate(50_000, events, today, window_end)

    assert daily[0].balance_cents == 50_000 + sum(e.signed_amount_cents for e in daily[0].events)
    for prev, cur in zip(daily, daily[1:]):
        assert cur.balance_cents == prev.balance_cents + sum(e.signed_amount_cents for e in cur.events)

    applied = sum(len(d.events) for d in daily)
    assert applied == len(events)


def test_same_day_events_keep_collection_order(today):
    first = CashEvent(today, "Coffee", -500, EventKind.PURCHASE)
    second = CashEvent(today, "Refund", 300, EventKind.INCOME)
    daily = simulate(1_000, [first, second], today, today)

    assert daily[0].events == [first, second]
    assert daily[0].balance_cents == 800


def test_events_outside_window_are_ignored(today):
    before = CashEvent(today - timedelta(days=1), "Old", -100, EventKind.EXPENSE)
    after = CashEvent(today + timedelta(days=5), "Later", -100, EventKind.EXPENSE)
    daily = simulate(1_000, [before, after], today, today + timedelta(days=2))

    assert [d.balance_cents for d in daily] == [1_000, 1_000, 1_000]


def test_project_cashflow_applies_all_sources(today, salary, rent):
    daily = project_cashflow(100_000, incomes=[salary], expenses=[rent], weeks_ahead=2, today=today)
    by_date = {d.date: d.balance_cents for d in daily}

    assert len(daily) == 15
    assert by_date[date(2025, 1, 8)] == 100_000
    assert by_date[date(2025, 1, 9)] == 300_000
    assert by_date[date(2025, 1, 16)] == 250_000
    assert by_date[date(2025, 1, 20)] == 250_000
    assert minimum_balance(daily) == 100_000


def test_project_cashflow_with_hypothetical_purchase(today):
    purchase = CashEvent(today + timedelta(days=1), "Buy TV", -150_000, EventKind.PURCHASE)
    daily = project_cashflow(100_000, extra_events=[purchase], weeks_ahead=1, today=today)

    assert daily[1].balance_cents == -50_000
    assert minimum_balance(daily) == -50_000
